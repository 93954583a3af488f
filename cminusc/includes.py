"""Resolution of include directives into a single source file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_LIBRARIES_PATH = "lib"


class IncludeError(Exception):
    """An include could not be recorded or expanded."""


@dataclass(frozen=True)
class _Import:
    filename: str
    line: int


class IncludeResolver:
    """Records include directives and splices the files into the source."""

    def __init__(self, library_path: str = DEFAULT_LIBRARIES_PATH) -> None:
        self.library_path = library_path
        self.imports: list[_Import] = []
        self.failed = False

    def add(self, file_name: str, line_number: int) -> _Import:
        """Record ``"name"`` or ``<name>`` included at ``line_number``."""
        if len(file_name) < 2:
            self.failed = True
            raise IncludeError(f"Malformed include '{file_name}' at line {line_number}.")
        opener = file_name[0]
        inner = file_name[1:-1]
        path = f"{self.library_path}/{inner}" if opener == "<" else inner
        for existing in self.imports:
            if existing.line == line_number:
                self.failed = True
                raise IncludeError(
                    f"Unable to import '{inner}' at line {line_number}, "
                    f"'{existing.filename}' was already imported. "
                    f"Consider moving '{path}' to the next line."
                )
            if existing.filename == path:
                self.failed = True
                raise IncludeError(
                    f"Unable to import '{inner}' at line {line_number}, "
                    f"'{existing.filename}' was already imported."
                )
        entry = _Import(path, line_number)
        self.imports.append(entry)
        return entry

    def expand(self, source_path: str | Path, dest_path: str | Path) -> None:
        """Write ``source_path`` to ``dest_path`` with each include line replaced."""
        if self.failed:
            raise IncludeError("Errors occured when importing files.")
        try:
            data = Path(source_path).read_bytes()
        except OSError as exc:
            raise IncludeError(f"File '{source_path}' not found") from exc

        out = bytearray()
        line = 1
        skip_line = False
        for byte in data:
            if not skip_line:
                out.append(byte)
            if byte == 0x0A:
                skip_line = False
                line += 1
                for entry in self.imports:
                    if entry.line != line:
                        continue
                    try:
                        out += Path(entry.filename).read_bytes()
                    except OSError as exc:
                        raise IncludeError(
                            f"File '{entry.filename}' could not be found"
                        ) from exc
                    skip_line = True
        try:
            Path(dest_path).write_bytes(bytes(out))
        except OSError as exc:
            raise IncludeError(f"File '{dest_path}' could not be created") from exc
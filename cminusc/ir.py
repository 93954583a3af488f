"""Quadruple-based intermediate representation and its helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, TextIO


class ArgKind(enum.IntEnum):
    """What an operand of a quadruple holds."""

    BUCKET = 0
    STRING = 1
    CONSTANT = 2
    ADDR_CONSTANT = 3


@dataclass
class Arg:
    """One operand of a quadruple: a symbol, a name, or a constant."""

    kind: ArgKind
    value: Any
    address: int = 0


def string_arg(text: str) -> Arg:
    """Operand holding a name such as an opcode, temporary or label."""
    return Arg(ArgKind.STRING, text)


def const_arg(value: int) -> Arg:
    """Operand holding an integer constant."""
    return Arg(ArgKind.CONSTANT, value)


def addr_arg(value: int) -> Arg:
    """Operand holding the memory address of a variable."""
    return Arg(ArgKind.ADDR_CONSTANT, value)


def bucket_arg(bucket: Any) -> Arg:
    """Operand referring to a symbol table entry."""
    return Arg(ArgKind.BUCKET, bucket)


def reg_name(number: int) -> str:
    """Name of machine register ``number``."""
    return f"R{number}"


@dataclass
class Quad:
    """A single intermediate instruction: (op, arg1, arg2, result)."""

    id: int
    op: Arg
    arg1: Arg
    arg2: Arg
    result: Arg
    number_instm: int = 0


_LABELLED_PREFIX = {
    ArgKind.BUCKET: "var=",
    ArgKind.STRING: "str=",
    ArgKind.CONSTANT: "const=",
}


def _render(arg: Arg, labelled: bool) -> str | None:
    """Text of one operand, or None when it refers to no symbol."""
    if arg.kind is ArgKind.BUCKET:
        if arg.value is None:
            return None
        text = str(arg.value.name)
    elif arg.kind is ArgKind.STRING:
        text = str(arg.value)
    elif arg.kind is ArgKind.CONSTANT:
        text = str(int(arg.value))
    else:
        return "err=ERROR" if labelled else "ERROR"
    if labelled:
        return _LABELLED_PREFIX[arg.kind] + text
    return text


def _format_quad(quad: Quad, labelled: bool) -> str:
    parts = [f"[{quad.id}] "]
    fields = (
        ("(", quad.op, " ,"),
        ("", quad.arg1, " ,"),
        ("", quad.arg2, " ,"),
        ("", quad.result, " )\n"),
    )
    for before, arg, after in fields:
        text = _render(arg, labelled)
        if text is not None:
            parts.append(f"{before}{text}{after}")
    return "".join(parts)


class IRList:
    """Ordered list of quadruples, numbered from 1."""

    def __init__(self) -> None:
        self._quads: list[Quad] = []

    def append(self, op: Arg, arg1: Arg, arg2: Arg, result: Arg) -> Quad:
        """Add a quadruple at the end and return it."""
        quad = Quad(len(self._quads) + 1, op, arg1, arg2, result)
        self._quads.append(quad)
        return quad

    def __iter__(self) -> Iterator[Quad]:
        return iter(self._quads)

    def __len__(self) -> int:
        return len(self._quads)

    @property
    def last(self) -> Quad:
        """The most recently appended quadruple."""
        if not self._quads:
            raise IndexError("the instruction list is empty")
        return self._quads[-1]

    def format(self) -> str:
        """Listing of all quadruples, preceded by their count."""
        lines = [f"{len(self._quads)} \n"]
        if self._quads:
            lines.extend(_format_quad(q, labelled=True) for q in self._quads[:-1])
            lines.append(_format_quad(self._quads[-1], labelled=False))
        return "".join(lines)

    def write(self, stream: TextIO) -> None:
        """Write the listing to ``stream``."""
        stream.write(self.format())


class NameGenerator:
    """Produces fresh label, temporary and parameter names."""

    def __init__(self) -> None:
        self._label = -1
        self._temp = -1
        self._param = -1

    def new_label(self) -> str:
        self._label += 1
        return f"L{self._label}"

    def new_temp(self) -> str:
        self._temp += 1
        return f"t{self._temp}"

    def new_param(self) -> str:
        self._param += 1
        return f"Param{self._param}"


@dataclass
class _LabelEntry:
    label: str
    memloc: int
    addr_final_funct: int = 0


@dataclass
class LabelTable:
    """Labels of the intermediate code with their memory locations."""

    entries: list[_LabelEntry] = field(default_factory=list)

    def add(self, label: str, memloc: int) -> _LabelEntry:
        """Record ``label`` at ``memloc`` and return the new entry."""
        entry = _LabelEntry(label, memloc)
        self.entries.append(entry)
        return entry

    def find(self, label: str) -> _LabelEntry | None:
        """First entry with this label, or None."""
        return next((e for e in self.entries if e.label == label), None)

    def __len__(self) -> int:
        return len(self.entries)

    def format(self) -> str:
        return "".join(
            f"{e.label} {e.memloc}    {e.addr_final_funct}\n" for e in self.entries
        )
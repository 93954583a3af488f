"""Symbol table kept as a chained hash table."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator

SIZE = 211
SHIFT = 4


class StructureId(enum.IntEnum):
    """What kind of construct a symbol names."""

    FUNCTION = 0
    PARAMETER = 1
    VECTOR_PARAMETER = 2
    CALL_FUNCTION = 3
    VARIABLE_USED = 4
    VARIABLE_ADDR_USED = 5
    VARIABLE_DECLARED = 6
    VECTOR_DECLARED = 7
    VECTOR_USED = 8


class DataType(enum.IntEnum):
    VOID = 0
    INTEGER = 1
    BOOLEAN = 2


_STRUCTURE_NAMES = {
    StructureId.FUNCTION: "Function",
    StructureId.PARAMETER: "Parameter",
    StructureId.VECTOR_PARAMETER: "VectorParameter",
    StructureId.CALL_FUNCTION: "CallFunction",
    StructureId.VARIABLE_USED: "VariableUsed",
    StructureId.VARIABLE_ADDR_USED: "VariableAddrUsed",
    StructureId.VARIABLE_DECLARED: "VariableDeclared",
    StructureId.VECTOR_DECLARED: "VectorDeclared",
    StructureId.VECTOR_USED: "VectorUsed",
}

_DATATYPE_NAMES = {
    DataType.VOID: "Void",
    DataType.INTEGER: "Integer",
    DataType.BOOLEAN: "Boolean",
}


def hash_key(key: str) -> int:
    """Bucket index of ``key`` in the table."""
    value = 0
    for char in key:
        value = ((value << SHIFT) + ord(char)) % SIZE
    return value


def structure_type_name(structure: StructureId | int) -> str:
    """Human-readable name of a structure kind, or "ERROR"."""
    try:
        return _STRUCTURE_NAMES[StructureId(structure)]
    except ValueError:
        return "ERROR"


@dataclass
class Bucket:
    """One symbol and the lines it appears on."""

    name: str
    scope: str
    structure: StructureId
    datatype: int
    memloc: int
    number_args: int = 0
    pass_by_ref: int = 0
    lines: list[int] = field(default_factory=list)

    def visible_from(self, name: str, scope: str) -> bool:
        return self.name == name and (self.scope == "global" or self.scope == scope)


class SymbolTable:
    """Symbols by name; a global symbol is visible from every scope."""

    def __init__(self) -> None:
        self._table: list[list[Bucket]] = [[] for _ in range(SIZE)]

    def insert(
        self,
        name: str,
        structure: StructureId,
        datatype: int,
        lineno: int,
        loc: int,
        scope: str,
        num_args: int = 0,
        pass_by_ref: int = 0,
    ) -> Bucket:
        """Add a symbol, or only record ``lineno`` if it is already visible."""
        chain = self._table[hash_key(name)]
        existing = next((b for b in chain if b.visible_from(name, scope)), None)
        if existing is not None:
            existing.lines.append(lineno)
            return existing
        bucket = Bucket(
            name=name,
            scope=scope,
            structure=structure,
            datatype=datatype,
            memloc=loc,
            number_args=num_args,
            pass_by_ref=pass_by_ref,
            lines=[lineno],
        )
        chain.insert(0, bucket)
        return bucket

    def lookup(self, name: str, scope: str) -> Bucket | None:
        """Symbol ``name`` as seen from ``scope``, or None."""
        chain = self._table[hash_key(name)]
        return next((b for b in chain if b.visible_from(name, scope)), None)

    def __iter__(self) -> Iterator[Bucket]:
        for chain in self._table:
            yield from chain

    def format(self) -> str:
        """Tabular listing of every symbol."""
        out = [
            "Variable Name   Scope Function   StructureID          DataType"
            "     Location  passByref  Line Numbers\n",
            "-------------   --------------   -----------         ----------"
            "    --------  --------   ------------\n",
        ]
        for bucket in self:
            row = (
                f"{bucket.name:<18} "
                f"{bucket.scope:<14} "
                f"{structure_type_name(bucket.structure):<18} "
            )
            if bucket.datatype in _DATATYPE_NAMES.keys():
                row += f"{_DATATYPE_NAMES[DataType(bucket.datatype)]:>10} "
            row += f"{bucket.memloc:>10d}  {bucket.pass_by_ref:>7d}  "
            row += "".join(f"{line:>4d} " for line in bucket.lines)
            out.append(row + "\n")
        return "".join(out)
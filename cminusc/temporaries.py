"""Mapping of intermediate temporaries onto a small fixed set of registers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .ir import Arg, ArgKind, Quad
from .symtab import DataType, StructureId, SymbolTable

REGISTER_COUNT = 10


def temp_name(number: int) -> str:
    """Name of limited temporary register ``number``."""
    return f"t{number}"


@dataclass
class TempRegister:
    """One limited temporary and the intermediate temporary mapped onto it."""

    in_use: bool = False
    used_by: str | None = None
    name: str | None = None
    address: int = 0


class TempAllocator:
    """Hands out registers t1..t10 to intermediate temporaries.

    A register released for the first time is declared as a global integer in
    ``symtab`` (when one is given) at ``next_location``, which then advances.
    """

    def __init__(
        self, symtab: SymbolTable | None = None, next_location: int = 0
    ) -> None:
        self.symtab = symtab
        self.next_location = next_location
        self.registers: list[TempRegister] = [
            TempRegister() for _ in range(REGISTER_COUNT)
        ]

    def _numbered(self):
        return enumerate(self.registers, start=1)

    def acquire(self, name: str, address: int = 0) -> str | None:
        """Map ``name`` onto the lowest free register; None if all are busy."""
        for number, reg in self._numbered():
            if not reg.in_use:
                reg.in_use = True
                reg.used_by = name
                reg.name = temp_name(number)
                reg.address = address
                return reg.name
        return None

    def release(self, name: str) -> TempRegister:
        """Free the register holding ``name`` and return a copy of it.

        When no register holds ``name``, a copy of the last register is
        returned unchanged.
        """
        for number, reg in self._numbered():
            if reg.in_use and reg.used_by == name:
                reg.in_use = False
                register_name = temp_name(number)
                if (
                    self.symtab is not None
                    and self.symtab.lookup(register_name, "global") is None
                ):
                    self.symtab.insert(
                        register_name,
                        StructureId.VARIABLE_DECLARED,
                        DataType.INTEGER,
                        -1,
                        self.next_location,
                        "global",
                        0,
                        0,
                    )
                    self.next_location += 1
                return replace(reg)
        return replace(self.registers[-1])

    def last_in_use(self) -> str | None:
        """Name of the first register if it is in use, else None."""
        first = self.registers[0]
        return first.name if first.in_use else None


def _is_string(arg: Arg) -> bool:
    return arg.kind is ArgKind.STRING


def _release(arg: Arg, allocator: TempAllocator) -> TempRegister:
    reg = allocator.release(arg.value)
    arg.value = reg.name
    arg.address = reg.address
    return reg


def _acquire(arg: Arg, allocator: TempAllocator, address: int = 0) -> None:
    arg.value = allocator.acquire(arg.value, address)


_VECTOR_LOAD = frozenset({"vector_var", "vector_const"})
_VECTOR_COMPUTED = frozenset({"vector_exp", "vector_fun"})
_ASSIGN_ID = frozenset(
    {"assign_id_const", "assign_id_id", "assign_id_a", "assign_id_exp", "assign_id_f"}
)
_ASSIGN_ARRAY = frozenset(
    {"assign_a_const", "assign_a_id", "assign_a_a", "assign_a_exp"}
)
_ARRAY_LOAD = frozenset({"array_var", "array_const"})
_ARRAY_COMPUTED = frozenset({"array_exp", "array_fun"})
_OPERATORS = frozenset(
    {"sum", "sub", "mult", "div", "LT", "LTEQ", "GT", "GTEQ", "DIFFERENT", "EQ"}
)


def _rewrite(quad: Quad, allocator: TempAllocator) -> None:
    op = quad.op.value
    arg1, arg2, result = quad.arg1, quad.arg2, quad.result

    if op == "IF_FALSE":
        if _is_string(arg1):
            _release(arg1, allocator)
    elif op == "call":
        bucket = arg1.value
        if (
            bucket is not None
            and bucket.datatype != 0
            and _is_string(result)
            and result.value != "void"
        ):
            _acquire(result, allocator)
    elif op in _VECTOR_LOAD:
        if _is_string(result):
            _acquire(result, allocator)
    elif op in _VECTOR_COMPUTED:
        if _is_string(arg2):
            _release(arg2, allocator)
        if _is_string(result):
            _acquire(result, allocator)
    elif op in _ASSIGN_ID:
        if _is_string(arg1):
            _release(arg1, allocator)
        if _is_string(result):
            _acquire(result, allocator)
    elif op in _ASSIGN_ARRAY:
        if _is_string(arg1):
            _release(arg1, allocator)
        if _is_string(result):
            _release(result, allocator)
    elif op == "assign_a_f":
        if _is_string(arg1):
            _release(arg1, allocator)
        if _is_string(result):
            reg = allocator.release(result.value)
            result.value = reg.name
            arg1.address = reg.address
    elif op == "arg":
        if _is_string(result) and result.value != "void":
            _release(result, allocator)
    elif op == "arg_address":
        if _is_string(result):
            _release(result, allocator)
    elif op == "return":
        if _is_string(result) and result.value != "void":
            _release(result, allocator)
    elif op == "return_array":
        if _is_string(result):
            _release(result, allocator)
    elif op in _ARRAY_LOAD:
        if _is_string(result):
            _acquire(result, allocator, 1)
    elif op in _ARRAY_COMPUTED:
        if _is_string(arg2):
            _release(arg2, allocator)
        if _is_string(result):
            _acquire(result, allocator, 1)
    elif op in _OPERATORS:
        if _is_string(arg1):
            _release(arg1, allocator)
        if _is_string(arg2):
            _release(arg2, allocator)
        if _is_string(result):
            _acquire(result, allocator)


def allocate_temporaries(
    quads: Iterable[Quad], allocator: TempAllocator | None = None
) -> TempAllocator:
    """Rename temporaries in place onto limited registers.

    The final quadruple is left untouched. Returns the allocator used.
    """
    if allocator is None:
        allocator = TempAllocator()
    items = list(quads)
    for quad in items[:-1]:
        _rewrite(quad, allocator)
    return allocator
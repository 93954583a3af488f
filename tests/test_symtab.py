import pytest

from cminusc.symtab import (
    SIZE,
    Bucket,
    DataType,
    StructureId,
    SymbolTable,
    hash_key,
    structure_type_name,
)


@pytest.fixture
def table():
    return SymbolTable()


def test_insert_then_lookup(table):
    table.insert("x", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 3, 7, "main", 0, 0)
    bucket = table.lookup("x", "main")
    assert isinstance(bucket, Bucket)
    assert (bucket.name, bucket.scope, bucket.memloc, bucket.lines) == ("x", "main", 7, [3])
    assert bucket.structure is StructureId.VARIABLE_DECLARED


def test_lookup_missing_returns_none(table):
    assert table.lookup("nothing", "global") is None


def test_global_symbol_visible_from_any_scope(table):
    table.insert("vet", StructureId.VECTOR_DECLARED, DataType.INTEGER, 1, 0, "global", 0, 0)
    assert table.lookup("vet", "sort").scope == "global"


def test_local_symbol_hidden_from_other_scope(table):
    table.insert("i", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 2, 1, "sort", 0, 0)
    assert table.lookup("i", "main") is None
    table.insert("i", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 9, 2, "main", 0, 0)
    assert table.lookup("i", "main").memloc == 2
    assert table.lookup("i", "sort").memloc == 1


def test_reinsert_only_adds_line(table):
    table.insert("gcd", StructureId.FUNCTION, DataType.INTEGER, 4, 0, "global", 2, 0)
    table.insert("gcd", StructureId.CALL_FUNCTION, DataType.VOID, 6, 99, "main", 0, 0)
    bucket = table.lookup("gcd", "main")
    assert bucket.lines == [4, 6]
    assert bucket.memloc == 0
    assert bucket.number_args == 2
    assert len(list(table)) == 1


def test_colliding_names_are_both_found(table):
    first, second = "\x01", chr(1 + SIZE)
    assert hash_key(first) == hash_key(second)
    table.insert(first, StructureId.VARIABLE_DECLARED, DataType.INTEGER, 1, 10, "global", 0, 0)
    table.insert(second, StructureId.VARIABLE_DECLARED, DataType.INTEGER, 1, 20, "global", 0, 0)
    assert table.lookup(first, "global").memloc == 10
    assert table.lookup(second, "global").memloc == 20


@pytest.mark.parametrize("name", ["", "a", "main", "minloc", "t10", "x" * 50])
def test_hash_in_range(name):
    assert 0 <= hash_key(name) < SIZE


def test_structure_type_names():
    assert structure_type_name(StructureId.FUNCTION) == "Function"
    assert structure_type_name(StructureId.VECTOR_PARAMETER) == "VectorParameter"
    assert structure_type_name(42) == "ERROR"


def test_iteration_yields_every_symbol(table):
    names = ["main", "x", "y", "gcd"]
    for n, name in enumerate(names):
        table.insert(name, StructureId.VARIABLE_DECLARED, DataType.INTEGER, n, n, "global", 0, 0)
    assert sorted(b.name for b in table) == sorted(names)


def test_format_lists_header_and_rows(table):
    table.insert("x", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 3, 5, "main", 0, 1)
    lines = table.format().splitlines()
    assert lines[0].startswith("Variable Name   Scope Function")
    assert lines[1].startswith("-------------")
    row = lines[2]
    assert row.startswith("x".ljust(18) + " " + "main".ljust(14) + " ")
    assert "VariableDeclared" in row
    assert "Integer" in row
    assert row.split()[-1] == "3"
    assert len(lines) == 3
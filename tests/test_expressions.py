import pytest

from cminusc.expressions import ExpressionGenerator
from cminusc.ir import ArgKind
from cminusc.symtab import DataType, StructureId, SymbolTable
from cminusc.tree import ExpKind, StmtKind, TokenType, new_exp_node, new_stmt_node


@pytest.fixture
def symtab():
    table = SymbolTable()
    table.insert("a", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 1, 0, "main")
    table.insert("b", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 1, 1, "main")
    table.insert("c", StructureId.VARIABLE_DECLARED, DataType.INTEGER, 1, 2, "main")
    table.insert("v", StructureId.VECTOR_DECLARED, DataType.INTEGER, 1, 7, "global")
    return table


def ident(name, kind=ExpKind.ID):
    node = new_exp_node(kind)
    node.name = name
    node.scope = "main"
    return node


def const(value):
    node = new_exp_node(ExpKind.CONST)
    node.val = value
    return node


def op(token, left, right):
    node = new_exp_node(ExpKind.OP)
    node.op = token
    node.child[0] = left
    node.child[1] = right
    return node


def vector(name, index):
    node = ident(name, ExpKind.VECTOR_ID)
    node.child[0] = index
    return node


def ops(gen):
    return [q.op.value for q in gen.ir]


def test_simple_sum(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(op(TokenType.PLUS, ident("a"), const(1)))
    quad = gen.ir.last
    assert len(gen.ir) == 1
    assert quad.op.value == "sum"
    assert quad.arg1.kind is ArgKind.BUCKET
    assert quad.arg1.value.name == "a"
    assert quad.arg2.kind is ArgKind.CONSTANT and quad.arg2.value == 1
    assert quad.result.value == "t0"
    assert [a.value for a in gen.operands] == ["t0"]


def test_nested_operation_uses_inner_result(symtab):
    gen = ExpressionGenerator(symtab)
    tree = op(TokenType.TIMES, op(TokenType.PLUS, ident("a"), ident("b")), ident("c"))
    gen.generate(tree)
    assert ops(gen) == ["sum", "mult"]
    first, second = list(gen.ir)
    assert second.arg1.value == first.result.value
    assert second.arg2.value.name == "c"
    assert gen.operands[-1].value == second.result.value


@pytest.mark.parametrize(
    "token, name",
    [
        (TokenType.MINUS, "sub"),
        (TokenType.OVER, "div"),
        (TokenType.LT, "LT"),
        (TokenType.LET, "LTEQ"),
        (TokenType.GT, "GT"),
        (TokenType.GET, "GTEQ"),
        (TokenType.DIFF, "DIFFERENT"),
        (TokenType.EQ, "EQ"),
    ],
)
def test_operator_names(symtab, token, name):
    gen = ExpressionGenerator(symtab)
    gen.generate(op(token, ident("a"), ident("b")))
    assert ops(gen) == [name]


def test_vector_with_constant_index(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(vector("v", const(2)))
    quad = gen.ir.last
    assert quad.op.value == "vector_const"
    assert quad.arg1.value.name == "v"
    assert quad.arg2.kind is ArgKind.CONSTANT and quad.arg2.value == 2
    assert quad.result.value == gen.last_temp


def test_vector_with_variable_index(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(vector("v", ident("a")))
    quad = gen.ir.last
    assert quad.op.value == "vector_var"
    assert quad.arg2.value.name == "a"


def test_vector_with_expression_index_copies_result(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(vector("v", op(TokenType.PLUS, ident("a"), const(1))))
    assert ops(gen) == ["sum", "vector_exp"]
    first, second = list(gen.ir)
    assert second.arg2.value == first.result.value
    assert second.arg2 is not first.result


def test_vector_operand_is_loaded(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(op(TokenType.PLUS, vector("v", const(0)), const(1)))
    assert ops(gen) == ["vector_const", "assign_id_a", "sum"]
    load, assign, total = list(gen.ir)
    assert assign.arg1.value == load.result.value == assign.result.value
    assert total.arg1.value == load.result.value


def test_vector_operand_with_expression_index_drops_index(symtab):
    gen = ExpressionGenerator(symtab)
    inner = vector("v", op(TokenType.PLUS, ident("a"), const(1)))
    gen.generate(op(TokenType.PLUS, inner, const(3)))
    assert ops(gen) == ["sum", "vector_exp", "assign_id_a", "sum"]
    quads = list(gen.ir)
    assert quads[-1].arg1.value == quads[1].result.value
    assert len(gen.operands) == 1


def test_address_operand(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(op(TokenType.PLUS, ident("c", ExpKind.ID_ADDR), const(1)))
    quad = gen.ir.last
    assert quad.arg1.kind is ArgKind.ADDR_CONSTANT
    assert quad.arg1.value == symtab.lookup("c", "main").memloc


def test_emit_operator_on_empty_stack(symtab):
    gen = ExpressionGenerator(symtab)
    quad = gen.emit_operator("sum")
    assert quad.arg1.value is None and quad.arg2.value is None
    assert quad.arg1.kind is ArgKind.STRING


def test_siblings_are_generated(symtab):
    gen = ExpressionGenerator(symtab)
    first = op(TokenType.PLUS, ident("a"), ident("b"))
    first.sibling = op(TokenType.MINUS, ident("a"), ident("b"))
    gen.generate(first)
    assert ops(gen) == ["sum", "sub"]


def test_statement_node_rejected(symtab):
    gen = ExpressionGenerator(symtab)
    with pytest.raises(TypeError):
        gen.generate(new_stmt_node(StmtKind.RETURN))


def test_undeclared_address_raises(symtab):
    gen = ExpressionGenerator(symtab)
    with pytest.raises(LookupError):
        gen.generate(op(TokenType.PLUS, ident("zz", ExpKind.ID_ADDR), const(1)))


def test_constant_alone_emits_nothing(symtab):
    gen = ExpressionGenerator(symtab)
    gen.generate(const(5))
    assert len(gen.ir) == 0
"""Intermediate code generation for expression nodes."""

from __future__ import annotations

from dataclasses import replace

from .ir import (
    Arg,
    ArgKind,
    IRList,
    NameGenerator,
    Quad,
    addr_arg,
    bucket_arg,
    const_arg,
    string_arg,
)
from .symtab import Bucket, SymbolTable
from .tree import ExpKind, NodeKind, StmtKind, TokenType, TreeNode, iter_siblings

OPERATOR_NAMES = {
    TokenType.PLUS: "sum",
    TokenType.MINUS: "sub",
    TokenType.TIMES: "mult",
    TokenType.OVER: "div",
    TokenType.LT: "LT",
    TokenType.LET: "LTEQ",
    TokenType.GT: "GT",
    TokenType.GET: "GTEQ",
    TokenType.DIFF: "DIFFERENT",
    TokenType.EQ: "EQ",
}

_PLACEHOLDER = "_"


def _is_exp(node: TreeNode | None, kind: ExpKind) -> bool:
    return node is not None and node.nodekind is NodeKind.EXP and node.kind is kind


def _is_stmt(node: TreeNode | None, kind: StmtKind) -> bool:
    return node is not None and node.nodekind is NodeKind.STMT and node.kind is kind


class ExpressionGenerator:
    """Emits quadruples for expressions, using a stack of pending operands.

    Statement nodes are handed to ``_statement``, which a full code generator
    overrides; here they are rejected.
    """

    def __init__(
        self,
        symtab: SymbolTable,
        names: NameGenerator | None = None,
        ir: IRList | None = None,
    ) -> None:
        self.symtab = symtab
        self.names = names if names is not None else NameGenerator()
        self.ir = ir if ir is not None else IRList()
        self.operands: list[Arg] = []
        self.pending: list[Quad] = []
        self.last_temp: str | None = None

    # -- helpers -------------------------------------------------------

    def _new_temp(self) -> str:
        self.last_temp = self.names.new_temp()
        return self.last_temp

    def _bucket(self, node: TreeNode) -> Bucket | None:
        return self.symtab.lookup(node.name, node.scope)

    def _required(self, node: TreeNode) -> Bucket:
        bucket = self._bucket(node)
        if bucket is None:
            raise LookupError(f"'{node.name}' is not declared in scope {node.scope}")
        return bucket

    def _last_result(self) -> Arg:
        return replace(self.ir.last.result)

    def _emit(self, op: str, arg1: Arg, arg2: Arg, result: Arg) -> Quad:
        return self.ir.append(string_arg(op), arg1, arg2, result)

    def _pop_operand(self) -> Arg:
        if not self.operands:
            return Arg(ArgKind.STRING, None)
        return self.operands.pop()

    def _statement(self, node: TreeNode) -> None:
        raise TypeError(
            f"statement node {node.kind.name} cannot appear in an expression here"
        )

    # -- traversal -----------------------------------------------------

    def generate(self, tree: TreeNode | None) -> None:
        """Generate code for ``tree`` and each of its siblings."""
        for node in iter_siblings(tree):
            if node.nodekind is NodeKind.STMT:
                self._statement(node)
            elif node.nodekind is NodeKind.EXP:
                self.generate_expression(node)

    def emit_operator(self, op: str) -> Quad:
        """Pop two operands, emit ``op`` on them and push its temporary."""
        right = self._pop_operand()
        left = self._pop_operand()
        temp = self._new_temp()
        self.operands.append(string_arg(temp))
        return self._emit(op, left, right, string_arg(temp))

    def generate_expression(self, node: TreeNode) -> None:
        """Generate code for one expression node."""
        if node.kind is ExpKind.VECTOR_ID:
            self._vector(node)
        elif node.kind is ExpKind.OP:
            self._operand(node.child[0])
            self._operand(node.child[1])
            name = OPERATOR_NAMES.get(node.op) if node.op is not None else None
            if name is not None:
                self.emit_operator(name)

    def _vector(self, node: TreeNode) -> None:
        index = node.child[0]
        if index is None:
            raise ValueError(f"array access '{node.name}' has no index")
        array = bucket_arg(self._bucket(node))
        if index.nodekind is NodeKind.EXP:
            if index.kind is ExpKind.ID:
                self._emit(
                    "vector_var",
                    array,
                    bucket_arg(self._bucket(index)),
                    string_arg(self._new_temp()),
                )
            elif index.kind is ExpKind.ID_ADDR:
                self._emit(
                    "vector_const",
                    array,
                    addr_arg(self._required(index).memloc),
                    string_arg(self._new_temp()),
                )
            elif index.kind is ExpKind.CONST:
                self._emit(
                    "vector_const",
                    array,
                    const_arg(index.val),
                    string_arg(self._new_temp()),
                )
            else:
                self.generate(index)
                offset = self._last_result()
                self._emit("vector_exp", array, offset, string_arg(self._new_temp()))
        else:
            self.generate(index)
            offset = self._last_result()
            self._emit("vector_fun", array, offset, string_arg(self._new_temp()))

    def _operand(self, node: TreeNode | None) -> None:
        if node is None:
            return
        if _is_exp(node, ExpKind.VECTOR_ID):
            self.generate(node)
            if _is_exp(node.child[0], ExpKind.OP):
                self._pop_operand()
            self.operands.append(self._last_result())
            # Load the element into a temporary so comparisons see its value.
            self._emit(
                "assign_id_a",
                string_arg(self.last_temp),
                string_arg(_PLACEHOLDER),
                string_arg(self.last_temp),
            )
        elif _is_stmt(node, StmtKind.CALL):
            self.generate(node)
            self.operands.append(self._last_result())
        elif _is_exp(node, ExpKind.CONST):
            self.operands.append(const_arg(node.val))
        elif _is_exp(node, ExpKind.ID):
            self.operands.append(bucket_arg(self._bucket(node)))
        elif _is_exp(node, ExpKind.ID_ADDR):
            self.operands.append(addr_arg(self._required(node).memloc))
        elif _is_exp(node, ExpKind.OP):
            self.generate(node)
"""Syntax tree nodes, token names and tree listings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator

MAXCHILDREN = 3


class TokenType(enum.IntEnum):
    """Tokens of the source language."""

    ENDFILE = 0
    ERROR = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    RETURN = enum.auto()
    IMPORT = enum.auto()
    VOID = enum.auto()
    INT = enum.auto()
    NUM = enum.auto()
    ID = enum.auto()
    INST = enum.auto()
    FILENAME = enum.auto()
    ASSIGN = enum.auto()
    EQ = enum.auto()
    DIFF = enum.auto()
    LT = enum.auto()
    LET = enum.auto()
    GT = enum.auto()
    GET = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    TIMES = enum.auto()
    OVER = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    LCBRACE = enum.auto()
    RCBRACE = enum.auto()
    SEMI = enum.auto()
    COMMA = enum.auto()


class NodeKind(enum.IntEnum):
    STMT = 0
    EXP = 1


class StmtKind(enum.IntEnum):
    IF = 0
    WHILE = enum.auto()
    ASSIGN = enum.auto()
    FUNCTION = enum.auto()
    CALL = enum.auto()
    PARAM = enum.auto()
    RETURN = enum.auto()
    ASSEMBLY = enum.auto()
    NUMBER = enum.auto()


class ExpKind(enum.IntEnum):
    OP = 0
    CONST = enum.auto()
    ID = enum.auto()
    ID_ADDR = enum.auto()
    VECTOR_ID = enum.auto()
    VECTOR = enum.auto()
    VARIABLE = enum.auto()
    TYPE = enum.auto()
    INSTRUCTION = enum.auto()


@dataclass
class TreeNode:
    """A node of the syntax tree; siblings form statement and argument lists."""

    nodekind: NodeKind
    kind: StmtKind | ExpKind
    lineno: int = 0
    child: list[TreeNode | None] = field(default_factory=lambda: [None] * MAXCHILDREN)
    sibling: TreeNode | None = None
    scope: str | None = None
    type: int = 0
    name: str | None = None
    val: int = 0
    op: TokenType | None = None


def new_stmt_node(kind: StmtKind, lineno: int = 0) -> TreeNode:
    """Fresh statement node with no children."""
    return TreeNode(NodeKind.STMT, StmtKind(kind), lineno)


def new_exp_node(kind: ExpKind, lineno: int = 0) -> TreeNode:
    """Fresh expression node with no children and void type."""
    return TreeNode(NodeKind.EXP, ExpKind(kind), lineno, type=0)


_RESERVED = frozenset(
    {
        TokenType.IF,
        TokenType.ELSE,
        TokenType.WHILE,
        TokenType.RETURN,
        TokenType.IMPORT,
        TokenType.VOID,
        TokenType.INT,
    }
)

_SYMBOLS = {
    TokenType.ASSIGN: "=",
    TokenType.EQ: "==",
    TokenType.DIFF: "!=",
    TokenType.LT: "<",
    TokenType.LET: "<=",
    TokenType.GT: ">",
    TokenType.GET: ">=",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.TIMES: "*",
    TokenType.OVER: "/",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.LBRACKET: "[",
    TokenType.RBRACKET: "]",
    TokenType.LCBRACE: "{",
    TokenType.RCBRACE: "}",
    TokenType.SEMI: ";",
    TokenType.COMMA: ",",
}


def token_text(token: TokenType | int, lexeme: str) -> str:
    """One listing line describing a token and its lexeme."""
    try:
        tok = TokenType(token)
    except ValueError:
        return f"Unknown token: {int(token)}\n"
    if tok is TokenType.ENDFILE:
        return "EOF\n"
    if tok is TokenType.ERROR:
        return f"ERROR: {lexeme}\n"
    if tok in _RESERVED:
        return f"reserved word: {lexeme}\n"
    if tok is TokenType.NUM:
        return f"NUM, val= {lexeme}\n"
    if tok is TokenType.ID:
        return f"ID, name= {lexeme}\n"
    if tok is TokenType.INST:
        return f"INST, name= {lexeme}\n"
    if tok in _SYMBOLS:
        return _SYMBOLS[tok] + "\n"
    return f"Unknown token: {int(tok)}\n"


def iter_siblings(node: TreeNode | None) -> Iterator[TreeNode]:
    """Yield ``node`` and each of its following siblings."""
    while node is not None:
        yield node
        node = node.sibling


def _walk(
    tree: TreeNode | None,
    indent: int,
    describe: Callable[[TreeNode], str],
    out: list[str],
) -> None:
    indent += 2
    for node in iter_siblings(tree):
        out.append(" " * indent + describe(node))
        for child in node.child:
            _walk(child, indent, describe, out)


def _describe(node: TreeNode) -> str:
    if node.nodekind is NodeKind.STMT:
        kind = node.kind
        if kind is StmtKind.IF:
            return "If\n"
        if kind is StmtKind.WHILE:
            return "While\n"
        if kind is StmtKind.ASSIGN:
            return f"Assign to: {node.name}\n"
        if kind is StmtKind.FUNCTION:
            return f"Function {node.name}\n"
        if kind is StmtKind.ASSEMBLY:
            return f"Assembly {node.name}\n"
        return "Unknown StmtNode kind\n"
    if node.nodekind is NodeKind.EXP:
        kind = node.kind
        if kind is ExpKind.OP:
            return "Op: " + token_text(node.op, "")
        if kind is ExpKind.CONST:
            return f"Const: {node.val}\n"
        if kind is ExpKind.ID:
            return f"Id: {node.name}\n"
        if kind is ExpKind.ID_ADDR:
            return f"Id Addr: {node.name}\n"
        if kind is ExpKind.INSTRUCTION:
            return f"Instruction: {node.name}\n"
        return "Unknown ExpNode kind\n"
    return "Unknown node kind\n"


_TYPE_LINES = {0: "Type: Void\n", 1: "Type: Int\n"}


def _describe_c(node: TreeNode) -> str:
    if node.nodekind is NodeKind.STMT:
        kind = node.kind
        if kind is StmtKind.FUNCTION:
            return _TYPE_LINES.get(node.type, "") + f"FunctionK: {node.name}\n"
        if kind is StmtKind.PARAM:
            label = "Parameter" if node.child[0] is None else "Parameter Vector"
            return _TYPE_LINES.get(node.type, "") + f"{label}: {node.name}\n"
        if kind is StmtKind.CALL:
            return f"Call Function: {node.name}\n"
        if kind is StmtKind.IF:
            return "IF\n"
        if kind is StmtKind.WHILE:
            return "WHILE\n"
        if kind is StmtKind.ASSIGN:
            return f"ASSIGN TO: {node.name}\n"
        if kind is StmtKind.RETURN:
            return "RETURN \n"
        if kind is StmtKind.ASSEMBLY:
            return "Assembly: \n"
        return "Unknown StmtNode kind\n"
    if node.nodekind is NodeKind.EXP:
        kind = node.kind
        if kind is ExpKind.VECTOR:
            size = node.child[0].val if node.child[0] is not None else 0
            return f"Array: {node.name} [{size}] \n"
        if kind is ExpKind.VARIABLE:
            return f"Variable Declared: {node.name}\n"
        if kind is ExpKind.OP:
            return "Op: " + token_text(node.op, "")
        if kind is ExpKind.CONST:
            return f"Const: {node.val}\n"
        if kind is ExpKind.ID:
            return f"Variable Used: {node.name}\n"
        if kind is ExpKind.ID_ADDR:
            return f"Variable Addr Used: {node.name}\n"
        if kind is ExpKind.VECTOR_ID:
            return f"Array Used: {node.name}\n"
        if kind is ExpKind.INSTRUCTION:
            return f"Instruction: {node.name}\n"
        if kind is ExpKind.TYPE:
            return _TYPE_LINES.get(node.type, "Unknown ExpNode kind\n")
        return "Unknown ExpNode kind\n"
    return "Unknown node kind\n"


def format_tree(tree: TreeNode | None) -> str:
    """Indented listing of a syntax tree."""
    out: list[str] = []
    _walk(tree, 0, _describe, out)
    return "".join(out)


def format_tree_c(tree: TreeNode | None) -> str:
    """Indented listing of a syntax tree with declarations and types."""
    out: list[str] = []
    _walk(tree, 0, _describe_c, out)
    return "".join(out)
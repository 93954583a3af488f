"""Intermediate code generation for statements and whole programs."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, TextIO

from .expressions import ExpressionGenerator
from .ir import (
    Arg,
    IRList,
    NameGenerator,
    Quad,
    addr_arg,
    bucket_arg,
    const_arg,
    string_arg,
)
from .symtab import Bucket, DataType, SymbolTable
from .temporaries import TempAllocator, allocate_temporaries
from .tree import ExpKind, NodeKind, StmtKind, TreeNode, iter_siblings

_BLANK = "_"
_HEADER = "\n******** INTERMEDIATE CODE **********\n\n"


def _blank() -> Arg:
    return string_arg(_BLANK)


def _is_exp(node: TreeNode | None, kind: ExpKind) -> bool:
    return node is not None and node.nodekind is NodeKind.EXP and node.kind is kind


def _is_stmt(node: TreeNode | None, kind: StmtKind) -> bool:
    return node is not None and node.nodekind is NodeKind.STMT and node.kind is kind


class CodeGenerator(ExpressionGenerator):
    """Walks a syntax tree and emits quadruples for every construct."""

    def __init__(
        self,
        symtab: SymbolTable,
        names: NameGenerator | None = None,
        ir: IRList | None = None,
        next_location: int | None = None,
    ) -> None:
        super().__init__(symtab, names, ir)
        if next_location is None:
            next_location = max((b.memloc for b in symtab), default=-1) + 1
        self.next_location = next_location
        self.current_function: Bucket | None = None
        self._seen_function = False
        self._handlers: dict[StmtKind, Callable[[TreeNode], None]] = {
            StmtKind.IF: self._if,
            StmtKind.WHILE: self._while,
            StmtKind.ASSIGN: self._assign,
            StmtKind.FUNCTION: self._function,
            StmtKind.PARAM: self._param,
            StmtKind.CALL: self._call,
            StmtKind.ASSEMBLY: self._assembly,
            StmtKind.RETURN: self._return,
        }

    # -- helpers -------------------------------------------------------

    def _statement(self, node: TreeNode) -> None:
        self.generate_statement(node)

    def _control(self, op: str, result: Arg) -> Quad:
        return self._emit(op, _blank(), _blank(), result)

    def _generate_one(self, node: TreeNode) -> None:
        """Generate code for ``node`` alone, leaving its siblings alone."""
        if node.nodekind is NodeKind.STMT:
            self.generate_statement(node)
        else:
            self.generate_expression(node)

    def _call_result(self, bucket: Bucket) -> Arg:
        if bucket.datatype != DataType.VOID:
            return string_arg(self._new_temp())
        return string_arg("void")

    # -- statements ----------------------------------------------------

    def generate_statement(self, node: TreeNode) -> None:
        """Generate code for one statement node."""
        handler = self._handlers.get(node.kind)
        if handler is not None:
            handler(node)

    def _if(self, node: TreeNode) -> None:
        test, then_part, else_part = node.child
        self.generate(test)
        jump = self._emit(
            "IF_FALSE", self._last_result(), _blank(), string_arg("Label Undefined")
        )
        self.pending.append(jump)
        self.generate(then_part)
        if else_part is None:
            skipped = self.pending.pop()
            label = self.names.new_label()
            skipped.result = string_arg(label)
            self._control("label", string_arg(label))
            return
        skipped = self.pending.pop()
        leave = self._control("goto", string_arg("Label Undefined"))
        self.pending.append(leave)
        else_label = self.names.new_label()
        self._control("label", string_arg(else_label))
        skipped.result = string_arg(else_label)
        self.generate(else_part)
        end_label = self.names.new_label()
        self._control("label", string_arg(end_label))
        leave = self.pending.pop()
        leave.result = string_arg(end_label)

    def _while(self, node: TreeNode) -> None:
        test, body = node.child[0], node.child[1]
        start = self._control("label", string_arg("Label Undefined1"))
        self.pending.append(start)
        self.generate(test)
        exit_jump = self._emit(
            "IF_FALSE", self._last_result(), _blank(), string_arg("Label Undefined2")
        )
        self.pending.append(exit_jump)
        self.generate(body)
        exit_jump = self.pending.pop()
        loop_label = self.names.new_label()
        self._control("goto", string_arg(loop_label))
        start = self.pending.pop()
        start.result = string_arg(loop_label)
        end_label = self.names.new_label()
        self._control("label", string_arg(end_label))
        exit_jump.result = string_arg(end_label)

    def _assign(self, node: TreeNode) -> None:
        target, value = node.child[0], node.child[1]
        if target is None or value is None:
            raise ValueError("assignment needs a target and a value")
        if _is_exp(target, ExpKind.ID):
            self._assign_variable(target, value)
        elif _is_exp(target, ExpKind.VECTOR_ID):
            self._assign_element(target, value)

    def _assign_variable(self, target: TreeNode, value: TreeNode) -> None:
        dest = bucket_arg(self._bucket(target))
        if value.nodekind is NodeKind.EXP:
            if value.kind is ExpKind.CONST:
                self._emit("assign_id_const", const_arg(value.val), _blank(), dest)
            elif value.kind is ExpKind.ID:
                self._emit(
                    "assign_id_id", bucket_arg(self._bucket(value)), _blank(), dest
                )
            elif value.kind is ExpKind.ID_ADDR:
                self._emit(
                    "assign_id_const",
                    addr_arg(self._required(value).memloc),
                    _blank(),
                    dest,
                )
            elif value.kind is ExpKind.VECTOR_ID:
                self.generate(value)
                self._emit("assign_id_a", self._last_result(), _blank(), dest)
            else:
                self.generate(value)
                self._emit("assign_id_exp", self._last_result(), _blank(), dest)
        else:
            self.generate(value)
            self._emit("assign_id_f", self._last_result(), _blank(), dest)

    def _assign_element(self, target: TreeNode, value: TreeNode) -> None:
        self.generate(target)
        if value.nodekind is NodeKind.EXP:
            if value.kind is ExpKind.CONST:
                self._emit(
                    "assign_a_const", const_arg(value.val), _blank(), self._last_result()
                )
                return
            if value.kind is ExpKind.ID:
                self._emit(
                    "assign_a_id",
                    bucket_arg(self._bucket(value)),
                    _blank(),
                    self._last_result(),
                )
                return
            if value.kind is ExpKind.ID_ADDR:
                self._emit(
                    "assign_a_const",
                    addr_arg(self._required(value).memloc),
                    _blank(),
                    self._last_result(),
                )
                return
            op = "assign_a_a" if value.kind is ExpKind.VECTOR_ID else "assign_a_exp"
        else:
            op = "assign_a_f"
        self.pending.append(self.ir.last)
        self.generate(value)
        source = self._last_result()
        element = self.pending.pop()
        self._emit(op, source, _blank(), replace(element.result))

    def _function(self, node: TreeNode) -> None:
        bucket = self._bucket(node)
        if self._seen_function:
            self._control("end_function", bucket_arg(self.current_function))
        self._seen_function = True
        self.current_function = bucket
        self._control("start_function", bucket_arg(bucket))
        self.generate(node.child[0])
        self.generate(node.child[1])

    def _param(self, node: TreeNode) -> None:
        bucket = self._bucket(node)
        if bucket is None:
            return
        op = "param" if node.child[0] is None else "param_array"
        self._control(op, bucket_arg(bucket))

    def _call(self, node: TreeNode) -> None:
        first = node.child[0]
        if first is None:
            bucket = self._required(node)
            self._emit("call", bucket_arg(bucket), const_arg(0), self._call_result(bucket))
            return
        # Arguments are pushed last to first.
        for arg in reversed(list(iter_siblings(first))):
            self._argument(arg)
        bucket = self._required(node)
        self._emit(
            "call",
            bucket_arg(bucket),
            const_arg(bucket.number_args),
            self._call_result(bucket),
        )

    def _argument(self, arg: TreeNode) -> None:
        if arg.nodekind is NodeKind.EXP:
            if arg.kind is ExpKind.CONST:
                self._control("arg", const_arg(arg.val))
            elif arg.kind is ExpKind.ID:
                # Array names are passed like any other variable.
                self._control("arg", bucket_arg(self._required(arg)))
            elif arg.kind is ExpKind.ID_ADDR:
                self._control("arg", addr_arg(self._required(arg).memloc))
            elif arg.kind is ExpKind.VECTOR_ID:
                if arg.child[0] is None:
                    self._control("arg", bucket_arg(self._bucket(arg)))
                else:
                    self._generate_one(arg)
                    self._control("arg_address", self._last_result())
            elif arg.kind is ExpKind.OP:
                self._generate_one(arg)
                self._control("arg", self._last_result())
        elif _is_stmt(arg, StmtKind.CALL):
            self._generate_one(arg)
            self._control("arg", self._last_result())

    def _assembly(self, node: TreeNode) -> None:
        if node.child[0] is None:
            return
        self._control("start_assembly", _blank())
        for inst in iter_siblings(node.child[0]):
            self._emit(
                "inst", string_arg(inst.name), string_arg(node.scope), string_arg("void")
            )
        self._control("end_assembly", _blank())

    def _return(self, node: TreeNode) -> None:
        value = node.child[0]
        if value is None:
            self._control("return", string_arg("void"))
        elif _is_exp(value, ExpKind.CONST):
            self._control("return", const_arg(value.val))
        elif _is_exp(value, ExpKind.ID):
            self._control("return", bucket_arg(self._bucket(value)))
        elif _is_exp(value, ExpKind.ID_ADDR):
            self._control("return", addr_arg(self._required(value).memloc))
        elif _is_exp(value, ExpKind.VECTOR_ID):
            self.generate(value)
            self._control("return_array", self._last_result())
        else:
            self.generate(value)
            self._control("return", self._last_result())

    # -- whole program -------------------------------------------------

    def run(self, tree: TreeNode | None) -> IRList:
        """Generate the program, close ``main`` and map temporaries to registers."""
        self.generate(tree)
        self._control("end_function", bucket_arg(self.symtab.lookup("main", "global")))
        allocator = TempAllocator(self.symtab, self.next_location)
        allocate_temporaries(self.ir, allocator)
        self.next_location = allocator.next_location
        return self.ir


def code_gen(tree: TreeNode | None, symtab: SymbolTable, output: TextIO) -> IRList:
    """Generate intermediate code for ``tree`` and write its listing to ``output``."""
    ir = CodeGenerator(symtab).run(tree)
    output.write(_HEADER)
    ir.write(output)
    output.write("\n")
    return ir
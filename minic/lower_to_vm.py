from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from . import ast, ir
from .diagnostics import Diagnostic, UnsupportedNodeKind, UnsupportedOperator
from .instructions import Instruction
from .labels import LabelAllocator
from .symbols import SymbolTable


@dataclass
class CompilationContext:
    """Mutable state of a single compilation; build a fresh one per unit."""

    symbols: SymbolTable = field(default_factory=SymbolTable)
    labels: LabelAllocator = field(default_factory=LabelAllocator)
    warnings: List[Diagnostic] = field(default_factory=list)

    def warn(self, message: str, loc: Optional[ast.Located] = None, code: str | None = None) -> None:
        self.warnings.append(Diagnostic(message=message, code=code, severity="warning", loc=loc))


class Lowerer:
    """
    Lowers minic AST nodes to a flat list of stack-machine IR items.

    Supported:
    - literals, identifier loads, binary operators and `!`
    - declarations and assignments (slots come from the symbol table)
    - if/else conditionals lowered to JZ/J and labels
    - function definitions (label + body + RET)
    - print statements

    Call sites are accepted but emit nothing; there is no argument passing
    convention yet. Each one leaves a warning on the context.
    """

    def __init__(self, ctx: CompilationContext | None = None) -> None:
        self.ctx = ctx if ctx is not None else CompilationContext()

    def lower_chain(self, head: Optional[ast.Node]) -> List[ir.IrItem]:
        program: List[ir.IrItem] = []
        for stmt in ast.unchain(head):
            program.extend(self.lower(stmt))
        return program

    def lower(self, node: Optional[ast.Node]) -> List[ir.IrItem]:
        if node is None:
            return []
        if isinstance(node, ast.Literal):
            return [ir.push(), ir.number(node.text)]
        if isinstance(node, ast.BinaryOp):
            return self._lower_binary(node)
        if isinstance(node, ast.Conditional):
            return self._lower_conditional(node)
        if isinstance(node, ast.Declaration):
            self.ctx.symbols.declare(node.name)
            return self.lower(node.init)
        if isinstance(node, ast.Assignment):
            program = self.lower(node.value)
            slot = self.ctx.symbols.resolve(node.name, node.loc)
            program.extend([ir.push(), ir.number(slot), ir.save()])
            return program
        if isinstance(node, ast.Load):
            slot = self.ctx.symbols.resolve(node.name, node.loc)
            return [ir.push(), ir.number(slot), ir.load()]
        if isinstance(node, ast.FunctionDef):
            return self._lower_function(node)
        if isinstance(node, ast.FunctionCall):
            self.ctx.warn(f"call to '{node.name}' emits no instructions", node.loc, code="W0001")
            return []
        if isinstance(node, ast.Print):
            program = self.lower(node.value)
            program.append(ir.op(Instruction.PRINTC if node.char else Instruction.PRINTI))
            return program
        raise UnsupportedNodeKind(node, getattr(node, "loc", None))

    def _lower_binary(self, node: ast.BinaryOp) -> List[ir.IrItem]:
        if not isinstance(node.op, ast.Operator):
            raise UnsupportedOperator(node.op, node.loc)
        if node.right is None or (node.left is None and not node.op.is_unary):
            raise UnsupportedOperator(node.op, node.loc)
        # right-to-left: the right child is pushed first
        program = self.lower(node.right)
        program.extend(self.lower(node.left))
        program.append(ir.op(node.op.instruction))
        return program

    def _lower_conditional(self, node: ast.Conditional) -> List[ir.IrItem]:
        labels = self.ctx.labels.allocate()
        has_else = node.else_branch is not None

        program = self.lower(node.condition)
        program.append(ir.jump(Instruction.JZ, labels.else_target if has_else else labels.end_target))
        program.append(ir.label(labels.if_def))
        program.extend(self.lower_chain(node.then_branch))
        if has_else:
            program.append(ir.jump(Instruction.J, labels.end_target))
            program.append(ir.label(labels.else_def))
            program.extend(self.lower_chain(node.else_branch))
        program.append(ir.label(labels.end_def))
        return program

    def _lower_function(self, node: ast.FunctionDef) -> List[ir.IrItem]:
        # The slot is reserved but unused: calls jump to the label.
        self.ctx.symbols.declare(node.name)
        program = [ir.label(node.name)]
        program.extend(self.lower_chain(node.body))
        program.append(ir.ret())
        return program


def lower_program(root: Optional[ast.Node], ctx: CompilationContext | None = None) -> List[ir.IrItem]:
    return Lowerer(ctx).lower_chain(root)


__all__ = ["CompilationContext", "Lowerer", "lower_program"]

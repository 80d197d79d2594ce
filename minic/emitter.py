from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from . import ast, ir
from .instructions import Instruction
from .lower_to_vm import CompilationContext, Lowerer


def emit_program(
    root: Optional[ast.Node],
    entry: str = "main",
    ctx: CompilationContext | None = None,
) -> List[ir.IrItem]:
    """Build the full program: call the entry label, the lowered top level, halt."""
    program = [ir.call(entry)]
    program.extend(Lowerer(ctx).lower_chain(root))
    program.append(ir.halt())
    return program


def format_lines(items: Sequence[ir.IrItem]) -> List[str]:
    """
    Render items one per line. A PUSH item and the operand item after it
    share a single line, separated by a space.
    """
    lines: List[str] = []
    pending: Optional[str] = None
    for item in items:
        if pending is not None:
            lines.append(f"{pending} {item.text}")
            pending = None
        elif item.op is Instruction.PUSH:
            pending = item.text
        else:
            lines.append(item.text)
    if pending is not None:
        raise ValueError("program ends with a PUSH that has no operand")
    return lines


def format_program(items: Sequence[ir.IrItem]) -> str:
    return "".join(f"{line}\n" for line in format_lines(items))


def write_program(items: Sequence[ir.IrItem], out) -> None:
    out.write(format_program(items))


def count_instructions(items: Iterable[ir.IrItem]) -> int:
    """Number of output lines `items` serialize to (PUSH operands fold into the PUSH line)."""
    return sum(1 for item in items if item.kind is not ir.IrKind.NUMBER)


__all__ = ["emit_program", "format_lines", "format_program", "write_program", "count_instructions"]

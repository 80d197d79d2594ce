from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .instructions import Instruction


class IrKind(Enum):
    OP = auto()
    NUMBER = auto()
    LABEL = auto()
    JUMP = auto()
    SAVE = auto()
    LOAD = auto()
    RETURN = auto()
    HALT = auto()
    CALL = auto()


@dataclass(frozen=True)
class IrItem:
    """
    One emitted item of a stack-machine program.

    `op` is the opcode the item stands for (None for NUMBER and LABEL items).
    `operand` is the literal text of a NUMBER item, the name of a LABEL, or
    the target label of a JUMP/CALL. The textual form is derived from these
    fields only when asked for.
    """

    kind: IrKind
    op: Optional[Instruction] = None
    operand: Optional[str] = None

    @property
    def text(self) -> str:
        if self.kind is IrKind.NUMBER:
            return str(self.operand)
        if self.kind is IrKind.LABEL:
            return f"{self.operand}:"
        if self.kind in (IrKind.JUMP, IrKind.CALL):
            return f"\t{self.op.mnemonic} {self.operand}"
        return f"\t{self.op.mnemonic}"

    def __str__(self) -> str:
        return self.text


def op(inst: Instruction) -> IrItem:
    return IrItem(kind=IrKind.OP, op=inst)


def push() -> IrItem:
    return IrItem(kind=IrKind.OP, op=Instruction.PUSH)


def number(value: object) -> IrItem:
    return IrItem(kind=IrKind.NUMBER, operand=str(value))


def label(name: str) -> IrItem:
    return IrItem(kind=IrKind.LABEL, operand=name)


def jump(inst: Instruction, target: str) -> IrItem:
    if not inst.is_jump or inst is Instruction.CALL:
        raise ValueError(f"{inst.mnemonic} is not a jump instruction")
    return IrItem(kind=IrKind.JUMP, op=inst, operand=target)


def call(target: str) -> IrItem:
    return IrItem(kind=IrKind.CALL, op=Instruction.CALL, operand=target)


def save() -> IrItem:
    return IrItem(kind=IrKind.SAVE, op=Instruction.SAVE)


def load() -> IrItem:
    return IrItem(kind=IrKind.LOAD, op=Instruction.LOAD)


def ret() -> IrItem:
    return IrItem(kind=IrKind.RETURN, op=Instruction.RET)


def halt() -> IrItem:
    return IrItem(kind=IrKind.HALT, op=Instruction.HALT)


__all__ = [
    "IrKind",
    "IrItem",
    "op",
    "push",
    "number",
    "label",
    "jump",
    "call",
    "save",
    "load",
    "ret",
    "halt",
]

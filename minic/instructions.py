from __future__ import annotations

from enum import Enum


class Instruction(Enum):
    """Opcodes understood by the minic stack machine."""

    NOP = "NOP"
    PUSH = "PUSH"
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    MOD = "MOD"
    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    GT = "GT"
    LE = "LE"
    GE = "GE"
    NOT = "NOT"
    PRINTI = "PRINTI"
    PRINTC = "PRINTC"
    READC = "READC"
    POP = "POP"
    LOAD = "LOAD"
    SAVE = "SAVE"
    J = "J"
    JZ = "JZ"
    JLEZ = "JLEZ"
    JNZ = "JNZ"
    CALL = "CALL"
    RET = "RET"
    POPC = "POPC"
    HALT = "HALT"

    @property
    def mnemonic(self) -> str:
        return self.value

    @property
    def takes_immediate(self) -> bool:
        return self in _IMMEDIATE

    @property
    def is_jump(self) -> bool:
        return self in _JUMPS


_IMMEDIATE = frozenset({Instruction.PUSH})

_JUMPS = frozenset(
    {
        Instruction.J,
        Instruction.JZ,
        Instruction.JLEZ,
        Instruction.JNZ,
        Instruction.CALL,
    }
)


def requires_immediate(inst: Instruction) -> bool:
    return inst.takes_immediate


def is_jump(inst: Instruction) -> bool:
    return inst.is_jump


__all__ = ["Instruction", "requires_immediate", "is_jump"]

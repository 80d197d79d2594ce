"""
Compile errors and the diagnostic records the driver prints for them.

Every error raised while lowering is fatal: there is no recovery and no
partial program. Warnings are collected on the compilation context instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .ast import Located


@dataclass
class Diagnostic:
    """A single compiler message (error or warning) with an optional location."""

    message: str
    code: str | None = None
    severity: str = "error"
    loc: Optional[Located] = None

    def format(self, source_name: str | None = None) -> str:
        prefix = source_name or "<input>"
        if self.loc is not None:
            prefix = f"{prefix}:{self.loc.line}:{self.loc.column}"
        code = f" [{self.code}]" if self.code else ""
        return f"{prefix}: {self.severity}{code}: {self.message}"


class CompileError(Exception):
    code = "E0000"

    def __init__(self, message: str, loc: Optional[Located] = None) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(message=self.message, code=self.code, loc=self.loc)


class UndeclaredIdentifier(CompileError):
    code = "E0001"

    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        super().__init__(f"identifier: '{name}' has not been declared", loc)
        self.name = name


class UnsupportedNodeKind(CompileError):
    code = "E0002"

    def __init__(self, node: object, loc: Optional[Located] = None) -> None:
        super().__init__(f"unsupported node kind: {type(node).__name__}", loc)
        self.node = node


class UnsupportedOperator(CompileError):
    code = "E0003"

    def __init__(self, op: object, loc: Optional[Located] = None) -> None:
        super().__init__(f"unsupported operator: {op!r}", loc)
        self.op = op


__all__ = [
    "Diagnostic",
    "CompileError",
    "UndeclaredIdentifier",
    "UnsupportedNodeKind",
    "UnsupportedOperator",
]

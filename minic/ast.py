from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from .instructions import Instruction


@dataclass(frozen=True)
class Located:
    line: int
    column: int


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    NOT = "!"

    @property
    def instruction(self) -> Instruction:
        return Instruction[self.name]

    @property
    def is_unary(self) -> bool:
        return self is Operator.NOT


class LiteralKind(Enum):
    NUMBER = "number"
    CHAR = "char"


@dataclass
class Node:
    """
    Base of every AST node.

    `sibling` chains statements of one block (or of the top level) into a
    flat list; it is not a child. Use `siblings()` to walk the chain.
    """

    loc: Optional[Located] = field(default=None, kw_only=True)
    sibling: Optional["Node"] = field(default=None, kw_only=True, repr=False)

    def siblings(self) -> Iterator["Node"]:
        node: Optional[Node] = self
        while node is not None:
            yield node
            node = node.sibling


@dataclass
class Literal(Node):
    text: str
    kind: LiteralKind = LiteralKind.NUMBER


@dataclass
class BinaryOp(Node):
    """
    Operator node. Operands are lowered `right` first, then `left`, so `right`
    ends up deeper on the stack. The unary NOT only has `right`.
    """

    op: Operator
    left: Optional[Node]
    right: Optional[Node]


@dataclass
class Conditional(Node):
    condition: Node
    then_branch: Optional[Node]
    else_branch: Optional[Node] = None


@dataclass
class Assignment(Node):
    name: str
    value: Node


@dataclass
class Declaration(Node):
    name: str
    init: Optional[Node] = None


@dataclass
class Load(Node):
    name: str


@dataclass
class FunctionDef(Node):
    name: str
    body: Optional[Node] = None


@dataclass
class FunctionCall(Node):
    name: str
    args: Optional[Node] = None


@dataclass
class Print(Node):
    value: Node
    char: bool = False


def chain(nodes: Sequence[Node]) -> Optional[Node]:
    """Link `nodes` through their sibling fields and return the head."""
    for prev, nxt in zip(nodes, nodes[1:]):
        prev.sibling = nxt
    if nodes:
        nodes[-1].sibling = None
        return nodes[0]
    return None


def unchain(head: Optional[Node]) -> List[Node]:
    return list(head.siblings()) if head is not None else []


def dump(node: Optional[Node], indent: int = 0) -> str:
    """Render an AST (following sibling chains) as an indented outline."""
    lines: List[str] = []
    _dump_chain(node, indent, lines)
    return "\n".join(lines)


def _dump_chain(head: Optional[Node], indent: int, lines: List[str]) -> None:
    for node in unchain(head):
        pad = "  " * indent
        if isinstance(node, Literal):
            lines.append(f"{pad}Literal {node.text}")
        elif isinstance(node, BinaryOp):
            lines.append(f"{pad}BinaryOp {node.op.value}")
            _dump_chain(node.left, indent + 1, lines)
            _dump_chain(node.right, indent + 1, lines)
        elif isinstance(node, Conditional):
            lines.append(f"{pad}Conditional")
            _dump_chain(node.condition, indent + 1, lines)
            lines.append(f"{pad}then:")
            _dump_chain(node.then_branch, indent + 1, lines)
            if node.else_branch is not None:
                lines.append(f"{pad}else:")
                _dump_chain(node.else_branch, indent + 1, lines)
        elif isinstance(node, Assignment):
            lines.append(f"{pad}Assignment {node.name}")
            _dump_chain(node.value, indent + 1, lines)
        elif isinstance(node, Declaration):
            lines.append(f"{pad}Declaration {node.name}")
            _dump_chain(node.init, indent + 1, lines)
        elif isinstance(node, Load):
            lines.append(f"{pad}Load {node.name}")
        elif isinstance(node, FunctionDef):
            lines.append(f"{pad}FunctionDef {node.name}")
            _dump_chain(node.body, indent + 1, lines)
        elif isinstance(node, FunctionCall):
            lines.append(f"{pad}FunctionCall {node.name}")
            _dump_chain(node.args, indent + 1, lines)
        elif isinstance(node, Print):
            lines.append(f"{pad}Print{'C' if node.char else 'I'}")
            _dump_chain(node.value, indent + 1, lines)
        else:
            lines.append(f"{pad}<{type(node).__name__}>")

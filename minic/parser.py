from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from .ast import (
    Assignment,
    BinaryOp,
    Conditional,
    Declaration,
    FunctionCall,
    FunctionDef,
    Literal,
    LiteralKind,
    Load,
    Located,
    Node,
    Operator,
    Print,
    chain,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    start="program",
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse(source: str) -> Optional[Node]:
    """Parse minic source and return the head of the top-level statement chain."""
    tree = _PARSER.parse(source)
    return _build_program(tree)


def parse_file(path: Path) -> Optional[Node]:
    return parse(Path(path).read_text())


def _build_program(tree: Tree) -> Optional[Node]:
    items: List[Node] = []
    for child in tree.children:
        if not isinstance(child, Tree):
            continue
        if _name(child) == "func_def":
            items.append(_build_function(child))
        else:
            items.append(_build_stmt(child))
    return chain(items)


def _build_function(tree: Tree) -> FunctionDef:
    name_token = tree.children[0]
    body = _build_block(tree.children[1])
    return FunctionDef(name=name_token.value, body=body, loc=_loc(tree))


def _build_block(tree: Tree) -> Optional[Node]:
    statements = [_build_stmt(child) for child in tree.children if isinstance(child, Tree)]
    return chain(statements)


def _build_stmt(tree: Tree) -> Node:
    kind = _name(tree)
    loc = _loc(tree)
    if kind == "let_stmt":
        name_token = tree.children[0]
        init = None
        if len(tree.children) > 1:
            # `let x = e` declares x, then runs the assignment x = e
            init = Assignment(name=name_token.value, value=_build_expr(tree.children[1]), loc=loc)
        return Declaration(name=name_token.value, init=init, loc=loc)
    if kind == "assign_stmt":
        name_token, value_node = tree.children
        return Assignment(name=name_token.value, value=_build_expr(value_node), loc=loc)
    if kind == "print_stmt":
        value = _build_expr(tree.children[0])
        is_char = isinstance(value, Literal) and value.kind is LiteralKind.CHAR
        return Print(value=value, char=is_char, loc=loc)
    if kind == "call_stmt":
        return _build_call(tree.children[0])
    if kind == "if_stmt":
        return _build_if_stmt(tree)
    raise ValueError(f"Unsupported statement node: {kind}")


def _build_if_stmt(tree: Tree) -> Conditional:
    children = [child for child in tree.children if isinstance(child, Tree)]
    if len(children) not in (2, 3):
        raise ValueError("malformed if statement")
    condition = _build_expr(children[0])
    then_branch = _build_block(children[1])
    else_branch = None
    if len(children) == 3:
        tail = children[2]
        if _name(tail) == "if_stmt":
            else_branch = _build_if_stmt(tail)
        else:
            else_branch = _build_block(tail)
    return Conditional(
        condition=condition,
        then_branch=then_branch,
        else_branch=else_branch,
        loc=_loc(tree),
    )


def _build_call(tree: Tree) -> FunctionCall:
    name_token = tree.children[0]
    args: List[Node] = []
    if len(tree.children) > 1:
        args = [_build_expr(arg) for arg in tree.children[1].children if isinstance(arg, Tree)]
    return FunctionCall(name=name_token.value, args=chain(args), loc=_loc(tree))


def _build_expr(node) -> Node:
    if isinstance(node, Token):
        raise TypeError(f"Unexpected token in expression position: {node.type}")
    name = _name(node)
    loc = _loc(node)
    if name == "number":
        return Literal(text=node.children[0].value, kind=LiteralKind.NUMBER, loc=loc)
    if name == "char":
        return Literal(text=node.children[0].value, kind=LiteralKind.CHAR, loc=loc)
    if name == "load":
        return Load(name=node.children[0].value, loc=loc)
    if name == "call":
        return _build_call(node)
    if name == "not_expr":
        return BinaryOp(op=Operator.NOT, left=None, right=_build_expr(node.children[0]), loc=loc)
    if name == "binary":
        lhs, op_token, rhs = node.children
        # Operands are lowered right child first; the source's left operand
        # is stored as the right child so it ends up deeper on the stack.
        return BinaryOp(
            op=Operator(op_token.value),
            left=_build_expr(rhs),
            right=_build_expr(lhs),
            loc=loc,
        )
    raise ValueError(f"Unsupported expression node: {name}")


def _loc(tree: Tree) -> Optional[Located]:
    meta = tree.meta
    if getattr(meta, "empty", True):
        return None
    return Located(line=meta.line, column=meta.column)


def _name(node: Tree | Token) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    if isinstance(node, Token):
        return node.type
    return str(node)


__all__ = ["parse", "parse_file"]

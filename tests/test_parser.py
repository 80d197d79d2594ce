from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from minic import ast
from minic.minicc import compile_source
from minic.parser import parse


def test_let_desugars_to_declare_and_assign():
    root = parse("let x = 1;")
    assert isinstance(root, ast.Declaration)
    assert root.name == "x"
    assert isinstance(root.init, ast.Assignment)
    assert root.init.name == "x"
    assert root.init.value.text == "1"
    assert root.loc == ast.Located(line=1, column=1)


def test_statements_are_chained_as_siblings():
    root = parse("let x; x = 3; print x;")
    kinds = [type(node).__name__ for node in ast.unchain(root)]
    assert kinds == ["Declaration", "Assignment", "Print"]


def test_binary_operands_are_stored_for_stack_order():
    root = parse("let d = a - b;")
    expr = root.init.value
    assert expr.op is ast.Operator.SUB
    assert expr.right == ast.Load(name="a", loc=expr.right.loc)
    assert expr.left.name == "b"


def test_precedence():
    expr = parse("x = 1 + 2 * 3;").value
    assert expr.op is ast.Operator.ADD
    assert expr.right.text == "1"
    assert expr.left.op is ast.Operator.MUL


def test_function_and_if_else_chain():
    src = """
    fn main() {
        if (x == 1) { print 'a' } else if (x == 2) { print 'b' } else { print 'c' }
        f(1, 2);
    }
    """
    fn = parse(src)
    assert isinstance(fn, ast.FunctionDef)
    stmts = ast.unchain(fn.body)
    cond, call = stmts
    assert isinstance(cond.else_branch, ast.Conditional)
    assert cond.else_branch.else_branch.value.text == "'c'"
    assert cond.then_branch.char
    assert isinstance(call, ast.FunctionCall)
    assert [a.text for a in ast.unchain(call.args)] == ["1", "2"]


def test_not_and_comments():
    expr = parse("x = !(1 < 2); // trailing\n").value
    assert expr.op is ast.Operator.NOT
    assert expr.left is None
    assert expr.right.op is ast.Operator.LT


def test_syntax_error():
    with pytest.raises(UnexpectedInput):
        parse("let = 3;")


def test_end_to_end_assignment():
    out = compile_source("let x = 1; x = x + 2;")
    assert out.splitlines() == [
        "\tCALL main",
        "\tPUSH 1",
        "\tPUSH 0",
        "\tSAVE",
        "\tPUSH 0",
        "\tLOAD",
        "\tPUSH 2",
        "\tADD",
        "\tPUSH 0",
        "\tSAVE",
        "\tHALT",
    ]


def test_end_to_end_conditional():
    out = compile_source("if (1 > 0) { print 'y' } else { print 'n' }")
    assert out.splitlines() == [
        "\tCALL main",
        "\tPUSH 1",
        "\tPUSH 0",
        "\tGT",
        "\tJZ _else_0",
        "_if_0:",
        "\tPUSH 'y'",
        "\tPRINTC",
        "\tJ _end_if_0",
        "_else_0:",
        "\tPUSH 'n'",
        "\tPRINTC",
        "_end_if_0:",
        "\tHALT",
    ]


def test_end_to_end_function():
    out = compile_source("fn main() { let c = 'h'; print c; }")
    assert out == "\tCALL main\nmain:\n\tPUSH 'h'\n\tPUSH 1\n\tSAVE\n\tPUSH 1\n\tLOAD\n\tPRINTI\n\tRET\n\tHALT\n"

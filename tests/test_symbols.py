from __future__ import annotations

import pytest

from minic.ast import Located
from minic.diagnostics import UndeclaredIdentifier
from minic.symbols import SymbolTable


def test_slots_increase_from_zero():
    table = SymbolTable()
    assert [table.declare(name) for name in ("a", "b", "c")] == [0, 1, 2]
    assert len(table) == 3


def test_resolve_returns_declared_slot():
    table = SymbolTable()
    table.declare("a")
    slot = table.declare("b")
    assert table.resolve("b") == slot
    assert table.resolve("a") == 0


def test_redeclaration_shadows_without_reusing_slots():
    table = SymbolTable()
    assert table.declare("x") == 0
    assert table.declare("y") == 1
    assert table.declare("x") == 2
    assert table.resolve("x") == 2
    assert table.entries() == [("x", 0), ("x", 2), ("y", 1)]


def test_undeclared_identifier():
    table = SymbolTable()
    table.declare("x")
    with pytest.raises(UndeclaredIdentifier) as excinfo:
        table.resolve("nope", Located(line=3, column=7))
    assert excinfo.value.name == "nope"
    assert "'nope' has not been declared" in str(excinfo.value)
    assert excinfo.value.loc == Located(line=3, column=7)
    assert "nope" not in table

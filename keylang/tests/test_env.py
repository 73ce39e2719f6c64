from __future__ import annotations

import pytest

from keylang.builtins import builtin_signatures
from keylang.env import FunctionTableBuilder, VarInfo, VariableEnv
from keylang.errors import DuplicateFunction, DuplicateName
from keylang.types import BOOL, BOTTOM, PRINTABLE, FunctionSignature, int_range


def test_declare_then_lookup():
    env = VariableEnv()
    env.declare("x", int_range(0, 10), mutable=True)
    assert env.lookup("x") == VarInfo(type=int_range(0, 10), mutable=True)
    assert env.lookup("y") is None
    assert "x" in env


def test_duplicate_declaration_ignores_mutability():
    env = VariableEnv()
    env.declare("b", BOOL, mutable=False)
    with pytest.raises(DuplicateName) as excinfo:
        env.declare("b", BOOL, mutable=True)
    assert excinfo.value.name == "b"
    assert env.lookup("b").mutable is False


def test_function_table_seeded_with_builtins():
    table = FunctionTableBuilder(builtin_signatures()).build()
    sig = table.lookup("print")
    assert sig.params == (PRINTABLE,)
    assert sig.return_type == BOTTOM
    assert "println" in table


def test_builtin_cannot_be_redefined():
    builder = FunctionTableBuilder(builtin_signatures())
    with pytest.raises(DuplicateFunction):
        builder.define(FunctionSignature("print", (), BOTTOM))


def test_duplicate_user_function_rejected():
    builder = FunctionTableBuilder()
    builder.define(FunctionSignature("go", (), BOTTOM))
    with pytest.raises(DuplicateFunction):
        builder.define(FunctionSignature("go", (BOOL,), BOOL))


def test_built_table_is_a_snapshot():
    builder = FunctionTableBuilder()
    builder.define(FunctionSignature("a", (), BOTTOM))
    table = builder.build()
    builder.define(FunctionSignature("b", (), BOTTOM))
    assert "a" in table
    assert "b" not in table
    assert not hasattr(table, "define")

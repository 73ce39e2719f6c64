from __future__ import annotations

from typing import List

from . import ast
from .env import FunctionTable, VariableEnv
from .errors import (
    ArgumentTypeMismatch,
    ArityMismatch,
    CheckError,
    HeterogeneousList,
    IllegalUnaryInBinaryContext,
    ImmutableModification,
    IndexNotInteger,
    IndexOutOfBounds,
    ListTooLong,
    LiteralOutOfRange,
    NotAList,
    TypeMismatch,
    UndeclaredFunction,
    UndeclaredVariable,
    UnsupportedOperator,
)
from .types import (
    BOOL,
    BOTTOM,
    COLOR,
    KEY,
    MAX_VALUE,
    PRINTABLE,
    IntType,
    ListType,
    Type,
    int_range,
    join_element,
    join_interval,
    list_of,
    subtype,
)

UNARY_OPS = frozenset({"++", "--"})


class ExprChecker:
    """Infers expression types against a function table and a read-only variable environment."""

    def __init__(self, functions: FunctionTable, env: VariableEnv) -> None:
        self.functions = functions
        self.env = env

    def check(self, expr: ast.Expr) -> Type:
        if isinstance(expr, ast.Literal):
            return self._check_literal(expr)
        if isinstance(expr, ast.ListLiteral):
            return self._check_list_literal(expr)
        if isinstance(expr, ast.Name):
            info = self.env.lookup(expr.ident)
            if info is None:
                raise UndeclaredVariable(expr.ident, expr.loc)
            return info.type
        if isinstance(expr, ast.Binary):
            return self._check_binary(expr)
        if isinstance(expr, ast.Unary):
            return self._check_unary(expr)
        if isinstance(expr, ast.Call):
            return self._check_call(expr)
        if isinstance(expr, ast.Index):
            return self._check_index(expr)
        raise CheckError(f"unsupported expression {expr}", getattr(expr, "loc", None))

    def _check_literal(self, expr: ast.Literal) -> Type:
        value = expr.value
        # bool before int: True is an int in Python.
        if isinstance(value, bool):
            return BOOL
        if isinstance(value, int):
            if value >= MAX_VALUE:
                raise LiteralOutOfRange(value, MAX_VALUE, expr.loc)
            return int_range(0, value + 1)
        if isinstance(value, str):
            return PRINTABLE
        if isinstance(value, ast.Key):
            return KEY
        if isinstance(value, ast.Color):
            return COLOR
        raise CheckError(f"unsupported literal {value!r}", expr.loc)

    def _check_list_literal(self, expr: ast.ListLiteral) -> Type:
        if len(expr.elements) >= MAX_VALUE:
            raise ListTooLong(len(expr.elements), MAX_VALUE, expr.loc)
        if not expr.elements:
            return list_of(BOTTOM, 0)
        element_type = self.check(expr.elements[0])
        for element in expr.elements[1:]:
            actual = self.check(element)
            joined = join_element(element_type, actual)
            if joined is None:
                raise HeterogeneousList(element_type, actual, element.loc)
            element_type = joined
        return list_of(element_type, len(expr.elements))

    def _check_binary(self, expr: ast.Binary) -> Type:
        op = expr.op
        if op in UNARY_OPS:
            raise IllegalUnaryInBinaryContext(op, expr.loc)
        left = self.check(expr.left)
        right = self.check(expr.right)
        if isinstance(left, IntType) and isinstance(right, IntType) and op in ("+", "-"):
            return join_interval(left, right)
        if left == PRINTABLE:
            if op == "+" and (right == PRINTABLE or right == COLOR or isinstance(right, IntType)):
                return PRINTABLE
            if op == "*" and isinstance(right, IntType):
                return PRINTABLE
        if left == COLOR and op == "+" and right == PRINTABLE:
            return PRINTABLE
        raise UnsupportedOperator(op, left, right, expr.loc)

    def _check_unary(self, expr: ast.Unary) -> Type:
        info = self.env.lookup(expr.target)
        if info is None:
            raise UndeclaredVariable(expr.target, expr.loc)
        if not info.mutable:
            raise ImmutableModification(expr.target, expr.loc)
        if not isinstance(info.type, IntType):
            raise TypeMismatch(expr.target, int_range(0), info.type, expr.loc)
        return info.type

    def _check_call(self, expr: ast.Call) -> Type:
        sig = self.functions.lookup(expr.func)
        if sig is None:
            raise UndeclaredFunction(expr.func, expr.loc)
        if len(expr.args) != len(sig.params):
            raise ArityMismatch(expr.func, len(sig.params), len(expr.args), expr.loc)
        arg_types: List[Type] = [self.check(arg) for arg in expr.args]
        for position, (expected, actual) in enumerate(zip(sig.params, arg_types)):
            if not subtype(expected, actual):
                raise ArgumentTypeMismatch(expr.func, position, expected, actual, expr.args[position].loc)
        return sig.return_type

    def _check_index(self, expr: ast.Index) -> Type:
        container = self.check(expr.value)
        index = self.check(expr.index)
        if not isinstance(container, ListType):
            raise NotAList(container, expr.value.loc)
        if not isinstance(index, IntType):
            raise IndexNotInteger(index, expr.index.loc)
        if not subtype(int_range(0, container.length), index):
            raise IndexOutOfBounds(index, container.length, expr.index.loc)
        return container.element

from __future__ import annotations

import logging
from typing import Optional, Set

from . import ast
from .env import FunctionTable, VariableEnv
from .errors import (
    CheckError,
    DuplicateBranch,
    DuplicateName,
    ImmutableModification,
    TypeMismatch,
    UndeclaredVariable,
)
from .expr_checker import ExprChecker
from .types import Type, subtype

logger = logging.getLogger(__name__)


class StmtChecker:
    """
    Walks statements of one function body.

    `check` returns the type a statement returns on the paths that reach a
    `return`, or None when it never returns. Declarations grow the shared
    environment; blocks do not open a new scope.
    """

    def __init__(self, functions: FunctionTable, env: VariableEnv) -> None:
        self.functions = functions
        self.env = env
        self.exprs = ExprChecker(functions, env)

    def check(self, stmt: ast.Stmt) -> Optional[Type]:
        if isinstance(stmt, ast.DeclStmt):
            if stmt.name in self.env:
                raise DuplicateName(stmt.name, stmt.loc)
            value_type = self.exprs.check(stmt.value)
            if not subtype(stmt.type, value_type):
                raise TypeMismatch(stmt.name, stmt.type, value_type, stmt.value.loc)
            self.env.declare(stmt.name, stmt.type, stmt.mutable, stmt.loc)
            return None
        if isinstance(stmt, ast.AssignStmt):
            info = self.env.lookup(stmt.target)
            if info is None:
                raise UndeclaredVariable(stmt.target, stmt.loc)
            if not info.mutable:
                raise ImmutableModification(stmt.target, stmt.loc)
            value_type = self.exprs.check(stmt.value)
            if not subtype(info.type, value_type):
                raise TypeMismatch(stmt.target, info.type, value_type, stmt.value.loc)
            return None
        if isinstance(stmt, ast.BlockStmt):
            for index, inner in enumerate(stmt.statements):
                returned = self.check(inner)
                if returned is not None:
                    skipped = len(stmt.statements) - index - 1
                    if skipped:
                        logger.debug(
                            "%d:%d: %d statement(s) after return not checked",
                            inner.loc.line,
                            inner.loc.column,
                            skipped,
                        )
                    return returned
            return None
        if isinstance(stmt, ast.LoopStmt):
            return self.check(stmt.body)
        if isinstance(stmt, ast.BreakStmt):
            return None
        if isinstance(stmt, ast.InputStmt):
            seen: Set[ast.Key] = set()
            for case in stmt.cases:
                if case.key in seen:
                    raise DuplicateBranch(case.key, case.loc)
                seen.add(case.key)
                self.check(case.body)
            return None
        if isinstance(stmt, ast.ReturnStmt):
            return self.exprs.check(stmt.value)
        if isinstance(stmt, ast.ExprStmt):
            self.exprs.check(stmt.value)
            return None
        raise CheckError(f"unsupported statement {stmt}", getattr(stmt, "loc", None))

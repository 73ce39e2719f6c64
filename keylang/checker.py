from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from . import ast
from .builtins import builtin_signatures
from .env import FunctionTable, FunctionTableBuilder, VariableEnv
from .errors import MissingReturn, ReturnTypeMismatch, UnexpectedReturn
from .stmt_checker import StmtChecker
from .types import BOTTOM, FunctionSignature, subtype

logger = logging.getLogger(__name__)


@dataclass
class CheckedProgram:
    program: ast.Program
    functions: FunctionTable
    # Final variable environment of each user function, keyed by function name.
    envs: Dict[str, VariableEnv]


class Checker:
    def __init__(self, builtin_functions: Optional[Mapping[str, FunctionSignature]] = None) -> None:
        if builtin_functions is None:
            builtin_functions = builtin_signatures()
        self.builtin_functions = dict(builtin_functions)

    def check(self, program: ast.Program) -> CheckedProgram:
        functions = self._register_functions(program.functions)
        envs: Dict[str, VariableEnv] = {}
        for fn in program.functions:
            envs[fn.name] = self._check_function(fn, functions)
        logger.debug("checked %d function(s)", len(program.functions))
        return CheckedProgram(program=program, functions=functions, envs=envs)

    def _register_functions(self, functions: Sequence[ast.FunctionDef]) -> FunctionTable:
        # All signatures go in before any body is checked so calls may refer forward.
        builder = FunctionTableBuilder(self.builtin_functions)
        for fn in functions:
            signature = FunctionSignature(
                name=fn.name,
                params=tuple(param.type for param in fn.params),
                return_type=fn.return_type if fn.return_type is not None else BOTTOM,
            )
            builder.define(signature, fn.loc)
            logger.debug("registered %s", signature)
        return builder.build()

    def _check_function(self, fn: ast.FunctionDef, functions: FunctionTable) -> VariableEnv:
        env = VariableEnv()
        for param in fn.params:
            env.declare(param.name, param.type, mutable=False, loc=fn.loc)
        returned = StmtChecker(functions, env).check(fn.body)
        declared = fn.return_type
        if returned is not None and declared is None:
            raise UnexpectedReturn(fn.name, fn.loc)
        if returned is None and declared is not None:
            raise MissingReturn(fn.name, declared, fn.loc)
        if returned is not None and declared is not None and not subtype(declared, returned):
            raise ReturnTypeMismatch(fn.name, declared, returned, fn.loc)
        logger.debug("function %s ok (%d binding(s))", fn.name, len(env))
        return env


def check(program: ast.Program) -> CheckedProgram:
    return Checker().check(program)

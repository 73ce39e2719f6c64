from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .types import Type


class Key(Enum):
    W = "W"
    A = "A"
    S = "S"
    D = "D"


class Color(Enum):
    RED = "red"
    WHITE = "white"


@dataclass(frozen=True)
class Located:
    line: int
    column: int


@dataclass
class Param:
    name: str
    type: Type


class Stmt:
    loc: Located


class Expr:
    loc: Located


@dataclass
class Literal(Expr):
    """Constant of kind bool, int, str, Key or Color, told apart by the Python value."""

    loc: Located
    value: object


@dataclass
class ListLiteral(Expr):
    loc: Located
    elements: List[Expr]


@dataclass
class Name(Expr):
    loc: Located
    ident: str


@dataclass
class Binary(Expr):
    loc: Located
    op: str
    left: Expr
    right: Expr


@dataclass
class Unary(Expr):
    # `x++` / `x--`: the operand is always a variable name.
    loc: Located
    op: str
    target: str


@dataclass
class Call(Expr):
    loc: Located
    func: str
    args: List[Expr]


@dataclass
class Index(Expr):
    loc: Located
    value: Expr
    index: Expr


@dataclass
class DeclStmt(Stmt):
    loc: Located
    name: str
    type: Type
    value: Expr
    mutable: bool = False


@dataclass
class AssignStmt(Stmt):
    loc: Located
    target: str
    value: Expr


@dataclass
class BlockStmt(Stmt):
    loc: Located
    statements: List[Stmt] = field(default_factory=list)


@dataclass
class LoopStmt(Stmt):
    loc: Located
    body: Stmt


@dataclass
class BreakStmt(Stmt):
    loc: Located


@dataclass
class InputCase:
    key: Key
    body: Stmt
    loc: Located


@dataclass
class InputStmt(Stmt):
    loc: Located
    cases: List[InputCase]


@dataclass
class ReturnStmt(Stmt):
    loc: Located
    value: Expr


@dataclass
class ExprStmt(Stmt):
    loc: Located
    value: Expr


@dataclass
class FunctionDef:
    name: str
    params: Sequence[Param]
    return_type: Optional[Type]
    body: Stmt
    loc: Located


@dataclass
class Program:
    functions: List[FunctionDef]

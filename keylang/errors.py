"""
Check failures raised by the semantic checker.

Every failure is a subclass of `CheckError`; the class name is the failure
kind. Context (names, types, operators) is kept on the instance so callers
and tests can inspect it without parsing the message.
"""

from __future__ import annotations

from typing import Optional

from .ast import Key, Located
from .types import Type


class CheckError(Exception):
    def __init__(self, message: str, loc: Optional[Located] = None) -> None:
        self.message = message
        self.loc = loc
        if loc is not None:
            message = f"{loc.line}:{loc.column}: {message}"
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class DuplicateName(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"duplicated definition of '{name}'", loc)


class DuplicateFunction(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"function '{name}' is already defined", loc)


class UndeclaredVariable(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"undeclared variable '{name}'", loc)


class UndeclaredFunction(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"undeclared function '{name}'", loc)


class LiteralOutOfRange(CheckError):
    def __init__(self, value: int, limit: int, loc: Optional[Located] = None) -> None:
        self.value = value
        self.limit = limit
        super().__init__(f"integer literal {value} must be less than {limit}", loc)


class ListTooLong(CheckError):
    def __init__(self, length: int, limit: int, loc: Optional[Located] = None) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"list literal has {length} elements, must have fewer than {limit}", loc)


class HeterogeneousList(CheckError):
    def __init__(self, first: Type, other: Type, loc: Optional[Located] = None) -> None:
        self.first = first
        self.other = other
        super().__init__(f"list literal mixes elements of type {first} and {other}", loc)


class IllegalUnaryInBinaryContext(CheckError):
    def __init__(self, op: str, loc: Optional[Located] = None) -> None:
        self.op = op
        super().__init__(f"unary operator '{op}' used as a binary operator", loc)


class UnsupportedOperator(CheckError):
    def __init__(self, op: str, left: Type, right: Type, loc: Optional[Located] = None) -> None:
        self.op = op
        self.left = left
        self.right = right
        super().__init__(f"operator '{op}' is not supported between {left} and {right}", loc)


class ImmutableModification(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"attempted to modify immutable variable '{name}'", loc)


class TypeMismatch(CheckError):
    def __init__(self, name: str, expected: Type, actual: Type, loc: Optional[Located] = None) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"'{name}' has type {expected}, cannot hold a value of type {actual}", loc)


class ArityMismatch(CheckError):
    def __init__(self, name: str, expected: int, actual: int, loc: Optional[Located] = None) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"'{name}' expects {expected} args, got {actual}", loc)


class ArgumentTypeMismatch(CheckError):
    def __init__(
        self, name: str, position: int, expected: Type, actual: Type, loc: Optional[Located] = None
    ) -> None:
        self.name = name
        self.position = position
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"argument {position} to '{name}' has type {actual}, expected {expected}", loc
        )


class NotAList(CheckError):
    def __init__(self, actual: Type, loc: Optional[Located] = None) -> None:
        self.actual = actual
        super().__init__(f"type {actual} is not indexable", loc)


class IndexNotInteger(CheckError):
    def __init__(self, actual: Type, loc: Optional[Located] = None) -> None:
        self.actual = actual
        super().__init__(f"list index must be int, got {actual}", loc)


class IndexOutOfBounds(CheckError):
    def __init__(self, index: Type, length: int, loc: Optional[Located] = None) -> None:
        self.index = index
        self.length = length
        super().__init__(f"index of type {index} may fall outside a list of length {length}", loc)


class DuplicateBranch(CheckError):
    def __init__(self, key: Key, loc: Optional[Located] = None) -> None:
        self.key = key
        super().__init__(f"input branch for key {key.value} appears more than once", loc)


class UnexpectedReturn(CheckError):
    def __init__(self, name: str, loc: Optional[Located] = None) -> None:
        self.name = name
        super().__init__(f"function '{name}' returns a value but declares no return type", loc)


class MissingReturn(CheckError):
    def __init__(self, name: str, expected: Type, loc: Optional[Located] = None) -> None:
        self.name = name
        self.expected = expected
        super().__init__(f"function '{name}' must return a value of type {expected}", loc)


class ReturnTypeMismatch(CheckError):
    def __init__(self, name: str, expected: Type, actual: Type, loc: Optional[Located] = None) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"function '{name}' returned {actual} when {expected} was expected", loc)

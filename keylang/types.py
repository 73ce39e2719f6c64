from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# Exclusive upper limit for integer literals and list literal lengths.
MAX_VALUE = 65535


class TypeSystemError(Exception):
    pass


@dataclass(frozen=True)
class Type:
    name: str

    def __str__(self) -> str:  # pragma: no cover - trivial repr
        return self.name


@dataclass(frozen=True)
class IntType(Type):
    low: int = 0
    high: int = MAX_VALUE

    def __post_init__(self) -> None:
        if self.low < 0 or self.high < 0:
            raise TypeSystemError(f"int bounds must be non-negative, got <{self.low}, {self.high}>")
        if self.low > self.high:
            raise TypeSystemError(f"int lower bound {self.low} exceeds upper bound {self.high}")

    def __str__(self) -> str:
        return f"int<{self.low}, {self.high}>"


@dataclass(frozen=True)
class ListType(Type):
    element: Optional[Type] = None
    length: int = 0

    def __post_init__(self) -> None:
        if self.element is None:
            raise TypeSystemError("list type needs an element type")
        if self.length < 0:
            raise TypeSystemError(f"list length must be non-negative, got {self.length}")

    def __str__(self) -> str:
        return f"list<{self.element}, {self.length}>"


BOOL = Type("bool")
COLOR = Type("color")
KEY = Type("key")
PRINTABLE = Type("string")
BOTTOM = Type("⊥")


def int_range(low: int, high: int = MAX_VALUE) -> IntType:
    return IntType(name="int", low=low, high=high)


def list_of(element: Type, length: int) -> ListType:
    return ListType(name="list", element=element, length=length)


def is_int(ty: Type) -> bool:
    return isinstance(ty, IntType)


def is_list(ty: Type) -> bool:
    return isinstance(ty, ListType)


def subtype(expected: Type, actual: Type) -> bool:
    """Return True when a value of type `actual` may be used where `expected` is declared.

    Intervals accept any interval they enclose. Lists of equal length are
    covariant in their element type; the empty list literal is accepted by
    any list type of length zero.
    """
    if expected == actual:
        return True
    if isinstance(expected, IntType) and isinstance(actual, IntType):
        return expected.low <= actual.low and expected.high >= actual.high
    if isinstance(expected, ListType) and isinstance(actual, ListType):
        if expected.length != actual.length:
            return False
        if actual.length == 0 and actual.element == BOTTOM:
            return True
        return subtype(expected.element, actual.element)
    return False


def join_interval(a: IntType, b: IntType) -> IntType:
    """Widest interval enclosing both operands."""
    return int_range(min(a.low, b.low), max(a.high, b.high))


def join_element(a: Type, b: Type) -> Optional[Type]:
    if a == b:
        return a
    if isinstance(a, IntType) and isinstance(b, IntType):
        return join_interval(a, b)
    if isinstance(a, ListType) and isinstance(b, ListType) and a.length == b.length:
        if a.element == BOTTOM:
            return b
        if b.element == BOTTOM:
            return a
        inner = join_element(a.element, b.element)
        if inner is None:
            return None
        return list_of(inner, a.length)
    return None


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    params: Tuple[Type, ...]
    return_type: Type

    def __str__(self) -> str:  # pragma: no cover - trivial repr
        params = ", ".join(str(p) for p in self.params)
        return f"{self.return_type} {self.name}({params})"

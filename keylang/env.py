"""
Name tables used while checking: the per-function variable environment and
the global function table.

Neither table supports update or removal. A variable is bound once at its
declaration; only later assignments of a value are checked against it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

from .ast import Located
from .errors import DuplicateFunction, DuplicateName
from .types import FunctionSignature, Type


@dataclass(frozen=True)
class VarInfo:
    type: Type
    mutable: bool


class VariableEnv:
    """Flat, per-function namespace; nested blocks share it."""

    def __init__(self) -> None:
        self.vars: Dict[str, VarInfo] = {}

    def declare(self, name: str, ty: Type, mutable: bool, loc: Optional[Located] = None) -> VarInfo:
        if name in self.vars:
            raise DuplicateName(name, loc)
        info = VarInfo(type=ty, mutable=mutable)
        self.vars[name] = info
        return info

    def lookup(self, name: str) -> Optional[VarInfo]:
        return self.vars.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)


class FunctionTable:
    def __init__(self, signatures: Mapping[str, FunctionSignature]) -> None:
        self._signatures: Dict[str, FunctionSignature] = dict(signatures)

    def lookup(self, name: str) -> Optional[FunctionSignature]:
        return self._signatures.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._signatures

    def __iter__(self) -> Iterator[str]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)


class FunctionTableBuilder:
    def __init__(self, builtins: Optional[Mapping[str, FunctionSignature]] = None) -> None:
        self._signatures: Dict[str, FunctionSignature] = dict(builtins or {})

    def define(self, signature: FunctionSignature, loc: Optional[Located] = None) -> None:
        if signature.name in self._signatures:
            raise DuplicateFunction(signature.name, loc)
        self._signatures[signature.name] = signature

    def build(self) -> FunctionTable:
        return FunctionTable(self._signatures)

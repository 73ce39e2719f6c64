from __future__ import annotations

from typing import Dict

from .types import BOTTOM, PRINTABLE, FunctionSignature

PRINT_SIGNATURE = FunctionSignature("print", (PRINTABLE,), BOTTOM)
PRINTLN_SIGNATURE = FunctionSignature("println", (PRINTABLE,), BOTTOM)


def builtin_signatures() -> Dict[str, FunctionSignature]:
    return {
        PRINT_SIGNATURE.name: PRINT_SIGNATURE,
        PRINTLN_SIGNATURE.name: PRINTLN_SIGNATURE,
    }

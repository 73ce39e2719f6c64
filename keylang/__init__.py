"""
keylang: front end for a small language of keyboard-driven control programs.

Modules:
  types:        type algebra (intervals, lists, subtyping)
  parser:       source text -> AST (Lark grammar in grammar.lark)
  checker:      two-pass semantic checker, entry point `check`
  printer:      AST -> source text
  keylangc:     command-line driver
"""

from .checker import CheckedProgram, Checker, check
from .errors import CheckError
from .parser import ParseError, parse_program

__all__ = ["CheckError", "CheckedProgram", "Checker", "ParseError", "check", "parse_program"]

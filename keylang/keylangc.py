#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lark.exceptions import UnexpectedInput

from . import checker, parser
from .errors import CheckError
from .printer import format_program

logger = logging.getLogger(__name__)


def check_file(source_path: Path, print_ast: bool) -> int:
    try:
        source = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read {source_path}: {exc}", file=sys.stderr)
        return 2
    try:
        prog = parser.parse_program(source)
    except (UnexpectedInput, parser.ParseError) as exc:
        print(f"Parse error: {exc}", file=sys.stderr)
        return 2
    logger.debug("parsed %s: %d function(s)", source_path, len(prog.functions))
    if print_ast:
        sys.stdout.write(format_program(prog))
    try:
        checker.check(prog)
    except CheckError as exc:
        print(f"Typechecker error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="keylangc: check a keylang program")
    ap.add_argument("source", type=Path, help="keylang source file")
    ap.add_argument("--ast", action="store_true", help="Print the parsed program before checking")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log checker progress to stderr")
    args = ap.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op when the root logger already has handlers.
    logging.getLogger("keylang").setLevel(level)
    return check_file(args.source, args.ast)


if __name__ == "__main__":
    raise SystemExit(main())

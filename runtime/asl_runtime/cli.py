"""
ASL command line front end.

Reads a program from standard input (or a file) up to the first blank
line, runs it and prints either `error` or one `name = value` line per
variable.

Usage:
    asl [--bits {32,64}] [--overflow {wrap,error}] [--strict] [-v] [file]
    python -m asl_runtime < program.asl
"""

from typing import Iterable, List, Optional
import argparse
import logging
import sys

from .asl_runtime import ASLInterpreter, format_result, trim
from .config import InterpreterConfig, OVERFLOW_POLICIES, SUPPORTED_BITS


logger = logging.getLogger(__name__)


def read_program(lines: Iterable[str]) -> str:
    """Collect lines until the first blank one (or the end of input)"""
    program = []
    for line in lines:
        line = line.rstrip('\r\n')
        if not trim(line):
            break
        program.append(line + '\n')
    return ''.join(program)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asl",
        description="Interpret an assignment-statement program read until the first blank line.",
    )
    parser.add_argument("file", nargs="?", help="Read the program from this file instead of stdin.")
    parser.add_argument("--bits", type=int, choices=SUPPORTED_BITS, default=None,
                        help="Integer width (default: ASL_INT_BITS or 32).")
    parser.add_argument("--overflow", choices=OVERFLOW_POLICIES, default=None,
                        help="Overflow policy (default: ASL_OVERFLOW or wrap).")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Reject tokens left over after a complete expression.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log interpreter activity to stderr.")
    return parser


def resolve_config(args: argparse.Namespace) -> InterpreterConfig:
    """Environment settings, overridden by explicit flags"""
    base = InterpreterConfig.from_env()
    return InterpreterConfig(
        bits=base.bits if args.bits is None else args.bits,
        overflow=base.overflow if args.overflow is None else args.overflow,
        strict=base.strict if args.strict is None else args.strict,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = resolve_config(args)
    except ValueError as e:
        parser.error(str(e))

    if args.file:
        try:
            with open(args.file, encoding="utf-8", errors="replace") as f:
                program = read_program(f)
        except OSError as e:
            print(f"Error: cannot read '{args.file}': {e.strerror}", file=sys.stderr)
            return 1
    else:
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors="replace")
        program = read_program(sys.stdin)

    logger.debug("Running %d character program with %r", len(program), config)
    result = ASLInterpreter(config).interpret(program)

    for line in format_result(result):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

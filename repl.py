"""Interactive calculator loop and one-shot command line.

Run with:
    bigint-calc                    # interactive
    bigint-calc -e "2^100 % 97"    # evaluate once and exit

Every line is parsed by ``expression`` into a syntax tree and evaluated
against the ``bigint`` operations; failures are reported and the loop
keeps going.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable

from errors import BigIntegerError, ExpressionError
from expression import evaluate_expression
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def banner(settings: Settings) -> str:
    return f"BigInt Calculator (type '{settings.exit_commands[0]}' to quit)"


def evaluate_line(line: str, settings: Settings) -> str:
    """Evaluate one line and return the text to show for it."""
    try:
        return str(evaluate_expression(line, settings.limits()))
    except (BigIntegerError, ExpressionError) as e:
        logger.info("rejected %r: %s", line, e)
        return f"Error: {e}"


def run_repl(
    settings: Settings | None = None,
    read_line: Callable[[str], str] | None = None,
    write: Callable[[str], None] | None = None,
) -> int:
    """Read-evaluate-print until an exit command or end of input.

    Returns the number of expressions evaluated (failed ones included).
    """
    if settings is None:
        settings = get_settings()
    if read_line is None:
        read_line = input
    if write is None:
        write = print

    exit_commands = {c.lower() for c in settings.exit_commands}
    evaluated = 0

    write(banner(settings))
    while True:
        try:
            line = read_line(settings.prompt)
        except EOFError:
            write("")
            break

        line = line.strip()
        if not line:
            continue
        if line.lower() in exit_commands:
            break

        write(evaluate_line(line, settings))
        evaluated += 1

    logger.debug("session ended after %d expression(s)", evaluated)
    return evaluated


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bigint-calc",
        description="Exact arbitrary-precision integer calculator",
    )
    parser.add_argument(
        "-e", "--expression",
        help="Evaluate one expression, print the result and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override BIGINT_LOG_LEVEL",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, args.log_level or settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.expression is not None:
        try:
            result = evaluate_expression(args.expression, settings.limits())
        except (BigIntegerError, ExpressionError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(result)
        return 0

    try:
        run_repl(settings)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

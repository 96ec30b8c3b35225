"""Command line interface for exprcalc."""

from __future__ import annotations

import argparse
import sys

from .core.logging import setup_logging
from .errors import ExpressionError
from .evaluator import ExpressionEvaluator
from .math.value import NumericType, Value, classify_text
from .resolvers import SymbolTable


def _parse_definition(text: str) -> tuple[str, Value]:
    """Parse ``NAME=VALUE``; numeric values become Integer or Float."""
    name, sep, raw = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")

    numeric_type, number = classify_text(raw)
    if numeric_type is NumericType.NONE:
        return name, Value(raw)
    return name, Value(number)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprcalc",
        description="Evaluate an expression and print the result.",
    )
    parser.add_argument(
        "expression",
        help="The expression to evaluate, e.g. \"(2 + 3) * -5\".",
    )
    parser.add_argument(
        "-D",
        "--define",
        dest="definitions",
        action="append",
        type=_parse_definition,
        default=[],
        metavar="NAME=VALUE",
        help="Define a symbol (may be repeated).",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="show_type",
        action="store_true",
        help="Also print the type of the result.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: from EXPRCALC_LOG_LEVEL).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    symbols = SymbolTable(dict(args.definitions))
    evaluator = ExpressionEvaluator(symbol_resolver=symbols)

    try:
        result = evaluator.evaluate(args.expression)
    except ExpressionError as exc:
        print(args.expression, file=sys.stderr)
        print(" " * exc.index + "^", file=sys.stderr)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.show_type:
        print(f"{result.to_text()} ({result.type.value})")
    else:
        print(result.to_text())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Command-line interface for one-off tolerance comparisons."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

from number_delta.assertions import DeltaAsserter
from number_delta.config import DeltaConfig, build_config, load_config
from number_delta.errors import NumberDeltaError
from number_delta.logging import configure_logging
from number_delta.operand import to_operand
from number_delta.reporter import TapReporter
from number_delta.tolerance import validate_epsilon

LOGGER = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _operand(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(
            f"expected a JSON number or array of numbers, got {text!r}"
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""

    parser = argparse.ArgumentParser(prog="number-delta")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level for JSON logs written to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    compare_parser = subparsers.add_parser(
        "compare", help="Compare two numbers or JSON arrays and print a TAP result"
    )
    compare_parser.add_argument("actual", type=_operand, help="Actual value as JSON.")
    compare_parser.add_argument("expected", type=_operand, help="Expected value as JSON.")
    tolerance = compare_parser.add_mutually_exclusive_group()
    tolerance.add_argument(
        "--epsilon", type=float, default=None, help="Explicit epsilon for this comparison."
    )
    tolerance.add_argument("--within", type=float, default=None, help="Default fixed epsilon.")
    tolerance.add_argument(
        "--relative", type=float, default=None, help="Default tolerance relative to magnitude."
    )
    compare_parser.add_argument(
        "--not",
        dest="negate",
        action="store_true",
        help="Pass when the values are NOT equal within the tolerance.",
    )
    compare_parser.add_argument("--label", default=None, help="Label printed with the result.")
    compare_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with 'within' or 'relative' defaults.",
    )
    compare_parser.set_defaults(handler=_compare_command)
    return parser


def _resolve_config(args: argparse.Namespace) -> DeltaConfig:
    options = {
        name: value
        for name, value in (("within", args.within), ("relative", args.relative))
        if value is not None
    }
    if args.config is None:
        return build_config(**options)
    config = load_config(args.config)
    if not options:
        return config
    merged = config.model_dump(exclude={"within", "relative"}) | options
    return build_config(**merged)


def _compare_command(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    # Fatal input errors must surface before the plan line is written.
    if args.epsilon is not None:
        validate_epsilon(args.epsilon)
    actual = to_operand(args.actual)
    expected = to_operand(args.expected)

    reporter = TapReporter()
    reporter.plan(tests=1)
    asserter = DeltaAsserter(config, reporter)

    if args.epsilon is not None:
        check = asserter.delta_not_within if args.negate else asserter.delta_within
        passed = check(actual, expected, args.epsilon, args.label)
    else:
        check_default = asserter.delta_not_ok if args.negate else asserter.delta_ok
        passed = check_default(actual, expected, args.label)

    reporter.finish()
    return EXIT_PASSED if passed else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(log_level=args.log_level)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    command_handler = cast(Callable[[argparse.Namespace], int], handler)
    try:
        return command_handler(args)
    except NumberDeltaError as exc:
        LOGGER.error("command_failed command=%s error=%s", args.command, exc)
        print(f"number-delta: error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())

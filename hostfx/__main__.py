from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable

from loguru import logger

from hostfx.config import HostConfig, load_config
from hostfx.errors import ConfigError
from hostfx.harness import check_output, run_platform


def configure_logging(level: str) -> None:
    """Route loguru and stdlib logging to a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.enable("hostfx")
    # loguru-only levels (TRACE, SUCCESS) map to DEBUG
    stdlib_level = getattr(logging, level, logging.DEBUG)
    logging.basicConfig(level=stdlib_level, stream=sys.stderr, force=True)


def _unescape(text: str) -> str:
    # characters beyond latin-1 become \u escapes that decode back to themselves
    return text.encode("latin-1", "backslashreplace").decode("unicode_escape")


def handle_run(args: argparse.Namespace, config: HostConfig) -> int:
    output = run_platform(args.resource, config=config, forward_stdout=True)
    sys.stdout.write(output)
    sys.stdout.flush()
    return 0


def handle_check(args: argparse.Namespace, config: HostConfig) -> int:
    expected = _unescape(args.expected) if args.expected is not None else config.expected_output
    actual = run_platform(args.resource, config=config)
    return check_output(actual, expected)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostfx", description="hostfx platform runner")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (TRACE, DEBUG, INFO, WARNING, ERROR). Defaults to HOSTFX_LOG_LEVEL.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a program module and print its result")
    run_parser.add_argument("resource", help="Path or http(s) URL of the program module")
    run_parser.set_defaults(func=handle_run)

    check_parser = subparsers.add_parser(
        "check", help="Run a program module and compare its result with an expected string"
    )
    check_parser.add_argument("resource", help="Path or http(s) URL of the program module")
    check_parser.add_argument(
        "--expected",
        default=None,
        help=r"Expected output; backslash escapes such as \n are decoded. "
        "Defaults to HOSTFX_EXPECTED_OUTPUT.",
    )
    check_parser.set_defaults(func=handle_check)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        config = load_config()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    configure_logging((args.log_level or config.log_level).upper())
    try:
        return args.func(args, config)
    except Exception as exc:
        logger.opt(exception=exc).debug("command failed")
        print(f"Error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

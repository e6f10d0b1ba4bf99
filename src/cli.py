"""Command-line interface for timecop-check."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from report.write import write_jsonl, write_text
from rules.config import ConfigError, load_config
from runner import RunResult, run_check


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to scan for Ruby files (default: .)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "jsonl"),
        default=None,
        help="Report format (default: config format, else text)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timecop-check")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Report Timecop usage")
    _add_common_args(check_parser)

    fix_parser = subparsers.add_parser(
        "fix", help="Autocorrect Timecop usage in place and report the rest"
    )
    _add_common_args(fix_parser)

    return parser


def _write_report(result: RunResult, output_format: str) -> None:
    if output_format == "jsonl":
        write_jsonl(sys.stdout.buffer, result.reports)
        sys.stdout.buffer.flush()
    else:
        write_text(sys.stdout, result.reports)


def _exit_code(result: RunResult) -> int:
    if result.failed:
        return 2
    if result.offense_count:
        return 1
    return 0


def _handle(root: Path, *, output_format: str | None, fix: bool) -> int:
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    result = run_check(root, config=config, fix=fix)
    _write_report(result, output_format or config.format)

    if fix and result.corrected_count:
        sys.stderr.write(f"corrected: {result.corrected_count}\n")
    for path in result.failed:
        sys.stderr.write(f"failed: {path}\n")
    return _exit_code(result)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).expanduser().resolve()
    if not root.is_dir():
        sys.stderr.write(f"error: not a directory: {root}\n")
        return 2

    if args.command == "check":
        return _handle(root, output_format=args.format, fix=False)

    if args.command == "fix":
        return _handle(root, output_format=args.format, fix=True)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())

"""``skillint`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skillint import __version__
from skillint.cli.handlers import evaluate_fail_threshold, handle_validate_config, parse_output_formats
from skillint.constants.branding import CLI_DESCRIPTION
from skillint.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_OUTPUT_FORMATS
from skillint.constants.scoring import DEFAULT_FAIL_ON, FAIL_ON_CHOICES, SEVERITY_ORDER
from skillint.exceptions import ConfigError, SkillintError
from skillint.exceptions.validation import format_errors
from skillint.reporting import StdoutReporter
from skillint.scanner import lint_workspace
from skillint.validation import preflight_validate

EXIT_FINDINGS = 1
EXIT_USAGE = 2

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, required=True, help="Corpus root path")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")


def _add_lint_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    lint = subparsers.add_parser("lint", help="Lint skill documents under a corpus root")
    _add_common_arguments(lint)
    lint.add_argument("-o", "--output-dir", type=Path, help="Write reports under this directory")

    rules = lint.add_argument_group("rule selection")
    rules.add_argument("--only", action="append", metavar="RULE", help="Run only this rule; repeatable")
    rules.add_argument("--disable", action="append", metavar="RULE", help="Skip this rule; repeatable")
    rules.add_argument("--max-file-mb", type=int, help="Skip SKILL.md files larger than this size")

    output = lint.add_argument_group("output")
    output.add_argument(
        "--output-format",
        default=DEFAULT_OUTPUT_FORMAT,
        help=f"Comma-separated list of {', '.join(sorted(VALID_OUTPUT_FORMATS))} (default: {DEFAULT_OUTPUT_FORMAT})",
    )
    output.add_argument(
        "--min-severity",
        choices=SEVERITY_ORDER[::-1],
        help="Only show and write findings at or above this severity",
    )
    output.add_argument(
        "--fail-on",
        choices=FAIL_ON_CHOICES,
        default=DEFAULT_FAIL_ON,
        help=f"Exit 1 when a finding reaches this severity (default: {DEFAULT_FAIL_ON})",
    )
    output.add_argument("--no-stdout", action="store_true", help="Print nothing to stdout")
    output.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    output.add_argument("-v", "--verbose", action="store_true", help="Debug logging and extra summary lines")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillint",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_lint_command(subparsers)
    _add_common_arguments(subparsers.add_parser("validate-config", help="Check configuration without linting"))
    return parser


def _config_error(message: str) -> int:
    print(f"Configuration error: {message}", file=sys.stderr)
    return EXIT_USAGE


def run_lint(args: argparse.Namespace) -> int:
    """Run the ``lint`` subcommand and return its exit code."""
    output_formats = parse_output_formats(args.output_format)
    if output_formats is None:
        return _config_error("--output-format contains empty or malformed tokens")
    unknown_formats = sorted(set(output_formats) - VALID_OUTPUT_FORMATS)
    if unknown_formats:
        return _config_error(
            f"unknown output format(s): {', '.join(unknown_formats)}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )

    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return EXIT_USAGE

    try:
        result = lint_workspace(
            root=args.root,
            out=args.output_dir,
            config_path=args.config,
            max_file_mb=args.max_file_mb,
            only_rules=tuple(args.only) if args.only else None,
            disable_rules=tuple(args.disable) if args.disable else None,
            output_formats=output_formats,
            min_severity=args.min_severity,
        )
    except ConfigError as exc:
        return _config_error(str(exc))
    except SkillintError as exc:
        logger.debug("Lint aborted", exc_info=True)
        print(f"Lint error: {exc}", file=sys.stderr)
        return EXIT_FINDINGS

    if not args.no_stdout:
        reporter = StdoutReporter(
            result,
            color=not args.no_color and sys.stdout.isatty(),
            verbose=args.verbose,
            min_severity=args.min_severity,
            fail_on=args.fail_on,
        )
        print(reporter.render())
    return evaluate_fail_threshold(result, fail_on=args.fail_on)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    if args.command == "validate-config":
        return handle_validate_config(args)
    return run_lint(args)


if __name__ == "__main__":
    raise SystemExit(main())

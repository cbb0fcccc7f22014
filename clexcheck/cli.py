"""Command line driver: analyze source files and print their reports."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys

from tqdm import tqdm

from clexcheck.output import format_report, report_to_dict, report_to_json
from clexcheck.pipeline import AnalysisReport, AnalyzerOptions, analyze_file

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_FLAGGED = 1
EXIT_UNREADABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clexcheck",
        description="Tokenize C-like sources and report common novice mistakes",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="Source files to analyze")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--no-tokens",
        action="store_true",
        help="Omit the token table from text reports",
    )
    parser.add_argument(
        "--tables",
        type=Path,
        default=None,
        help="JSON document overriding the keyword/symbol/type tables",
    )
    parser.add_argument(
        "--no-assignment-checks",
        action="store_true",
        help="Only type-check literal initializers, not later literal assignments",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the tqdm progress bar shown for multiple files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    check_assignments = not args.no_assignment_checks
    if args.tables is None:
        options = AnalyzerOptions(check_assignments=check_assignments)
    else:
        try:
            options = AnalyzerOptions.from_table_file(args.tables, check_assignments=check_assignments)
        except (OSError, ValueError) as exc:
            logger.error("Cannot load tables from %s: %s", args.tables, exc)
            return EXIT_UNREADABLE

    paths: list[Path] = args.paths
    show_progress = len(paths) > 1 and not args.no_progress
    iterator = tqdm(paths, desc="analyzing", unit="file", file=sys.stderr) if show_progress else paths

    reports: dict[Path, AnalysisReport] = {}
    unreadable = False
    for path in iterator:
        try:
            reports[path] = analyze_file(path, options)
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            unreadable = True

    _print_reports(reports, output_format=args.format, include_tokens=not args.no_tokens)

    if unreadable:
        return EXIT_UNREADABLE
    if any(report.has_flags for report in reports.values()):
        return EXIT_FLAGGED
    return EXIT_CLEAN


def _print_reports(reports: dict[Path, AnalysisReport], *, output_format: str, include_tokens: bool) -> None:
    if output_format == "json":
        if len(reports) == 1:
            (report,) = reports.values()
            print(report_to_json(report))
            return
        documents = {str(path): report_to_dict(report) for path, report in reports.items()}
        print(json.dumps(documents, indent=2, ensure_ascii=False))
        return

    for path, report in reports.items():
        if len(reports) > 1:
            print(f"== {path}")
        print(format_report(report, include_tokens=include_tokens), end="")


if __name__ == "__main__":
    raise SystemExit(main())

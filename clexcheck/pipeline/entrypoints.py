"""Analyzer entrypoints: scan, classify, track and check in one pass."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from pathlib import Path
from types import MappingProxyType

from clexcheck.analysis import DeclarationTracker
from clexcheck.diagnostics import collect_flags
from clexcheck.lexer import Classifier, CommentRecord, LanguageTables, Token, TokenKind, scan
from clexcheck.lint import TokenRule, default_token_rules, validate_token_rules
from clexcheck.pipeline.options import AnalyzerOptions
from clexcheck.pipeline.result import AnalysisReport
from clexcheck.typecheck import TypeConsistencyChecker

logger = logging.getLogger(__name__)


def analyze(
    source_text: str,
    options: AnalyzerOptions | None = None,
    *,
    tables: LanguageTables | None = None,
    rules: Sequence[TokenRule] | None = None,
) -> AnalysisReport:
    """Analyze one source unit and return its report."""
    resolved = _resolve_options(options, tables)
    resolved_tables = resolved.tables
    resolved_rules = tuple(rules) if rules is not None else default_token_rules(resolved_tables)
    validate_token_rules(resolved_rules)

    classifier = Classifier(resolved_tables)
    tracker = DeclarationTracker(
        resolved_tables,
        checker=TypeConsistencyChecker(resolved_tables),
        check_assignments=resolved.check_assignments,
    )

    tokens: list[Token] = []
    comments: list[CommentRecord] = []
    for lexeme in scan(source_text, resolved_tables):
        token = classifier.classify(
            lexeme,
            declared=tracker.declarations,
            previous=tokens[-1] if tokens else None,
        )
        if token.kind == TokenKind.COMMENT:
            comments.append(CommentRecord.from_lexeme(lexeme))
            continue
        tracker.process_token(token, tokens)
        tokens.append(token)

    rule_flags = [rule.run(tokens) for rule in resolved_rules]
    flags = collect_flags(classifier.flags, tracker.flags, *rule_flags)

    logger.debug(
        "Analyzed %d characters: %d tokens, %d comments, %d declarations, %d flags",
        len(source_text),
        len(tokens),
        len(comments),
        len(tracker.declarations),
        len(flags),
    )
    return AnalysisReport(
        source_text=source_text,
        tokens=tuple(tokens),
        declarations=MappingProxyType(dict(tracker.declarations)),
        flags=tuple(flags),
        comments=tuple(comments),
    )


def analyze_file(path: str | Path, options: AnalyzerOptions | None = None) -> AnalysisReport:
    """Read a file as UTF-8 and analyze it. Undecodable bytes are replaced."""
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8", errors="replace")
    logger.debug("Read %s (%d characters)", file_path, len(text))
    return analyze(text, options)


def analyze_files(
    paths: Iterable[str | Path],
    options: AnalyzerOptions | None = None,
) -> dict[Path, AnalysisReport]:
    """Analyze each file independently, keyed by path in input order."""
    return {Path(path): analyze_file(path, options) for path in paths}


def _resolve_options(options: AnalyzerOptions | None, tables: LanguageTables | None) -> AnalyzerOptions:
    if options is not None:
        if tables is not None:
            raise ValueError("Pass either options or tables, not both")
        return options
    if tables is not None:
        return AnalyzerOptions(tables=tables)
    return AnalyzerOptions()

"""Flags reported by the analyzer."""

from clexcheck.diagnostics.codes import (
    MISPLACED_RELATIONAL_OPERATOR,
    MISSPELLED_KEYWORD,
    SPECS_BY_KIND,
    TYPE_MISMATCH,
    USE_BEFORE_DECLARATION,
    FlagSpec,
)
from clexcheck.diagnostics.flag import ErrorKind, Flag, Severity
from clexcheck.diagnostics.report import collect_flags, count_by_kind, has_errors, sort_flags

__all__ = [
    "MISPLACED_RELATIONAL_OPERATOR",
    "MISSPELLED_KEYWORD",
    "SPECS_BY_KIND",
    "TYPE_MISMATCH",
    "USE_BEFORE_DECLARATION",
    "ErrorKind",
    "Flag",
    "FlagSpec",
    "Severity",
    "collect_flags",
    "count_by_kind",
    "has_errors",
    "sort_flags",
]

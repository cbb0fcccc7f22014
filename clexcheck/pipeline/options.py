"""Analyzer configuration options."""

from dataclasses import dataclass, field
from pathlib import Path

from clexcheck.lexer import LanguageTables, load_tables


@dataclass(frozen=True, slots=True)
class AnalyzerOptions:
    """Tables and feature switches for one analysis run."""

    tables: LanguageTables = field(default_factory=LanguageTables.default)
    check_assignments: bool = True

    @staticmethod
    def from_table_file(path: str | Path, *, check_assignments: bool = True) -> "AnalyzerOptions":
        return AnalyzerOptions(tables=load_tables(path), check_assignments=check_assignments)

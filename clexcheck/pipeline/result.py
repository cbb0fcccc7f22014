"""Analysis report carrier."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from clexcheck.analysis import Declaration
from clexcheck.diagnostics import ErrorKind, Flag, count_by_kind
from clexcheck.lexer import CommentRecord, Token


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Everything one analysis found, in document order. Read only."""

    source_text: str
    tokens: tuple[Token, ...]
    declarations: Mapping[str, Declaration]
    flags: tuple[Flag, ...]
    comments: tuple[CommentRecord, ...]

    @property
    def has_flags(self) -> bool:
        return bool(self.flags)

    def flags_of(self, kind: ErrorKind) -> tuple[Flag, ...]:
        return tuple(flag for flag in self.flags if flag.error_kind == kind)

    def flag_counts(self) -> dict[ErrorKind, int]:
        return count_by_kind(self.flags)

"""Flag core types."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from clexcheck.text import Position, Span

Severity = Literal["error", "warning"]


class ErrorKind(StrEnum):
    MISSPELLED_KEYWORD = "MisspelledKeyword"
    TYPE_MISMATCH = "TypeMismatch"
    USE_BEFORE_DECLARATION = "UseBeforeDeclaration"
    MISPLACED_RELATIONAL_OPERATOR = "MisplacedRelationalOperator"

    @property
    def rank(self) -> int:
        """Stable order used to break ties between flags at one position."""
        return _RANKS[self]


_RANKS = {kind: index for index, kind in enumerate(ErrorKind)}


@dataclass(frozen=True, slots=True)
class Flag:
    """Structured anomaly reported by the classifier and the checkers."""

    error_kind: ErrorKind
    message: str
    span: Span
    severity: Severity = "error"
    hint: str | None = None

    @property
    def position(self) -> Position:
        return self.span.start

    @property
    def code(self) -> str:
        return _CODES[self.error_kind]


_CODES = {
    ErrorKind.TYPE_MISMATCH: "E1",
    ErrorKind.MISSPELLED_KEYWORD: "E2",
    ErrorKind.USE_BEFORE_DECLARATION: "E3",
    ErrorKind.MISPLACED_RELATIONAL_OPERATOR: "E4",
}

"""Flag specs: one message/hint template per error kind."""

from dataclasses import dataclass
from typing import Final

from clexcheck.diagnostics.flag import ErrorKind, Flag, Severity
from clexcheck.text import Span


@dataclass(frozen=True, slots=True)
class FlagSpec:
    error_kind: ErrorKind
    message: str
    hint: str | None = None
    severity: Severity = "error"

    def flag(self, span: Span, detail: str, *, hint: str | None = None) -> Flag:
        """Build a Flag whose message is this spec's message followed by `detail`."""
        return Flag(
            error_kind=self.error_kind,
            message=f"{self.message} {detail}",
            span=span,
            severity=self.severity,
            hint=hint if hint is not None else self.hint,
        )


MISSPELLED_KEYWORD: Final[FlagSpec] = FlagSpec(
    error_kind=ErrorKind.MISSPELLED_KEYWORD,
    message="Identifier looks like a misspelled keyword.",
    hint="Check the spelling; a single character is added, missing, swapped or wrong.",
)

TYPE_MISMATCH: Final[FlagSpec] = FlagSpec(
    error_kind=ErrorKind.TYPE_MISMATCH,
    message="Literal does not match the declared type.",
    hint="Use a literal of the declared type or change the declaration.",
)

USE_BEFORE_DECLARATION: Final[FlagSpec] = FlagSpec(
    error_kind=ErrorKind.USE_BEFORE_DECLARATION,
    message="Identifier is assigned before it is declared.",
    hint="Declare the identifier with a type before assigning to it.",
)

MISPLACED_RELATIONAL_OPERATOR: Final[FlagSpec] = FlagSpec(
    error_kind=ErrorKind.MISPLACED_RELATIONAL_OPERATOR,
    message="Relational operator is misplaced or malformed.",
    hint="A relational operator needs one operand on each side, e.g. `x < y`.",
)

SPECS_BY_KIND: Final[dict[ErrorKind, FlagSpec]] = {
    spec.error_kind: spec
    for spec in (
        MISSPELLED_KEYWORD,
        TYPE_MISMATCH,
        USE_BEFORE_DECLARATION,
        MISPLACED_RELATIONAL_OPERATOR,
    )
}

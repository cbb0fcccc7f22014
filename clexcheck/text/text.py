from dataclasses import dataclass, field
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A point in source text.

    Ordering compares the character offset only; `line` and `column` are
    derived from it and kept for reporting.
    """

    offset: int
    line: int = field(compare=False)
    column: int = field(compare=False)

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError("Position offset cannot be negative")
        if self.line < 1 or self.column < 1:
            raise ValueError("Position line and column are 1-based")

    def as_tuple(self) -> tuple[int, int]:
        """Get the position as a (line, column) tuple."""
        return (self.line, self.column)

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.column}@{self.offset})"


START: Final[Position] = Position(0, 1, 1)
"""Position of the first character of any source text."""


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """
    Half-open span [start, end) in source text.

    Invariant:
    - start <= end
    """

    start: Position
    end: Position

    def __post_init__(self):
        if self.start.offset > self.end.offset:
            raise ValueError("Span invariant violated: start > end")

    @staticmethod
    def empty(at: Position) -> "Span":
        """Create an empty Span at the given position."""
        return Span(at, at)

    def len(self) -> int:
        """Number of characters covered by the span."""
        return self.end.offset - self.start.offset

    def is_empty(self) -> bool:
        return self.start.offset == self.end.offset

    def contains(self, position: Position) -> bool:
        """Check if the span contains the given position."""
        return self.start.offset <= position.offset < self.end.offset

    def cover(self, other: "Span") -> "Span":
        """Get the minimal span that covers both this span and another span."""
        start = min(self.start, other.start)
        end = max(self.end, other.end)
        return Span(start, end)

    def __repr__(self) -> str:
        return f"Span({self.start.line}:{self.start.column}..{self.end.line}:{self.end.column})"


def slice_span(source: str, span: Span) -> str:
    """Get the substring of the source text covered by the given Span."""
    return source[span.start.offset : span.end.offset]

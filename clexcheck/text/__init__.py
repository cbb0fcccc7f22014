"""Source positions and spans."""

from clexcheck.text.text import START, Position, Span, slice_span

__all__ = ["START", "Position", "Span", "slice_span"]

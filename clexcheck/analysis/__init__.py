"""Declaration tracking shared by the analyzer pipeline."""

from clexcheck.analysis.declarations import (
    INITIAL_STATE,
    Declaration,
    DeclarationTracker,
    TrackerPhase,
    TrackerState,
    transition,
)
from clexcheck.lexer import PrimitiveType

__all__ = [
    "INITIAL_STATE",
    "Declaration",
    "DeclarationTracker",
    "PrimitiveType",
    "TrackerPhase",
    "TrackerState",
    "transition",
]

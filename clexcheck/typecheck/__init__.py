"""Type-consistency checking between declared types and literals."""

from clexcheck.typecheck.checker import TypeConsistencyChecker, is_literal_like

__all__ = ["TypeConsistencyChecker", "is_literal_like"]

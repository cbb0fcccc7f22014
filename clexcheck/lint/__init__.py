"""Checks that run over the complete token sequence."""

from clexcheck.lint.relational import RelationalOperatorValidator
from clexcheck.lint.rules import TokenRule, default_token_rules, validate_token_rules

__all__ = [
    "RelationalOperatorValidator",
    "TokenRule",
    "default_token_rules",
    "validate_token_rules",
]

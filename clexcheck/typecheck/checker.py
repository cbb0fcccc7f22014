"""Type-consistency checks for literal initializers and assignments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clexcheck.diagnostics import TYPE_MISMATCH, Flag
from clexcheck.lexer import LanguageTables, Token, TokenKind

if TYPE_CHECKING:
    from clexcheck.analysis.declarations import Declaration


def is_literal_like(token: Token) -> bool:
    """Literal tokens, plus Unknown tokens that start like a literal (`'ab'`, `"open`, `5x`)."""
    if token.kind.is_literal:
        return True
    first = token.text[:1]
    return token.kind == TokenKind.UNKNOWN and (first in ("'", '"') or first.isdigit())


class TypeConsistencyChecker:
    """Compares literal kinds against declared types using the compatibility table.

    Only single literal tokens are checked; expressions are left alone.
    """

    def __init__(self, tables: LanguageTables | None = None) -> None:
        self._tables = tables if tables is not None else LanguageTables.default()

    def check_initializer(self, declaration: Declaration, initializer: Token) -> Flag | None:
        """Check the literal in `Type name = literal`."""
        return self._check(declaration, initializer, context="initialized with")

    def check_assignment(self, declaration: Declaration, value: Token) -> Flag | None:
        """Check the literal in `name = literal` for an already declared name."""
        return self._check(declaration, value, context="assigned")

    def is_compatible(self, declaration: Declaration, literal: Token) -> bool:
        """Untyped declarations accept any literal."""
        if declaration.declared_type is None:
            return True
        return literal.kind in self._tables.allowed_literals(declaration.declared_type)

    def _check(self, declaration: Declaration, token: Token, *, context: str) -> Flag | None:
        declared_type = declaration.declared_type
        if declared_type is None or not is_literal_like(token) or self.is_compatible(declaration, token):
            return None
        allowed = sorted(self._tables.allowed_literals(declared_type))
        return TYPE_MISMATCH.flag(
            token.lexeme.span,
            f"`{declaration.identifier}` is declared {declared_type} but {context} {token.kind} `{token.text}`.",
            hint=f"{declared_type} accepts {', '.join(allowed) or 'no literals'}.",
        )

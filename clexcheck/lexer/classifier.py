"""Classifier: assigns a TokenKind to each lexeme and flags near-miss keywords."""

from __future__ import annotations

from collections.abc import Container
import re
from typing import Final

from clexcheck.diagnostics import MISSPELLED_KEYWORD, Flag
from clexcheck.lexer.distance import within_one_edit
from clexcheck.lexer.tables import LanguageTables
from clexcheck.lexer.tokens import Lexeme, Token, TokenKind

# Identifiers and keywords shorter than this never take part in misspelling
# checks: `i` is one edit from `if`, `id` one edit from `is`.
MIN_MISSPELLING_LENGTH: Final[int] = 3

_NUMBER_PATTERN = re.compile(r"(?P<body>\d+(?P<fraction>\.\d+)?)(?P<suffix>\w*)")
_CHAR_PATTERN = re.compile(r"'(?:\\.|[^\\'\r\n])'")
_STRING_PATTERN = re.compile(r'"(?:\\.|[^\\"\r\n])*"')


class Classifier:
    """Classifies lexemes against one set of language tables.

    Misspelling flags accumulate on the classifier in classification order.
    """

    def __init__(self, tables: LanguageTables | None = None) -> None:
        self._tables = tables if tables is not None else LanguageTables.default()
        self._flags: list[Flag] = []

    @property
    def tables(self) -> LanguageTables:
        return self._tables

    @property
    def flags(self) -> list[Flag]:
        """Misspelled-keyword flags emitted so far."""
        return self._flags

    def classify(
        self,
        lexeme: Lexeme,
        *,
        declared: Container[str] = frozenset(),
        previous: Token | None = None,
    ) -> Token:
        """Classify one lexeme.

        `declared` is a read-only view of identifiers declared so far and
        `previous` the last non-comment token; both only narrow misspelling
        detection.
        """
        text = lexeme.text
        if lexeme.is_comment:
            return Token(TokenKind.COMMENT, lexeme)
        if self._tables.is_keyword(text):
            return Token(TokenKind.KEYWORD, lexeme)

        token = Token(self._shape_kind(text), lexeme)
        if token.kind == TokenKind.IDENTIFIER and text not in declared and not self._names_declaration(previous):
            keyword = self.nearest_keyword(text)
            if keyword is not None:
                self._flags.append(
                    MISSPELLED_KEYWORD.flag(
                        lexeme.span,
                        f"`{text}` is one edit away from keyword `{keyword}`.",
                        hint=f"Did you mean `{keyword}`?",
                    )
                )
        return token

    def nearest_keyword(self, text: str) -> str | None:
        """First keyword in table order exactly one edit away from `text`."""
        if len(text) < MIN_MISSPELLING_LENGTH:
            return None
        for keyword in self._tables.keywords:
            if len(keyword) >= MIN_MISSPELLING_LENGTH and within_one_edit(text, keyword):
                return keyword
        return None

    def _names_declaration(self, previous: Token | None) -> bool:
        # `int name`, `var name` and `import some.name` introduce names rather than misspell keywords.
        if previous is None or previous.kind != TokenKind.KEYWORD:
            return False
        text = previous.text
        return (
            self._tables.primitive_type(text) is not None
            or text in self._tables.binding_keywords
            or text in self._tables.namespace_keywords
        )

    def _shape_kind(self, text: str) -> TokenKind:
        ch = text[0]
        if ch.isdigit():
            return self._number_kind(text)
        if ch == "'":
            return TokenKind.CHAR_LITERAL if _CHAR_PATTERN.fullmatch(text) else TokenKind.UNKNOWN
        if ch == '"':
            return TokenKind.STRING_LITERAL if _STRING_PATTERN.fullmatch(text) else TokenKind.UNKNOWN

        symbol_kind = self._tables.symbol_kind(text)
        if symbol_kind is not None:
            return symbol_kind
        if ch.isalpha() or ch == "_":
            return TokenKind.IDENTIFIER
        return TokenKind.UNKNOWN

    def _number_kind(self, text: str) -> TokenKind:
        match = _NUMBER_PATTERN.fullmatch(text)
        if match is None:
            return TokenKind.UNKNOWN
        has_fraction = match.group("fraction") is not None
        suffix = match.group("suffix")
        if not suffix:
            return TokenKind.FLOAT_LITERAL if has_fraction else TokenKind.INT_LITERAL
        if len(suffix) > 1:
            return TokenKind.UNKNOWN
        if suffix in self._tables.float_suffixes:
            return TokenKind.FLOAT_LITERAL
        if suffix in self._tables.int_suffixes and not has_fraction:
            return TokenKind.INT_LITERAL
        return TokenKind.UNKNOWN


def classify(lexeme: Lexeme, tables: LanguageTables | None = None) -> Token:
    """Classify a single lexeme without declaration context."""
    return Classifier(tables).classify(lexeme)

"""Relational-operator placement checks."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from clexcheck.diagnostics import MISPLACED_RELATIONAL_OPERATOR, ErrorKind, Flag
from clexcheck.lexer import LanguageTables, Token, TokenKind

_OPERAND_KINDS = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.INT_LITERAL,
        TokenKind.FLOAT_LITERAL,
        TokenKind.CHAR_LITERAL,
        TokenKind.STRING_LITERAL,
    }
)
_LEFT_CLOSERS = frozenset({")", "]", "++", "--"})
_UNARY_PREFIXES = frozenset({"+", "-", "++", "--"})


@dataclass(frozen=True, slots=True)
class RelationalOperatorValidator:
    """Flags relational operators without an operand on each side.

    Neighbors are found after dropping comment tokens. Two relational
    operators next to each other (`x <> y`, `x < > y`) are both flagged as a
    split operator; otherwise each side must look like an operand.
    """

    tables: LanguageTables = field(default_factory=LanguageTables.default)
    name: str = "misplacedRelationalOperator"
    error_kind: ErrorKind = ErrorKind.MISPLACED_RELATIONAL_OPERATOR

    def run(self, tokens: Sequence[Token]) -> list[Flag]:
        return self.validate(tokens)

    def validate(self, tokens: Sequence[Token]) -> list[Flag]:
        code_tokens = [token for token in tokens if token.kind != TokenKind.COMMENT]
        flags: list[Flag] = []
        for index, token in enumerate(code_tokens):
            if token.kind != TokenKind.RELATIONAL_OPERATOR:
                continue
            left = code_tokens[index - 1] if index > 0 else None
            right = code_tokens[index + 1] if index + 1 < len(code_tokens) else None
            after_right = code_tokens[index + 2] if index + 2 < len(code_tokens) else None
            problem = self._describe_problem(token, left, right, after_right)
            if problem is not None:
                flags.append(MISPLACED_RELATIONAL_OPERATOR.flag(token.lexeme.span, problem))
        return flags

    def _describe_problem(
        self,
        token: Token,
        left: Token | None,
        right: Token | None,
        after_right: Token | None,
    ) -> str | None:
        if left is not None and left.kind == TokenKind.RELATIONAL_OPERATOR:
            return f"Split relational operator `{left.text} {token.text}`; `{token.text}` follows another relational operator."
        if right is not None and right.kind == TokenKind.RELATIONAL_OPERATOR:
            return f"Split relational operator `{token.text} {right.text}`; `{token.text}` precedes another relational operator."

        left_ok = self._is_left_operand(left)
        right_ok = self._is_right_operand(right, after_right)
        if not left_ok and not right_ok:
            return f"`{token.text}` is missing both operands."
        if not left_ok:
            return f"`{token.text}` is missing its left operand."
        if not right_ok:
            return f"`{token.text}` is missing its right operand."
        return None

    def _is_operand(self, token: Token) -> bool:
        if token.kind in _OPERAND_KINDS:
            return True
        return token.kind == TokenKind.KEYWORD and token.text in self.tables.value_keywords

    def _is_left_operand(self, token: Token | None) -> bool:
        if token is None:
            return False
        if self._is_operand(token):
            return True
        # `f(x) < y`, `a[i] < y`, `i++ < n`
        return token.kind in (TokenKind.PUNCTUATION, TokenKind.ARITHMETIC_OPERATOR) and token.text in _LEFT_CLOSERS

    def _is_right_operand(self, token: Token | None, after: Token | None) -> bool:
        if token is None:
            return False
        if self._is_operand(token) or token.is_symbol("("):
            return True
        # `x < -1`
        return (
            token.kind == TokenKind.ARITHMETIC_OPERATOR
            and token.text in _UNARY_PREFIXES
            and after is not None
            and (self._is_operand(after) or after.is_symbol("("))
        )

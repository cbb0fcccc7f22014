"""Lexer tokens."""

from dataclasses import dataclass
from enum import StrEnum

from clexcheck.text import Position, Span


class TokenKind(StrEnum):
    # -------------------------
    # Words
    # -------------------------
    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"

    # -------------------------
    # Literals
    # -------------------------
    INT_LITERAL = "IntLiteral"
    FLOAT_LITERAL = "FloatLiteral"
    CHAR_LITERAL = "CharLiteral"
    STRING_LITERAL = "StringLiteral"

    # -------------------------
    # Operators
    # -------------------------
    RELATIONAL_OPERATOR = "RelationalOperator"  # < > <= >= == !=
    ARITHMETIC_OPERATOR = "ArithmeticOperator"  # + - * / % ++ --
    ASSIGN_OPERATOR = "AssignOperator"  # = += -= *= /= %=

    # -------------------------
    # Everything else
    # -------------------------
    PUNCTUATION = "Punctuation"  # ; , { } ( ) [ ] : .
    COMMENT = "Comment"
    UNKNOWN = "Unknown"

    @property
    def is_literal(self) -> bool:
        return self in (
            TokenKind.INT_LITERAL,
            TokenKind.FLOAT_LITERAL,
            TokenKind.CHAR_LITERAL,
            TokenKind.STRING_LITERAL,
        )


class CommentStyle(StrEnum):
    LINE_COMMENT = "LineComment"  # // ...
    BLOCK_COMMENT = "BlockComment"  # /* ... */


@dataclass(frozen=True, slots=True)
class Lexeme:
    """A positioned slice of source text, prior to classification."""

    text: str
    start: Position
    end: Position
    comment_style: CommentStyle | None = None

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    @property
    def is_comment(self) -> bool:
        return self.comment_style is not None


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexeme."""

    kind: TokenKind
    lexeme: Lexeme

    @property
    def text(self) -> str:
        return self.lexeme.text

    @property
    def start(self) -> Position:
        return self.lexeme.start

    @property
    def end(self) -> Position:
        return self.lexeme.end

    def is_symbol(self, symbol: str) -> bool:
        return self.kind != TokenKind.UNKNOWN and self.lexeme.text == symbol


@dataclass(frozen=True, slots=True)
class CommentRecord:
    """A comment span extracted from the source."""

    text: str
    start: Position
    end: Position
    style: CommentStyle

    @staticmethod
    def from_lexeme(lexeme: Lexeme) -> "CommentRecord":
        if lexeme.comment_style is None:
            raise ValueError(f"Not a comment lexeme: {lexeme.text!r}")
        return CommentRecord(
            text=lexeme.text,
            start=lexeme.start,
            end=lexeme.end,
            style=lexeme.comment_style,
        )

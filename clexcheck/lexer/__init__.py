"""Lexer: scanner, classifier and the fixed tables they share."""

from clexcheck.lexer.classifier import MIN_MISSPELLING_LENGTH, Classifier, classify
from clexcheck.lexer.distance import edit_distance, within_one_edit
from clexcheck.lexer.scanner import Scanner, scan
from clexcheck.lexer.tables import LanguageTables, PrimitiveType, load_tables
from clexcheck.lexer.tokens import (
    CommentRecord,
    CommentStyle,
    Lexeme,
    Token,
    TokenKind,
)

__all__ = [
    "MIN_MISSPELLING_LENGTH",
    "Classifier",
    "CommentRecord",
    "CommentStyle",
    "LanguageTables",
    "Lexeme",
    "PrimitiveType",
    "Scanner",
    "Token",
    "TokenKind",
    "classify",
    "edit_distance",
    "load_tables",
    "scan",
    "within_one_edit",
]

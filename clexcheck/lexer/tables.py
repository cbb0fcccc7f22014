"""Fixed lookup tables shared by the scanner, classifier and checkers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, TypeVar

from clexcheck.lexer.tokens import TokenKind


class PrimitiveType(StrEnum):
    INT = "Int"
    FLOAT = "Float"
    CHAR = "Char"
    STRING_LIKE = "StringLike"


DEFAULT_KEYWORDS: Final[tuple[str, ...]] = (
    # C / Java
    "int",
    "float",
    "double",
    "char",
    "long",
    "short",
    "byte",
    "boolean",
    "if",
    "else",
    "for",
    "while",
    "class",
    "public",
    "private",
    "return",
    "static",
    "void",
    "new",
    # Kotlin
    "fun",
    "var",
    "val",
    "when",
    "is",
    "in",
    "object",
    "null",
    "true",
    "false",
    "package",
    "import",
    "override",
    "data",
    "sealed",
    "lateinit",
    "Int",
    "Float",
    "Double",
    "Char",
    "String",
    "Boolean",
    "Long",
    "Short",
    "Byte",
)

DEFAULT_TYPE_KEYWORDS: Final[Mapping[str, PrimitiveType]] = MappingProxyType(
    {
        "int": PrimitiveType.INT,
        "long": PrimitiveType.INT,
        "short": PrimitiveType.INT,
        "byte": PrimitiveType.INT,
        "Int": PrimitiveType.INT,
        "Long": PrimitiveType.INT,
        "Short": PrimitiveType.INT,
        "Byte": PrimitiveType.INT,
        "float": PrimitiveType.FLOAT,
        "double": PrimitiveType.FLOAT,
        "Float": PrimitiveType.FLOAT,
        "Double": PrimitiveType.FLOAT,
        "char": PrimitiveType.CHAR,
        "Char": PrimitiveType.CHAR,
        "String": PrimitiveType.STRING_LIKE,
    }
)

DEFAULT_SYMBOLS: Final[Mapping[str, TokenKind]] = MappingProxyType(
    {
        "<": TokenKind.RELATIONAL_OPERATOR,
        ">": TokenKind.RELATIONAL_OPERATOR,
        "<=": TokenKind.RELATIONAL_OPERATOR,
        ">=": TokenKind.RELATIONAL_OPERATOR,
        "==": TokenKind.RELATIONAL_OPERATOR,
        "!=": TokenKind.RELATIONAL_OPERATOR,
        "=": TokenKind.ASSIGN_OPERATOR,
        "+=": TokenKind.ASSIGN_OPERATOR,
        "-=": TokenKind.ASSIGN_OPERATOR,
        "*=": TokenKind.ASSIGN_OPERATOR,
        "/=": TokenKind.ASSIGN_OPERATOR,
        "%=": TokenKind.ASSIGN_OPERATOR,
        "+": TokenKind.ARITHMETIC_OPERATOR,
        "-": TokenKind.ARITHMETIC_OPERATOR,
        "*": TokenKind.ARITHMETIC_OPERATOR,
        "/": TokenKind.ARITHMETIC_OPERATOR,
        "%": TokenKind.ARITHMETIC_OPERATOR,
        "++": TokenKind.ARITHMETIC_OPERATOR,
        "--": TokenKind.ARITHMETIC_OPERATOR,
        ";": TokenKind.PUNCTUATION,
        ",": TokenKind.PUNCTUATION,
        "{": TokenKind.PUNCTUATION,
        "}": TokenKind.PUNCTUATION,
        "(": TokenKind.PUNCTUATION,
        ")": TokenKind.PUNCTUATION,
        "[": TokenKind.PUNCTUATION,
        "]": TokenKind.PUNCTUATION,
        ":": TokenKind.PUNCTUATION,
        ".": TokenKind.PUNCTUATION,
    }
)

DEFAULT_COMPATIBILITY: Final[Mapping[PrimitiveType, frozenset[TokenKind]]] = MappingProxyType(
    {
        PrimitiveType.INT: frozenset({TokenKind.INT_LITERAL}),
        PrimitiveType.FLOAT: frozenset({TokenKind.FLOAT_LITERAL, TokenKind.INT_LITERAL}),
        PrimitiveType.CHAR: frozenset({TokenKind.CHAR_LITERAL}),
        PrimitiveType.STRING_LIKE: frozenset({TokenKind.STRING_LITERAL}),
    }
)

DEFAULT_VALUE_KEYWORDS: Final[frozenset[str]] = frozenset({"true", "false", "null"})

# `var`/`val` start a Kotlin binding; `package`/`import` take a qualified name.
DEFAULT_BINDING_KEYWORDS: Final[frozenset[str]] = frozenset({"var", "val"})

DEFAULT_NAMESPACE_KEYWORDS: Final[frozenset[str]] = frozenset({"package", "import"})

_SYMBOL_KINDS = frozenset(
    {
        TokenKind.RELATIONAL_OPERATOR,
        TokenKind.ARITHMETIC_OPERATOR,
        TokenKind.ASSIGN_OPERATOR,
        TokenKind.PUNCTUATION,
    }
)


@dataclass(frozen=True, slots=True)
class LanguageTables:
    """Read-only keyword, symbol and type tables for one analysis."""

    keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    type_keywords: Mapping[str, PrimitiveType] = field(default_factory=lambda: DEFAULT_TYPE_KEYWORDS)
    symbols: Mapping[str, TokenKind] = field(default_factory=lambda: DEFAULT_SYMBOLS)
    compatibility: Mapping[PrimitiveType, frozenset[TokenKind]] = field(
        default_factory=lambda: DEFAULT_COMPATIBILITY
    )
    value_keywords: frozenset[str] = DEFAULT_VALUE_KEYWORDS
    binding_keywords: frozenset[str] = DEFAULT_BINDING_KEYWORDS
    namespace_keywords: frozenset[str] = DEFAULT_NAMESPACE_KEYWORDS
    int_suffixes: frozenset[str] = frozenset("lL")
    float_suffixes: frozenset[str] = frozenset("fFdD")
    _keyword_set: frozenset[str] = field(init=False, repr=False, compare=False)
    _max_symbol_length: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_keyword_set", frozenset(self.keywords))
        object.__setattr__(self, "_max_symbol_length", max((len(s) for s in self.symbols), default=0))

    @staticmethod
    def default() -> "LanguageTables":
        return _DEFAULT_TABLES

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "LanguageTables":
        """Build tables from a plain mapping; missing sections keep their defaults."""
        unknown = set(data) - _DOCUMENT_KEYS
        if unknown:
            raise ValueError(f"Unknown table sections: {', '.join(sorted(unknown))}")

        keywords = tuple(_strings(data.get("keywords", DEFAULT_KEYWORDS), "keywords"))
        type_keywords = {
            name: _enum_value(PrimitiveType, value, f"type_keywords.{name}")
            for name, value in _mapping(data.get("type_keywords", DEFAULT_TYPE_KEYWORDS), "type_keywords").items()
        }
        missing = [name for name in type_keywords if name not in keywords]
        if missing:
            raise ValueError(f"Type keywords must also be keywords: {', '.join(sorted(missing))}")

        special: dict[str, frozenset[str]] = {}
        for section, default in (
            ("binding_keywords", DEFAULT_BINDING_KEYWORDS),
            ("namespace_keywords", DEFAULT_NAMESPACE_KEYWORDS),
        ):
            names = frozenset(_strings(data.get(section, default), section))
            # Defaults only apply while the keyword table still has them.
            if section not in data:
                names = frozenset(name for name in names if name in keywords)
            missing = [name for name in names if name not in keywords]
            if missing:
                raise ValueError(f"Entries of `{section}` must also be keywords: {', '.join(sorted(missing))}")
            special[section] = names

        symbols: dict[str, TokenKind] = {}
        for symbol, value in _mapping(data.get("symbols", DEFAULT_SYMBOLS), "symbols").items():
            kind = _enum_value(TokenKind, value, f"symbols.{symbol}")
            if kind not in _SYMBOL_KINDS:
                raise ValueError(f"Symbol `{symbol}` must be an operator or punctuation, got {kind}")
            if not symbol or any(ch.isalnum() or ch.isspace() or ch in "_'\"" for ch in symbol):
                raise ValueError(f"Symbol `{symbol}` contains word, quote or whitespace characters")
            symbols[symbol] = kind

        compatibility = {
            _enum_value(PrimitiveType, name, "compatibility"): frozenset(
                _enum_value(TokenKind, kind, f"compatibility.{name}") for kind in _strings(kinds, f"compatibility.{name}")
            )
            for name, kinds in _mapping(data.get("compatibility", DEFAULT_COMPATIBILITY), "compatibility").items()
        }

        return LanguageTables(
            keywords=keywords,
            type_keywords=MappingProxyType(type_keywords),
            symbols=MappingProxyType(symbols),
            compatibility=MappingProxyType(compatibility),
            value_keywords=frozenset(_strings(data.get("value_keywords", DEFAULT_VALUE_KEYWORDS), "value_keywords")),
            binding_keywords=special["binding_keywords"],
            namespace_keywords=special["namespace_keywords"],
            int_suffixes=frozenset(_strings(data.get("int_suffixes", "lL"), "int_suffixes")),
            float_suffixes=frozenset(_strings(data.get("float_suffixes", "fFdD"), "float_suffixes")),
        )

    @property
    def max_symbol_length(self) -> int:
        return self._max_symbol_length

    def is_keyword(self, text: str) -> bool:
        return text in self._keyword_set

    def primitive_type(self, text: str) -> PrimitiveType | None:
        return self.type_keywords.get(text)

    def symbol_kind(self, text: str) -> TokenKind | None:
        return self.symbols.get(text)

    def allowed_literals(self, declared_type: PrimitiveType) -> frozenset[TokenKind]:
        return self.compatibility.get(declared_type, frozenset())


_DEFAULT_TABLES: Final[LanguageTables] = LanguageTables()

_DOCUMENT_KEYS = frozenset(
    {
        "keywords",
        "type_keywords",
        "symbols",
        "compatibility",
        "value_keywords",
        "binding_keywords",
        "namespace_keywords",
        "int_suffixes",
        "float_suffixes",
    }
)


def load_tables(path: str | Path) -> LanguageTables:
    """Load tables from a JSON document on disk."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid table document {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Table document {path} must contain a JSON object")
    return LanguageTables.from_mapping(data)


def _mapping(value: object, section: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Table section `{section}` must be an object")
    return value


def _strings(value: object, section: str) -> Iterable[str]:
    if isinstance(value, str) and section.endswith("_suffixes"):
        return tuple(value)
    if not isinstance(value, Iterable) or isinstance(value, (str, Mapping)):
        raise ValueError(f"Table section `{section}` must be a list of strings")
    items = tuple(value)
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"Table section `{section}` must be a list of strings")
    return items


E = TypeVar("E", bound=StrEnum)


def _enum_value(enum_type: type[E], value: object, section: str) -> E:
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ValueError(f"Invalid value {value!r} in `{section}`; expected one of {choices}") from None

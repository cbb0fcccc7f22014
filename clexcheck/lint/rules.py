"""Token rule contract and the default rule set."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from clexcheck.diagnostics import ErrorKind, Flag
from clexcheck.lexer import LanguageTables, Token
from clexcheck.lint.relational import RelationalOperatorValidator


class TokenRule(Protocol):
    """A check that runs once over the finished token sequence."""

    @property
    def name(self) -> str: ...

    @property
    def error_kind(self) -> ErrorKind: ...

    def run(self, tokens: Sequence[Token]) -> list[Flag]: ...


def default_token_rules(tables: LanguageTables | None = None) -> tuple[TokenRule, ...]:
    resolved = tables if tables is not None else LanguageTables.default()
    rules: list[TokenRule] = [
        RelationalOperatorValidator(resolved),
    ]
    return tuple(sorted(rules, key=lambda rule: (rule.error_kind.rank, rule.name)))


def validate_token_rules(rules: Sequence[TokenRule]) -> None:
    names: set[str] = set()
    for rule in rules:
        if not isinstance(rule.error_kind, ErrorKind):
            raise ValueError(
                f"Token rule `{rule.name}` has invalid error kind `{rule.error_kind}`; expected one of "
                f"{', '.join(kind.value for kind in ErrorKind)}."
            )
        if rule.name in names:
            raise ValueError(f"Token rule `{rule.name}` is registered more than once.")
        names.add(rule.name)

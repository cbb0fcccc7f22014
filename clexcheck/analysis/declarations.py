"""Declaration tracking over the classified token stream."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from clexcheck.diagnostics import USE_BEFORE_DECLARATION, Flag
from clexcheck.lexer import LanguageTables, PrimitiveType, Token, TokenKind
from clexcheck.text import Position
from clexcheck.typecheck import TypeConsistencyChecker, is_literal_like


@dataclass(frozen=True, slots=True)
class Declaration:
    """First recorded binding of an identifier to a primitive type.

    `declared_type` is None for Kotlin bindings whose type is inferred
    (`var n = 5`) or names a user type (`val w: Widget`); those are never
    type checked.
    """

    identifier: str
    declared_type: PrimitiveType | None
    position: Position


class TrackerPhase(StrEnum):
    EXPECT_TYPE = "ExpectType"
    EXPECT_IDENTIFIER = "ExpectIdentifier"
    EXPECT_REST = "ExpectRest"
    # Kotlin `var`/`val name[: Type]`.
    EXPECT_BINDING_NAME = "ExpectBindingName"
    EXPECT_ANNOTATION = "ExpectAnnotation"
    EXPECT_ANNOTATED_TYPE = "ExpectAnnotatedType"


@dataclass(frozen=True, slots=True)
class TrackerState:
    """Tracker phase plus the type being declared and paren nesting inside the statement.

    `binding` marks Kotlin statements, which end at a line break. `pending`
    is a binding name still waiting for its type and `subject` the name the
    statement has just declared.
    """

    phase: TrackerPhase = TrackerPhase.EXPECT_TYPE
    declared_type: PrimitiveType | None = None
    depth: int = 0
    binding: bool = False
    pending: Token | None = None
    subject: Token | None = None


INITIAL_STATE: Final[TrackerState] = TrackerState()

_STATEMENT_ENDS = frozenset({";", "{", "}"})


def transition(state: TrackerState, token: Token, tables: LanguageTables, *, new_line: bool = False) -> TrackerState:
    """Advance the declaration state machine by one token.

    `new_line` tells whether `token` starts a later line than the token
    before it.
    """
    if token.kind == TokenKind.COMMENT:
        return state
    if new_line and state.binding:
        state = INITIAL_STATE
    is_keyword = token.kind == TokenKind.KEYWORD
    type_keyword = tables.primitive_type(token.text) if is_keyword else None
    binding_keyword = is_keyword and token.text in tables.binding_keywords

    match state.phase:
        case TrackerPhase.EXPECT_TYPE:
            if type_keyword is not None:
                return TrackerState(TrackerPhase.EXPECT_IDENTIFIER, type_keyword)
            if binding_keyword:
                return TrackerState(TrackerPhase.EXPECT_BINDING_NAME, binding=True)
            if token.is_symbol(":"):
                # Parameter or return type: `fun f(n: Int): Int`.
                return TrackerState(TrackerPhase.EXPECT_ANNOTATED_TYPE, binding=True)
            return INITIAL_STATE
        case TrackerPhase.EXPECT_IDENTIFIER:
            if token.kind == TokenKind.IDENTIFIER:
                return TrackerState(TrackerPhase.EXPECT_REST, state.declared_type, subject=token)
            if token.is_symbol("[") or token.is_symbol("]"):
                # `int[] values`
                return state
            # Reset, then read the token again from the initial phase.
            return transition(INITIAL_STATE, token, tables)
        case TrackerPhase.EXPECT_BINDING_NAME:
            if token.kind == TokenKind.IDENTIFIER:
                return TrackerState(TrackerPhase.EXPECT_ANNOTATION, binding=True, pending=token)
            return transition(INITIAL_STATE, token, tables)
        case TrackerPhase.EXPECT_ANNOTATION:
            if token.is_symbol(":"):
                return replace(state, phase=TrackerPhase.EXPECT_ANNOTATED_TYPE)
            if token.is_symbol("="):
                # `var n = 5`: the type is inferred.
                return TrackerState(TrackerPhase.EXPECT_REST, binding=True, subject=state.pending)
            return transition(INITIAL_STATE, token, tables)
        case TrackerPhase.EXPECT_ANNOTATED_TYPE:
            if state.pending is None:
                if type_keyword is not None:
                    # No binding name to give the type to; a Java label may precede `int y`.
                    return TrackerState(TrackerPhase.EXPECT_IDENTIFIER, type_keyword, binding=True)
                return transition(INITIAL_STATE, token, tables)
            if type_keyword is not None or token.kind == TokenKind.IDENTIFIER:
                return TrackerState(TrackerPhase.EXPECT_REST, type_keyword, binding=True, subject=state.pending)
            return transition(INITIAL_STATE, token, tables)
        case TrackerPhase.EXPECT_REST:
            if token.kind == TokenKind.PUNCTUATION and token.text in _STATEMENT_ENDS:
                return INITIAL_STATE
            if type_keyword is not None:
                return TrackerState(TrackerPhase.EXPECT_IDENTIFIER, type_keyword)
            if binding_keyword:
                return TrackerState(TrackerPhase.EXPECT_BINDING_NAME, binding=True)
            if token.is_symbol("("):
                return replace(state, depth=state.depth + 1)
            if token.is_symbol(")"):
                if state.depth == 0:
                    return INITIAL_STATE
                return replace(state, depth=state.depth - 1)
            if token.is_symbol(",") and state.depth == 0:
                if state.binding:
                    # Next Kotlin parameter; it carries its own annotation.
                    return INITIAL_STATE
                # `int a, b;`
                return TrackerState(TrackerPhase.EXPECT_IDENTIFIER, state.declared_type)
            return state


class DeclarationTracker:
    """Records declarations and flags assignments to undeclared identifiers.

    Tokens are fed one at a time in scan order. Literal initializers and
    literal assignments are handed to the type-consistency checker.
    """

    def __init__(
        self,
        tables: LanguageTables | None = None,
        *,
        checker: TypeConsistencyChecker | None = None,
        check_assignments: bool = True,
    ) -> None:
        self._tables = tables if tables is not None else LanguageTables.default()
        self._checker = checker if checker is not None else TypeConsistencyChecker(self._tables)
        self._check_assignments = check_assignments
        self._state = INITIAL_STATE
        self._declarations: dict[str, Declaration] = {}
        self._flags: list[Flag] = []

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def declarations(self) -> Mapping[str, Declaration]:
        """Read-only view of declarations recorded so far."""
        return MappingProxyType(self._declarations)

    @property
    def flags(self) -> list[Flag]:
        return self._flags

    def process_token(self, token: Token, preceding: Sequence[Token]) -> tuple[Declaration | None, Flag | None]:
        """Feed one token; `preceding` holds the earlier non-comment tokens in order."""
        if token.kind == TokenKind.COMMENT:
            return None, None

        previous_state = self._state
        new_line = bool(preceding) and token.start.line > preceding[-1].end.line
        self._state = transition(previous_state, token, self._tables, new_line=new_line)

        declaration: Declaration | None = None
        subject = self._state.subject
        if subject is not None and subject is not previous_state.subject:
            declaration = self._declare(subject, self._state.declared_type)

        flag: Flag | None = None
        if token.kind == TokenKind.ASSIGN_OPERATOR:
            flag = self._check_assignment_target(preceding)
        elif is_literal_like(token):
            flag = self._check_literal_value(token, preceding, previous_state)

        if flag is not None:
            self._flags.append(flag)
        return declaration, flag

    def _declare(self, token: Token, declared_type: PrimitiveType | None) -> Declaration | None:
        if token.text in self._declarations:
            # Redeclaration: the first type stays.
            return None
        declaration = Declaration(token.text, declared_type, token.start)
        self._declarations[token.text] = declaration
        return declaration

    def _check_assignment_target(self, preceding: Sequence[Token]) -> Flag | None:
        if not preceding:
            return None
        target = preceding[-1]
        if target.kind != TokenKind.IDENTIFIER or target.text in self._declarations:
            return None
        if len(preceding) >= 2 and preceding[-2].is_symbol(":"):
            # `val w: Widget = ...` names a type, not a target.
            return None
        return USE_BEFORE_DECLARATION.flag(
            target.lexeme.span,
            f"`{target.text}` is assigned before any declaration of it.",
        )

    def _check_literal_value(self, token: Token, preceding: Sequence[Token], state: TrackerState) -> Flag | None:
        if not preceding or not preceding[-1].is_symbol("="):
            return None
        subject = state.subject if state.phase == TrackerPhase.EXPECT_REST else None
        if len(preceding) >= 2 and preceding[-2].kind == TokenKind.IDENTIFIER:
            name = preceding[-2].text
        elif subject is not None:
            # `val y: Float = 2.5f`, `var s: String? = "hi"`
            name = subject.text
        else:
            return None
        declaration = self._declarations.get(name)
        if declaration is None:
            return None
        if subject is not None and subject.text == name:
            return self._checker.check_initializer(declaration, token)
        if self._check_assignments:
            return self._checker.check_assignment(declaration, token)
        return None

import textwrap

import pytest

from clexcheck.analysis import Declaration, DeclarationTracker
from clexcheck.diagnostics import ErrorKind, Flag
from clexcheck.lexer import PrimitiveType, Token
from clexcheck.text import START
from clexcheck.typecheck import TypeConsistencyChecker, is_literal_like
from tests._shared_cases import classify_all


def mismatches(source: str, *, check_assignments: bool = True) -> list[Flag]:
    tracker = DeclarationTracker(check_assignments=check_assignments)
    seen: list[Token] = []
    for token in classify_all(source):
        tracker.process_token(token, seen)
        seen.append(token)
    return [flag for flag in tracker.flags if flag.error_kind == ErrorKind.TYPE_MISMATCH]


@pytest.mark.parametrize(
    "source",
    [
        "int count = 0;",
        "long big = 10L;",
        "float temp = 21.9;",
        "float whole = 7;",
        "double ratio = 2.5f;",
        "char grade = 'A';",
        "char newline = '\\n';",
        'String name = "Ada";',
    ],
)
def test_compatible_initializers_are_accepted(source: str):
    assert mismatches(source) == []


@pytest.mark.parametrize(
    ("source", "literal"),
    [
        ("int badInt1 = 3.14;", "3.14"),
        ('char badChar1 = "wrong";', '"wrong"'),
        ("char twoChars = 'ab';", "'ab'"),
        ("int flag = 'y';", "'y'"),
        ("String s = 42;", "42"),
        ("int weird = 5abc;", "5abc"),
    ],
)
def test_incompatible_initializers_are_flagged(source: str, literal: str):
    flags = mismatches(source)

    assert len(flags) == 1
    assert literal in flags[0].message


def test_mismatch_message_names_declaration_and_literal_kind():
    (flag,) = mismatches("int badInt1 = 3.14;")

    assert "`badInt1` is declared Int but initialized with FloatLiteral `3.14`." in flag.message
    assert flag.hint == "Int accepts IntLiteral."
    assert flag.position.as_tuple() == (1, 15)
    assert flag.code == "E1"


def test_later_literal_assignments_are_checked():
    source = textwrap.dedent(
        """\
        int x;
        x = 2.5;
        """
    )

    (flag,) = mismatches(source)

    assert "`x` is declared Int but assigned FloatLiteral `2.5`." in flag.message
    assert mismatches(source, check_assignments=False) == []


def test_expressions_are_not_type_checked():
    assert mismatches("int x = 1 + 2.5; int y = (3.5);") == []


def test_checker_compares_against_the_compatibility_table():
    checker = TypeConsistencyChecker()
    declaration = Declaration("ratio", PrimitiveType.FLOAT, START)
    (int_literal,) = classify_all("3")
    (char_literal,) = classify_all("'c'")

    assert checker.is_compatible(declaration, int_literal)
    assert checker.check_initializer(declaration, int_literal) is None
    assert not checker.is_compatible(declaration, char_literal)
    assert checker.check_assignment(declaration, char_literal) is not None


def test_non_literal_values_are_ignored_by_the_checker():
    checker = TypeConsistencyChecker()
    declaration = Declaration("count", PrimitiveType.INT, START)
    (identifier,) = classify_all("other")

    assert checker.check_initializer(declaration, identifier) is None


@pytest.mark.parametrize(("text", "expected"), [("7", True), ("'ab'", True), ('"open', True), ("5x", True), ("x", False), ("@", False)])
def test_literal_like_tokens(text: str, expected: bool):
    (token,) = classify_all(text)

    assert is_literal_like(token) is expected

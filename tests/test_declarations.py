from clexcheck.analysis import (
    INITIAL_STATE,
    Declaration,
    DeclarationTracker,
    PrimitiveType,
    TrackerPhase,
    TrackerState,
    transition,
)
from clexcheck.diagnostics import ErrorKind
from clexcheck.lexer import LanguageTables, Token
from tests._shared_cases import classify_all


def track(source: str, *, check_assignments: bool = True) -> DeclarationTracker:
    tracker = DeclarationTracker(check_assignments=check_assignments)
    seen: list[Token] = []
    for token in classify_all(source):
        tracker.process_token(token, seen)
        seen.append(token)
    return tracker


def phases(source: str) -> list[TrackerPhase]:
    tables = LanguageTables.default()
    state = INITIAL_STATE
    result: list[TrackerPhase] = []
    for token in classify_all(source):
        state = transition(state, token, tables)
        result.append(state.phase)
    return result


def test_transition_walks_a_declaration_statement():
    assert phases("int x = 5;") == [
        TrackerPhase.EXPECT_IDENTIFIER,
        TrackerPhase.EXPECT_REST,
        TrackerPhase.EXPECT_REST,
        TrackerPhase.EXPECT_REST,
        TrackerPhase.EXPECT_TYPE,
    ]


def test_transition_is_pure():
    tables = LanguageTables.default()
    (token,) = classify_all("double")

    first = transition(INITIAL_STATE, token, tables)
    second = transition(INITIAL_STATE, token, tables)

    assert first == second == TrackerState(TrackerPhase.EXPECT_IDENTIFIER, PrimitiveType.FLOAT)
    assert INITIAL_STATE == TrackerState()


def test_non_identifier_after_type_keyword_resets():
    assert phases("int ; int 5") == [
        TrackerPhase.EXPECT_IDENTIFIER,
        TrackerPhase.EXPECT_TYPE,
        TrackerPhase.EXPECT_IDENTIFIER,
        TrackerPhase.EXPECT_TYPE,
    ]


def test_type_keyword_after_type_keyword_restarts_the_declaration():
    tracker = track("long double value;")

    assert tracker.declarations["value"].declared_type == PrimitiveType.FLOAT


def test_declarations_record_type_and_position():
    tracker = track("int count = 0;\nString name;")

    assert dict(tracker.declarations) == {
        "count": Declaration("count", PrimitiveType.INT, tracker.declarations["count"].position),
        "name": Declaration("name", PrimitiveType.STRING_LIKE, tracker.declarations["name"].position),
    }
    assert tracker.declarations["name"].position.as_tuple() == (2, 8)


def test_first_declaration_wins_on_redeclaration():
    tracker = track("int total; float total;")

    assert tracker.declarations["total"].declared_type == PrimitiveType.INT
    assert tracker.declarations["total"].position.as_tuple() == (1, 5)


def test_comma_separated_names_share_the_type():
    tracker = track("float a, b = 1.5, c;")

    assert {name: d.declared_type for name, d in tracker.declarations.items()} == {
        "a": PrimitiveType.FLOAT,
        "b": PrimitiveType.FLOAT,
        "c": PrimitiveType.FLOAT,
    }


def test_commas_inside_parentheses_do_not_declare():
    tracker = track("int r = max(a, b);")

    assert set(tracker.declarations) == {"r"}


def test_parameters_and_loop_variables_are_declared():
    tracker = track("int add(int left, int right) { for (int i = 0; i < 3; i++) {} }")

    assert set(tracker.declarations) == {"add", "left", "right", "i"}


def test_array_brackets_between_type_and_name_are_skipped():
    tracker = track("int[] values;")

    assert tracker.declarations["values"].declared_type == PrimitiveType.INT


def test_assignment_before_declaration_is_flagged_once():
    tracker = track("preDecl = 99;\nint preDecl;\npreDecl = 5;")

    assert [flag.error_kind for flag in tracker.flags] == [ErrorKind.USE_BEFORE_DECLARATION]
    flag = tracker.flags[0]
    assert flag.position.as_tuple() == (1, 1)
    assert "`preDecl` is assigned before any declaration of it." in flag.message


def test_compound_assignment_to_undeclared_name_is_flagged():
    tracker = track("total += 1;")

    assert [flag.error_kind for flag in tracker.flags] == [ErrorKind.USE_BEFORE_DECLARATION]


def test_names_after_user_or_misspelled_types_are_flagged():
    tracker = track("Widget w = build(); inti wrong1 = 5;")

    assert [(flag.error_kind, flag.position.as_tuple()) for flag in tracker.flags] == [
        (ErrorKind.USE_BEFORE_DECLARATION, (1, 8)),
        (ErrorKind.USE_BEFORE_DECLARATION, (1, 26)),
    ]
    assert "`wrong1` is assigned before any declaration of it." in tracker.flags[1].message
    assert dict(tracker.declarations) == {}


def test_kotlin_annotated_bindings_are_declared_and_checked():
    tracker = track('var x: Int\nx = 10\nvar a: Int = 3.14\nval s: String? = "hi"\nvar w: Widget = make()')

    assert {name: d.declared_type for name, d in tracker.declarations.items()} == {
        "x": PrimitiveType.INT,
        "a": PrimitiveType.INT,
        "s": PrimitiveType.STRING_LIKE,
        "w": None,
    }
    assert tracker.declarations["x"].position.as_tuple() == (1, 5)
    assert [(flag.error_kind, flag.position.as_tuple()) for flag in tracker.flags] == [
        (ErrorKind.TYPE_MISMATCH, (3, 14)),
    ]


def test_kotlin_inferred_bindings_are_declared_without_a_type():
    tracker = track('var n = 5\nn = "text"\nval label = \'c\'')

    assert tracker.declarations["n"] == Declaration("n", None, tracker.declarations["n"].position)
    assert tracker.declarations["label"].declared_type is None
    assert tracker.flags == []


def test_kotlin_statement_ends_at_the_line_break():
    tracker = track("fun size(): Int\ncount = 1\nvar total: Int\nlimit = 2")

    assert set(tracker.declarations) == {"total"}
    assert [flag.position.as_tuple() for flag in tracker.flags] == [(2, 1), (4, 1)]


def test_kotlin_parameters_do_not_share_a_type():
    tracker = track("fun area(w: Int, h: Float) {\nvar out: Float = 1.5\n}")

    assert set(tracker.declarations) == {"out"}
    assert tracker.flags == []


def test_transition_walks_a_kotlin_binding():
    assert phases("val y: Float = 2.5f") == [
        TrackerPhase.EXPECT_BINDING_NAME,
        TrackerPhase.EXPECT_ANNOTATION,
        TrackerPhase.EXPECT_ANNOTATED_TYPE,
        TrackerPhase.EXPECT_REST,
        TrackerPhase.EXPECT_REST,
        TrackerPhase.EXPECT_REST,
    ]


def test_line_break_resets_only_kotlin_statements():
    tables = LanguageTables.default()
    int_token, name_token = classify_all("int\nvalue")
    var_token, other_token = classify_all("var\nother")

    java = transition(transition(INITIAL_STATE, int_token, tables), name_token, tables, new_line=True)
    kotlin = transition(transition(INITIAL_STATE, var_token, tables), other_token, tables, new_line=True)

    assert java.phase == TrackerPhase.EXPECT_REST
    assert kotlin == INITIAL_STATE


def test_process_token_reports_what_it_recorded():
    tracker = DeclarationTracker()
    seen: list[Token] = []
    results = []
    for token in classify_all("char c = 'x';"):
        results.append(tracker.process_token(token, seen))
        seen.append(token)

    declaration, flag = results[1]
    assert declaration is not None and declaration.identifier == "c"
    assert flag is None
    assert all(result == (None, None) for index, result in enumerate(results) if index != 1)


def test_declarations_view_is_read_only():
    tracker = track("int x;")

    try:
        tracker.declarations["y"] = tracker.declarations["x"]  # type: ignore[index]
    except TypeError:
        pass
    else:
        raise AssertionError("Expected declarations to be read only")

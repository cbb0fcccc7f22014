from pathlib import Path
import re

import pytest

from clexcheck import AnalyzerOptions, ErrorKind, analyze, analyze_file
from clexcheck.lexer import LanguageTables, TokenKind
from clexcheck.lint import RelationalOperatorValidator
from clexcheck.output import report_to_json
from clexcheck.pipeline import analyze_files
from tests._shared_cases import (
    CLEAN_PROGRAM,
    NOVICE_PROGRAM,
    NOVICE_PROGRAM_DECLARATIONS,
    NOVICE_PROGRAM_FLAGS,
    ExpectedFlag,
)


def test_empty_source_produces_an_empty_report():
    report = analyze("")

    assert report.tokens == ()
    assert report.comments == ()
    assert report.flags == ()
    assert dict(report.declarations) == {}
    assert not report.has_flags


def test_novice_program_flags():
    report = analyze(NOVICE_PROGRAM)

    assert [ExpectedFlag(flag.code, *flag.position.as_tuple()) for flag in report.flags] == list(NOVICE_PROGRAM_FLAGS)
    assert report.flag_counts() == {
        ErrorKind.MISSPELLED_KEYWORD: 3,
        ErrorKind.TYPE_MISMATCH: 2,
        ErrorKind.USE_BEFORE_DECLARATION: 4,
        ErrorKind.MISPLACED_RELATIONAL_OPERATOR: 3,
    }


def test_novice_program_declarations_and_comments():
    report = analyze(NOVICE_PROGRAM)

    assert tuple(report.declarations) == NOVICE_PROGRAM_DECLARATIONS
    assert [comment.start.as_tuple() for comment in report.comments] == [(1, 1), (2, 1)]
    assert all(token.kind != TokenKind.COMMENT for token in report.tokens)


def test_clean_program_has_no_flags():
    report = analyze(CLEAN_PROGRAM)

    assert report.flags == ()
    assert set(report.declarations) == {"total", "i"}


def test_tokens_and_comments_cover_all_non_whitespace_text():
    report = analyze(NOVICE_PROGRAM)

    pieces = sorted([*report.tokens, *report.comments], key=lambda item: item.start.offset)
    joined = "".join(piece.text for piece in pieces)

    assert re.sub(r"\s", "", joined) == re.sub(r"\s", "", NOVICE_PROGRAM)


def test_flags_are_in_non_decreasing_position_order():
    report = analyze(NOVICE_PROGRAM)

    offsets = [flag.position.offset for flag in report.flags]
    assert offsets == sorted(offsets)


def test_analysis_is_deterministic():
    assert report_to_json(analyze(NOVICE_PROGRAM)) == report_to_json(analyze(NOVICE_PROGRAM))


def test_declared_names_are_not_reported_as_misspellings():
    report = analyze("int fort = 1;\nfort = 2;")

    assert report.flags_of(ErrorKind.MISSPELLED_KEYWORD) == ()


def test_report_declarations_are_read_only():
    report = analyze("int x;")

    with pytest.raises(TypeError):
        report.declarations["y"] = report.declarations["x"]  # type: ignore[index]


def test_options_switch_off_assignment_checks():
    source = "int x;\nx = 2.5;"

    assert len(analyze(source).flags_of(ErrorKind.TYPE_MISMATCH)) == 1
    assert analyze(source, AnalyzerOptions(check_assignments=False)).flags == ()


def test_custom_tables_change_the_vocabulary():
    tables = LanguageTables.from_mapping(
        {
            "keywords": ["num", "if"],
            "type_keywords": {"num": "Float"},
        }
    )

    report = analyze("num x = 3;\nint y = 'c';", tables=tables)

    assert set(report.declarations) == {"x"}
    assert report.tokens[5].kind == TokenKind.IDENTIFIER
    assert report.flags_of(ErrorKind.TYPE_MISMATCH) == ()


def test_rejects_options_and_tables_together():
    try:
        analyze("int x;", AnalyzerOptions(), tables=LanguageTables.default())
    except ValueError as exc:
        assert "Pass either options or tables, not both" in str(exc)
    else:
        raise AssertionError("Expected ValueError when passing options and tables together")


def test_rejects_duplicate_rules():
    rule = RelationalOperatorValidator()

    with pytest.raises(ValueError, match="registered more than once"):
        analyze("x < y", rules=[rule, rule])


def test_empty_rule_set_skips_relational_checks():
    report = analyze("<", rules=[])

    assert report.flags == ()


def test_analyze_file_reads_utf8_and_replaces_bad_bytes(tmp_path: Path):
    path = tmp_path / "Main.java"
    path.write_bytes(b'String s = "caf\xc3\xa9";\nint \xff = 1;\n')

    report = analyze_file(path)

    assert report.tokens[3].text == '"café"'
    assert "\ufffd" in report.source_text


def test_analyze_files_keeps_input_order(tmp_path: Path):
    first = tmp_path / "b.c"
    second = tmp_path / "a.c"
    first.write_text("int x;", encoding="utf-8")
    second.write_text("flaot y;", encoding="utf-8")

    reports = analyze_files([first, second])

    assert list(reports) == [first, second]
    assert not reports[first].has_flags
    assert reports[second].has_flags


def test_kotlin_bindings_end_to_end():
    report = analyze("var x: Int\nx = 10\nvar a: Int = 3.14\n")

    assert [(flag.error_kind, flag.position.as_tuple()) for flag in report.flags] == [
        (ErrorKind.TYPE_MISMATCH, (3, 14)),
    ]
    assert report.declarations["x"].position.as_tuple() == (1, 5)


def test_kotlin_header_and_misspelled_binding_keyword():
    source = (
        "package com.example.test.project\n"
        "import kotlin.math.PI\n"
        "val y: Float = 2.5f\n"
        "var c: Char = \"hello\"\n"
        "vaar badVar = 5\n"
        "var maybe: String? = null\n"
        "var len = maybe\n"
    )

    report = analyze(source)

    assert report.tokens[1].text == "com.example.test.project"
    assert report.tokens[1].kind == TokenKind.IDENTIFIER
    assert [(flag.code, *flag.position.as_tuple()) for flag in report.flags] == [
        ("E1", 4, 15),
        ("E2", 5, 1),
        ("E3", 5, 6),
    ]
    assert set(report.declarations) == {"y", "c", "maybe", "len"}

"""Field-by-field JSON encoding of analysis reports."""

from __future__ import annotations

import json
from typing import Any

from clexcheck.analysis import Declaration
from clexcheck.diagnostics import Flag
from clexcheck.lexer import CommentRecord, Token
from clexcheck.pipeline import AnalysisReport
from clexcheck.text import Position


def position_to_dict(position: Position) -> dict[str, int]:
    return {"line": position.line, "column": position.column, "offset": position.offset}


def token_to_dict(token: Token) -> dict[str, Any]:
    return {
        "kind": token.kind.value,
        "text": token.text,
        "start": position_to_dict(token.start),
        "end": position_to_dict(token.end),
    }


def declaration_to_dict(declaration: Declaration) -> dict[str, Any]:
    return {
        "identifier": declaration.identifier,
        "declared_type": declaration.declared_type.value if declaration.declared_type is not None else None,
        "position": position_to_dict(declaration.position),
    }


def flag_to_dict(flag: Flag) -> dict[str, Any]:
    return {
        "error_kind": flag.error_kind.value,
        "code": flag.code,
        "severity": flag.severity,
        "message": flag.message,
        "hint": flag.hint,
        "position": position_to_dict(flag.position),
        "end": position_to_dict(flag.span.end),
    }


def comment_to_dict(comment: CommentRecord) -> dict[str, Any]:
    return {
        "style": comment.style.value,
        "text": comment.text,
        "start": position_to_dict(comment.start),
        "end": position_to_dict(comment.end),
    }


def report_to_dict(report: AnalysisReport) -> dict[str, Any]:
    return {
        "tokens": [token_to_dict(token) for token in report.tokens],
        "declarations": {
            name: declaration_to_dict(declaration) for name, declaration in report.declarations.items()
        },
        "flags": [flag_to_dict(flag) for flag in report.flags],
        "comments": [comment_to_dict(comment) for comment in report.comments],
        "summary": {kind.value: count for kind, count in report.flag_counts().items()},
    }


def report_to_json(report: AnalysisReport, *, indent: int | None = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=False)

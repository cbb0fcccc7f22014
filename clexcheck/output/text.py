"""Line-oriented text rendering of analysis reports."""

from __future__ import annotations

from collections.abc import Iterable

from clexcheck.diagnostics import Flag
from clexcheck.lexer import CommentRecord, Token
from clexcheck.pipeline import AnalysisReport

TOKEN_COLUMN_WIDTH = 40


def format_token_table(tokens: Iterable[Token]) -> str:
    """Token table: text, kind and line/column, one token per row."""
    lines = [f"{'TOKEN':<{TOKEN_COLUMN_WIDTH}} {'KIND':<20} POSITION"]
    for token in tokens:
        text = _clip(token.text, TOKEN_COLUMN_WIDTH)
        lines.append(f"{text:<{TOKEN_COLUMN_WIDTH}} {token.kind.value:<20} {token.start.line}:{token.start.column}")
    return "\n".join(lines)


def format_comments(comments: Iterable[CommentRecord]) -> str:
    rendered = [
        f"{comment.start.line}:{comment.start.column}-{comment.end.line}:{comment.end.column} "
        f"{comment.style.value:<12} {_clip(comment.text.splitlines()[0], 60)}"
        for comment in comments
    ]
    return "\n".join(rendered) if rendered else "(no comments found)"


def format_flag(flag: Flag) -> str:
    line = f"{flag.position.line}:{flag.position.column} {flag.code}-{flag.error_kind.value}: {flag.message}"
    if flag.hint:
        line += f"\n    hint: {flag.hint}"
    return line


def format_summary(report: AnalysisReport) -> str:
    counts = report.flag_counts()
    parts = [f"{kind.value}={count}" for kind, count in counts.items()]
    return f"Summary: {'  '.join(parts)}  Total={sum(counts.values())}"


def format_report(report: AnalysisReport, *, include_tokens: bool = True) -> str:
    """Token table, comments, flags and the per-kind summary."""
    sections: list[str] = []
    if include_tokens:
        sections.append("TOKENS\n" + format_token_table(report.tokens))
    sections.append("COMMENTS\n" + format_comments(report.comments))
    flags = "\n".join(format_flag(flag) for flag in report.flags) or "No errors found."
    sections.append("FLAGS\n" + flags)
    sections.append(format_summary(report))
    return "\n\n".join(sections) + "\n"


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."

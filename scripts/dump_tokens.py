#!/usr/bin/env python
"""Dump the classified tokens, comments and flags of one source file."""

from __future__ import annotations

import argparse
from pathlib import Path

from clexcheck.lexer import Token
from clexcheck.pipeline import analyze_file


def format_token(idx: int, token: Token) -> str:
    return (
        f"[{idx:03d}] {token.kind.value:<20} "
        f"text={token.text!r} "
        f"span=({token.start.line}:{token.start.column},{token.end.line}:{token.end.column})"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump classified tokens for debugging")
    parser.add_argument("input", type=Path, help="Source file to scan")
    parser.add_argument("--output", type=Path, default=None, help="Write the dump here instead of stdout")
    args = parser.parse_args()

    report = analyze_file(args.input)
    lines = [format_token(idx, token) for idx, token in enumerate(report.tokens)]
    lines.append("")
    lines.append("Comments:")
    lines.extend(f"- {c.style.value} {c.start.line}:{c.start.column} {c.text!r}" for c in report.comments)
    lines.append("")
    lines.append("Flags:")
    lines.extend(
        f"- {f.code} {f.error_kind.value} {f.position.line}:{f.position.column} {f.message}" for f in report.flags
    )
    text = "\n".join(lines) + "\n"

    if args.output is None:
        print(text, end="")
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text, encoding="utf-8")
    print(f"Wrote {len(report.tokens)} tokens to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Flag helpers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from clexcheck.diagnostics.flag import ErrorKind, Flag


def collect_flags(*groups: Iterable[Flag]) -> list[Flag]:
    """Merge flag groups into one list in document order."""
    flags: list[Flag] = []
    for group in groups:
        flags.extend(group)
    return sort_flags(flags)


def sort_flags(flags: Iterable[Flag]) -> list[Flag]:
    return sorted(
        flags,
        key=lambda flag: (
            flag.span.start.offset,
            flag.error_kind.rank,
            flag.span.end.offset,
            flag.message,
        ),
    )


def count_by_kind(flags: Iterable[Flag]) -> dict[ErrorKind, int]:
    """Per-kind totals, with every kind present (zero when unseen)."""
    counts = Counter(flag.error_kind for flag in flags)
    return {kind: counts.get(kind, 0) for kind in ErrorKind}


def has_errors(flags: Iterable[Flag]) -> bool:
    return any(flag.severity == "error" for flag in flags)

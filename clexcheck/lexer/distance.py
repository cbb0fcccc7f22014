"""Edit distance used for near-miss keyword detection."""


def edit_distance(a: str, b: str) -> int:
    """Damerau-Levenshtein distance (optimal string alignment variant).

    Counts insertions, deletions, substitutions and transpositions of two
    adjacent characters, each at cost 1. Comparison is case-sensitive, so
    `flaot` is 1 away from `float` and `Int` is 1 away from `int`.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Three rolling rows: i-2, i-1 and i.
    before_previous: list[int] = []
    previous = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        current = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                current[j] = min(current[j], before_previous[j - 2] + 1)
        before_previous, previous = previous, current
    return previous[len(b)]


def within_one_edit(a: str, b: str) -> bool:
    """True when `a` and `b` differ by exactly one edit."""
    if abs(len(a) - len(b)) > 1 or a == b:
        return False
    return edit_distance(a, b) == 1

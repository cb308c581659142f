"""String similarity helpers used to rank food search results."""
from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions or substitutions."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """
    Percentage similarity (0-100) between two strings, case and surrounding
    whitespace ignored. Rounded to two decimals.
    """
    if a == b:
        return 100.0
    if not a or not b:
        return 0.0

    na = a.lower().strip()
    nb = b.lower().strip()
    if na == nb:
        return 100.0

    longest = max(len(na), len(nb))
    distance = levenshtein_distance(na, nb)
    return round((longest - distance) / longest * 100, 2)

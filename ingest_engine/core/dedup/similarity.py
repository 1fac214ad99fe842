"""
Field similarity measures used by duplicate detection.
"""

from datetime import datetime

DAY_SECONDS = 24 * 60 * 60


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance: unit cost for each insert, delete or substitute.

    Runs in O(len(a) * len(b)) time with two rows of memory.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,                        # deletion
                current[j - 1] + 1,                     # insertion
                previous[j - 1] + (char_a != char_b),   # substitution
            ))
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """1 - distance / longest length; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def date_similarity(a: datetime | None, b: datetime | None) -> float:
    """
    Step function over the gap between two timestamps:
    same instant 1.0, within 7 days 0.8, within 30 days 0.5, otherwise 0.
    An unparsable side scores 0.
    """
    if a is None or b is None:
        return 0.0

    gap_days = abs((a - b).total_seconds()) / DAY_SECONDS
    if gap_days == 0:
        return 1.0
    if gap_days <= 7:
        return 0.8
    if gap_days <= 30:
        return 0.5
    return 0.0


def exact_similarity(a: str, b: str) -> float:
    return 1.0 if a == b else 0.0

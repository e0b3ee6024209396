"""Text helpers consumed by text-oriented metrics."""

from __future__ import annotations


def tokenize(text: str) -> list[str]:
    """Split ``text`` on whitespace, preserving token order."""
    return text.split()


def edit_distance(first: str, second: str) -> int:
    """Return the Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost one; strings are
    compared code point by code point.
    """
    if not first:
        return len(second)
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for row, left in enumerate(first, start=1):
        current = [row]
        for column, right in enumerate(second, start=1):
            cost = 0 if left == right else 1
            current.append(
                min(
                    previous[column] + 1,
                    current[column - 1] + 1,
                    previous[column - 1] + cost,
                ),
            )
        previous = current
    return previous[-1]


__all__ = ["edit_distance", "tokenize"]

"""Duplicate key detection on raw env text."""

from __future__ import annotations

from collections import Counter

from dotenv_diff.core.parse import iter_assignments
from dotenv_diff.models.env import DuplicateEntry


def find_duplicates(raw_text: str | None) -> list[DuplicateEntry]:
    """
    Count keys that are assigned more than once.

    Works on the unparsed text so that counts survive the parser's
    last-write-wins folding.

    Args:
        raw_text: Raw env file text

    Returns:
        One entry per repeated key with its total occurrence count, in order
        of first occurrence
    """
    counts = Counter(key for key, _ in iter_assignments(raw_text))
    return [DuplicateEntry(key=k, count=c) for k, c in counts.items() if c > 1]


def excess_occurrences(*groups: list[DuplicateEntry]) -> int:
    """Total number of redundant lines across duplicate lists."""
    return sum(max(0, d.count - 1) for group in groups for d in group)

"""Parsing of flat KEY=VALUE env files."""

from __future__ import annotations

import re
from typing import Iterable, Iterator


def iter_assignments(text: str | None) -> Iterator[tuple[str, str]]:
    """
    Yield ``(key, value)`` for every assignment line of an env file.

    Blank lines, ``#`` comments, lines without ``=`` and lines with an empty
    key are skipped. Only the first ``=`` splits key from value. A leading
    byte-order mark is dropped.

    Args:
        text: Raw file text, or None for an absent file

    Yields:
        Trimmed key and value of each assignment, in file order
    """
    if not text:
        return
    if text.startswith("\ufeff"):
        text = text[1:]
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        yield key, value.strip()


def parse_env(text: str | None) -> dict[str, str]:
    """
    Parse env file text into an ordered mapping.

    The last occurrence of a key wins. No quoting, escaping or multi-line
    values are interpreted.

    Args:
        text: Raw file text, or None for an absent file

    Returns:
        Mapping of variable name to value
    """
    env: dict[str, str] = {}
    for key, value in iter_assignments(text):
        env[key] = value
    return env


def filter_ignored_keys(
    keys: Iterable[str],
    ignore: Iterable[str] = (),
    ignore_regex: Iterable[re.Pattern[str]] = (),
) -> list[str]:
    """Drop keys listed in ``ignore`` or matched by any of ``ignore_regex``."""
    ignored = set(ignore)
    patterns = list(ignore_regex)
    return [k for k in keys if k not in ignored and not any(rx.search(k) for rx in patterns)]

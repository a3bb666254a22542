"""Text transforms behind ``compare --fix``."""

from __future__ import annotations

import re

from dotenv_diff.core.parse import iter_assignments

_ASSIGNED_KEY = re.compile(r"^\s*([\w.-]+)\s*=")


def remove_duplicate_lines(text: str, keys: list[str]) -> str:
    """
    Drop all but the last assignment of each key in ``keys``.

    Other lines, comments included, are left untouched. A leading byte
    order mark is kept even when its line is removed.
    """
    bom = "\ufeff" if text.startswith("\ufeff") else ""
    text = text[len(bom):]
    targets = set(keys)
    seen: set[str] = set()
    kept: list[str] = []
    for line in reversed(text.split("\n")):
        m = _ASSIGNED_KEY.match(line)
        if m and m.group(1) in targets:
            if m.group(1) in seen:
                continue
            seen.add(m.group(1))
        kept.append(line)
    return bom + "\n".join(reversed(kept))


def _append_lines(text: str, lines: list[str]) -> str:
    if not lines:
        return text
    sep = "" if not text or text.endswith("\n") else "\n"
    return text + sep + "\n".join(lines) + "\n"


def append_missing_keys(text: str, keys: list[str]) -> str:
    """Append an empty ``KEY=`` line for each key."""
    return _append_lines(text, [f"{k}=" for k in keys])


def append_example_keys(text: str, keys: list[str]) -> tuple[str, list[str]]:
    """
    Append bare keys to an example file unless it already declares them.

    Returns:
        The new text and the keys actually added
    """
    existing = {k for k, _ in iter_assignments(text)}
    existing.update(line.strip() for line in text.split("\n") if line.strip())
    added = [k for k in keys if k not in existing]
    return _append_lines(text, added), added

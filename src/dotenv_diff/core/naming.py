"""Naming convention checks over variable names."""

from __future__ import annotations

import re
from typing import Iterable

from dotenv_diff.models.env import EnvUsage
from dotenv_diff.models.findings import InconsistentNamingWarning, UppercaseWarning

UPPERCASE_KEY = re.compile(r"^[A-Z0-9_]+$")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[-\s]+")


def to_upper_snake_case(name: str) -> str:
    """
    Convert a name to UPPER_SNAKE_CASE.

    Runs of capitals are not split, so ``URLParser`` becomes ``URLPARSER``.
    """
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    name = _SEPARATORS.sub("_", name)
    return name.upper()


def detect_uppercase_keys(usages: Iterable[EnvUsage | str]) -> list[UppercaseWarning]:
    """
    Warn for every name that is not UPPER_SNAKE_CASE.

    Accepts usages or plain key names; one warning is produced per item.
    """
    names = [u.variable if isinstance(u, EnvUsage) else u for u in usages]
    return [
        UppercaseWarning(key=name, suggestion=to_upper_snake_case(name))
        for name in names
        if not UPPERCASE_KEY.match(name)
    ]


def _inconsistently_named(key1: str, key2: str) -> bool:
    return key1 != key2 and key1.replace("_", "").lower() == key2.replace("_", "").lower()


def detect_inconsistent_naming(keys: list[str]) -> list[InconsistentNamingWarning]:
    """
    Find pairs of keys that only differ by underscores or letter case.

    Every unordered pair is considered once; the pair is remembered by its
    sorted form so repeated keys in the input cannot produce a second warning.

    Args:
        keys: Variable names to compare

    Returns:
        One warning per inconsistent pair, recommending the underscored form
    """
    warnings: list[InconsistentNamingWarning] = []
    seen: set[tuple[str, str]] = set()

    for i, key1 in enumerate(keys):
        for key2 in keys[i + 1 :]:
            if not key1 or not key2:
                continue
            pair = tuple(sorted((key1, key2)))
            if pair in seen:
                continue
            seen.add(pair)

            if _inconsistently_named(key1, key2):
                snake = key1 if "_" in key1 else key2
                warnings.append(
                    InconsistentNamingWarning(
                        key1=key1,
                        key2=key2,
                        suggestion=f"Consider using snake_case naming: '{snake}'",
                    )
                )

    return warnings

"""Expiration annotations in env files.

An annotation applies to the first assignment that follows it::

    # @expire 2025-12-31
    API_KEY=abc
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from dotenv_diff.models.findings import ExpireWarning

EXPIRE_ANNOTATION = re.compile(r"(//|#)?\s*@?expire\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE)
ENV_ASSIGNMENT = re.compile(r"^[A-Za-z0-9_.-]+=")

_SECONDS_PER_DAY = 24 * 60 * 60


def days_until(date: str, now: datetime | None = None) -> int | None:
    """
    Whole days from ``now`` until midnight UTC of ``date``, rounded up.

    Args:
        date: ISO date (YYYY-MM-DD)
        now: Reference instant; naive values are taken as UTC

    Returns:
        Signed day count, or None if the date is not a valid calendar date
    """
    try:
        expires = datetime.strptime(date, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.ceil((expires - now).total_seconds() / _SECONDS_PER_DAY)


def detect_env_expirations(raw_text: str | None, now: datetime | None = None) -> list[ExpireWarning]:
    """
    Collect expiration annotations and the keys they apply to.

    Args:
        raw_text: Raw env file text
        now: Reference instant for ``days_left`` (defaults to the current time)

    Returns:
        One warning per annotated key, in file order
    """
    warnings: list[ExpireWarning] = []
    pending: str | None = None

    for raw in (raw_text or "").splitlines():
        line = raw.strip()

        m = EXPIRE_ANNOTATION.search(line)
        if m:
            pending = m.group(2)
            continue

        if pending and ENV_ASSIGNMENT.match(line):
            key = line.split("=", 1)[0]
            days_left = days_until(pending, now)
            if days_left is not None:
                warnings.append(ExpireWarning(key=key, date=pending, days_left=days_left))
            pending = None

    return warnings

"""Linear weighted-defect health score."""

from __future__ import annotations

from typing import Any

from dotenv_diff.models.findings import Severity
from dotenv_diff.models.report import HealthWeights


def _count(report: Any, field: str) -> int:
    return len(getattr(report, field, None) or [])


def compute_health_score(report: Any, weights: HealthWeights | None = None) -> int:
    """
    Score a report from 0 (worst) to 100 (clean).

    Works on both ``ScanReport`` and ``CompareReport``; fields a report does
    not carry count as zero. t3-env warnings do not affect the score.

    Args:
        report: Report to score
        weights: Points per defect (defaults to ``HealthWeights()``)

    Returns:
        Score clamped to [0, 100]
    """
    w = weights or HealthWeights()
    secrets = getattr(report, "secrets", None) or []

    score = 100
    score -= sum(1 for s in secrets if s.severity == Severity.HIGH) * w.high_secret
    score -= sum(1 for s in secrets if s.severity == Severity.MEDIUM) * w.medium_secret
    score -= _count(report, "missing") * w.missing
    score -= _count(report, "uppercase_warnings") * w.uppercase
    score -= _count(report, "logged") * w.logged
    score -= _count(report, "unused") * w.unused
    score -= _count(report, "framework_warnings") * w.framework
    score -= _count(report, "example_warnings") * w.example_secret
    score -= _count(report, "expire_warnings") * w.expire
    score -= _count(report, "inconsistent_naming_warnings") * w.inconsistent_naming

    return max(0, min(100, score))

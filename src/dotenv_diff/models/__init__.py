"""Data models for dotenv-diff.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from dotenv_diff.models.common import ErrorDetail
from dotenv_diff.models.env import (
    DiffResult,
    DuplicateEntry,
    EnvPattern,
    EnvUsage,
    ValueMismatch,
)
from dotenv_diff.models.findings import (
    ExampleSecretWarning,
    ExpireWarning,
    Framework,
    FrameworkWarning,
    InconsistentNamingWarning,
    SecretFinding,
    Severity,
    T3EnvSchema,
    T3EnvWarning,
    UppercaseWarning,
)
from dotenv_diff.models.report import (
    CompareOptions,
    CompareReport,
    CompareStats,
    HealthWeights,
    ScanReport,
    ScanStats,
)

__all__ = [
    # Common
    "ErrorDetail",
    # Env
    "DiffResult",
    "DuplicateEntry",
    "EnvPattern",
    "EnvUsage",
    "ValueMismatch",
    # Findings
    "ExampleSecretWarning",
    "ExpireWarning",
    "Framework",
    "FrameworkWarning",
    "InconsistentNamingWarning",
    "SecretFinding",
    "Severity",
    "T3EnvSchema",
    "T3EnvWarning",
    "UppercaseWarning",
    # Reports
    "CompareOptions",
    "CompareReport",
    "CompareStats",
    "HealthWeights",
    "ScanReport",
    "ScanStats",
]

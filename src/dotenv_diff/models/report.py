"""Aggregate report models assembled by the comparison layer."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from dotenv_diff.models.env import DiffResult, DuplicateEntry, EnvUsage, ValueMismatch
from dotenv_diff.models.findings import (
    ExampleSecretWarning,
    ExpireWarning,
    Framework,
    FrameworkWarning,
    InconsistentNamingWarning,
    SecretFinding,
    T3EnvWarning,
    UppercaseWarning,
)


class HealthWeights(BaseModel):
    """Points subtracted from a perfect score of 100 per defect.

    These are configuration, not derived constants.
    """

    model_config = {"frozen": True}

    high_secret: int = Field(default=20, description="Per high-severity secret")
    medium_secret: int = Field(default=10, description="Per medium-severity secret")
    missing: int = Field(default=20, description="Per missing variable")
    uppercase: int = Field(default=2, description="Per uppercase naming warning")
    logged: int = Field(default=10, description="Per logged variable")
    unused: int = Field(default=1, description="Per unused variable")
    framework: int = Field(default=5, description="Per framework warning")
    example_secret: int = Field(default=10, description="Per example-file secret")
    expire: int = Field(default=5, description="Per expiration warning")
    inconsistent_naming: int = Field(default=3, description="Per inconsistent pair")


class CompareOptions(BaseModel):
    """Options for comparing an env file against its example."""

    model_config = {"frozen": True}

    check_values: bool = Field(default=False, description="Compare non-empty example values")
    ignore: list[str] = Field(default_factory=list, description="Keys to exclude")
    ignore_regex: list[re.Pattern[str]] = Field(
        default_factory=list, description="Compiled patterns of keys to exclude"
    )


class CompareStats(BaseModel):
    """Counts describing one env/example comparison."""

    model_config = {"frozen": True}

    env_count: int = Field(description="Keys in the env file after filtering")
    example_count: int = Field(description="Keys in the example file after filtering")
    shared_count: int = Field(description="Keys present in both")
    duplicate_count: int = Field(description="Excess duplicate lines across both files")
    value_mismatch_count: int = Field(description="Number of value mismatches")


class CompareReport(BaseModel):
    """Full result of comparing an env file with its example."""

    model_config = {"frozen": True}

    env: str = Field(default=".env", description="Label of the env file")
    example: str = Field(default=".env.example", description="Label of the example file")
    diff: DiffResult = Field(default_factory=DiffResult, description="Key differences")
    empty: list[str] = Field(default_factory=list, description="Keys with empty values")
    duplicates_env: list[DuplicateEntry] = Field(
        default_factory=list, description="Duplicate keys in the env file"
    )
    duplicates_example: list[DuplicateEntry] = Field(
        default_factory=list, description="Duplicate keys in the example file"
    )
    example_warnings: list[ExampleSecretWarning] = Field(
        default_factory=list, description="Secrets found in the example file"
    )
    expire_warnings: list[ExpireWarning] = Field(
        default_factory=list, description="Expiration annotations"
    )
    inconsistent_naming_warnings: list[InconsistentNamingWarning] = Field(
        default_factory=list, description="Keys differing only by underscores"
    )
    stats: CompareStats | None = Field(default=None, description="Comparison counts")
    health_score: int = Field(default=100, description="0-100 health score")

    @property
    def missing(self) -> list[str]:
        return self.diff.missing

    @property
    def extra(self) -> list[str]:
        return self.diff.extra

    @property
    def value_mismatches(self) -> list[ValueMismatch]:
        return self.diff.value_mismatches

    @property
    def ok(self) -> bool:
        """Whether the comparison found nothing to report."""
        return not (
            self.diff.missing
            or self.diff.extra
            or self.diff.value_mismatches
            or self.empty
            or self.duplicates_env
            or self.duplicates_example
        )


class ScanStats(BaseModel):
    """Counts describing one codebase scan."""

    model_config = {"frozen": True}

    files_scanned: int = Field(default=0, description="Files read successfully")
    total_usages: int = Field(default=0, description="Usages after ignore filtering")
    unique_variables: int = Field(default=0, description="Distinct variables used")
    warnings_count: int = Field(default=0, description="Total warnings of all kinds")
    duration: float = Field(default=0.0, description="Scan duration in seconds")


class ScanReport(BaseModel):
    """Full result of scanning a codebase against a declared env file."""

    model_config = {"frozen": True}

    comparison_file: str | None = Field(
        default=None, description="Env file the usages were compared with"
    )
    framework: Framework = Field(default=Framework.UNKNOWN, description="Detected framework")
    used: list[EnvUsage] = Field(default_factory=list, description="All usages")
    missing: list[str] = Field(default_factory=list, description="Used but not declared")
    unused: list[str] = Field(default_factory=list, description="Declared but not used")
    secrets: list[SecretFinding] = Field(default_factory=list, description="Source secrets")
    logged: list[EnvUsage] = Field(default_factory=list, description="Usages that are logged")
    uppercase_warnings: list[UppercaseWarning] = Field(default_factory=list)
    framework_warnings: list[FrameworkWarning] = Field(default_factory=list)
    t3env_warnings: list[T3EnvWarning] = Field(default_factory=list)
    example_warnings: list[ExampleSecretWarning] = Field(default_factory=list)
    expire_warnings: list[ExpireWarning] = Field(default_factory=list)
    inconsistent_naming_warnings: list[InconsistentNamingWarning] = Field(default_factory=list)
    duplicates_env: list[DuplicateEntry] = Field(default_factory=list)
    duplicates_example: list[DuplicateEntry] = Field(default_factory=list)
    has_csp: bool = Field(default=False, description="Whether a CSP is configured")
    stats: ScanStats = Field(default_factory=ScanStats, description="Scan counts")
    health_score: int = Field(default=100, description="0-100 health score")

"""Diagnostic finding models produced by the detectors.

Every warning kind carries a fixed ``kind`` tag so that mixed lists can be
told apart after serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity level for secret-related findings."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_ORDER = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}


class Framework(str, Enum):
    """Frontend framework a project is built with."""

    SVELTEKIT = "sveltekit"
    NEXTJS = "nextjs"
    ANGULAR = "angular"
    UNKNOWN = "unknown"


class SecretFinding(BaseModel):
    """A potential secret found in source code."""

    model_config = {"frozen": True}

    kind: Literal["pattern", "entropy"] = Field(description="Detection rule family")
    file: str = Field(description="File the finding was made in")
    line: int = Field(description="1-based line number")
    message: str = Field(description="Why the line was flagged")
    snippet: str = Field(description="Trimmed source line, truncated")
    severity: Severity = Field(description="Finding severity")


class ExampleSecretWarning(BaseModel):
    """A value in an example file that looks like a real credential."""

    model_config = {"frozen": True}

    kind: Literal["example-secret"] = "example-secret"
    key: str = Field(description="Variable name")
    value: str = Field(description="The offending value")
    reason: str = Field(description="Why the value was flagged")
    severity: Severity = Field(description="Finding severity")


class ExpireWarning(BaseModel):
    """A variable annotated with an expiration date."""

    model_config = {"frozen": True}

    kind: Literal["expire"] = "expire"
    key: str = Field(description="Variable name")
    date: str = Field(description="Expiration date (YYYY-MM-DD)")
    days_left: int = Field(description="Whole days until expiry, negative if expired")


class FrameworkWarning(BaseModel):
    """A framework-specific misuse of an environment variable."""

    model_config = {"frozen": True}

    kind: Literal["framework"] = "framework"
    variable: str = Field(description="Variable name")
    reason: str = Field(description="Rule that was violated")
    file: str = Field(description="File of the usage")
    line: int = Field(description="Line of the usage")
    framework: Framework = Field(description="Framework whose rule fired")


class T3EnvWarning(BaseModel):
    """A usage that conflicts with a t3-env schema."""

    model_config = {"frozen": True}

    kind: Literal["t3-env"] = "t3-env"
    variable: str = Field(description="Variable name")
    reason: str = Field(description="Rule that was violated")
    file: str = Field(description="File of the usage")
    line: int = Field(description="Line of the usage")
    framework: Literal["t3-env"] = "t3-env"


class T3EnvSchema(BaseModel):
    """Server and client variable names declared with createEnv."""

    model_config = {"frozen": True}

    server: list[str] = Field(default_factory=list, description="Server-only variables")
    client: list[str] = Field(default_factory=list, description="Client variables")


class UppercaseWarning(BaseModel):
    """A variable name that is not UPPER_SNAKE_CASE."""

    model_config = {"frozen": True}

    kind: Literal["uppercase"] = "uppercase"
    key: str = Field(description="Variable name as written")
    suggestion: str = Field(description="UPPER_SNAKE_CASE form")


class InconsistentNamingWarning(BaseModel):
    """Two keys that differ only by underscores or case."""

    model_config = {"frozen": True}

    kind: Literal["inconsistent-naming"] = "inconsistent-naming"
    key1: str = Field(description="First key of the pair")
    key2: str = Field(description="Second key of the pair")
    suggestion: str = Field(description="Recommended spelling")

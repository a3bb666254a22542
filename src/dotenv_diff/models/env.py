"""Environment file and source usage data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EnvPattern(str, Enum):
    """Source access idiom an environment variable was read through."""

    PROCESS_ENV = "process.env"
    IMPORT_META_ENV = "import.meta.env"
    SVELTEKIT = "sveltekit"


class EnvUsage(BaseModel):
    """A single reference to an environment variable found in source code."""

    model_config = {"frozen": True}

    variable: str = Field(description="Variable name")
    file: str = Field(description="File path, relative to the scan root")
    line: int = Field(description="1-based line number")
    column: int = Field(description="1-based column of the match")
    pattern: EnvPattern = Field(description="Access idiom used")
    context: str = Field(default="", description="The source line, trimmed")
    is_logged: bool = Field(
        default=False, description="Whether the line also logs via console.*"
    )
    imports: list[str] = Field(
        default_factory=list,
        description="SvelteKit $env modules imported by the file",
    )


class ValueMismatch(BaseModel):
    """A key whose value differs from the example file."""

    model_config = {"frozen": True}

    key: str = Field(description="Variable name")
    expected: str = Field(description="Value in the example file")
    actual: str = Field(description="Value in the current file")


class DiffResult(BaseModel):
    """Result of comparing two env maps."""

    model_config = {"frozen": True}

    missing: list[str] = Field(
        default_factory=list, description="Example keys absent from current"
    )
    extra: list[str] = Field(
        default_factory=list, description="Current keys absent from example"
    )
    value_mismatches: list[ValueMismatch] = Field(
        default_factory=list, description="Keys with differing values"
    )


class DuplicateEntry(BaseModel):
    """A key that occurs more than once in a raw env file."""

    model_config = {"frozen": True}

    key: str = Field(description="Variable name")
    count: int = Field(description="Total number of occurrences (always >= 2)")

"""Error types for dotenv-diff.

The detection engine never raises for missing or empty input; these errors
belong to the layer that loads files, options and configuration.
"""

from __future__ import annotations

from typing import Any

from dotenv_diff.models.common import ErrorDetail


class DotenvDiffError(Exception):
    """Base exception for dotenv-diff."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_detail(self) -> ErrorDetail:
        """Convert to ErrorDetail model."""
        return ErrorDetail(code=self.code, message=self.message, details=self.details)


class ValidationError(DotenvDiffError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidPatternError(ValidationError):
    """An ignore pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid ignore pattern '{pattern}': {reason}", field="ignore_regex")
        self.code = "INVALID_PATTERN"
        self.details = {"pattern": pattern, "reason": reason}


class ConfigurationError(DotenvDiffError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class EnvFileNotFoundError(DotenvDiffError):
    """An env file named explicitly on the command line does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Env file not found: {path}",
            code="ENV_FILE_NOT_FOUND",
            details={"path": path},
        )


def validate_env_var_name(name: str) -> None:
    """Validate an environment variable name passed as an option.

    Args:
        name: Environment variable name to validate

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Environment variable name cannot be empty", field="name")

    if not name[0].isalpha() and name[0] != "_":
        raise ValidationError(
            "Environment variable name must start with a letter or underscore",
            field="name",
        )

    for char in name:
        if not (char.isalnum() or char in "_.-"):
            raise ValidationError(
                f"Environment variable name contains invalid character: {char}",
                field="name",
            )

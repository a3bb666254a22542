"""Utility functions for dotenv-diff."""

from dotenv_diff.utils.logging import configure_logging, get_logger, get_logger_with_context
from dotenv_diff.utils.errors import (
    DotenvDiffError,
    ValidationError,
    InvalidPatternError,
    ConfigurationError,
    EnvFileNotFoundError,
    validate_env_var_name,
)
from dotenv_diff.utils.config import (
    DotenvDiffConfig,
    compile_ignore_patterns,
    get_config_paths,
    load_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "DotenvDiffError",
    "ValidationError",
    "InvalidPatternError",
    "ConfigurationError",
    "EnvFileNotFoundError",
    "validate_env_var_name",
    # Config
    "DotenvDiffConfig",
    "compile_ignore_patterns",
    "get_config_paths",
    "load_config",
]

"""Configuration file support for dotenv-diff."""

from __future__ import annotations

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from dotenv_diff.models.report import HealthWeights
from dotenv_diff.utils.errors import ConfigurationError, InvalidPatternError
from dotenv_diff.utils.logging import get_logger

logger = get_logger("config")

CONFIG_FILENAMES = (".dotenv-diff.yaml", ".dotenv-diff.yml", "dotenv-diff.config.json")


class DotenvDiffConfig(BaseModel):
    """Project configuration; command line flags take precedence."""

    env: str = Field(default=".env", description="Env file to check")
    example: str = Field(default=".env.example", description="Example file to compare with")
    check_values: bool = Field(default=False, description="Compare non-empty example values")
    allow_duplicates: bool = Field(default=False, description="Do not report duplicate keys")
    ignore: list[str] = Field(default_factory=list, description="Keys to ignore")
    ignore_regex: list[str] = Field(default_factory=list, description="Key patterns to ignore")
    include: list[str] = Field(default_factory=list, description="Extra source globs to scan")
    exclude: list[str] = Field(default_factory=list, description="Extra paths to skip")
    secrets: bool = Field(default=True, description="Scan source files for secrets")
    ignore_urls: list[str] = Field(
        default_factory=list, description="URL substrings never reported as secrets"
    )
    health: HealthWeights = Field(default_factory=HealthWeights, description="Health score weights")


def get_config_paths(cwd: Path | str | None = None) -> list[Path]:
    """Get possible configuration file paths, in search order.

    Args:
        cwd: Project directory (defaults to the current directory)

    Returns:
        List of paths to check for configuration files
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    return [base / name for name in CONFIG_FILENAMES]


def load_config(config_path: Path | str | None = None, cwd: Path | str | None = None) -> DotenvDiffConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches ``cwd``.
        cwd: Project directory searched when no explicit path is given

    Returns:
        Loaded configuration, or defaults if no file exists

    Raises:
        ConfigurationError: If the explicit file is missing or a file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}", config_key="config")

    for path in get_config_paths(cwd):
        if path.exists():
            return _load_config_file(path)

    return DotenvDiffConfig()


def _load_config_file(path: Path) -> DotenvDiffConfig:
    logger.debug("Loading config from %s", path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return DotenvDiffConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    try:
        return DotenvDiffConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def compile_ignore_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    """Compile ignore expressions before they reach the engine.

    Args:
        patterns: Regular expression sources

    Returns:
        Compiled patterns in input order

    Raises:
        InvalidPatternError: If any expression does not compile
    """
    compiled = []
    for source in patterns:
        try:
            compiled.append(re.compile(source))
        except re.error as e:
            raise InvalidPatternError(source, str(e)) from e
    return compiled

"""Shared utilities for CLI commands."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console

from dotenv_diff.core.fix import append_example_keys, append_missing_keys, remove_duplicate_lines
from dotenv_diff.renderers import OutputFormat, RenderContext, get_renderer
from dotenv_diff.utils.config import DotenvDiffConfig, compile_ignore_patterns, load_config
from dotenv_diff.utils.errors import DotenvDiffError, ValidationError, validate_env_var_name
from dotenv_diff.utils.logging import get_logger

logger = get_logger("cli")

# Shared console instances; errors go to stderr so JSON on stdout stays parseable
console = Console()
err_console = Console(stderr=True)


def fail(error: DotenvDiffError) -> NoReturn:
    """Print an error and exit with status 2.

    Args:
        error: The error to report
    """
    err_console.print(f"[red]Error:[/red] {error.message}")
    logger.debug("Error detail: %s", error.to_error_detail())
    raise typer.Exit(2)


def resolve_config(config_path: Path | None, cwd: Path | None = None) -> DotenvDiffConfig:
    """Load the configuration file, exiting on errors."""
    try:
        return load_config(config_path, cwd=cwd)
    except DotenvDiffError as e:
        fail(e)


def resolve_ignores(
    config: DotenvDiffConfig,
    ignore: list[str] | None,
    ignore_regex: list[str] | None,
) -> tuple[list[str], list[re.Pattern[str]]]:
    """Merge ignore settings from config and flags, validating them.

    Returns:
        Ignored key names and compiled ignore patterns
    """
    keys = [*config.ignore, *(ignore or [])]
    try:
        for key in keys:
            validate_env_var_name(key)
        patterns = compile_ignore_patterns([*config.ignore_regex, *(ignore_regex or [])])
    except DotenvDiffError as e:
        fail(e)
    return keys, patterns


def parse_format(value: str) -> OutputFormat:
    """Convert the ``--format`` flag, exiting on unknown values."""
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        fail(ValidationError(f"Unsupported format '{value}' (choose from {choices})", field="format"))


def read_env_file(path: Path) -> str | None:
    """Read an env file; a missing or unreadable file yields None."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None


def render_report(report: Any, format: OutputFormat, output: Path | None, verbose: bool, **options: Any) -> None:
    """Render a report to the console or a file.

    Args:
        report: Compare or scan report
        format: Output format
        output: Optional output file path
        verbose: Include detail tables
        **options: Extra RenderContext fields
    """
    context = RenderContext(format=format, output_path=output, verbose=verbose, **options)
    renderer = get_renderer(format)

    if output:
        renderer.render_to_file(report, context)
        err_console.print(f"Report written to {output}")
    elif format.machine_readable:
        print(renderer.render(report, context))
    else:
        renderer.render(report, context)


def apply_fixes(
    env_path: Path,
    example_path: Path | None,
    missing_keys: list[str],
    duplicate_keys: list[str],
) -> dict[str, list[str]]:
    """Rewrite env files in place.

    Duplicates are removed from the env file keeping the last assignment,
    missing keys are appended to the env file with empty values and, when an
    example file exists, appended there too unless already declared.

    Returns:
        Keys changed per action (``removed_duplicates``, ``added_env``,
        ``added_example``)
    """
    result: dict[str, list[str]] = {"removed_duplicates": [], "added_env": [], "added_example": []}
    text = read_env_file(env_path) or ""
    new_text = text

    if duplicate_keys:
        new_text = remove_duplicate_lines(new_text, duplicate_keys)
        result["removed_duplicates"] = list(duplicate_keys)
    if missing_keys:
        new_text = append_missing_keys(new_text, missing_keys)
        result["added_env"] = list(missing_keys)
    if new_text != text:
        env_path.write_text(new_text, encoding="utf-8")

    if example_path is not None and missing_keys and example_path.exists():
        example_text = read_env_file(example_path) or ""
        new_example, added = append_example_keys(example_text, missing_keys)
        if added:
            example_path.write_text(new_example, encoding="utf-8")
            result["added_example"] = added

    return result


def print_fix_summary(result: dict[str, list[str]], env_label: str, example_label: str | None) -> None:
    """Print what ``--fix`` changed."""
    if not any(result.values()):
        err_console.print("[green]Auto-fix applied: no changes needed.[/green]")
        return
    err_console.print("[green]Auto-fix applied:[/green]")
    if result["removed_duplicates"]:
        keys = ", ".join(result["removed_duplicates"])
        err_console.print(f"  - Removed duplicate keys from {env_label}: {keys}")
    if result["added_env"]:
        err_console.print(f"  - Added missing keys to {env_label}: {', '.join(result['added_env'])}")
    if result["added_example"]:
        err_console.print(f"  - Synced keys to {example_label}: {', '.join(result['added_example'])}")

"""CLI command for comparing an env file with its example."""

from pathlib import Path
from typing import Optional

import typer

from dotenv_diff.cli.utils import (
    apply_fixes,
    err_console,
    fail,
    logger,
    parse_format,
    print_fix_summary,
    read_env_file,
    render_report,
    resolve_config,
    resolve_ignores,
)
from dotenv_diff.utils.errors import EnvFileNotFoundError


def compare_cmd(
    env: Optional[Path] = typer.Option(None, "--env", "-e", help="Env file to check (default: .env)"),
    example: Optional[Path] = typer.Option(
        None,
        "--example",
        "-x",
        help="Example file to compare with (default: .env.example)",
    ),
    check_values: bool = typer.Option(
        False,
        "--check-values",
        help="Also compare values that are set in the example file",
    ),
    allow_duplicates: bool = typer.Option(
        False,
        "--allow-duplicates",
        help="Do not report keys assigned more than once",
    ),
    ignore: Optional[list[str]] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Key to ignore (repeatable)",
    ),
    ignore_regex: Optional[list[str]] = typer.Option(
        None,
        "--ignore-regex",
        help="Regular expression of keys to ignore (repeatable)",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Add missing keys and remove duplicate lines in the env file",
    ),
    format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help="Output format (terminal, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a configuration file",
    ),
    stats: bool = typer.Option(False, "--stats", help="Show comparison statistics"),
) -> None:
    """
    Compare an env file with its example.

    Reports missing, extra, empty and duplicated keys, value mismatches,
    secrets committed to the example file and expiring variables.

    Example:
        dotenv-diff compare --env .env --example .env.example --check-values
    """
    from dotenv_diff.core.compare import compare_env_texts
    from dotenv_diff.models.report import CompareOptions

    out_format = parse_format(format)
    cfg = resolve_config(config)
    keys, patterns = resolve_ignores(cfg, ignore, ignore_regex)

    env_path = env or Path(cfg.env)
    example_path = example or Path(cfg.example)

    for explicit in (env, example):
        if explicit is not None and not explicit.exists():
            fail(EnvFileNotFoundError(str(explicit)))
    if not env_path.exists() and not example_path.exists():
        fail(EnvFileNotFoundError(str(env_path)))

    env_text = read_env_file(env_path)
    example_text = read_env_file(example_path)
    if env_text is None:
        logger.warning("%s not found, comparing as empty", env_path)
    if example_text is None:
        logger.warning("%s not found, comparing as empty", example_path)

    options = CompareOptions(
        check_values=check_values or cfg.check_values,
        ignore=keys,
        ignore_regex=patterns,
    )
    allow_dups = allow_duplicates or cfg.allow_duplicates

    report = compare_env_texts(
        env_text,
        example_text,
        options,
        env_label=str(env_path),
        example_label=str(example_path),
        allow_duplicates=allow_dups,
        weights=cfg.health,
    )

    render_report(report, out_format, output, stats)

    if fix:
        result = apply_fixes(
            env_path,
            None,
            report.missing,
            [d.key for d in report.duplicates_env],
        )
        print_fix_summary(result, str(env_path), None)
        if report.duplicates_example:
            err_console.print(
                f"[yellow]Duplicates in {example_path} were not changed; fix them by hand.[/yellow]"
            )
            raise typer.Exit(1)
        return

    has_duplicates = bool(report.duplicates_env or report.duplicates_example)
    if report.missing or (has_duplicates and not allow_dups):
        raise typer.Exit(1)

"""CLI command for scanning a codebase for environment variable usage."""

from pathlib import Path
from typing import Optional

import typer

from dotenv_diff.cli.utils import (
    apply_fixes,
    err_console,
    fail,
    parse_format,
    print_fix_summary,
    render_report,
    resolve_config,
    resolve_ignores,
)
from dotenv_diff.utils.errors import EnvFileNotFoundError, ValidationError
from dotenv_diff.utils.logging import get_logger_with_context


def scan_cmd(
    path: Path = typer.Argument(Path("."), help="Project directory to scan"),
    env: Optional[str] = typer.Option(
        None,
        "--env",
        "-e",
        help="Env file to compare usages with, relative to the project",
    ),
    example: Optional[str] = typer.Option(
        None,
        "--example",
        "-x",
        help="Example file to compare usages with (takes precedence over --env)",
    ),
    include: Optional[list[str]] = typer.Option(
        None,
        "--include",
        help="Extra glob of files to scan (repeatable)",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        help="Extra path or glob to skip (repeatable)",
    ),
    ignore: Optional[list[str]] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Variable to ignore (repeatable)",
    ),
    ignore_regex: Optional[list[str]] = typer.Option(
        None,
        "--ignore-regex",
        help="Regular expression of variables to ignore (repeatable)",
    ),
    no_secrets: bool = typer.Option(
        False,
        "--no-secrets",
        help="Skip secret detection in source files",
    ),
    ignore_url: Optional[list[str]] = typer.Option(
        None,
        "--ignore-url",
        help="URL substring never reported as a secret (repeatable)",
    ),
    hide_unused: bool = typer.Option(
        False,
        "--hide-unused",
        help="Do not list declared but unused variables",
    ),
    allow_duplicates: bool = typer.Option(
        False,
        "--allow-duplicates",
        help="Do not report keys assigned more than once",
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
    show_usages: bool = typer.Option(
        False,
        "--show-usages",
        help="List every usage and scan statistics",
    ),
) -> None:
    """
    Scan a codebase for environment variable usage.

    Compares used variables with an env file and checks for leaked
    secrets, logged variables and framework-specific mistakes.

    Example:
        dotenv-diff scan ./my-app --example .env.example
    """
    from dotenv_diff.core.compare import build_scan_report
    from dotenv_diff.core.discovery import (
        DEFAULT_EXCLUDE_PATTERNS,
        LocalFilesystemView,
        ScanOptions,
        detect_project_framework,
        detect_t3env_schema,
        determine_comparison_file,
        read_text,
        scan_codebase,
    )
    from dotenv_diff.core.scan import normalize_path
    from dotenv_diff.models.findings import Severity
    from dotenv_diff.models.report import CompareOptions

    out_format = parse_format(format)
    if not path.is_dir():
        fail(ValidationError(f"Not a directory: {path}", field="path"))

    cfg = resolve_config(config, cwd=path)
    keys, patterns = resolve_ignores(cfg, ignore, ignore_regex)
    excludes = [*cfg.exclude, *(exclude or [])]

    view = LocalFilesystemView(path, exclude=[*DEFAULT_EXCLUDE_PATTERNS, *excludes])
    for explicit in (example, env):
        if explicit is not None and view.read_file(explicit) is None:
            fail(EnvFileNotFoundError(explicit))

    with err_console.status("Scanning codebase..."):
        framework = detect_project_framework(view)
        schema = detect_t3env_schema(view)
        scan = scan_codebase(
            view,
            ScanOptions(
                include=[*cfg.include, *(include or [])],
                exclude=excludes,
                secrets=cfg.secrets and not no_secrets,
                ignore_urls=[*cfg.ignore_urls, *(ignore_url or [])],
            ),
        )

    log = get_logger_with_context("cli.scan", path=str(path), framework=framework.value)
    log.debug("Scanned %d files, found %d usages", scan.files_scanned, len(scan.usages))

    comparison = determine_comparison_file(view, example=example, env=env)
    env_text = read_text(view, comparison) if comparison else None
    example = normalize_path(example) if example else None
    example_text = None
    if example and example != comparison:
        example_text = read_text(view, example)

    allow_dups = allow_duplicates or cfg.allow_duplicates
    report = build_scan_report(
        scan.usages,
        env_text=env_text,
        example_text=example_text,
        options=CompareOptions(ignore=keys, ignore_regex=patterns),
        comparison_file=comparison,
        framework=framework,
        file_content_map=scan.file_content_map,
        t3env_schema=schema,
        secrets=scan.secrets,
        files_scanned=scan.files_scanned,
        has_csp=scan.has_csp,
        allow_duplicates=allow_dups,
        duration=scan.duration,
        weights=cfg.health,
        comparison_is_example=True if example and example == comparison else None,
    )

    render_report(report, out_format, output, show_usages, show_unused=not hide_unused)

    missing = report.missing
    duplicates = bool(report.duplicates_env or report.duplicates_example)
    if fix and comparison:
        example_path = path / example if example and example != comparison else None
        result = apply_fixes(
            path / comparison,
            example_path,
            report.missing,
            [d.key for d in report.duplicates_env],
        )
        print_fix_summary(result, comparison, example)
        missing = []
        duplicates = bool(report.duplicates_example)

    high_secrets = any(
        s.severity == Severity.HIGH for s in [*report.secrets, *report.example_warnings]
    )
    if missing or high_secrets or (duplicates and not allow_dups):
        raise typer.Exit(1)

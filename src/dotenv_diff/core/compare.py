"""Aggregation of the detectors into compare and scan reports."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath

from dotenv_diff.core.diff import diff_env, find_empty_keys
from dotenv_diff.core.duplicates import excess_occurrences, find_duplicates
from dotenv_diff.core.expire import detect_env_expirations
from dotenv_diff.core.frameworks import framework_validator, t3env_validator
from dotenv_diff.core.health import compute_health_score
from dotenv_diff.core.naming import detect_inconsistent_naming, detect_uppercase_keys
from dotenv_diff.core.parse import filter_ignored_keys, parse_env
from dotenv_diff.core.scan import compare_with_env_files, filter_ignored_usages
from dotenv_diff.core.secrets import detect_secrets_in_example
from dotenv_diff.models.env import DiffResult, DuplicateEntry, EnvUsage
from dotenv_diff.models.findings import Framework, SecretFinding, T3EnvSchema
from dotenv_diff.models.report import (
    CompareOptions,
    CompareReport,
    CompareStats,
    HealthWeights,
    ScanReport,
    ScanStats,
)


def calculate_stats(
    current_keys: list[str],
    example_keys: list[str],
    dups_env: list[DuplicateEntry],
    dups_example: list[DuplicateEntry],
    diff: DiffResult,
    check_values: bool,
) -> CompareStats:
    """
    Count keys, shared keys, excess duplicate lines and value mismatches.

    The mismatch count is zero unless values were checked.
    """
    example_set = set(example_keys)
    return CompareStats(
        env_count=len(current_keys),
        example_count=len(example_keys),
        shared_count=len({k for k in current_keys if k in example_set}),
        duplicate_count=excess_occurrences(dups_env, dups_example),
        value_mismatch_count=len(diff.value_mismatches) if check_values else 0,
    )


def _restrict(env: dict[str, str], options: CompareOptions) -> dict[str, str]:
    keys = filter_ignored_keys(env, options.ignore, options.ignore_regex)
    return {k: env[k] for k in keys}


def _without_ignored(dups: list[DuplicateEntry], options: CompareOptions) -> list[DuplicateEntry]:
    kept = set(filter_ignored_keys([d.key for d in dups], options.ignore, options.ignore_regex))
    return [d for d in dups if d.key in kept]


def compare_env_texts(
    env_text: str | None,
    example_text: str | None,
    options: CompareOptions | None = None,
    env_label: str = ".env",
    example_label: str = ".env.example",
    allow_duplicates: bool = False,
    weights: HealthWeights | None = None,
    now: datetime | None = None,
) -> CompareReport:
    """
    Compare an env file with its example.

    Ignored keys are removed from both sides before any check runs, so they
    never show up as missing, extra, duplicated or insecure.

    Args:
        env_text: Raw env file text (None if the file is absent)
        example_text: Raw example file text (None if the file is absent)
        options: Value checking and ignore settings
        env_label: Name used for the env file in the report
        example_label: Name used for the example file in the report
        allow_duplicates: Skip duplicate detection
        weights: Health score weights
        now: Reference instant for expiration warnings

    Returns:
        The assembled report
    """
    options = options or CompareOptions()
    current = _restrict(parse_env(env_text), options)
    example = _restrict(parse_env(example_text), options)

    diff = diff_env(current, example, options.check_values)

    dups_env: list[DuplicateEntry] = []
    dups_example: list[DuplicateEntry] = []
    if not allow_duplicates:
        dups_env = _without_ignored(find_duplicates(env_text), options)
        dups_example = _without_ignored(find_duplicates(example_text), options)

    ignored_keys = set(parse_env(env_text)) - set(current)
    expirations = [w for w in detect_env_expirations(env_text, now) if w.key not in ignored_keys]

    report = CompareReport(
        env=env_label,
        example=example_label,
        diff=diff,
        empty=find_empty_keys(current),
        duplicates_env=dups_env,
        duplicates_example=dups_example,
        example_warnings=detect_secrets_in_example(example),
        expire_warnings=expirations,
        inconsistent_naming_warnings=detect_inconsistent_naming(
            list(dict.fromkeys([*current, *example]))
        ),
        stats=calculate_stats(
            list(current), list(example), dups_env, dups_example, diff, options.check_values
        ),
    )
    return report.model_copy(update={"health_score": compute_health_score(report, weights)})


def is_example_file(name: str | None) -> bool:
    """Whether a file name looks like an example env file, e.g. ``.env.example``."""
    return bool(name) and "example" in PurePosixPath(name).name.lower()


def _compares_example(comparison_file: str | None, flag: bool | None) -> bool:
    return is_example_file(comparison_file) if flag is None else flag


def build_scan_report(
    usages: list[EnvUsage],
    env_text: str | None = None,
    example_text: str | None = None,
    options: CompareOptions | None = None,
    comparison_file: str | None = None,
    framework: Framework = Framework.UNKNOWN,
    file_content_map: dict[str, str] | None = None,
    t3env_schema: T3EnvSchema | None = None,
    secrets: list[SecretFinding] | None = None,
    files_scanned: int = 0,
    has_csp: bool = False,
    allow_duplicates: bool = False,
    duration: float = 0.0,
    weights: HealthWeights | None = None,
    now: datetime | None = None,
    comparison_is_example: bool | None = None,
) -> ScanReport:
    """
    Assemble the report for a codebase scan.

    Usages on commented-out lines and ignored variables are dropped first.
    When ``env_text`` is None no declared file exists, so nothing is reported
    as missing or unused and the env-file checks are skipped.

    Args:
        usages: Raw usages from the scanner
        env_text: Text of the file the usages are compared with
        example_text: Text of the example file, when it differs from
            ``env_text``
        options: Ignore settings
        comparison_file: Name of the compared file, for display
        framework: Detected framework
        file_content_map: Source text by relative path, for client detection
        t3env_schema: Parsed t3-env schema, if the project has one
        secrets: Source secret findings
        files_scanned: Number of files read
        has_csp: Whether a CSP is configured
        allow_duplicates: Skip duplicate detection
        duration: Scan time in seconds
        weights: Health score weights
        now: Reference instant for expiration warnings
        comparison_is_example: Whether the compared file is itself the
            example file; inferred from its name when None

    Returns:
        The assembled report
    """
    options = options or CompareOptions()
    used = [u for u in usages if u.context and not u.context.lstrip().startswith(("//", "#"))]
    used = filter_ignored_usages(used, options.ignore, options.ignore_regex)

    missing: list[str] = []
    unused: list[str] = []
    uppercase = []
    dups_env: list[DuplicateEntry] = []
    dups_example: list[DuplicateEntry] = []
    expirations = []
    inconsistent = []
    example_warnings = []

    if env_text is not None:
        declared = _restrict(parse_env(env_text), options)
        example = _restrict(parse_env(example_text), options)
        missing, unused = compare_with_env_files(used, declared)
        uppercase = detect_uppercase_keys(declared)
        if not allow_duplicates:
            dups_env = _without_ignored(find_duplicates(env_text), options)
            dups_example = _without_ignored(find_duplicates(example_text), options)
        expirations = [w for w in detect_env_expirations(env_text, now) if w.key in declared]
        inconsistent = detect_inconsistent_naming(list(dict.fromkeys([*declared, *example])))
        if example_text is None and _compares_example(comparison_file, comparison_is_example):
            example_warnings = detect_secrets_in_example(declared)
        else:
            example_warnings = detect_secrets_in_example(example)

    framework_warnings = framework_validator(used, framework, file_content_map)
    t3env_warnings = t3env_validator(used, t3env_schema)
    logged = [u for u in used if u.is_logged]
    secrets = list(secrets or [])

    warnings_count = sum(
        len(group)
        for group in (
            secrets,
            logged,
            uppercase,
            framework_warnings,
            t3env_warnings,
            example_warnings,
            expirations,
            inconsistent,
        )
    )

    report = ScanReport(
        comparison_file=comparison_file,
        framework=framework,
        used=used,
        missing=missing,
        unused=unused,
        secrets=secrets,
        logged=logged,
        uppercase_warnings=uppercase,
        framework_warnings=framework_warnings,
        t3env_warnings=t3env_warnings,
        example_warnings=example_warnings,
        expire_warnings=expirations,
        inconsistent_naming_warnings=inconsistent,
        duplicates_env=dups_env,
        duplicates_example=dups_example,
        has_csp=has_csp,
        stats=ScanStats(
            files_scanned=files_scanned,
            total_usages=len(used),
            unique_variables=len({u.variable for u in used}),
            warnings_count=warnings_count,
            duration=duration,
        ),
    )
    return report.model_copy(update={"health_score": compute_health_score(report, weights)})

"""dotenv-diff: cross-check environment variables across a codebase.

The package compares ``.env`` files with their examples and scans source
code for environment variable usage, reporting:

- **Diff**: missing, extra, empty and mismatched keys
- **Duplicates**: keys assigned more than once
- **Naming**: non UPPER_SNAKE_CASE keys and keys differing only by underscores
- **Secrets**: provider keys and high-entropy literals in code and example files
- **Expiration**: ``# @expire YYYY-MM-DD`` annotations
- **Frameworks**: SvelteKit, Next.js, Angular and t3-env usage rules

Usage:
    # Library API
    from dotenv_diff import compare_env_texts, scan_codebase, build_scan_report

    report = compare_env_texts(open(".env").read(), open(".env.example").read())
    print(report.missing, report.health_score)

CLI:
    dotenv-diff compare --env .env --example .env.example
    dotenv-diff scan ./src --format json
"""

__version__ = "0.1.0"

# Engine
from dotenv_diff.core import (
    build_scan_report,
    compare_env_texts,
    compute_health_score,
    detect_env_expirations,
    detect_inconsistent_naming,
    detect_secrets_in_example,
    detect_secrets_in_source,
    detect_uppercase_keys,
    diff_env,
    find_duplicates,
    parse_env,
    scan_codebase,
    scan_file,
    shannon_entropy_normalized,
)
from dotenv_diff.core.discovery import LocalFilesystemView, MemoryFilesystemView

# Models (commonly used)
from dotenv_diff.models import (
    CompareOptions,
    CompareReport,
    DiffResult,
    EnvUsage,
    HealthWeights,
    ScanReport,
    Severity,
)

# Renderers
from dotenv_diff.renderers.base import BaseRenderer, OutputFormat, RenderContext

__all__ = [
    # Version
    "__version__",
    # Engine
    "parse_env",
    "scan_file",
    "diff_env",
    "find_duplicates",
    "detect_uppercase_keys",
    "detect_inconsistent_naming",
    "shannon_entropy_normalized",
    "detect_secrets_in_example",
    "detect_secrets_in_source",
    "detect_env_expirations",
    "compute_health_score",
    "compare_env_texts",
    "build_scan_report",
    "scan_codebase",
    "LocalFilesystemView",
    "MemoryFilesystemView",
    # Models
    "CompareOptions",
    "CompareReport",
    "DiffResult",
    "EnvUsage",
    "HealthWeights",
    "ScanReport",
    "Severity",
    # Renderers
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
]

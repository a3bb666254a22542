"""Core detection engine for dotenv-diff.

Everything except ``discovery`` is a pure function over in-memory text and
parsed data; ``discovery`` feeds the engine from a filesystem view.
"""

from dotenv_diff.core.parse import filter_ignored_keys, iter_assignments, parse_env
from dotenv_diff.core.diff import diff_env, find_empty_keys
from dotenv_diff.core.duplicates import excess_occurrences, find_duplicates
from dotenv_diff.core.naming import (
    detect_inconsistent_naming,
    detect_uppercase_keys,
    to_upper_snake_case,
)
from dotenv_diff.core.secrets import (
    detect_secrets_in_example,
    detect_secrets_in_source,
    has_ignore_comment,
    shannon_entropy_normalized,
)
from dotenv_diff.core.expire import detect_env_expirations
from dotenv_diff.core.scan import compare_with_env_files, filter_ignored_usages, scan_file
from dotenv_diff.core.csp import has_csp_in_source
from dotenv_diff.core.fix import append_example_keys, append_missing_keys, remove_duplicate_lines
from dotenv_diff.core.frameworks import (
    apply_framework_rules,
    apply_t3env_rules,
    detect_framework,
    framework_validator,
    parse_t3env_schema,
    t3env_validator,
)
from dotenv_diff.core.health import compute_health_score
from dotenv_diff.core.compare import build_scan_report, calculate_stats, compare_env_texts
from dotenv_diff.core.discovery import (
    FilesystemView,
    LocalFilesystemView,
    MemoryFilesystemView,
    ScanOptions,
    scan_codebase,
)

__all__ = [
    # Parsing
    "parse_env",
    "iter_assignments",
    "filter_ignored_keys",
    # Diff and duplicates
    "diff_env",
    "find_empty_keys",
    "find_duplicates",
    "excess_occurrences",
    # Naming
    "to_upper_snake_case",
    "detect_uppercase_keys",
    "detect_inconsistent_naming",
    # Secrets
    "shannon_entropy_normalized",
    "detect_secrets_in_example",
    "detect_secrets_in_source",
    "has_ignore_comment",
    # Expiration
    "detect_env_expirations",
    # Usage scanning
    "scan_file",
    "filter_ignored_usages",
    "compare_with_env_files",
    "has_csp_in_source",
    # Fixes
    "remove_duplicate_lines",
    "append_missing_keys",
    "append_example_keys",
    # Frameworks
    "detect_framework",
    "apply_framework_rules",
    "framework_validator",
    "parse_t3env_schema",
    "apply_t3env_rules",
    "t3env_validator",
    # Aggregation
    "compute_health_score",
    "calculate_stats",
    "compare_env_texts",
    "build_scan_report",
    # Discovery
    "FilesystemView",
    "LocalFilesystemView",
    "MemoryFilesystemView",
    "ScanOptions",
    "scan_codebase",
]

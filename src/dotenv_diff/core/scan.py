"""Detection of environment variable references in source code."""

from __future__ import annotations

import os
import re
from typing import Callable, Iterable

from dotenv_diff.core.secrets import has_ignore_comment
from dotenv_diff.models.env import EnvPattern, EnvUsage

ENV_NAME = re.compile(r"^[A-Z_][A-Z0-9_]*$")
LOGGING_CALL = re.compile(r"\bconsole\.(log|error|warn|info|debug)\s*\(")
SVELTEKIT_IMPORT = re.compile(
    r"import\s+(?:\{[^}]*\}|\w+)\s+from\s+['\"](\$env/(?:static|dynamic)/(?:private|public))['\"]"
)


def _first_group(match: re.Match[str]) -> list[str]:
    name = next((g for g in match.groups() if g), None)
    return [name] if name else []


def _destructured_names(match: re.Match[str]) -> list[str]:
    # { A, B: alias, C = "fallback" } -> the left-most identifier of each part
    names = []
    for part in match.group(1).split(","):
        name = re.split(r"[:=]", part.strip(), maxsplit=1)[0].strip()
        if ENV_NAME.match(name):
            names.append(name)
    return names


class UsagePattern:
    """A named regular expression for one way of reading an env variable."""

    def __init__(
        self,
        name: EnvPattern,
        regex: str,
        extract: Callable[[re.Match[str]], list[str]] = _first_group,
    ):
        self.name = name
        self.regex = re.compile(regex)
        self.extract = extract


ENV_PATTERNS: list[UsagePattern] = [
    # process.env.KEY, process.env["KEY"]
    UsagePattern(
        EnvPattern.PROCESS_ENV,
        r"process\.env\.([A-Z_][A-Z0-9_]*)|process\.env\[['\"]([A-Z_][A-Z0-9_]*)['\"]\]",
    ),
    # const { KEY, OTHER: alias, THIRD = "x" } = process.env
    UsagePattern(EnvPattern.PROCESS_ENV, r"\{([^}]*)\}\s*=\s*process\.env\b", _destructured_names),
    # import.meta.env.KEY, import.meta.env["KEY"]
    UsagePattern(
        EnvPattern.IMPORT_META_ENV,
        r"import\.meta\.env\.([A-Z_][A-Z0-9_]*)|import\.meta\.env\[['\"]([A-Z_][A-Z0-9_]*)['\"]\]",
    ),
    # import { KEY } from '$env/static/private'
    UsagePattern(
        EnvPattern.SVELTEKIT,
        r"import\s*\{\s*([A-Z_][A-Z0-9_]*)\s*\}\s*from\s*['\"]\$env/static/(?:private|public)['\"]",
    ),
    # env.KEY from $env/dynamic/*
    UsagePattern(EnvPattern.SVELTEKIT, r"(?<![.\w])env\.([A-Z_][A-Z0-9_]*)"),
    # import { KEY } from '$env/dynamic/private' (invalid, still a usage)
    UsagePattern(
        EnvPattern.SVELTEKIT,
        r"import\s*\{\s*([A-Z_][A-Z0-9_]*)\s*\}\s*from\s*['\"]\$env/dynamic/(?:private|public)['\"]",
    ),
    # import KEY from '$env/...' (invalid, still a usage)
    UsagePattern(
        EnvPattern.SVELTEKIT,
        r"import\s+([A-Z_][A-Z0-9_]*)\s+from\s+['\"]\$env/(?:static|dynamic)/(?:private|public)['\"]",
    ),
]


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def scan_file(file_path: str, content: str, cwd: str | None = None) -> list[EnvUsage]:
    """
    Find every environment variable reference in a file.

    Usages on a line carrying an ignore marker, or directly below one, are
    dropped. Results are ordered by pattern, then by position.

    Args:
        file_path: Path of the file
        content: File text
        cwd: Scan root; when given, reported paths are relative to it

    Returns:
        Usages with 1-based line and column
    """
    rel = os.path.relpath(file_path, cwd) if cwd else file_path
    rel = normalize_path(rel)
    lines = content.split("\n")
    imports = SVELTEKIT_IMPORT.findall(content)
    usages: list[EnvUsage] = []

    for pattern in ENV_PATTERNS:
        for match in pattern.regex.finditer(content):
            names = pattern.extract(match)
            if not names:
                continue

            offset = match.start()
            line_no = content.count("\n", 0, offset) + 1
            column = offset - content.rfind("\n", 0, offset)
            line = lines[line_no - 1]
            prev = lines[line_no - 2] if line_no > 1 else ""

            if has_ignore_comment(line) or has_ignore_comment(prev):
                continue

            logged = bool(LOGGING_CALL.search(line))
            for name in names:
                usages.append(
                    EnvUsage(
                        variable=name,
                        file=rel,
                        line=line_no,
                        column=column,
                        pattern=pattern.name,
                        context=line.strip(),
                        is_logged=logged,
                        imports=list(imports),
                    )
                )

    return usages


def filter_ignored_usages(
    usages: Iterable[EnvUsage],
    ignore: Iterable[str] = (),
    ignore_regex: Iterable[re.Pattern[str]] = (),
) -> list[EnvUsage]:
    ignored = set(ignore)
    patterns = list(ignore_regex)
    return [
        u
        for u in usages
        if u.variable not in ignored and not any(rx.search(u.variable) for rx in patterns)
    ]


def compare_with_env_files(
    used: Iterable[EnvUsage],
    env_keys: Iterable[str],
) -> tuple[list[str], list[str]]:
    """
    Compare codebase usage with declared keys.

    Args:
        used: Usages found in the codebase
        env_keys: Keys declared in the env or example file

    Returns:
        ``(missing, unused)``: names used but never declared, in first-use
        order, and names declared but never used, in declaration order
    """
    used_names = list(dict.fromkeys(u.variable for u in used))
    declared = list(dict.fromkeys(env_keys))
    used_set = set(used_names)
    declared_set = set(declared)
    missing = [v for v in used_names if v not in declared_set]
    unused = [k for k in declared if k not in used_set]
    return missing, unused

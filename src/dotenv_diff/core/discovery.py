"""File discovery and codebase scanning on top of a filesystem view."""

from __future__ import annotations

import fnmatch
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from dotenv_diff.core.csp import has_csp_in_source
from dotenv_diff.core.frameworks import T3ENV_CONFIG_PATHS, detect_framework, parse_t3env_schema
from dotenv_diff.core.scan import normalize_path, scan_file
from dotenv_diff.core.secrets import detect_secrets_in_source
from dotenv_diff.models.env import EnvUsage
from dotenv_diff.models.findings import Framework, SecretFinding, Severity, T3EnvSchema
from dotenv_diff.utils.logging import get_logger

logger = get_logger("discovery")

DEFAULT_INCLUDE_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx", ".vue", ".svelte", ".mjs", ".cjs")

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules",
    ".sveltekit",
    ".svelte-kit",
    "_actions",
    "dist",
    "build",
    ".next",
    ".nuxt",
    "coverage",
    ".git",
    ".vscode",
    ".idea",
    ".test.",
    ".spec.",
    "__tests__",
    "__mocks__",
]

# Files probed, in order, when no comparison file is given
DEFAULT_ENV_CANDIDATES = [".env", ".env.example", ".env.local", ".env.production"]


class SourceFile:
    """A file read through a filesystem view."""

    def __init__(self, path: str, content: bytes):
        self.path = path
        self.content = content


class FilesystemView(ABC):
    """Abstract read-only view of a project tree.

    Paths are relative to the project root and use forward slashes.
    """

    @abstractmethod
    def search_filenames(self, predicate: Callable[[str], bool]) -> list[str]:
        """Search for files matching a predicate."""
        ...

    @abstractmethod
    def read_file(self, path: str) -> SourceFile | None:
        """Read a file, or return None if it does not exist or cannot be read."""
        ...


class MemoryFilesystemView(FilesystemView):
    """In-memory filesystem view for testing."""

    def __init__(self, files: dict[str, bytes | str]):
        self._files = {
            normalize_path(p): c.encode("utf-8") if isinstance(c, str) else c
            for p, c in files.items()
        }

    def search_filenames(self, predicate: Callable[[str], bool]) -> list[str]:
        return [p for p in self._files.keys() if predicate(p)]

    def read_file(self, path: str) -> SourceFile | None:
        path = normalize_path(path)
        if path in self._files:
            return SourceFile(path, self._files[path])
        return None


class LocalFilesystemView(FilesystemView):
    """Filesystem view over a directory on disk.

    Excluded directories are pruned during the walk so large trees such as
    ``node_modules`` are never descended into.
    """

    def __init__(self, root: Path | str, exclude: list[str] | None = None):
        self.root = Path(root)
        self._exclude = exclude if exclude is not None else DEFAULT_EXCLUDE_PATTERNS

    def search_filenames(self, predicate: Callable[[str], bool]) -> list[str]:
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            rel_dir = normalize_path(os.path.relpath(dirpath, self.root))
            if rel_dir == ".":
                rel_dir = ""
            dirnames[:] = sorted(
                d for d in dirnames if not is_excluded(_join(rel_dir, d), self._exclude)
            )
            for name in sorted(filenames):
                rel = _join(rel_dir, name)
                if predicate(rel):
                    found.append(rel)
        return found

    def read_file(self, path: str) -> SourceFile | None:
        full = self.root / path
        try:
            return SourceFile(normalize_path(path), full.read_bytes())
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", path, e)
            return None


def _join(directory: str, name: str) -> str:
    return f"{directory}/{name}" if directory else name


def matches_glob(path: str, pattern: str) -> bool:
    """
    Match a relative path against a glob.

    Patterns without a slash match the file name only. A leading ``**/``
    also matches files at the root.
    """
    pattern = normalize_path(pattern)
    if "/" not in pattern:
        return fnmatch.fnmatch(path.rsplit("/", 1)[-1], pattern)
    if pattern.startswith("**/") and fnmatch.fnmatch(path, pattern[3:]):
        return True
    return fnmatch.fnmatch(path, pattern)


def is_excluded(path: str, patterns: list[str]) -> bool:
    """Whether a path matches an exclude entry by name, substring or glob."""
    name = path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if name == pattern or pattern in path:
            return True
        if "*" in pattern and matches_glob(path, pattern):
            return True
    return False


def is_included(path: str, include: list[str] | None = None) -> bool:
    """Whether a path has a default source extension or matches an include glob."""
    if path.endswith(DEFAULT_INCLUDE_EXTENSIONS):
        return True
    return any(matches_glob(path, pattern) for pattern in include or [])


def find_source_files(
    fs: FilesystemView,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[str]:
    """
    List source files to scan.

    Args:
        fs: Filesystem view to search
        include: Extra globs added to the default extensions
        exclude: Extra exclude entries added to the defaults

    Returns:
        Sorted relative paths
    """
    excludes = [*DEFAULT_EXCLUDE_PATTERNS, *(exclude or [])]
    return sorted(
        fs.search_filenames(lambda p: is_included(p, include) and not is_excluded(p, excludes))
    )


def read_text(fs: FilesystemView, path: str) -> str | None:
    """Read a file as UTF-8; unreadable or binary files yield None."""
    sf = fs.read_file(path)
    if sf is None:
        return None
    try:
        return sf.content.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping non-UTF-8 file %s", path)
        return None


def detect_project_framework(fs: FilesystemView) -> Framework:
    """Detect the framework from ``package.json`` at the project root."""
    text = read_text(fs, "package.json")
    if text is None:
        return Framework.UNKNOWN
    framework, version = detect_framework(text)
    logger.debug("Detected framework %s (version %s)", framework.value, version)
    return framework


def detect_t3env_schema(fs: FilesystemView) -> T3EnvSchema | None:
    """Find and parse a t3-env ``createEnv`` definition, if the project has one."""
    for path in T3ENV_CONFIG_PATHS:
        text = read_text(fs, path)
        if text is None:
            continue
        schema = parse_t3env_schema(text)
        if schema is not None:
            logger.debug("Using t3-env schema from %s", path)
            return schema
    return None


class ScanOptions(BaseModel):
    """Options for scanning a codebase."""

    model_config = {"frozen": True}

    include: list[str] = Field(default_factory=list, description="Extra source globs")
    exclude: list[str] = Field(default_factory=list, description="Extra paths to skip")
    secrets: bool = Field(default=True, description="Run the source secret detector")
    ignore_urls: list[str] = Field(
        default_factory=list, description="URL substrings never reported as secrets"
    )


class CodebaseScan(BaseModel):
    """Raw material gathered from a codebase before aggregation."""

    model_config = {"frozen": True}

    usages: list[EnvUsage] = Field(default_factory=list, description="All usages found")
    secrets: list[SecretFinding] = Field(default_factory=list, description="Medium/high secrets")
    file_content_map: dict[str, str] = Field(
        default_factory=dict, description="Source text by relative path"
    )
    files_scanned: int = Field(default=0, description="Files read successfully")
    has_csp: bool = Field(default=False, description="Whether any file configures a CSP")
    duration: float = Field(default=0.0, description="Elapsed seconds")


def scan_codebase(fs: FilesystemView, options: ScanOptions | None = None) -> CodebaseScan:
    """
    Scan every source file of a project.

    Files that cannot be read or decoded are skipped. Low-severity secret
    findings are dropped here.

    Args:
        fs: Filesystem view over the project root
        options: Include, exclude and secret settings

    Returns:
        Usages, secrets and file contents of all scanned files
    """
    options = options or ScanOptions()
    start = time.perf_counter()
    files = find_source_files(fs, options.include, options.exclude)
    logger.debug("Found %d source files", len(files))

    usages: list[EnvUsage] = []
    secrets: list[SecretFinding] = []
    contents: dict[str, str] = {}
    has_csp = False

    for path in files:
        text = read_text(fs, path)
        if not text:
            continue
        contents[path] = text
        usages.extend(scan_file(path, text))
        if options.secrets:
            secrets.extend(
                s
                for s in detect_secrets_in_source(path, text, options.ignore_urls)
                if s.severity != Severity.LOW
            )
        has_csp = has_csp or has_csp_in_source(text)

    return CodebaseScan(
        usages=usages,
        secrets=secrets,
        file_content_map=contents,
        files_scanned=len(contents),
        has_csp=has_csp,
        duration=time.perf_counter() - start,
    )


def determine_comparison_file(
    fs: FilesystemView,
    example: str | None = None,
    env: str | None = None,
) -> str | None:
    """
    Pick the declared file that codebase usages are compared with.

    An explicit example file wins over an explicit env file; otherwise the
    first existing default candidate is used.
    """
    for candidate in [example, env, *DEFAULT_ENV_CANDIDATES]:
        if candidate and fs.read_file(candidate) is not None:
            return normalize_path(candidate)
    return None

"""Heuristic detection of leaked credentials.

Two consumers share the provider pattern table and the entropy estimator:
the source scanner (line by line over code) and the example-file checker
(over parsed key/value pairs).
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Iterable

from dotenv_diff.models.findings import (
    SEVERITY_ORDER,
    ExampleSecretWarning,
    SecretFinding,
    Severity,
)

# Assumed alphabet of typical secrets (A-Za-z0-9+/_- and friends)
_MAX_ENTROPY = math.log2(72)

PROVIDER_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("aws-access-key-id", re.compile(r"\bAKIA[0-9A-Z]{16}\b")),
    ("aws-temporary-key", re.compile(r"\bASIA[0-9A-Z]{16}\b")),
    ("github-token", re.compile(r"\bghp_[0-9A-Za-z]{30,}\b")),
    ("stripe-live-secret", re.compile(r"\bsk_live_[0-9a-zA-Z]{24,}\b")),
    ("stripe-test-secret", re.compile(r"\bsk_test_[0-9a-zA-Z]{24,}\b")),
    ("google-api-key", re.compile(r"\bAIza[0-9A-Za-z\-_]{20,}\b")),
    ("google-oauth-token", re.compile(r"\bya29\.[0-9A-Za-z\-_]+\b")),
    ("firebase-token", re.compile(r"\b[A-Za-z0-9_-]{21}:[A-Za-z0-9_-]{140}\b")),
    ("ethereum-address", re.compile(r"\b0x[a-fA-F0-9]{40}\b")),
    ("jwt", re.compile(r"\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\b")),
    ("twilio-account-sid", re.compile(r"\bAC[0-9a-fA-F]{32}\b")),
]

SUSPICIOUS_KEYS = re.compile(
    r"\b(pass(word)?|secret|token|apikey|api_key|key|auth|bearer|private"
    r"|client_secret|access[_-]?token)\b",
    re.IGNORECASE,
)

IGNORE_MARKER = re.compile(r"dotenv[\s_-]+diff[\s_-]+ignore(?![-_](?:start|end)\b)", re.IGNORECASE)
IGNORE_BLOCK_START = re.compile(r"dotenv[\s_-]+diff[\s_-]+ignore[-_]start\b", re.IGNORECASE)
IGNORE_BLOCK_END = re.compile(r"dotenv[\s_-]+diff[\s_-]+ignore[-_]end\b", re.IGNORECASE)

LONG_LITERAL = re.compile(r"[\"'`]([A-Za-z0-9+/_\-]{24,})[\"'`]")
URL_LITERAL = re.compile(r"[\"'`](https?://(?!localhost)[^\"'`]*)[\"'`]")
ASSIGNED_LITERAL = re.compile(r"=\s*[\"'`](.+?)[\"'`]")
ENV_ACCESSOR = re.compile(
    r"\bprocess\.env\b|\bimport\.meta\.env\b|\$env/(?:static|dynamic)/(?:public|private)\b"
)
_LINE_COMMENT = re.compile(r"^\s*//")

HARMLESS_URLS = [
    re.compile(r"https?://(www\.)?placeholder\.com", re.IGNORECASE),
    re.compile(r"https?://(www\.)?example\.com", re.IGNORECASE),
    re.compile(r"https?://127\.0\.0\.1(:\d+)?", re.IGNORECASE),
    re.compile(r"http://www\.w3\.org/2000/svg", re.IGNORECASE),
]

_HARMLESS_LITERALS = [
    re.compile(r"\S+@\S+"),
    re.compile(r"^data:[a-z]+/[a-z0-9.+-]+;base64,", re.IGNORECASE),
    re.compile(r"^\.{0,2}/"),
    re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE),
    re.compile(r"^[0-9a-f]{32,128}$", re.IGNORECASE),
    re.compile(r"^[A-Za-z0-9+/_\-]{16,20}={0,2}$"),
    re.compile(r"^[A-Za-z0-9+/_\-]*(_PUBLIC|_PRIVATE|VITE_|NEXT_PUBLIC|VUE_)[A-Za-z0-9+/_\-]*={0,2}$"),
    re.compile(r"^[MmZzLlHhVvCcSsQqTtAa][0-9eE+.\- ,MmZzLlHhVvCcSsQqTtAa]*$"),
    re.compile(r"<svg[\s\S]*?>[\s\S]*?</svg>", re.IGNORECASE),
]

_URL_CONSTRUCTION = [
    re.compile(r"=\s*`[^`]*\$\{[^}]+\}[^`]*/[^`]*`"),
    re.compile(r"=\s*[\"'][^\"']*/[^\"']*[\"']\s*\+"),
    re.compile(r"=\s*[\"'`][^\"'`]*/[^\"'`]*(auth|api|login|redirect|callback|protocol)[^\"'`]*/[^\"'`]*[\"'`]"),
    re.compile(r"realms/.*/protocol/openid-connect"),
]

_TEST_PATH_DIRS = re.compile(r"\b(__tests__|__mocks__|fixtures|sandbox|samples)\b", re.IGNORECASE)
_TEST_PATH_SUFFIX = re.compile(r"\.(spec|test)\.[jt]sx?$")

DEFAULT_SECRET_THRESHOLD = 0.85
TEST_SECRET_THRESHOLD = 0.95
EXAMPLE_ENTROPY_THRESHOLD = 0.80
EXAMPLE_HIGH_ENTROPY = 0.92
MIN_SUSPICIOUS_LITERAL = 12
MIN_ENTROPY_LITERAL = 32
HIGH_ENTROPY_LITERAL = 48
SNIPPET_LENGTH = 180


def shannon_entropy_normalized(s: str | None) -> float:
    """
    Shannon entropy of a string, normalized to the 0..1 range.

    Args:
        s: Input string; empty or None yields 0

    Returns:
        Character-frequency entropy divided by log2(72), capped at 1.0
    """
    if not s:
        return 0.0
    length = len(s)
    h = 0.0
    for count in Counter(s).values():
        p = count / length
        h -= p * math.log2(p)
    return min(1.0, h / _MAX_ENTROPY)


def has_ignore_comment(line: str) -> bool:
    """Whether a line carries a ``dotenv-diff-ignore`` marker in any comment style."""
    return bool(IGNORE_MARKER.search(line))


def matches_provider_pattern(value: str) -> str | None:
    """Name of the first provider pattern the value matches, if any."""
    for name, rx in PROVIDER_PATTERNS:
        if rx.search(value):
            return name
    return None


def looks_harmless_literal(s: str) -> bool:
    """Emails, data URIs, paths, hashes, UUIDs, env names, SVG and allow-listed URLs."""
    return any(rx.search(s) for rx in _HARMLESS_LITERALS) or any(
        rx.search(s) for rx in HARMLESS_URLS
    )


def looks_like_url_construction(line: str) -> bool:
    return any(rx.search(line) for rx in _URL_CONSTRUCTION)


def is_probably_test_path(path: str) -> bool:
    return bool(_TEST_PATH_DIRS.search(path) or _TEST_PATH_SUFFIX.search(path))


def _line_findings(
    file: str,
    line_no: int,
    line: str,
    threshold: float,
    ignore_urls: list[str],
) -> list[SecretFinding]:
    snippet = line.strip()[:SNIPPET_LENGTH]
    found: list[SecretFinding] = []

    def add(kind: str, message: str, severity: Severity) -> None:
        found.append(
            SecretFinding(
                kind=kind,
                file=file,
                line=line_no,
                message=message,
                snippet=snippet,
                severity=severity,
            )
        )

    for m in URL_LITERAL.finditer(line):
        url = m.group(1)
        if not url or looks_harmless_literal(url):
            continue
        if any(ignored in url for ignored in ignore_urls):
            continue
        if url.startswith("https"):
            add("pattern", "HTTPS URL detected - consider moving to an environment variable", Severity.LOW)
        else:
            add("pattern", "HTTP URL detected - consider moving to an environment variable", Severity.MEDIUM)

    if SUSPICIOUS_KEYS.search(line):
        m = ASSIGNED_LITERAL.search(line)
        if (
            m
            and len(m.group(1)) >= MIN_SUSPICIOUS_LITERAL
            and not looks_harmless_literal(m.group(1))
            and not looks_like_url_construction(line)
            and not ENV_ACCESSOR.search(line)
        ):
            add("pattern", "matches password/secret/token-like literal assignment", Severity.MEDIUM)

    if matches_provider_pattern(line):
        add("pattern", "matches known provider key pattern", Severity.HIGH)

    for m in LONG_LITERAL.finditer(line):
        literal = m.group(1)
        if len(literal) < MIN_ENTROPY_LITERAL or looks_harmless_literal(literal):
            continue
        ent = shannon_entropy_normalized(literal)
        if ent >= threshold:
            severity = Severity.HIGH if len(literal) >= HIGH_ENTROPY_LITERAL else Severity.MEDIUM
            add("entropy", f"found high-entropy string (len {len(literal)}, H~{ent:.2f})", severity)

    return found


def detect_secrets_in_source(
    file: str,
    content: str,
    ignore_urls: Iterable[str] | None = None,
) -> list[SecretFinding]:
    """
    Scan source text for likely leaked credentials.

    Lines starting with ``//``, lines marked with an ignore comment and lines
    between ignore-start/ignore-end markers are skipped. Test paths use a
    stricter entropy threshold. At most one finding is kept per line, the
    most severe one.

    Args:
        file: Path the content came from (used for reporting and thresholds)
        content: Source text
        ignore_urls: URL substrings that should never be reported

    Returns:
        Findings in line order; low-severity findings are included
    """
    threshold = TEST_SECRET_THRESHOLD if is_probably_test_path(file) else DEFAULT_SECRET_THRESHOLD
    allowed_urls = list(ignore_urls or [])
    findings: list[SecretFinding] = []
    in_ignore_block = False

    for idx, line in enumerate(content.splitlines(), start=1):
        if IGNORE_BLOCK_START.search(line):
            in_ignore_block = True
            continue
        if IGNORE_BLOCK_END.search(line):
            in_ignore_block = False
            continue
        if in_ignore_block or has_ignore_comment(line) or _LINE_COMMENT.match(line):
            continue

        candidates = _line_findings(file, idx, line, threshold, allowed_urls)
        if candidates:
            # max() keeps the earliest of equally severe findings
            findings.append(max(candidates, key=lambda f: SEVERITY_ORDER[f.severity]))

    return findings


def _is_placeholder(value: str) -> bool:
    lowered = value.lower()
    return (
        lowered in ("example", "placeholder")
        or "your_" in value
        or "<" in value
        or "CHANGE_ME" in value
    )


def detect_secrets_in_example(env: dict[str, str]) -> list[ExampleSecretWarning]:
    """
    Flag example-file values that look like real credentials.

    Placeholder values are skipped. A value gets one warning per provider
    pattern it matches, plus one entropy warning for long random values.

    Args:
        env: Parsed example file

    Returns:
        Warnings in key order
    """
    warnings: list[ExampleSecretWarning] = []

    for key, raw in env.items():
        value = (raw or "").strip()
        if not value or _is_placeholder(value):
            continue

        for _name, rx in PROVIDER_PATTERNS:
            if rx.search(value):
                warnings.append(
                    ExampleSecretWarning(
                        key=key,
                        value=value,
                        reason="Value in .env.example matches a known provider key pattern",
                        severity=Severity.HIGH,
                    )
                )

        if len(value) >= 24:
            entropy = shannon_entropy_normalized(value)
            if entropy > EXAMPLE_ENTROPY_THRESHOLD:
                warnings.append(
                    ExampleSecretWarning(
                        key=key,
                        value=value,
                        reason=f"High entropy value in .env.example (~{entropy:.2f})",
                        severity=Severity.HIGH if entropy > EXAMPLE_HIGH_ENTROPY else Severity.MEDIUM,
                    )
                )

    return warnings

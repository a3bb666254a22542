"""Detection of a configured Content-Security-Policy in source code."""

from __future__ import annotations

import re

CSP_PATTERNS = [
    # <meta http-equiv="Content-Security-Policy">
    re.compile(r"<meta[^>]*http-equiv=[\"']Content-Security-Policy[\"'][^>]*>", re.IGNORECASE),
    # res.setHeader('Content-Security-Policy', ...)
    re.compile(r"(setHeader|header|append)\(\s*['\"]Content-Security-Policy['\"]", re.IGNORECASE),
    # helmet({ contentSecurityPolicy })
    re.compile(r"\bcontentSecurityPolicy\b"),
    re.compile(r"Content-Security-Policy", re.IGNORECASE),
    # svelte.config.js kit.csp
    re.compile(r"kit\s*:\s*\{[^}]*csp\s*:", re.DOTALL),
    re.compile(r"\b(shared|global|site|app)[A-Z]?Csp\b"),
    re.compile(r"\bcspConfig\b", re.IGNORECASE),
    re.compile(r"\bcsp\s*:\s*\{[^}]*['\"]default-src['\"]:", re.IGNORECASE),
    re.compile(r"directives\s*:\s*\{[^}]*['\"]default-src['\"]:", re.IGNORECASE | re.DOTALL),
]


def has_csp_in_source(source: str) -> bool:
    """Whether the text looks like it configures a CSP anywhere."""
    return any(rx.search(source) for rx in CSP_PATTERNS)

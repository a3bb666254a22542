"""Framework detection from package.json dependencies."""

from __future__ import annotations

import json

from dotenv_diff.models.findings import Framework

# First match wins
_FRAMEWORK_DEPENDENCIES = [
    ("@sveltejs/kit", Framework.SVELTEKIT),
    ("next", Framework.NEXTJS),
    ("@angular/core", Framework.ANGULAR),
]


def detect_framework(package_json: str | None) -> tuple[Framework, str | None]:
    """
    Identify the framework declared in a package.json document.

    Args:
        package_json: Raw package.json text, or None when the file is absent

    Returns:
        The framework and its declared version range (None when unknown)
    """
    if not package_json:
        return Framework.UNKNOWN, None
    try:
        manifest = json.loads(package_json)
    except json.JSONDecodeError:
        return Framework.UNKNOWN, None
    if not isinstance(manifest, dict):
        return Framework.UNKNOWN, None

    deps: dict[str, str] = {}
    for section in ("dependencies", "devDependencies"):
        block = manifest.get(section)
        if isinstance(block, dict):
            deps.update(block)

    for name, framework in _FRAMEWORK_DEPENDENCIES:
        if name in deps:
            return framework, str(deps[name])
    return Framework.UNKNOWN, None

"""t3-env schema parsing and usage validation."""

from __future__ import annotations

import re

from dotenv_diff.models.env import EnvPattern, EnvUsage
from dotenv_diff.models.findings import T3EnvSchema, T3EnvWarning

# Probed relative to the project root
T3ENV_CONFIG_PATHS = [
    "src/env.ts",
    "src/env.mjs",
    "src/env.js",
    "env.ts",
    "env.mjs",
    "env.js",
    "lib/env.ts",
    "lib/env.mjs",
    "lib/env.js",
]

_SERVER_BLOCK = re.compile(r"server\s*:\s*\{([^}]*(?:\{[^}]*\}[^}]*)*)\}", re.DOTALL)
_CLIENT_BLOCK = re.compile(r"client\s*:\s*\{([^}]*(?:\{[^}]*\}[^}]*)*)\}", re.DOTALL)
_SCHEMA_KEY = re.compile(r"([A-Z_][A-Z0-9_]*)\s*:")
_ENV_DEFINITION_FILE = re.compile(r"(^|[/\\])env\.(ts|mjs|js)$")

_CLIENT_PATH_HINTS = ("/components/", "/pages/", "/app/", "client", "browser")
_SERVER_SUFFIXES = (".server.ts", ".server.js")


def parse_t3env_schema(content: str) -> T3EnvSchema | None:
    """
    Extract server and client variable names from a createEnv() definition.

    Args:
        content: Text of an env.ts-style file

    Returns:
        The schema, or None when neither a server nor a client block exists
    """
    if "createEnv" not in content:
        return None
    server = _SERVER_BLOCK.search(content)
    client = _CLIENT_BLOCK.search(content)
    if not server and not client:
        return None
    return T3EnvSchema(
        server=_SCHEMA_KEY.findall(server.group(1)) if server else [],
        client=_SCHEMA_KEY.findall(client.group(1)) if client else [],
    )


def is_server_context(u: EnvUsage) -> bool:
    path = u.file.lower()
    return path.endswith(_SERVER_SUFFIXES) or "server" in path or "/api/" in path


def is_client_context(u: EnvUsage) -> bool:
    if is_server_context(u):
        return False
    if u.pattern == EnvPattern.IMPORT_META_ENV or "use client" in u.context:
        return True
    path = u.file.lower()
    return any(hint in path for hint in _CLIENT_PATH_HINTS)


def apply_t3env_rules(u: EnvUsage, warnings: list[T3EnvWarning], schema: T3EnvSchema) -> None:
    """
    Check one usage against a t3-env schema.

    At most one warning is emitted per usage. The env definition file itself
    and node_modules are never checked.

    Args:
        u: The usage to check
        warnings: Output list the warnings are appended to
        schema: Declared server and client variables
    """
    if _ENV_DEFINITION_FILE.search(u.file) or "node_modules" in u.file:
        return

    def warn(reason: str) -> None:
        warnings.append(T3EnvWarning(variable=u.variable, reason=reason, file=u.file, line=u.line))

    in_server = u.variable in schema.server
    in_client = u.variable in schema.client

    if u.variable.startswith("NEXT_PUBLIC_"):
        warn(
            "Use t3-env client schema instead of NEXT_PUBLIC_ prefix "
            "for type-safe environment variables."
        )
    elif is_client_context(u) and in_server and not in_client:
        warn(
            f'Variable "{u.variable}" is used in client code but only defined in server schema. '
            "This will expose secrets! Add to client schema or move to server-only code."
        )
    elif is_server_context(u) and in_client and not in_server:
        warn(
            f'Variable "{u.variable}" is used in server code but only defined in client schema. '
            "Add it to the server schema."
        )
    elif not in_server and not in_client:
        warn(
            f'Variable "{u.variable}" is not defined in t3-env schema. '
            "Add it to either server or client schema for type safety."
        )


def t3env_validator(usages: list[EnvUsage], schema: T3EnvSchema | None) -> list[T3EnvWarning]:
    """
    Validate all usages against a schema.

    Returns:
        Warnings deduplicated by ``(variable, reason)`` across the whole
        project; the first occurrence is kept
    """
    if schema is None:
        return []

    warnings: list[T3EnvWarning] = []
    for u in usages:
        apply_t3env_rules(u, warnings, schema)

    seen: set[tuple[str, str]] = set()
    unique: list[T3EnvWarning] = []
    for w in warnings:
        key = (w.variable, w.reason)
        if key in seen:
            continue
        seen.add(key)
        unique.append(w)
    return unique

"""Next.js environment variable rules."""

from __future__ import annotations

import re

from dotenv_diff.models.env import EnvPattern, EnvUsage
from dotenv_diff.models.findings import Framework, FrameworkWarning

PUBLIC_PREFIX = "NEXT_PUBLIC_"
SENSITIVE_WORDS = ("SECRET", "PRIVATE", "KEY", "TOKEN", "PASSWORD")

_USE_CLIENT_QUOTED = re.compile(r"['\"]use client['\"]")
_USE_CLIENT_BARE = re.compile(r"^use client;?$", re.MULTILINE)
_SERVER_SUFFIXES = (
    ".server.ts",
    ".server.tsx",
    ".server.js",
    ".server.jsx",
    "middleware.ts",
    "middleware.js",
)
_SERVER_DIRS = ("/app/api/", "/pages/api/", "/route.ts", "/route.js")


def is_client_component(u: EnvUsage, file_content_map: dict[str, str] | None = None) -> bool:
    """A "use client" directive in the first lines of the file, or on the usage line."""
    if file_content_map:
        content = file_content_map.get(u.file)
        if content:
            head = "\n".join(content.split("\n")[:10])
            if _USE_CLIENT_QUOTED.search(head) or _USE_CLIENT_BARE.search(head):
                return True
    return "use client" in u.context


def is_server_only_file(path: str) -> bool:
    return path.endswith(_SERVER_SUFFIXES) or any(d in path for d in _SERVER_DIRS)


def apply_nextjs_rules(
    u: EnvUsage,
    warnings: list[FrameworkWarning],
    file_content_map: dict[str, str] | None = None,
) -> None:
    """
    Check one usage against Next.js public/server conventions.

    At most one warning is emitted per usage; the first rule that fires wins.

    Args:
        u: The usage to check
        warnings: Output list the warnings are appended to
        file_content_map: File contents keyed by the usage's relative path,
            used to find "use client" directives
    """
    if "node_modules" in u.file:
        return

    def warn(reason: str) -> None:
        warnings.append(
            FrameworkWarning(
                variable=u.variable,
                reason=reason,
                file=u.file,
                line=u.line,
                framework=Framework.NEXTJS,
            )
        )

    is_public = u.variable.startswith(PUBLIC_PREFIX)

    if is_server_only_file(u.file) and is_public:
        warn("NEXT_PUBLIC_ variable used in server-only file")
    elif is_client_component(u, file_content_map) and not is_public:
        warn("Server-only variable accessed from client code")
    elif u.pattern == EnvPattern.IMPORT_META_ENV:
        warn("Next.js uses process.env, not import.meta.env (Vite syntax)")
    elif is_public and any(word in u.variable for word in SENSITIVE_WORDS):
        warn("Sensitive data marked as public")

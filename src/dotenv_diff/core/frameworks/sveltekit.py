"""SvelteKit environment variable rules."""

from __future__ import annotations

import re

from dotenv_diff.core.scan import normalize_path
from dotenv_diff.models.env import EnvPattern, EnvUsage
from dotenv_diff.models.findings import Framework, FrameworkWarning

STATIC_PRIVATE = "$env/static/private"
STATIC_PUBLIC = "$env/static/public"
DYNAMIC_PUBLIC = "$env/dynamic/public"

_ENV_MODULE = re.compile(r"\$env/(?:static|dynamic)/(?:private|public)")
_PAGE_OR_LAYOUT = re.compile(r"\+(page|layout)\.(ts|js)$")


def _env_module(u: EnvUsage) -> str | None:
    """The $env module a SvelteKit usage reads from."""
    m = _ENV_MODULE.search(u.context)
    if m:
        return m.group(0)
    # env.KEY reads the object imported from a dynamic module
    return next((i for i in u.imports if i.startswith("$env/dynamic/")), None)


def apply_sveltekit_rules(u: EnvUsage, warnings: list[FrameworkWarning]) -> None:
    """
    Check one usage against SvelteKit conventions.

    Args:
        u: The usage to check
        warnings: Output list the warnings are appended to
    """
    file = normalize_path(u.file)
    if "node_modules/" in file:
        return

    def warn(reason: str) -> None:
        warnings.append(
            FrameworkWarning(
                variable=u.variable,
                reason=reason,
                file=file,
                line=u.line,
                framework=Framework.SVELTEKIT,
            )
        )

    is_svelte_file = file.endswith(".svelte")

    if u.pattern == EnvPattern.IMPORT_META_ENV:
        if not u.variable.startswith("VITE_"):
            warn('Variables accessed through import.meta.env must start with "VITE_"')
        return

    if u.pattern == EnvPattern.PROCESS_ENV:
        if u.variable.startswith("VITE_"):
            warn('Variables accessed through process.env cannot start with "VITE_"')
        if is_svelte_file:
            warn(
                "Avoid using process.env inside Svelte files, "
                "use $env/static/private or $env/static/public"
            )
        return

    module = _env_module(u)

    if module == STATIC_PRIVATE:
        if u.variable.startswith("VITE_"):
            warn('$env/static/private variables must not start with "VITE_" (private server env)')
        if is_svelte_file:
            warn("Private environment variables cannot be used in Svelte components (.svelte files)")
        if _PAGE_OR_LAYOUT.search(file):
            warn("Private env vars should only be used in +page.server.ts or +layout.server.ts")
        if u.variable.startswith("PUBLIC_"):
            warn("Variables starting with PUBLIC_ may never be used in private env imports")
        return

    if module == STATIC_PUBLIC:
        if u.variable.startswith("VITE_"):
            warn('$env/static/public variables must not start with "VITE_"')
        return

    if module == DYNAMIC_PUBLIC:
        warn(
            "$env/dynamic/public is strongly discouraged, "
            "use $env/static/public instead for build-time safety"
        )

"""Angular environment variable rules."""

from __future__ import annotations

from dotenv_diff.models.env import EnvPattern, EnvUsage
from dotenv_diff.models.findings import Framework, FrameworkWarning


def apply_angular_rules(u: EnvUsage, warnings: list[FrameworkWarning]) -> None:
    """Flag process.env in components and client-looking names without NG_APP_."""
    if u.pattern != EnvPattern.PROCESS_ENV:
        return

    if "app" in u.file and u.file.endswith(".component.ts"):
        warnings.append(
            FrameworkWarning(
                variable=u.variable,
                reason="Avoid using process.env directly in Angular components",
                file=u.file,
                line=u.line,
                framework=Framework.ANGULAR,
            )
        )

    if u.variable.startswith(("CLIENT_", "BROWSER_")):
        warnings.append(
            FrameworkWarning(
                variable=u.variable,
                reason="Use NG_APP_ prefix for Angular client-side variables",
                file=u.file,
                line=u.line,
                framework=Framework.ANGULAR,
            )
        )

"""Dispatch of usages to the rules of the detected framework."""

from __future__ import annotations

from dotenv_diff.core.frameworks.angular import apply_angular_rules
from dotenv_diff.core.frameworks.nextjs import apply_nextjs_rules
from dotenv_diff.core.frameworks.sveltekit import apply_sveltekit_rules
from dotenv_diff.models.env import EnvUsage
from dotenv_diff.models.findings import Framework, FrameworkWarning


def apply_framework_rules(
    u: EnvUsage,
    framework: Framework,
    warnings: list[FrameworkWarning],
    file_content_map: dict[str, str] | None = None,
) -> None:
    """Apply the rules of ``framework`` to one usage; unknown frameworks have none."""
    if framework == Framework.SVELTEKIT:
        apply_sveltekit_rules(u, warnings)
    elif framework == Framework.NEXTJS:
        apply_nextjs_rules(u, warnings, file_content_map)
    elif framework == Framework.ANGULAR:
        apply_angular_rules(u, warnings)


def framework_validator(
    usages: list[EnvUsage],
    framework: Framework,
    file_content_map: dict[str, str] | None = None,
) -> list[FrameworkWarning]:
    """Collect framework warnings for every usage, in usage order."""
    warnings: list[FrameworkWarning] = []
    for u in usages:
        apply_framework_rules(u, framework, warnings, file_content_map)
    return warnings

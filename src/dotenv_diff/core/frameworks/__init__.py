"""Framework-specific environment variable rules."""

from dotenv_diff.core.frameworks.angular import apply_angular_rules
from dotenv_diff.core.frameworks.detector import detect_framework
from dotenv_diff.core.frameworks.nextjs import apply_nextjs_rules
from dotenv_diff.core.frameworks.sveltekit import apply_sveltekit_rules
from dotenv_diff.core.frameworks.t3env import (
    T3ENV_CONFIG_PATHS,
    apply_t3env_rules,
    parse_t3env_schema,
    t3env_validator,
)
from dotenv_diff.core.frameworks.validator import apply_framework_rules, framework_validator

__all__ = [
    "detect_framework",
    "apply_sveltekit_rules",
    "apply_nextjs_rules",
    "apply_angular_rules",
    "apply_framework_rules",
    "framework_validator",
    "T3ENV_CONFIG_PATHS",
    "parse_t3env_schema",
    "apply_t3env_rules",
    "t3env_validator",
]

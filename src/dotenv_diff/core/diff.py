"""Key and value diffing between an env file and its example."""

from __future__ import annotations

from dotenv_diff.models.env import DiffResult, ValueMismatch


def diff_env(
    current: dict[str, str],
    example: dict[str, str],
    check_values: bool = False,
) -> DiffResult:
    """
    Compare two env maps.

    Args:
        current: Parsed env file (actual values)
        example: Parsed example file (expected keys and values)
        check_values: Also report keys whose non-empty example value differs

    Returns:
        DiffResult with missing keys in example order, extra keys in current
        order, and value mismatches in example order
    """
    missing = [k for k in example if k not in current]
    extra = [k for k in current if k not in example]

    mismatches: list[ValueMismatch] = []
    if check_values:
        for key, expected in example.items():
            if key not in current or not expected.strip():
                continue
            if current[key] != expected:
                mismatches.append(ValueMismatch(key=key, expected=expected, actual=current[key]))

    return DiffResult(missing=missing, extra=extra, value_mismatches=mismatches)


def find_empty_keys(env: dict[str, str]) -> list[str]:
    """Keys whose value is empty after trimming."""
    return [k for k, v in env.items() if not v.strip()]

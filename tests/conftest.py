"""Shared test fixtures for dotenv-diff tests."""

from pathlib import Path
from typing import Any, Callable

import pytest

from dotenv_diff.models.env import EnvPattern, EnvUsage

T3ENV_SOURCE = """import { createEnv } from "@t3-oss/env-nextjs";
import { z } from "zod";

export const env = createEnv({
  server: {
    DATABASE_URL: z.string().url(),
    SECRET_KEY: z.string(),
  },
  client: {
    NEXT_PUBLIC_API: z.string(),
    PUBLIC_URL: z.string(),
  },
});
"""


@pytest.fixture
def make_usage() -> Callable[..., EnvUsage]:
    """Factory for EnvUsage objects with sensible defaults."""

    def _make(variable: str = "API_KEY", **overrides: Any) -> EnvUsage:
        data: dict[str, Any] = {
            "variable": variable,
            "file": "src/index.ts",
            "line": 1,
            "column": 1,
            "pattern": EnvPattern.PROCESS_ENV,
            "context": f"const v = process.env.{variable};",
        }
        data.update(overrides)
        return EnvUsage(**data)

    return _make


@pytest.fixture
def env_text() -> str:
    """A typical .env file."""
    return (
        "# Database\n"
        "DATABASE_URL=postgres://localhost/app\n"
        "API_KEY=abc123\n"
        "DEBUG=true\n"
        "EMPTY_VALUE=\n"
    )


@pytest.fixture
def example_text() -> str:
    """A typical .env.example file."""
    return (
        "DATABASE_URL=\n"
        "API_KEY=\n"
        "DEBUG=false\n"
        "EMPTY_VALUE=\n"
        "REDIS_URL=\n"
    )


@pytest.fixture
def t3env_source() -> str:
    """An env.ts file defining a t3-env schema."""
    return T3ENV_SOURCE


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small Node project on disk."""
    (tmp_path / "src").mkdir()
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "package.json").write_text('{"dependencies": {"next": "14.1.0"}}')
    (tmp_path / ".env").write_text("API_KEY=abc\nUNUSED_VAR=1\n")
    (tmp_path / ".env.example").write_text("API_KEY=\nUNUSED_VAR=\n")
    (tmp_path / "src" / "index.js").write_text(
        "const key = process.env.API_KEY;\n"
        "const host = process.env.MISSING_HOST;\n"
    )
    (tmp_path / "node_modules" / "lib" / "index.js").write_text(
        "module.exports = process.env.FROM_DEPENDENCY;\n"
    )
    return tmp_path

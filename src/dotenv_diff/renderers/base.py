"""Renderer base class and rendering options."""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    TERMINAL = "terminal"

    @property
    def machine_readable(self) -> bool:
        """Whether the output is parsed by other tools.

        Such output is written to stdout unstyled and unwrapped. Status
        messages then belong on stderr.
        """
        return self is OutputFormat.JSON


class RenderContext(BaseModel):
    """Options for one render call."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    verbose: bool = Field(default=False, description="Include usage and stats tables")
    indent: int = Field(default=2, description="JSON indentation, 0 for a single line")
    show_unused: bool = Field(default=True, description="List unused variables in scan output")


class BaseRenderer(ABC):
    """Turns compare and scan reports into output.

    Subclasses return the rendered text from ``render``. Renderers that
    print instead (the terminal one) return "" and override
    ``render_to_file``.
    """

    @property
    @abstractmethod
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""

    @abstractmethod
    def render(self, data: Any, context: RenderContext) -> str:
        """Render a report."""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render a report into ``context.output_path``.

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")
        context.output_path.write_text(self.render(data, context), encoding="utf-8")

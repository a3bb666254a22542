"""JSON renderer for dotenv-diff reports."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from dotenv_diff.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    Reports are dumped with ``model_dump(mode="json")``. Compare reports also
    get their derived ``missing``, ``extra`` and ``ok`` fields so CI scripts
    do not need to dig into ``diff``.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, context)
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a JSON string.

        Args:
            data: The data to render (typically a report model)
            context: Rendering context with options

        Returns:
            JSON string
        """
        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
            if hasattr(data, "ok"):
                dict_data["ok"] = data.ok
                dict_data["missing"] = list(data.missing)
                dict_data["extra"] = list(data.extra)
        else:
            dict_data = data

        return json.dumps(
            dict_data,
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, set):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

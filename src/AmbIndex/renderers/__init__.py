"""Output renderers for command results.

Renders events and compiled queries as console text or JSON.
"""

from __future__ import annotations

from typing import Callable, Sequence

from AmbIndex.core.models import NostrEvent
from AmbIndex.renderers.console import render_compiled, render_text
from AmbIndex.renderers.json import render_json, render_json_text

OUTPUT_FORMATS = ("text", "json")


def get_renderer(output_format: str) -> Callable[[Sequence[NostrEvent]], str]:
    """Return the event renderer for an output format.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "text":
        return render_text
    if output_format == "json":
        return render_json_text
    raise ValueError(f"Unsupported output format: {output_format}")


__all__ = [
    "OUTPUT_FORMATS",
    "get_renderer",
    "render_compiled",
    "render_json",
    "render_json_text",
    "render_text",
]

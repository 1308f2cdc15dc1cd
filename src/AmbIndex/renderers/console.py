"""Console text output renderers.

Renders events and compiled queries into human-friendly text.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from AmbIndex.core.models import NostrEvent
from AmbIndex.sources.typesense.query import CompiledQuery


def _fmt_ts(timestamp: int) -> str:
    """Format a unix timestamp as a short UTC date (YYYY-mm-dd)."""
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return "-"


def render_text(events: Iterable[NostrEvent]) -> str:
    """Render events into a human-readable text block.

    Args:
        events: Iterable of events.

    Returns:
        A formatted string ready to be printed; empty when there are no events.
    """
    lines: list[str] = []
    for idx, event in enumerate(events, start=1):
        lines.append(f"{idx}. {event.tag_value('name') or '(untitled)'}")
        lines.append(f"   d: {event.tag_value('d') or '-'}")
        lines.append(f"   Author: {event.pubkey}")
        lines.append(f"   Created: {_fmt_ts(event.created_at)}  Kind: {event.kind}")
        description = event.tag_value("description")
        if description:
            lines.append(f"   {description}")
        lines.append("")
    if not lines:
        return ""
    return "\n".join(lines).rstrip() + "\n"


def render_compiled(compiled: CompiledQuery) -> str:
    """Render compiled Typesense parameters, one per line."""
    lines = [f"q: {compiled.q}"]
    if compiled.filter_by:
        lines.append(f"filter_by: {compiled.filter_by}")
    return "\n".join(lines) + "\n"

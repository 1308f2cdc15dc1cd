"""JSON output renderers.

Renders events as NIP-01 JSON objects, and reads event files back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from AmbIndex.core.models import NostrEvent


def render_json(events: Iterable[NostrEvent]) -> list[dict]:
    """Render events into JSON-serializable Python objects."""
    return [event.to_dict() for event in events]


def render_json_text(events: Iterable[NostrEvent]) -> str:
    """Render events as an indented JSON array."""
    return json.dumps(render_json(events), ensure_ascii=False, indent=2) + "\n"


def load_events(path: Path) -> list[NostrEvent]:
    """Read events from a JSON array file or a JSON lines file.

    Args:
        path: File holding either one JSON array of events or one event per line.

    Returns:
        Parsed events in file order.

    Raises:
        ValueError: If the file content is not valid event JSON.
    """
    text = path.read_text(encoding="utf-8")
    stripped = text.lstrip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON: {e}") from e
        return [NostrEvent.from_dict(item) for item in data]

    events: list[NostrEvent] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            events.append(NostrEvent.from_json(line))
        except ValueError as e:
            raise ValueError(f"{path}:{lineno}: {e}") from e
    return events

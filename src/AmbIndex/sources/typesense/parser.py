"""Typesense search response parser."""

from __future__ import annotations

from typing import Any, Mapping

from AmbIndex.core.models import NostrEvent
from AmbIndex.utils.log import log


def parse_search_hits(payload: Mapping[str, Any]) -> list[NostrEvent]:
    """Parse search hits back into Nostr events.

    Each hit carries the original event JSON in ``document.eventRaw``. Hits
    that cannot be turned into an event are skipped.

    Args:
        payload: Decoded Typesense search response.

    Returns:
        Events in hit order.
    """
    hits = payload.get("hits") if isinstance(payload, Mapping) else None
    if not isinstance(hits, list):
        return []

    events: list[NostrEvent] = []
    for idx, hit in enumerate(hits):
        document = hit.get("document") if isinstance(hit, Mapping) else None
        if not isinstance(document, Mapping):
            log.warning("Search hit %d has no document, skipped", idx)
            continue
        event_raw = document.get("eventRaw")
        if not isinstance(event_raw, str):
            log.warning("Search hit %d has no eventRaw string, skipped", idx)
            continue
        try:
            events.append(NostrEvent.from_json(event_raw))
        except ValueError as e:
            log.warning("Search hit %d has an invalid event: %s", idx, e)

    log.debug("Parsed %d/%d search hits", len(events), len(hits))
    return events


def found_count(payload: Mapping[str, Any]) -> int:
    """Return the total number of matches reported by a search response."""
    found = payload.get("found") if isinstance(payload, Mapping) else None
    if isinstance(found, bool) or not isinstance(found, int):
        return 0
    return found

"""Service layer for AmbIndex.

Provides the event service and factory functions for component creation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from AmbIndex.services.events import EventIndexService, EventStore, IndexReport

if TYPE_CHECKING:
    from AmbIndex.config import AppConfig
    from AmbIndex.sources.typesense.store import TypesenseEventStore


def create_event_store(config: AppConfig) -> TypesenseEventStore:
    """Create the Typesense event store from configuration.

    Args:
        config: Application configuration containing Typesense settings.

    Returns:
        Configured store with its own HTTP client.
    """
    from AmbIndex.sources.typesense.client import TypesenseApiClient
    from AmbIndex.sources.typesense.store import TypesenseEventStore

    client = TypesenseApiClient(
        host=config.typesense.host,
        api_key=config.typesense.api_key,
        timeout=config.typesense.timeout,
    )
    return TypesenseEventStore(
        client=client,
        collection=config.typesense.collection,
        query_by=config.search.query_by,
        per_page=config.search.per_page,
    )


def create_event_service(config: AppConfig) -> EventIndexService:
    """Create the event service backed by the configured store."""
    return EventIndexService(store=create_event_store(config))


__all__ = [
    "EventIndexService",
    "EventStore",
    "IndexReport",
    "create_event_service",
    "create_event_store",
]

"""Event service layer for indexing and searching AMB events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Protocol

from AmbIndex.core.models import EventFilter, NostrEvent
from AmbIndex.utils.log import log


class EventStore(Protocol):
    """Protocol for a searchable event store."""

    name: str

    def init(self) -> None:
        """Prepare backing storage."""
        raise NotImplementedError

    def replace_event(self, event: NostrEvent) -> None:
        """Index an event, replacing an earlier version."""
        raise NotImplementedError

    def delete_document(self, *, d: str, pubkey: str) -> int:
        """Delete documents by d tag and author."""
        raise NotImplementedError

    def query_events(self, event_filter: EventFilter) -> Iterator[NostrEvent]:
        """Return events matching a filter."""
        raise NotImplementedError

    def close(self) -> None:
        """Close resources held by the store."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class IndexReport:
    """Outcome of indexing a batch of events."""

    indexed: int
    failed: tuple[str, ...] = ()


@dataclass(slots=True)
class EventIndexService:
    """Application service over one event store."""

    store: EventStore

    def init(self) -> None:
        """Prepare the store for indexing."""
        self.store.init()

    def index(self, events: Iterable[NostrEvent]) -> IndexReport:
        """Index events one by one, replacing earlier versions.

        A failing event does not stop the batch.

        Args:
            events: Events to index.

        Returns:
            Number of indexed events and ids of failed ones.

        Raises:
            RuntimeError: If every event of a non-empty batch failed.
        """
        indexed = 0
        failed: list[str] = []
        for event in events:
            try:
                self.store.replace_event(event)
            except Exception as error:  # noqa: BLE001 - event failure must be isolated
                failed.append(event.id)
                log.warning("Indexing failed: event=%s error=%s", event.id, error)
                continue
            indexed += 1

        if failed and not indexed:
            raise RuntimeError(f"All events failed to index: {', '.join(failed)}")
        log.info("Indexed %d event(s), %d failed", indexed, len(failed))
        return IndexReport(indexed=indexed, failed=tuple(failed))

    def delete(self, *, d: str, pubkey: str) -> int:
        """Delete the indexed document of an addressable event."""
        return self.store.delete_document(d=d, pubkey=pubkey)

    def search(self, search: str, *, limit: Optional[int] = None) -> list[NostrEvent]:
        """Search events and collect them into a list."""
        log.info("Processing query with search: %s", search)
        return list(self.store.query_events(EventFilter(search=search, limit=limit)))

    def close(self) -> None:
        """Close the store, logging instead of raising on failure."""
        try:
            self.store.close()
        except Exception as error:  # noqa: BLE001 - close failure must be isolated
            log.warning("Event store close failed: store=%s error=%s", getattr(self.store, "name", "unknown"), error)

"""Typesense-backed event store.

Composes AMB mapping, query compilation, HTTP calls and response parsing into
an event store that can index, replace, delete and search kind 30142 events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from AmbIndex.core.amb import nostr_to_amb
from AmbIndex.core.models import EventFilter, NostrEvent
from AmbIndex.core.query import parse_search_query
from AmbIndex.sources.typesense.client import DocumentExistsError, TypesenseApiClient
from AmbIndex.sources.typesense.parser import found_count, parse_search_hits
from AmbIndex.sources.typesense.query import CompiledQuery, compile_typesense_query
from AmbIndex.sources.typesense.schema import collection_schema
from AmbIndex.utils.log import log

DEFAULT_QUERY_BY = (
    "name",
    "description",
    "about",
    "learningResourceType",
    "keywords",
    "creator",
    "publisher",
)
DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 250
WILDCARD_QUERY = "*"


def _identity_filter(d: str, pubkey: str) -> str:
    """Filter selecting the document of one addressable event.

    d tags are often URLs, so the value is backtick-quoted.
    """
    return f"d:=`{d}` && eventPubKey:={pubkey}"


@dataclass(slots=True)
class TypesenseEventStore:
    """Event store backed by one Typesense collection.

    Addressable events are identified by their ``d`` tag and author pubkey;
    replacing an event removes the previously indexed document first.
    """

    client: TypesenseApiClient
    collection: str
    query_by: Sequence[str] = DEFAULT_QUERY_BY
    per_page: int = DEFAULT_PER_PAGE
    name: str = "typesense"

    def init(self) -> None:
        """Create the collection unless it already exists."""
        if self.client.collection_exists(self.collection):
            log.info("Collection %s already exists", self.collection)
            return
        log.info("Collection %s does not exist. Creating...", self.collection)
        self.client.create_collection(collection_schema(self.collection))
        log.info("Collection %s created", self.collection)

    def close(self) -> None:
        """Close resources held by the store."""
        self.client.close()

    def save_event(self, event: NostrEvent) -> None:
        """Index an event; an event that is already indexed is left as is."""
        try:
            self.client.index_document(self.collection, nostr_to_amb(event))
        except DocumentExistsError:
            log.debug("Event %s already indexed", event.id)

    def replace_event(self, event: NostrEvent) -> None:
        """Index an event, removing any earlier version with the same d tag and author."""
        document = nostr_to_amb(event)
        existing = self._find_indexed(document["d"], event.pubkey)
        if existing is not None:
            log.info("Replacing indexed event %s with %s", existing.id, event.id)
            self.delete_event(existing)
        self.client.index_document(self.collection, document)

    def delete_event(self, event: NostrEvent) -> int:
        """Delete the indexed document of an event.

        Returns:
            Number of deleted documents.
        """
        return self.delete_document(d=event.tag_value("d") or "", pubkey=event.pubkey)

    def delete_document(self, *, d: str, pubkey: str) -> int:
        """Delete documents by d tag and author pubkey."""
        deleted = self.client.delete_documents(self.collection, _identity_filter(d, pubkey))
        log.info("Deleted %d document(s) d=%s pubkey=%s", deleted, d, pubkey)
        return deleted

    def query_events(self, event_filter: EventFilter) -> Iterator[NostrEvent]:
        """Run a filter's search and return an iterator over matching events.

        The search runs before this method returns, so request errors surface
        here; the caller may stop iterating at any point.

        Args:
            event_filter: Filter with a search string and optional limit.

        Returns:
            Iterator over events in relevance order. Empty when the filter has
            no search string.
        """
        if not event_filter.search.strip():
            log.info("No search parameter provided, returning empty result")
            return iter(())
        events = self.search_events(event_filter.search, limit=event_filter.limit)
        log.info("Search succeeded, found %d events", len(events))
        return iter(events)

    def count_events(self, event_filter: EventFilter) -> int:
        """Return the number of documents matching a filter's search."""
        if not event_filter.search.strip():
            return 0
        payload = self.client.search(self.collection, self.search_params(event_filter.search, limit=1))
        return found_count(payload)

    def search_events(self, search: str, *, limit: Optional[int] = None) -> list[NostrEvent]:
        """Search events with free text and ``field:value`` filters.

        Args:
            search: Search string.
            limit: Maximum number of results, capped at the page size limit.

        Returns:
            Matching events.
        """
        payload = self.client.search(self.collection, self.search_params(search, limit=limit))
        return parse_search_hits(payload)

    def search_params(self, search: str, *, limit: Optional[int] = None) -> dict[str, str]:
        """Build Typesense search parameters for a search string."""
        compiled = compile_typesense_query(parse_search_query(search))
        log.debug("Compiled search: q=%r filter_by=%r", compiled.q, compiled.filter_by)
        return self._params(compiled, limit=limit)

    def _params(self, compiled: CompiledQuery, *, limit: Optional[int]) -> dict[str, str]:
        per_page = self.per_page if limit is None or limit <= 0 else limit
        params = {
            "validate_field_names": "false",
            "query_by": ",".join(self.query_by),
            "per_page": str(min(per_page, MAX_PER_PAGE)),
        }
        params.update(compiled.to_params())
        if not params["q"]:
            params["q"] = WILDCARD_QUERY
        return params

    def _find_indexed(self, d: str, pubkey: str) -> Optional[NostrEvent]:
        """Return the indexed event for a d tag and author, if any."""
        payload = self.client.search(
            self.collection,
            {
                "q": WILDCARD_QUERY,
                "query_by": "d,eventPubKey",
                "filter_by": _identity_filter(d, pubkey),
                "per_page": "1",
            },
        )
        events = parse_search_hits(payload)
        return events[0] if events else None

"""Command implementations for AmbIndex CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling. Every command returns the text to print on stdout.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from AmbIndex.core.query import parse_search_query
from AmbIndex.renderers import get_renderer, render_compiled
from AmbIndex.renderers.json import load_events
from AmbIndex.services import EventIndexService
from AmbIndex.sources.typesense.query import compile_typesense_query
from AmbIndex.utils.log import log


class Command(Protocol):
    """A runnable CLI command."""

    def execute(self) -> str:
        """Run the command and return its stdout text."""
        raise NotImplementedError


@dataclass(slots=True)
class InitCommand:
    """Create the search collection when missing."""

    service: EventIndexService

    def execute(self) -> str:
        self.service.init()
        return ""


@dataclass(slots=True)
class IndexCommand:
    """Index (replace) all events from a file."""

    service: EventIndexService
    path: Path

    def execute(self) -> str:
        events = load_events(self.path)
        log.info("Loaded %d event(s) from %s", len(events), self.path)
        report = self.service.index(events)
        return f"indexed={report.indexed} failed={len(report.failed)}\n"


@dataclass(slots=True)
class DeleteCommand:
    """Delete the indexed document of one addressable event."""

    service: EventIndexService
    d: str
    pubkey: str

    def execute(self) -> str:
        deleted = self.service.delete(d=self.d, pubkey=self.pubkey)
        return f"deleted={deleted}\n"


@dataclass(slots=True)
class SearchCommand:
    """Search indexed events and render them."""

    service: EventIndexService
    search: str
    limit: Optional[int] = None
    output_format: str = "text"

    def execute(self) -> str:
        """Run the search and render results in the requested format."""
        render = get_renderer(self.output_format)
        events = self.service.search(self.search, limit=self.limit)
        log.info("Fetched %d events", len(events))
        return render(events)


@dataclass(slots=True)
class CompileCommand:
    """Show the Typesense parameters a search string compiles to."""

    search: str

    def execute(self) -> str:
        return render_compiled(compile_typesense_query(parse_search_query(self.search)))

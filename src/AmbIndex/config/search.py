"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from AmbIndex.config.common import get_section
from AmbIndex.sources.typesense.store import DEFAULT_PER_PAGE, DEFAULT_QUERY_BY, MAX_PER_PAGE


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior settings.

    Attributes:
        query_by: Document fields matched against free text, in weight order.
        per_page: Page size used when a search has no explicit limit.
    """

    query_by: tuple[str, ...] = DEFAULT_QUERY_BY
    per_page: int = DEFAULT_PER_PAGE


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from the optional ``search`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "search", required=False)
    return SearchConfig(
        query_by=_dedup_preserve_order(section.get_str_list("query_by", list(DEFAULT_QUERY_BY))),
        per_page=section.get_int("per_page", DEFAULT_PER_PAGE),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if not config.query_by:
        raise ValueError("search.query_by must include at least one field")
    if not 0 < config.per_page <= MAX_PER_PAGE:
        raise ValueError(f"search.per_page must be between 1 and {MAX_PER_PAGE}")


def _dedup_preserve_order(items: Any) -> tuple[str, ...]:
    """Remove duplicates while preserving first occurrence order."""
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return tuple(unique)

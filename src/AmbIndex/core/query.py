"""Search string parsing.

Splits a raw search string into free-text terms and ``field:value`` filters.

Rules
- ``"quoted phrase"`` -> one free-text term, quotes stripped, not re-split.
- ``a.b:value`` -> filter on the dotted field ``a.b``.
- ``field:value`` -> filter on ``field`` (split on the first colon only).
- anything else -> free-text word.

Parsing never fails: a fragment that does not look like a filter is kept as
free text, so a malformed filter widens the search instead of blocking it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence


_TOKEN_RE = re.compile(r'"([^"]+)"|(\S+\.\S+):(\S+)|(\S+)')


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """Structured form of one search string.

    Attributes:
        raw_terms: Free-text terms in input order.
        field_filters: Field name to filter values, both in input order.
            Repeated fields keep every value.
    """

    raw_terms: Sequence[str] = ()
    field_filters: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_terms", tuple(self.raw_terms))
        object.__setattr__(
            self,
            "field_filters",
            MappingProxyType({name: tuple(values) for name, values in self.field_filters.items()}),
        )

    @property
    def is_empty(self) -> bool:
        """Return True when the query has neither terms nor filters."""
        return not self.raw_terms and not self.field_filters


def parse_search_query(search: str) -> ParsedQuery:
    """Parse a search string into terms and field filters.

    Args:
        search: Raw search string, e.g. ``"open data" keywords:Mathe creator.name:Ada``.

    Returns:
        Parsed query. Empty or whitespace-only input yields an empty query.
    """
    raw_terms: list[str] = []
    field_filters: dict[str, list[str]] = {}

    for match in _TOKEN_RE.finditer(search or ""):
        phrase, dotted_field, dotted_value, word = match.groups()
        if phrase is not None:
            raw_terms.append(phrase)
        elif dotted_field is not None:
            field_filters.setdefault(dotted_field, []).append(dotted_value)
        else:
            name, sep, value = word.partition(":")
            if sep and "." not in name:
                field_filters.setdefault(name, []).append(value)
            else:
                raw_terms.append(word)

    return ParsedQuery(raw_terms=raw_terms, field_filters=field_filters)

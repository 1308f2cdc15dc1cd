"""Typesense query compiler.

Compiles a `ParsedQuery` into the Typesense ``q`` and ``filter_by`` parameters.

Rules
- Raw terms are joined with single spaces into ``q``.
- Every filter value becomes one ``field:value`` clause.
- Clauses are grouped by base field name (the part before the first dot), so
  ``creator`` and ``creator.name`` form one group.
- Clauses of one group are OR-ed and parenthesized when there is more than one.
- Groups are AND-ed in lexicographic order of their base name.

Example
- ``"hello world" name:foo name:bar creator.name:ada``
  -> q = ``hello world``
  -> filter_by = ``creator.name:ada && (name:foo || name:bar)``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from AmbIndex.core.query import ParsedQuery


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Typesense search parameters derived from one parsed query.

    Unpacks as ``q, filter_by``. An empty ``filter_by`` means no filter and
    must not be sent.
    """

    q: str
    filter_by: str

    def __iter__(self) -> Iterator[str]:
        yield self.q
        yield self.filter_by

    def to_params(self) -> dict[str, str]:
        """Return request parameters, leaving out an empty filter."""
        params = {"q": self.q}
        if self.filter_by:
            params["filter_by"] = self.filter_by
        return params


def base_field_name(field: str) -> str:
    """Return the part of a field name before the first dot."""
    return field.split(".", 1)[0]


def compile_filter_by(query: ParsedQuery) -> str:
    """Compile field filters into a Typesense ``filter_by`` expression.

    Args:
        query: Parsed query.

    Returns:
        Filter expression, or an empty string when there are no filters.
    """
    groups: dict[str, list[str]] = {}
    for field, values in query.field_filters.items():
        clauses = groups.setdefault(base_field_name(field), [])
        clauses.extend(f"{field}:{value}" for value in values)

    parts: list[str] = []
    for base in sorted(groups):
        clauses = groups[base]
        if not clauses:
            continue
        if len(clauses) == 1:
            parts.append(clauses[0])
        else:
            parts.append("(" + " || ".join(clauses) + ")")
    return " && ".join(parts)


def compile_typesense_query(query: ParsedQuery) -> CompiledQuery:
    """Compile a parsed query into Typesense ``q`` and ``filter_by``.

    Args:
        query: Parsed query.

    Returns:
        Compiled query. ``q`` is empty when there are no raw terms.
    """
    return CompiledQuery(q=" ".join(query.raw_terms), filter_by=compile_filter_by(query))

"""Typesense collection schema for AMB documents."""

from __future__ import annotations

from typing import Any

DEFAULT_SORTING_FIELD = "eventCreatedAt"

# (name, type, optional)
_FIELDS: tuple[tuple[str, str, bool], ...] = (
    # Base information
    ("id", "string", False),
    ("d", "string", False),
    ("type", "string[]", False),
    ("name", "string", False),
    ("description", "string", True),
    ("about", "object[]", True),
    ("keywords", "string[]", True),
    ("inLanguage", "string[]", True),
    ("image", "string", True),
    ("trailer", "object[]", True),
    # Provenience
    ("creator", "object[]", True),
    ("contributor", "object[]", True),
    ("dateCreated", "string", True),
    ("datePublished", "string", True),
    ("dateModified", "string", True),
    ("publisher", "object[]", True),
    ("funder", "object[]", True),
    # Costs and rights
    ("isAccessibleForFree", "bool", True),
    ("license", "object", True),
    ("conditionsOfAccess", "object", True),
    # Educational metadata
    ("learningResourceType", "object[]", True),
    ("audience", "object[]", True),
    ("teaches", "object[]", True),
    ("assesses", "object[]", True),
    ("competencyRequired", "object[]", True),
    ("educationalLevel", "object[]", True),
    ("interactivityType", "object", True),
    # Relation
    ("isBasedOn", "object[]", True),
    ("isPartOf", "object[]", True),
    ("hasPart", "object[]", True),
    # Technical
    ("duration", "string", True),
    # Nostr event
    ("eventID", "string", False),
    ("eventKind", "int32", False),
    ("eventPubKey", "string", False),
    ("eventSignature", "string", False),
    ("eventCreatedAt", "int64", False),
    ("eventContent", "string", False),
    ("eventRaw", "string", False),
)


def collection_schema(name: str) -> dict[str, Any]:
    """Build the collection schema payload for ``POST /collections``.

    Args:
        name: Collection name.

    Returns:
        Schema mapping with nested fields enabled.
    """
    fields: list[dict[str, Any]] = []
    for field_name, field_type, optional in _FIELDS:
        field: dict[str, Any] = {"name": field_name, "type": field_type}
        if optional:
            field["optional"] = True
        fields.append(field)
    return {
        "name": name,
        "fields": fields,
        "default_sorting_field": DEFAULT_SORTING_FIELD,
        "enable_nested_fields": True,
    }

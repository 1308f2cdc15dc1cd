"""AMB document mapping.

Converts a kind 30142 Nostr event into an AMB (Allgemeines Metadatenprofil
für Bildungsressourcen) document as stored in the search collection.

Tag layouts (index 0 is the tag name):

- scalar tags: ``["name", value]``
- entities: ``["creator", id, name, type?, affiliationName?, affiliationType?, affiliationId?]``
- controlled vocabularies: ``["about", id, prefLabel, inLanguage, type?]``
- trailer: ``["trailer", contentUrl, type, encodingFormat, contentSize, sha256, embedUrl, bitrate]``

Empty optional values are left out of the document.
"""

from __future__ import annotations

from typing import Any, Sequence

from AmbIndex.core.models import NostrEvent

DEFAULT_TYPE = "LearningResource"

_SCALAR_TAGS = frozenset(
    {
        "name",
        "description",
        "image",
        "datePublished",
        "dateCreated",
        "dateModified",
        "duration",
    }
)

# Controlled vocabulary tags collected into lists.
_VOCABULARY_LIST_TAGS = frozenset(
    {
        "about",
        "learningResourceType",
        "audience",
        "teaches",
        "assesses",
        "competencyRequired",
        "educationalLevel",
    }
)

_VOCABULARY_SINGLE_TAGS = frozenset({"conditionsOfAccess", "interactivityType"})

_LIST_FIELDS = (
    "about",
    "keywords",
    "inLanguage",
    "trailer",
    "creator",
    "contributor",
    "publisher",
    "funder",
    "learningResourceType",
    "audience",
    "teaches",
    "assesses",
    "competencyRequired",
    "educationalLevel",
    "isBasedOn",
    "isPartOf",
    "hasPart",
)


def _compact(entity: dict[str, Any]) -> dict[str, Any]:
    """Drop empty values from an entity mapping."""
    return {key: value for key, value in entity.items() if value not in ("", None, {}, [])}


def _at(tag: Sequence[str], index: int) -> str:
    """Return tag item at index, or empty string when absent."""
    return tag[index] if len(tag) > index else ""


def _entity(tag: Sequence[str], *, with_affiliation: bool = False) -> dict[str, Any]:
    entity: dict[str, Any] = {"id": tag[1], "name": tag[2], "type": _at(tag, 3)}
    if with_affiliation:
        entity["affiliation"] = _compact({"name": _at(tag, 4), "type": _at(tag, 5), "id": _at(tag, 6)})
    return _compact(entity)


def _vocabulary(tag: Sequence[str]) -> dict[str, Any]:
    vocabulary = {"id": tag[1], "prefLabel": tag[2], "inLanguage": tag[3], "type": _at(tag, 4)}
    return _compact(vocabulary)


def nostr_to_amb(event: NostrEvent | None) -> dict[str, Any]:
    """Convert a Nostr event to an AMB search document.

    Args:
        event: Kind 30142 event.

    Returns:
        JSON-serializable document keyed by AMB field names plus the Nostr
        metadata fields ``eventID``/``eventKind``/``eventPubKey``/
        ``eventSignature``/``eventCreatedAt``/``eventContent``/``eventRaw``.

    Raises:
        ValueError: If ``event`` is None.
    """
    if event is None:
        raise ValueError("cannot convert nil event")

    doc: dict[str, Any] = {
        "id": event.id,
        "d": "",
        "type": [DEFAULT_TYPE],
        "name": "",
    }
    lists: dict[str, list[Any]] = {name: [] for name in _LIST_FIELDS}

    for tag in event.tags:
        if len(tag) < 2:
            continue
        name, size = tag[0], len(tag)

        if name == "d":
            doc["d"] = tag[1]
        elif name == "type":
            doc["type"] = list(tag[1:])
        elif name in _SCALAR_TAGS:
            doc[name] = tag[1]
        elif name == "keywords":
            lists["keywords"] = list(tag[1:])
        elif name == "inLanguage":
            lists["inLanguage"].append(tag[1])
        elif name == "isAccessibleForFree":
            if tag[1] in ("true", "1"):
                doc["isAccessibleForFree"] = True
        elif name == "creator" and size >= 3:
            lists["creator"].append(_entity(tag, with_affiliation=True))
        elif name == "contributor" and size >= 4:
            lists["contributor"].append(_entity(tag, with_affiliation=True))
        elif name in ("publisher", "funder") and size >= 3:
            lists[name].append(_entity(tag))
        elif name in _VOCABULARY_LIST_TAGS and size >= 4:
            lists[name].append(_vocabulary(tag))
        elif name in _VOCABULARY_SINGLE_TAGS and size >= 4:
            doc[name] = _vocabulary(tag)
        elif name == "license" and size >= 3:
            doc["license"] = _compact({"id": tag[1], "name": tag[2]})
        elif name == "isBasedOn" and size >= 3:
            lists["isBasedOn"].append(_compact({"id": tag[1], "name": tag[2]}))
        elif name in ("isPartOf", "hasPart") and size >= 4:
            lists[name].append(_entity(tag))
        elif name == "trailer" and size >= 8:
            lists["trailer"].append(
                _compact(
                    {
                        "contentUrl": tag[1],
                        "type": tag[2],
                        "encodingFormat": tag[3],
                        "contentSize": tag[4],
                        "sha256": tag[5],
                        "embedUrl": tag[6],
                        "bitrate": tag[7],
                    }
                )
            )

    for field_name, values in lists.items():
        if values:
            doc[field_name] = values

    doc.update(
        {
            "eventID": event.id,
            "eventKind": event.kind,
            "eventPubKey": event.pubkey,
            "eventSignature": event.sig,
            "eventCreatedAt": event.created_at,
            "eventContent": event.content,
            "eventRaw": event.to_json(),
        }
    )
    return doc

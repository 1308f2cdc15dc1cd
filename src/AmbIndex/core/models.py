from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence


_REQUIRED_KEYS = ("id", "pubkey", "created_at", "kind")


@dataclass(frozen=True, slots=True)
class NostrEvent:
    """Internal canonical Nostr event.

    Mirrors the NIP-01 event object. Signatures are carried as-is and never
    verified here.

    Attributes:
        id: Hex event id.
        pubkey: Hex public key of the author.
        created_at: Unix timestamp in seconds.
        kind: Event kind (30142 for AMB learning resources).
        tags: Tags as tuples of strings; index 0 is the tag name.
        content: Event content.
        sig: Hex signature.
    """

    id: str
    pubkey: str
    created_at: int
    kind: int
    tags: Sequence[Sequence[str]] = ()
    content: str = ""
    sig: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(tuple(tag) for tag in self.tags))

    def tag_value(self, name: str) -> Optional[str]:
        """Return the first value of the first tag named ``name``.

        Args:
            name: Tag name, e.g. ``d``.

        Returns:
            Tag value, or None when no such tag with a value exists.
        """
        for tag in self.tags:
            if len(tag) >= 2 and tag[0] == name:
                return tag[1]
        return None

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 JSON object for this event."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }

    def to_json(self) -> str:
        """Serialize the event as compact JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NostrEvent:
        """Build an event from a decoded JSON object.

        Args:
            data: Mapping with NIP-01 event keys.

        Returns:
            Parsed event.

        Raises:
            ValueError: If keys are missing or values have the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError("event must be a JSON object")
        missing = [key for key in _REQUIRED_KEYS if key not in data]
        if missing:
            raise ValueError(f"event is missing keys: {missing}")

        for key in ("id", "pubkey"):
            if not isinstance(data[key], str):
                raise ValueError(f"event.{key} must be a string")
        for key in ("created_at", "kind"):
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"event.{key} must be an integer")

        content = data.get("content", "")
        sig = data.get("sig", "")
        if not isinstance(content, str) or not isinstance(sig, str):
            raise ValueError("event.content and event.sig must be strings")

        raw_tags = data.get("tags") or []
        if not isinstance(raw_tags, list):
            raise ValueError("event.tags must be a list")
        tags: list[tuple[str, ...]] = []
        for idx, tag in enumerate(raw_tags):
            if not isinstance(tag, list) or not all(isinstance(item, str) for item in tag):
                raise ValueError(f"event.tags[{idx}] must be a list of strings")
            tags.append(tuple(tag))

        return cls(
            id=data["id"],
            pubkey=data["pubkey"],
            created_at=data["created_at"],
            kind=data["kind"],
            tags=tuple(tags),
            content=content,
            sig=sig,
        )

    @classmethod
    def from_json(cls, text: str) -> NostrEvent:
        """Parse an event from its JSON text.

        Raises:
            ValueError: If the text is not valid JSON or not a valid event.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid event JSON: {e}") from e
        return cls.from_dict(data)


@dataclass(frozen=True, slots=True)
class EventFilter:
    """Subset of a Nostr REQ filter understood by the search backend.

    Attributes:
        search: NIP-50 search string.
        limit: Maximum number of events to return, if any.
    """

    search: str = ""
    limit: Optional[int] = None

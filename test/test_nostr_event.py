"""Tests for the Nostr event model."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AmbIndex.core.models import NostrEvent


_EVENT = {
    "id": "a" * 64,
    "pubkey": "b" * 64,
    "created_at": 1_700_000_000,
    "kind": 30142,
    "tags": [["d", "res-1"], ["name", "Bruchrechnung"], ["d", "ignored"]],
    "content": "Über Brüche",
    "sig": "c" * 128,
}


class TestNostrEvent(unittest.TestCase):
    def test_json_round_trip_keeps_key_order_and_unicode(self) -> None:
        event = NostrEvent.from_dict(_EVENT)

        text = event.to_json()

        self.assertEqual(list(json.loads(text)), ["id", "pubkey", "created_at", "kind", "tags", "content", "sig"])
        self.assertIn("Über Brüche", text)
        self.assertNotIn(", ", text)
        self.assertEqual(NostrEvent.from_json(text), event)

    def test_tag_value_returns_first_match(self) -> None:
        event = NostrEvent.from_dict(_EVENT)

        self.assertEqual(event.tag_value("d"), "res-1")
        self.assertEqual(event.tag_value("name"), "Bruchrechnung")
        self.assertIsNone(event.tag_value("image"))

    def test_optional_keys_default(self) -> None:
        event = NostrEvent.from_dict({"id": "x", "pubkey": "y", "created_at": 1, "kind": 1})

        self.assertEqual(event.tags, ())
        self.assertEqual(event.content, "")
        self.assertEqual(event.sig, "")

    def test_invalid_events_raise_value_error(self) -> None:
        bad_inputs = [
            {"pubkey": "y", "created_at": 1, "kind": 1},
            {**_EVENT, "kind": "30142"},
            {**_EVENT, "created_at": True},
            {**_EVENT, "tags": [["d", 1]]},
            {**_EVENT, "tags": "d"},
            ["not", "an", "object"],
        ]
        for data in bad_inputs:
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    NostrEvent.from_dict(data)  # type: ignore[arg-type]

    def test_invalid_json_raises_value_error(self) -> None:
        with self.assertRaises(ValueError):
            NostrEvent.from_json("{not json")


if __name__ == "__main__":
    unittest.main()

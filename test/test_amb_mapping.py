"""Tests for Nostr event to AMB document mapping."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from AmbIndex.core.amb import nostr_to_amb
from AmbIndex.core.models import NostrEvent


def _make_event(*tags: list[str]) -> NostrEvent:
    return NostrEvent(
        id="e" * 64,
        pubkey="p" * 64,
        created_at=1_700_000_000,
        kind=30142,
        tags=[["d", "test-resource-id"], *tags],
        content="",
        sig="s" * 128,
    )


class TestNostrToAmbBasics(unittest.TestCase):
    def test_basic_fields_and_event_metadata(self) -> None:
        event = _make_event(["name", "Test Resource"], ["description", "This is a test resource"])

        doc = nostr_to_amb(event)

        self.assertEqual(doc["id"], event.id)
        self.assertEqual(doc["d"], "test-resource-id")
        self.assertEqual(doc["name"], "Test Resource")
        self.assertEqual(doc["description"], "This is a test resource")
        self.assertEqual(doc["type"], ["LearningResource"])
        self.assertEqual(doc["eventID"], event.id)
        self.assertEqual(doc["eventPubKey"], event.pubkey)
        self.assertEqual(doc["eventKind"], 30142)
        self.assertEqual(doc["eventSignature"], event.sig)
        self.assertEqual(doc["eventCreatedAt"], 1_700_000_000)
        self.assertEqual(doc["eventContent"], "")
        self.assertEqual(NostrEvent.from_json(doc["eventRaw"]), event)

    def test_document_is_json_serializable(self) -> None:
        event = _make_event(["creator", "http://author1.org", "Autorin 1", "Person"], ["keywords", "Französisch"])

        encoded = json.dumps(nostr_to_amb(event), ensure_ascii=False)

        self.assertIn("Französisch", encoded)

    def test_none_event_raises(self) -> None:
        with self.assertRaises(ValueError):
            nostr_to_amb(None)

    def test_empty_optional_fields_are_omitted(self) -> None:
        doc = nostr_to_amb(_make_event())

        for key in ("creator", "about", "keywords", "license", "isAccessibleForFree", "trailer"):
            self.assertNotIn(key, doc)

    def test_short_and_unknown_tags_are_ignored(self) -> None:
        doc = nostr_to_amb(_make_event(["name"], ["unknown", "x"], ["creator", "only-id"]))

        self.assertEqual(doc["name"], "")
        self.assertNotIn("unknown", doc)
        self.assertNotIn("creator", doc)

    def test_type_tag_replaces_default(self) -> None:
        doc = nostr_to_amb(_make_event(["type", "LearningResource", "VideoObject"]))

        self.assertEqual(doc["type"], ["LearningResource", "VideoObject"])


class TestNostrToAmbTags(unittest.TestCase):
    def test_about(self) -> None:
        doc = nostr_to_amb(_make_event(["about", "http://w3id.org/kim/schulfaecher/s1009", "Französisch", "de"]))

        self.assertEqual(
            doc["about"],
            [{"id": "http://w3id.org/kim/schulfaecher/s1009", "prefLabel": "Französisch", "inLanguage": "de"}],
        )

    def test_keywords(self) -> None:
        doc = nostr_to_amb(_make_event(["keywords", "Französisch", "Niveau A2", "Sprache"]))

        self.assertEqual(doc["keywords"], ["Französisch", "Niveau A2", "Sprache"])

    def test_in_language(self) -> None:
        doc = nostr_to_amb(_make_event(["inLanguage", "fr"], ["inLanguage", "de"]))

        self.assertEqual(doc["inLanguage"], ["fr", "de"])

    def test_image_and_duration(self) -> None:
        image_url = "https://www.tutory.de/worksheet/fbbadf1a.jpg?width=1000"
        doc = nostr_to_amb(_make_event(["image", image_url], ["duration", "PT30M"]))

        self.assertEqual(doc["image"], image_url)
        self.assertEqual(doc["duration"], "PT30M")

    def test_creator_with_affiliation(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["creator", "http://author1.org", "Autorin 1", "Person"],
                ["creator", "http://author2.org", "Autorin 2", "Person", "Uni A", "Organization", "http://uni-a.org"],
            )
        )

        self.assertEqual(len(doc["creator"]), 2)
        self.assertEqual(doc["creator"][0], {"id": "http://author1.org", "name": "Autorin 1", "type": "Person"})
        self.assertEqual(
            doc["creator"][1]["affiliation"],
            {"name": "Uni A", "type": "Organization", "id": "http://uni-a.org"},
        )

    def test_contributor(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["contributor", "http://author1.org", "Autorin 1", "Person"],
                ["contributor", "http://author2.org", "Autorin 2"],
            )
        )

        self.assertEqual(doc["contributor"], [{"id": "http://author1.org", "name": "Autorin 1", "type": "Person"}])

    def test_dates(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["dateCreated", "2019-07-02"],
                ["datePublished", "2019-07-03"],
                ["dateModified", "2019-07-04"],
            )
        )

        self.assertEqual(doc["dateCreated"], "2019-07-02")
        self.assertEqual(doc["datePublished"], "2019-07-03")
        self.assertEqual(doc["dateModified"], "2019-07-04")

    def test_publisher_and_funder(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["publisher", "http://publisher1.org", "Publisher 1", "Person"],
                ["publisher", "http://publisher2.org", "Publisher 2"],
                ["funder", "http://funder1.org", "Funder 1", "Organization"],
            )
        )

        self.assertEqual(
            doc["publisher"],
            [
                {"id": "http://publisher1.org", "name": "Publisher 1", "type": "Person"},
                {"id": "http://publisher2.org", "name": "Publisher 2"},
            ],
        )
        self.assertEqual(doc["funder"], [{"id": "http://funder1.org", "name": "Funder 1", "type": "Organization"}])

    def test_is_accessible_for_free(self) -> None:
        for value, expected in (("true", True), ("1", True), ("false", False), ("no", False)):
            with self.subTest(value=value):
                doc = nostr_to_amb(_make_event(["isAccessibleForFree", value]))
                self.assertEqual(doc.get("isAccessibleForFree", False), expected)

    def test_license(self) -> None:
        doc = nostr_to_amb(_make_event(["license", "https://creativecommons.org/publicdomain/zero/1.0/", "CC-0"]))

        self.assertEqual(doc["license"], {"id": "https://creativecommons.org/publicdomain/zero/1.0/", "name": "CC-0"})

    def test_single_vocabularies(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["conditionsOfAccess", "http://w3id.org/kim/conditionsOfAccess/no_login", "Kein Login", "de"],
                ["interactivityType", "http://purl.org/dcx/lrmi-vocabs/interactivityType/active", "aktiv", "de"],
            )
        )

        self.assertEqual(doc["conditionsOfAccess"]["prefLabel"], "Kein Login")
        self.assertEqual(doc["interactivityType"]["id"], "http://purl.org/dcx/lrmi-vocabs/interactivityType/active")

    def test_vocabulary_lists(self) -> None:
        for tag_name in (
            "learningResourceType",
            "audience",
            "teaches",
            "assesses",
            "competencyRequired",
            "educationalLevel",
        ):
            with self.subTest(tag=tag_name):
                doc = nostr_to_amb(
                    _make_event(
                        [tag_name, "http://example.org/1", "Zuhören", "de"],
                        [tag_name, "http://example.org/2", "Sprechen", "en"],
                        [tag_name, "http://example.org/3", "incomplete"],
                    )
                )
                self.assertEqual(
                    doc[tag_name],
                    [
                        {"id": "http://example.org/1", "prefLabel": "Zuhören", "inLanguage": "de"},
                        {"id": "http://example.org/2", "prefLabel": "Sprechen", "inLanguage": "en"},
                    ],
                )

    def test_relations(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["isBasedOn", "http://an-awesome-resource.org", "Französisch I"],
                ["isPartOf", "http://whole.org", "Whole", "PresentationDigitalDocument"],
                ["hasPart", "http://part1.org", "Part 1", "LearningResource"],
            )
        )

        self.assertEqual(doc["isBasedOn"], [{"id": "http://an-awesome-resource.org", "name": "Französisch I"}])
        self.assertEqual(
            doc["isPartOf"],
            [{"id": "http://whole.org", "name": "Whole", "type": "PresentationDigitalDocument"}],
        )
        self.assertEqual(doc["hasPart"][0]["name"], "Part 1")

    def test_trailer(self) -> None:
        doc = nostr_to_amb(
            _make_event(
                ["trailer", "https://example.org/t.mp4", "VideoObject", "video/mp4", "1024", "abc", "", "128kbps"],
            )
        )

        self.assertEqual(
            doc["trailer"],
            [
                {
                    "contentUrl": "https://example.org/t.mp4",
                    "type": "VideoObject",
                    "encodingFormat": "video/mp4",
                    "contentSize": "1024",
                    "sha256": "abc",
                    "bitrate": "128kbps",
                }
            ],
        )


if __name__ == "__main__":
    unittest.main()

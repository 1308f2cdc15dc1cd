"""Smoke test for AmbIndex CLI.

Run:
  python test/smoke_test.py

This script patches the Typesense HTTP client to avoid network access and
validates that the CLI can execute a basic search and render one result.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


def _smoke_payload() -> dict:
    from AmbIndex.core.amb import nostr_to_amb
    from AmbIndex.core.models import NostrEvent

    event = NostrEvent(
        id="1" * 64,
        pubkey="2" * 64,
        created_at=1_700_000_000,
        kind=30142,
        tags=(
            ("d", "https://example.org/smoke"),
            ("name", "Smoke Test Resource"),
            ("keywords", "Mathe"),
        ),
        sig="3" * 128,
    )
    return {"found": 1, "hits": [{"document": nostr_to_amb(event)}]}


def _make_runner() -> CliRunner:
    """Create CliRunner with best-effort stderr capture."""
    try:
        return CliRunner(mix_stderr=True)
    except TypeError:
        # Newer Click versions always mix stderr into output.
        return CliRunner()


def main() -> int:
    from AmbIndex.cli import cli

    runner = _make_runner()
    with patch(
        "AmbIndex.sources.typesense.client.TypesenseApiClient.search",
        return_value=_smoke_payload(),
    ) as search:
        result = runner.invoke(
            cli,
            [
                "--config",
                str(REPO_ROOT / "config" / "default.yml"),
                "search",
                "smoke keywords:Mathe",
                "--limit",
                "1",
                "--format",
                "text",
            ],
            catch_exceptions=False,
        )

    output = result.output
    assert result.exit_code == 0, output
    assert "Search succeeded, found 1 events" in output, output
    assert "Smoke Test Resource" in output, output
    params = search.call_args.args[1]
    assert params["filter_by"] == "keywords:Mathe", params
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

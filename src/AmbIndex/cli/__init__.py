"""CLI package for AmbIndex command orchestration.

Click definitions live in ``ui``, command logic in ``commands`` and lifecycle
handling in ``runner``.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from AmbIndex.cli.runner import CommandRunner
from AmbIndex.cli.ui import cli


def main() -> None:
    """Run AmbIndex CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()

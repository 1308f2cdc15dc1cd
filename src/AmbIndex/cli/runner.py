"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

from typing import Callable

import click

from AmbIndex.cli.commands import Command
from AmbIndex.config import AppConfig
from AmbIndex.services import EventIndexService, create_event_service
from AmbIndex.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, service creation and cleanup, and turns
    command failures into ``click.Abort``.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run(self, action: str, build: Callable[[EventIndexService], Command]) -> None:
        """Execute a command that talks to the search backend.

        Args:
            action: The CLI command name (e.g., 'search').
            build: Builds the command from the event service.

        Raises:
            click.Abort: When the command fails.
        """
        self._configure_logging(action)
        service: EventIndexService | None = None
        try:
            service = create_event_service(self.config)
            self._echo(build(service).execute())
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
        finally:
            if service is not None:
                service.close()

    def run_local(self, action: str, command: Command) -> None:
        """Execute a command that needs no backend connection.

        Raises:
            click.Abort: When the command fails.
        """
        self._configure_logging(action)
        try:
            self._echo(command.execute())
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    @staticmethod
    def _echo(output: str) -> None:
        if output:
            click.echo(output, nl=False)

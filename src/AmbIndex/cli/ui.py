"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to the runner.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from AmbIndex.cli.commands import CompileCommand, DeleteCommand, IndexCommand, InitCommand, SearchCommand
from AmbIndex.cli.runner import CommandRunner
from AmbIndex.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults
from AmbIndex.renderers import OUTPUT_FORMATS


@click.group(help="AmbIndex: index and search AMB Nostr events in Typesense.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over the default config when present).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config, so
    the Typesense API key can live there.
    """
    load_dotenv()

    try:
        if config_path != DEFAULT_CONFIG_PATH and DEFAULT_CONFIG_PATH.exists():
            cfg = load_config_with_defaults(config_path)
        else:
            cfg = load_config(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid config {config_path}: {e}") from e
    ctx.obj = CommandRunner(cfg)


@cli.command("init")
@click.pass_context
def init_cmd(ctx: click.Context) -> None:
    """Create the Typesense collection if it does not exist."""
    runner: CommandRunner = ctx.obj
    runner.run(ctx.command.name, lambda service: InitCommand(service=service))


@cli.command("index")
@click.argument("path", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.pass_context
def index_cmd(ctx: click.Context, path: Path) -> None:
    """Index events from PATH (JSON array or one event per line)."""
    runner: CommandRunner = ctx.obj
    runner.run(ctx.command.name, lambda service: IndexCommand(service=service, path=path))


@cli.command("delete")
@click.option("--d", "d_tag", required=True, help="d tag of the event to delete.")
@click.option("--pubkey", required=True, help="Author public key (hex).")
@click.pass_context
def delete_cmd(ctx: click.Context, d_tag: str, pubkey: str) -> None:
    """Delete the indexed document of an addressable event."""
    runner: CommandRunner = ctx.obj
    runner.run(ctx.command.name, lambda service: DeleteCommand(service=service, d=d_tag, pubkey=pubkey))


@cli.command("search")
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum number of events.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def search_cmd(ctx: click.Context, query: str, limit: int | None, output_format: str) -> None:
    """Search events with free text and field:value filters.

    Example: amb-index search '"open data" keywords:Mathe creator.name:Ada'
    """
    runner: CommandRunner = ctx.obj
    runner.run(
        ctx.command.name,
        lambda service: SearchCommand(service=service, search=query, limit=limit, output_format=output_format),
    )


@cli.command("compile")
@click.argument("query")
@click.pass_context
def compile_cmd(ctx: click.Context, query: str) -> None:
    """Print the Typesense q and filter_by a search string compiles to."""
    runner: CommandRunner = ctx.obj
    runner.run_local(ctx.command.name, CompileCommand(search=query))

# ABOUTME: CLI package for gamemeta, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from gamemeta.cli.commands import clear_cmd, hltb_cmd, lookup_cmd, price_cmd, score_cmd
from gamemeta.config import Settings
from gamemeta.core.service import GameMetaService


def configure_logging(debug: bool) -> None:
    """Route library logging through Rich; DEBUG when asked, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="gamemeta")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for cache documents (default: $GAMEMETA_DATA_DIR or ~/.gamemeta).",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, data_dir: Path | None) -> None:
    """gamemeta - completion times, critic scores and prices for games."""
    ctx.ensure_object(dict)
    configure_logging(debug or Settings.from_env().debug)
    ctx.obj["data_dir"] = data_dir
    ctx.obj.setdefault("service_factory", GameMetaService)


cli.add_command(hltb_cmd.hltb)
cli.add_command(score_cmd.score)
cli.add_command(price_cmd.price)
cli.add_command(lookup_cmd.lookup)
cli.add_command(clear_cmd.clear_cache)

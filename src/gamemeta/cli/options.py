# ABOUTME: Shared Click options and helpers for gamemeta CLI commands.
# ABOUTME: Provides the --region flag and access to the service factory on the context.

import click

from gamemeta.core.service import GameMetaService

region_option = click.option(
    "-r",
    "--region",
    default=None,
    help="Store region as a country code (default: us).",
)


def make_service(ctx: click.Context) -> GameMetaService:
    """Build a service from the factory and data directory stored by the root group."""
    factory = ctx.obj["service_factory"]
    return factory(data_dir=ctx.obj.get("data_dir"))


def format_hours(hours: float | None) -> str:
    return f"{hours:g} h" if hours is not None else "[dim]no data[/dim]"


def format_score(score: float | None) -> str:
    return f"{score:g}" if score is not None else "[dim]no data[/dim]"

# ABOUTME: The `gamemeta price` command for current Steam store prices.
# ABOUTME: Looks up a single app id in a region; no caching.

import asyncio

import click
from rich.console import Console

from gamemeta.cli.options import make_service, region_option
from gamemeta.metadata.types import Price

console = Console()


@click.command("price")
@click.argument("app_id", type=int)
@region_option
@click.pass_context
def price(ctx: click.Context, app_id: int, region: str | None) -> None:
    """Show the current Steam price for APP_ID."""

    async def run() -> Price | None:
        async with make_service(ctx) as service:
            return await service.resolve_price(app_id, region)

    result = asyncio.run(run())
    if result is None:
        console.print(f"[yellow]No price available for app {app_id}.[/yellow]")
        return
    console.print(f"App {app_id}: {result.amount:.2f} {result.currency}")

# ABOUTME: The `gamemeta hltb` command for main-story completion times.
# ABOUTME: Resolves a title through the cache, the HLTB data route, and the HTML fallback.

import asyncio

import click
from rich.console import Console

from gamemeta.cli.options import format_hours, make_service
from gamemeta.metadata.types import CompletionTime

console = Console()


@click.command("hltb")
@click.argument("title")
@click.pass_context
def hltb(ctx: click.Context, title: str) -> None:
    """Show the main-story completion time for TITLE."""

    async def run() -> CompletionTime:
        async with make_service(ctx) as service:
            return await service.resolve_completion_time(title)

    result = asyncio.run(run())
    console.print(f"{title}: {format_hours(result.hours)} [dim]({result.provenance})[/dim]")

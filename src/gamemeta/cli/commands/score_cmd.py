# ABOUTME: The `gamemeta score` command for OpenCritic critic scores.
# ABOUTME: Fails with exit code 1 when the gateway API key is not configured.

import asyncio

import click
from rich.console import Console

from gamemeta.cli.options import format_score, make_service
from gamemeta.config import ConfigurationError

console = Console()


@click.command("score")
@click.argument("title")
@click.pass_context
def score(ctx: click.Context, title: str) -> None:
    """Show the top critic score (0-100) for TITLE."""

    async def run() -> float | None:
        async with make_service(ctx) as service:
            return await service.resolve_critic_score(title)

    try:
        value = asyncio.run(run())
    except ConfigurationError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    console.print(f"{title}: {format_score(value)}")

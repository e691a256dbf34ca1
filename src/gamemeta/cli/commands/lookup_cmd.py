# ABOUTME: The `gamemeta lookup` command combining every lookup for one game.
# ABOUTME: Runs completion time, critic score, and (optionally) price concurrently.

import asyncio
from dataclasses import dataclass

import click
from rich.console import Console
from rich.table import Table

from gamemeta.cli.options import format_hours, format_score, make_service, region_option
from gamemeta.config import ConfigurationError
from gamemeta.core.service import GameMetaService
from gamemeta.metadata.types import CompletionTime, Price, price_per_hour

console = Console()


@dataclass
class _LookupResult:
    completion: CompletionTime
    score: float | None
    score_error: str | None
    price: Price | None


async def _score_or_error(service: GameMetaService, title: str) -> tuple[float | None, str | None]:
    try:
        return await service.resolve_critic_score(title), None
    except ConfigurationError as exc:
        return None, str(exc)


async def _no_price() -> None:
    return None


@click.command("lookup")
@click.argument("title")
@click.option("--app-id", type=int, default=None, help="Steam app id for a price lookup.")
@region_option
@click.pass_context
def lookup(ctx: click.Context, title: str, app_id: int | None, region: str | None) -> None:
    """Show completion time, critic score, and price for TITLE."""

    async def run() -> _LookupResult:
        async with make_service(ctx) as service:
            price_task = service.resolve_price(app_id, region) if app_id is not None else _no_price()
            completion, (score, score_error), price = await asyncio.gather(
                service.resolve_completion_time(title),
                _score_or_error(service, title),
                price_task,
            )
        return _LookupResult(completion, score, score_error, price)

    result = asyncio.run(run())

    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row(
        "Main story",
        f"{format_hours(result.completion.hours)} [dim]({result.completion.provenance})[/dim]",
    )
    if result.score_error:
        table.add_row("Critic score", f"[red]{result.score_error}[/red]")
    else:
        table.add_row("Critic score", format_score(result.score))
    if app_id is not None:
        if result.price is None:
            table.add_row("Price", "[dim]no data[/dim]")
        else:
            table.add_row("Price", f"{result.price.amount:.2f} {result.price.currency}")
            per_hour = price_per_hour(result.price.amount, result.completion.hours)
            if per_hour is not None:
                table.add_row("Per hour", f"{per_hour} {result.price.currency}")

    console.print(table)

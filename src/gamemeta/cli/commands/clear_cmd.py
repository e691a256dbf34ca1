# ABOUTME: The `gamemeta clear-cache` command for dropping cached lookups.
# ABOUTME: Deletes the completion-time and/or critic-score cache documents.

import click
from rich.console import Console

from gamemeta.cli.options import make_service

console = Console()


@click.command("clear-cache")
@click.argument(
    "which",
    type=click.Choice(["hltb", "opencritic", "all"]),
    default="all",
)
@click.pass_context
def clear_cache(ctx: click.Context, which: str) -> None:
    """Delete cached completion times, critic scores, or both."""
    service = make_service(ctx)
    if which in ("hltb", "all"):
        service.clear_completion_time_cache()
    if which in ("opencritic", "all"):
        service.clear_critic_score_cache()
    console.print(f"[green]Cleared {which} cache.[/green]")

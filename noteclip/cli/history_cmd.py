"""noteclip stats / history: usage counters and the clip log."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console
from rich.table import Table

from noteclip.config.store import SettingsStore


console = Console()


async def _show_stats() -> None:
    store = SettingsStore.open()
    settings = await store.load()

    table = Table(title="Usage", border_style="bright_cyan", header_style="bold bright_cyan")
    table.add_column("Action", style="bold")
    table.add_column("Count", justify="right")
    for action, count in settings.stats.items():
        table.add_row(action, str(count))
    console.print(table)


async def _show_history(limit: int) -> None:
    store = SettingsStore.open()
    entries = await store.history.get_history()

    if not entries:
        console.print("[dim]no history yet.[/dim]")
        return

    table = Table(
        title=f"History ({len(entries)} entries)",
        border_style="bright_cyan",
        header_style="bold bright_cyan",
        row_styles=["", "dim"],
    )
    table.add_column("When", style="dim")
    table.add_column("Action")
    table.add_column("Title", style="bold")
    table.add_column("URL")
    for entry in entries[:limit]:
        table.add_row(entry.datetime, entry.action, entry.title or "", entry.url)
    console.print(table)


async def _clear_history() -> None:
    store = SettingsStore.open()
    await store.history.clear()
    console.print("[green]✓[/green] history cleared.")


@click.command("stats")
def stats_cmd() -> None:
    """Show how often each clip action was used."""
    asyncio.run(_show_stats())


@click.command("history")
@click.option("--limit", "-n", default=20, show_default=True, help="Entries to show.")
@click.option("--clear", is_flag=True, help="Delete the clip history.")
def history_cmd(limit: int, clear: bool) -> None:
    """Show recent clips, newest first."""
    if clear:
        asyncio.run(_clear_history())
    else:
        asyncio.run(_show_history(limit))

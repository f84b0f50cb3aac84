"""noteclip models / providers: list configured models and providers."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console
from rich.table import Table

from noteclip.config.store import SettingsStore


console = Console()


def mask_key(key: str) -> str:
    """Show only the last four characters of an API key."""
    if not key:
        return "—"
    if len(key) <= 8:
        return "•" * len(key)
    return "•" * 8 + key[-4:]


async def _list_models() -> None:
    store = SettingsStore.open()
    settings = await store.load()

    if not settings.models:
        console.print("[yellow]no models configured.[/yellow]")
        return

    table = Table(
        title="Models",
        border_style="bright_cyan",
        header_style="bold bright_cyan",
        row_styles=["", "dim"],
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Model ID", style="bold")
    table.add_column("Name")
    table.add_column("Provider")
    table.add_column("Enabled", justify="center")
    table.add_column("", width=3)

    for i, model in enumerate(settings.models, 1):
        provider = store.provider_for(model)
        if provider is None:
            provider_str = f"[red]{model.provider_id or 'unresolved'}[/red]"
        else:
            provider_str = provider.name
        is_current = model.id == settings.interpreter_model
        table.add_row(
            str(i),
            model.id,
            model.name,
            provider_str,
            "[green]yes[/green]" if model.enabled else "[dim]no[/dim]",
            "→" if is_current else "",
            style="bold bright_green" if is_current else "",
        )

    console.print()
    console.print(table)
    console.print(f"[dim]interpreter model: [bold]{settings.interpreter_model}[/bold][/dim]")


async def _list_providers() -> None:
    store = SettingsStore.open()
    settings = await store.load()

    table = Table(
        title="Providers",
        border_style="bright_cyan",
        header_style="bold bright_cyan",
    )
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Base URL", style="dim")
    table.add_column("API key")

    for provider in settings.providers:
        table.add_row(
            provider.id,
            provider.name,
            provider.base_url or "—",
            mask_key(provider.api_key),
        )

    console.print()
    console.print(table)


@click.command("models")
def models_cmd() -> None:
    """List configured AI models and their providers."""
    asyncio.run(_list_models())


@click.command("providers")
def providers_cmd() -> None:
    """List configured AI providers."""
    asyncio.run(_list_providers())

"""noteclip storage / migrate: inspect raw storage and run migrations."""

from __future__ import annotations

import asyncio
import json

import click
from rich.console import Console
from rich.syntax import Syntax

from noteclip.config.migration import needs_migration
from noteclip.config.store import SettingsStore


console = Console()


async def _dump(key: str | None) -> None:
    store = SettingsStore.open()
    data = await store.dump(key)
    raw = json.dumps(data, indent=2, default=str)
    console.print(Syntax(raw, "json", theme="monokai"))


async def _migrate() -> bool:
    store = SettingsStore.open()
    data = await store.dump()
    if not needs_migration(data):
        console.print("[dim]settings are up to date.[/dim]")
        return True

    console.print("[dim]legacy settings found, migrating…[/dim]")
    settings = await store.load()
    if store.migration_pending:
        console.print("[red]migration failed; it will be retried on the next load.[/red]")
        return False
    await store.save()
    console.print(
        f"[green]✓[/green] migrated {len(settings.models)} models "
        f"and {len(settings.providers)} providers."
    )
    return True


@click.command("storage")
@click.argument("key", required=False, default=None)
def storage_cmd(key: str | None) -> None:
    """Dump the raw sync storage, or a single KEY of it."""
    asyncio.run(_dump(key))


@click.command("migrate")
def migrate_cmd() -> None:
    """Migrate settings written by an older version."""
    if not asyncio.run(_migrate()):
        raise SystemExit(1)

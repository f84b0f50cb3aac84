"""noteclip config: view, edit, and reset the stored settings."""

from __future__ import annotations

import asyncio
import json
import os
import subprocess

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from noteclip.config.defaults import sync_store_path
from noteclip.config.store import SettingsStore


console = Console()


async def _show_config() -> None:
    """Pretty-print the effective settings."""
    store = SettingsStore.open()
    settings = await store.load()
    raw = json.dumps(settings.projection(), indent=2, default=str)
    syntax = Syntax(raw, "json", theme="monokai", line_numbers=True)
    console.print(Panel(syntax, title=str(sync_store_path()), border_style="bright_cyan"))


async def _open_config() -> None:
    """Open the sync store in the user's editor."""
    store = SettingsStore.open()
    await store.load()
    await store.save()  # Ensure the file exists with defaults
    editor = os.environ.get("EDITOR", "nano")
    subprocess.call([editor, str(sync_store_path())])


async def _set_value(key: str, value: str) -> bool:
    """Set a single settings field. Returns False for unknown fields."""
    store = SettingsStore.open()
    await store.load()

    # Try to parse as JSON (for booleans, numbers, lists)
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    try:
        await store.save({key: parsed})
    except KeyError:
        console.print(f"[red]unknown setting:[/red] {key}")
        return False
    console.print(f"[green]✓[/green] set [bold]{key}[/bold] = {parsed!r}")
    return True


async def _reset_config() -> None:
    """Reset settings to defaults."""
    store = SettingsStore.open()
    await store.load()
    await store.reset()
    console.print("[green]✓[/green] settings reset to defaults.")


@click.command("config")
@click.argument("action", required=False, default=None)
@click.argument("args", nargs=-1)
def config_cmd(action: str | None, args: tuple[str, ...]) -> None:
    """View or edit the noteclip settings.

    \b
    Actions:
      (none)    open the settings store in $EDITOR
      show      pretty-print current settings
      set K V   set a settings field, e.g. silent_open true
      reset     restore defaults
      path      print where settings are stored
    """
    if action is None:
        asyncio.run(_open_config())
    elif action == "show":
        asyncio.run(_show_config())
    elif action == "set":
        if len(args) < 2:
            console.print("[red]usage:[/red] noteclip config set <key> <value>")
            raise SystemExit(1)
        if not asyncio.run(_set_value(args[0], " ".join(args[1:]))):
            raise SystemExit(1)
    elif action == "reset":
        asyncio.run(_reset_config())
    elif action == "path":
        click.echo(str(sync_store_path()))
    else:
        console.print(f"[red]unknown action:[/red] {action}")
        raise SystemExit(1)

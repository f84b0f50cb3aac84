"""noteclip frontmatter: render properties the way a clip would."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from noteclip.clip.frontmatter import Property, serialize
from noteclip.config.defaults import PROPERTY_TYPES
from noteclip.config.store import SettingsStore


console = Console()


def _split_pair(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}")
    return name, value


async def _render(pairs: tuple[str, ...], overrides: tuple[str, ...]) -> None:
    store = SettingsStore.open()
    settings = await store.load()

    types = dict(settings.property_types)
    for raw in overrides:
        name, type_ = _split_pair(raw)
        if type_ not in PROPERTY_TYPES:
            raise click.BadParameter(f"unknown property type {type_!r}")
        types[name] = type_

    properties = []
    for raw in pairs:
        name, value = _split_pair(raw)
        properties.append(Property(name=name, value=value, type=types.get(name, "text")))

    block = serialize(properties, types)
    if not block:
        console.print("[dim]no frontmatter.[/dim]")
        return
    click.echo(block, nl=False)


@click.command("frontmatter")
@click.argument("properties", nargs=-1)
@click.option(
    "--type",
    "-t",
    "overrides",
    multiple=True,
    help="Override a property type, e.g. -t published=date.",
)
def frontmatter_cmd(properties: tuple[str, ...], overrides: tuple[str, ...]) -> None:
    """Render NAME=VALUE properties as a frontmatter block."""
    asyncio.run(_render(properties, overrides))

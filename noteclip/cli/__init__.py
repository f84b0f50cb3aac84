"""noteclip CLI: main entry point.

Registers all subcommands under the ``noteclip`` group.
"""

from __future__ import annotations

import logging

import click

from noteclip.cli.config_cmd import config_cmd
from noteclip.cli.frontmatter_cmd import frontmatter_cmd
from noteclip.cli.history_cmd import history_cmd, stats_cmd
from noteclip.cli.models_cmd import models_cmd, providers_cmd
from noteclip.cli.storage_cmd import migrate_cmd, storage_cmd


@click.group(invoke_without_command=True)
@click.version_option(package_name="noteclip")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """noteclip: web clipper settings and note tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(config_cmd, "config")
cli.add_command(models_cmd, "models")
cli.add_command(providers_cmd, "providers")
cli.add_command(stats_cmd, "stats")
cli.add_command(history_cmd, "history")
cli.add_command(storage_cmd, "storage")
cli.add_command(migrate_cmd, "migrate")
cli.add_command(frontmatter_cmd, "frontmatter")


def main() -> None:
    """Package entry point."""
    cli()

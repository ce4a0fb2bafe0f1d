"""CLI command definitions for provisio."""

import click

from provisio import __version__
from provisio.commands.check import check
from provisio.commands.config import config
from provisio.commands.list import list_catalogs
from provisio.commands.run import run


@click.group()
@click.version_option(__version__, prog_name="provisio")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.pass_context
def cli(ctx, debug):
    """Provision a developer workstation from install catalogs."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(run)
cli.add_command(check)
cli.add_command(list_catalogs, name="list")
cli.add_command(config)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()

"""List command implementation."""

import click

from provisio import setup_logging
from provisio.commands.utils import RISK_ICONS, load_catalogs_or_exit


@click.command(name="list")
@click.option("--verbose", "-v", is_flag=True, help="Show the items of each catalog")
@click.pass_context
def list_catalogs(ctx, verbose: bool):
    """List available catalogs."""
    setup_logging(ctx.obj.get("debug", False))
    catalogs = load_catalogs_or_exit()

    for name in sorted(catalogs):
        catalog = catalogs[name]
        click.echo(f"{name:14s} {len(catalog.items)} item(s) - {catalog.description}")
        if verbose:
            for spec in catalog.items:
                icon = RISK_ICONS[spec.risk_level.value]
                click.echo(f"  {icon} {spec.name}")
            click.echo("")

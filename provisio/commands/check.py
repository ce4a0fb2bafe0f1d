"""Check command implementation."""

import click

from provisio import setup_logging
from provisio.commands.utils import RISK_ICONS, require_catalog
from provisio.data_loader import build_detector
from provisio.orchestrator import DetectResult
from provisio.paths import get_rc_path
from provisio.rcfile import read_block


@click.command()
@click.argument("catalog_name", metavar="CATALOG")
@click.option("--verbose", "-v", is_flag=True, help="Show install commands")
@click.pass_context
def check(ctx, catalog_name: str, verbose: bool):
    """Show which items of CATALOG are installed. Never installs anything."""
    setup_logging(ctx.obj.get("debug", False))
    catalog = require_catalog(catalog_name)

    missing = 0
    for spec in catalog.items:
        present = build_detector(spec)() == DetectResult.PRESENT
        if present:
            click.echo(f"✅ {spec.name}")
        else:
            missing += 1
            click.echo(f"⚪ {spec.name}: not installed")

        if verbose:
            if spec.description:
                click.echo(f"   {spec.description}")
            if spec.depends_on:
                click.echo(f"   requires: {', '.join(spec.depends_on)}")
            for command in spec.install:
                click.echo(f"   {RISK_ICONS[spec.risk_level.value]} $ {command}")

    if catalog.shell_block:
        rc_path = get_rc_path()
        if read_block(rc_path, catalog.shell_block.marker) is None:
            click.echo(f"⚪ shell integration: not configured in {rc_path}")
        else:
            click.echo(f"✅ shell integration: configured in {rc_path}")

    if missing:
        click.echo(f"\n{missing} item(s) not installed. Run 'provisio run {catalog.name}'.")
    else:
        click.echo("\nAll items are installed.")

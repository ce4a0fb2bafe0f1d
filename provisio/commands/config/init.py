"""Initialize config command implementation."""

import sys

import click

from provisio import format_error, get_catalog_path, get_packaged_catalog_path


@click.command(name="init")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Force re-initialization, overwriting existing catalogs",
)
def config_init(force: bool):
    """Create the user catalog file from the bundled catalogs.

    Writes ~/.config/provisio/catalogs.json (or $PROVISIO_CONFIG).
    Use --force to overwrite an existing file (creates backup first).
    """
    catalog_path = get_catalog_path()

    if catalog_path.exists() and not force:
        click.echo(f"Catalog file already exists: {catalog_path}")
        click.echo("Use --force to re-initialize (creates backup first).")
        sys.exit(1)

    try:
        if catalog_path.exists():
            backup_path = catalog_path.with_suffix(".json.bak")
            click.echo(f"Backing up existing catalogs to {backup_path}...")
            catalog_path.replace(backup_path)

        click.echo(f"Initializing catalogs at {catalog_path}...")
        catalog_path.parent.mkdir(parents=True, exist_ok=True)
        catalog_path.write_text(get_packaged_catalog_path().read_text(encoding="utf-8"))
    except OSError as e:
        click.echo(format_error(f"initialization failed: {e}"), err=True)
        sys.exit(1)

    click.echo("✅ Catalogs initialized successfully")

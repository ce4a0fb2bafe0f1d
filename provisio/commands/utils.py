"""Shared helpers and exit codes for commands."""

import sys

import click

from provisio import ConfigError, format_error, format_suggestion
from provisio.data_loader import Catalog, get_catalog, get_catalogs

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 2
EXIT_CATALOG_NOT_FOUND = 3
EXIT_CONFIG_ERROR = 4
EXIT_INSTALL_FAILED = 5

RISK_ICONS = {"safe": "🟢", "interactive": "🟡", "dangerous": "🔴"}


def load_catalogs_or_exit() -> dict[str, Catalog]:
    try:
        return get_catalogs()
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(EXIT_CONFIG_ERROR)


def require_catalog(name: str) -> Catalog:
    """Return the named catalog, or exit with a hint listing the available ones."""
    catalogs = load_catalogs_or_exit()
    catalog = get_catalog(name)
    if catalog is None:
        available = ", ".join(sorted(catalogs))
        click.echo(
            format_suggestion(
                f"catalog '{name}' not found", f"available catalogs: {available}"
            ),
            err=True,
        )
        sys.exit(EXIT_CATALOG_NOT_FOUND)
    return catalog

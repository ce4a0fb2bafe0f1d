"""Run command implementation."""

import asyncio
import logging
import sys

import click

from provisio import (
    INSTALL_TIMEOUT,
    ConfigError,
    PreconditionError,
    format_error,
    setup_logging,
)
from provisio.commands.utils import (
    EXIT_CONFIG_ERROR,
    EXIT_INSTALL_FAILED,
    EXIT_SUCCESS,
    require_catalog,
)
from provisio.data_loader import Catalog, build_item, select_items
from provisio.orchestrator import (
    ConsentProvider,
    ConsoleReporter,
    Orchestrator,
    RunMode,
    RunReport,
    render_summary,
    summarize,
)
from provisio.paths import get_rc_path
from provisio.shell import apply_shell_integration

_logging = logging.getLogger(__name__)


@click.command()
@click.argument("catalog_name", metavar="CATALOG")
@click.option("--yes", "-y", is_flag=True, help="Auto-accept all prompts")
@click.option(
    "--reinstall",
    "--update",
    "reinstall",
    is_flag=True,
    help="Reinstall/update items that are already installed",
)
@click.option(
    "--only",
    "only",
    multiple=True,
    help="Install only this item (and its prerequisites). Repeatable.",
)
@click.option(
    "--timeout",
    "-t",
    default=INSTALL_TIMEOUT,
    show_default=True,
    help="Per-command timeout in seconds",
)
@click.pass_context
def run(ctx, catalog_name: str, yes: bool, reinstall: bool, only: tuple[str, ...], timeout: int):
    """Install the items of CATALOG that are missing."""
    debug = ctx.obj.get("debug", False)
    setup_logging(debug)

    catalog = require_catalog(catalog_name)
    mode = RunMode(auto_approve=yes, force_reinstall=reinstall)

    try:
        report = asyncio.run(
            run_catalog(catalog, mode, list(only), timeout=timeout, debug=debug)
        )
    except (ConfigError, PreconditionError) as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(EXIT_INSTALL_FAILED if report.has_failures else EXIT_SUCCESS)


def _print_header(catalog: Catalog, mode: RunMode) -> None:
    click.echo("")
    click.secho("=" * 42, fg="magenta")
    click.secho(f"   {catalog.description}", bold=True)
    click.secho("=" * 42, fg="magenta")
    if mode.auto_approve:
        click.secho("  Mode: Auto-accept all", fg="bright_black")
    if mode.force_reinstall:
        click.secho("  Mode: Force reinstall/update", fg="bright_black")


async def run_catalog(
    catalog: Catalog,
    mode: RunMode,
    only: list[str] | None = None,
    timeout: int = INSTALL_TIMEOUT,
    debug: bool = False,
    consent: ConsentProvider | None = None,
) -> RunReport:
    """Orchestrate one catalog and print progress, summary and notes."""
    specs = select_items(catalog, only)
    items = [build_item(spec, timeout=timeout, debug=debug) for spec in specs]
    _logging.debug(f"Running catalog {catalog.name} with {len(items)} item(s)")

    _print_header(catalog, mode)
    orchestrator = Orchestrator(mode, consent=consent, reporter=ConsoleReporter())
    report = await orchestrator.run(items)

    rc_path = get_rc_path()
    try:
        if apply_shell_integration(catalog, report, rc_path):
            click.echo("")
            click.secho(f"✓ Shell integration configured in {rc_path}", fg="green")
    except OSError as e:
        click.echo(format_error(f"could not update {rc_path}: {e}"), err=True)

    render_summary(summarize(report))

    if catalog.notes and not report.has_failures:
        click.echo("")
        for note in catalog.notes:
            click.secho(note, fg="cyan")
    click.echo("")
    return report

"""Outcome aggregation and console reporting."""

import click

from .models import InstallableItem, ItemOutcome, OutcomeKind, RunReport, RunSummary

_SKIPPED = (OutcomeKind.SKIPPED_BY_USER, OutcomeKind.SKIPPED_NO_CONSENT)


def summarize(report: RunReport) -> RunSummary:
    """Partition a report into buckets, preserving order within each."""
    outcomes = report.outcomes
    return RunSummary(
        present=tuple(o for o in outcomes if o.kind == OutcomeKind.ALREADY_PRESENT),
        installed=tuple(o for o in outcomes if o.kind == OutcomeKind.INSTALLED),
        updated=tuple(o for o in outcomes if o.kind == OutcomeKind.UPDATED),
        skipped=tuple(o for o in outcomes if o.kind in _SKIPPED),
        failed=tuple(o for o in outcomes if o.kind == OutcomeKind.FAILED),
    )


class Reporter:
    """Receives progress notifications from the orchestrator. Does nothing."""

    def item_started(self, item: InstallableItem, index: int, total: int) -> None:
        pass

    def item_detected(self, item: InstallableItem, present: bool) -> None:
        pass

    def consent_invalid(self, item: InstallableItem, answer: str) -> None:
        pass

    def item_finished(self, item: InstallableItem, outcome: ItemOutcome) -> None:
        pass


def _describe(outcome: ItemOutcome) -> str:
    if outcome.kind == OutcomeKind.ALREADY_PRESENT:
        return f"{outcome.name} (already installed)"
    if outcome.kind == OutcomeKind.SKIPPED_BY_USER:
        return f"{outcome.name} (user declined)"
    if outcome.kind == OutcomeKind.SKIPPED_NO_CONSENT:
        return f"{outcome.name} ({outcome.reason or 'prerequisite not available'})"
    if outcome.kind == OutcomeKind.FAILED and outcome.reason:
        return f"{outcome.name}: {outcome.reason}"
    return outcome.name


class ConsoleReporter(Reporter):
    def item_started(self, item: InstallableItem, index: int, total: int) -> None:
        click.echo("")
        click.secho(f"[{index}/{total}] {item.name}", bold=True, nl=False)
        if item.description:
            click.secho(f" ({item.description})", fg="bright_black", nl=False)
        click.echo("")

    def item_detected(self, item: InstallableItem, present: bool) -> None:
        if present:
            click.secho("  ✓ Already installed", fg="green")
        else:
            click.secho("  ○ Not installed", fg="yellow")

    def consent_invalid(self, item: InstallableItem, answer: str) -> None:
        click.secho("  ! Invalid input. Please enter 'y' or 'n'", fg="red")

    def item_finished(self, item: InstallableItem, outcome: ItemOutcome) -> None:
        if outcome.kind == OutcomeKind.INSTALLED:
            click.secho("  ✓ Installed successfully", fg="green")
        elif outcome.kind == OutcomeKind.UPDATED:
            click.secho("  ✓ Updated successfully", fg="green")
        elif outcome.kind == OutcomeKind.FAILED:
            click.secho(f"  ✗ Failed: {outcome.reason}", fg="red")
        elif outcome.kind in _SKIPPED:
            click.secho(f"  ○ Skipped: {_describe(outcome)}", fg="bright_black")


def render_summary(summary: RunSummary) -> None:
    click.echo("")
    click.secho("=" * 42, fg="magenta")
    click.secho("   Installation Summary", bold=True)
    click.secho("=" * 42, fg="magenta")

    sections = [
        ("Installed:", summary.installed, "green", "✓"),
        ("Updated:", summary.updated, "cyan", "↑"),
        ("Already installed:", summary.present, "green", "✓"),
        ("Skipped:", summary.skipped, "bright_black", "○"),
        ("Failed:", summary.failed, "red", "✗"),
    ]
    for title, outcomes, color, icon in sections:
        if not outcomes:
            continue
        click.echo("")
        click.secho(title, fg=color)
        for outcome in outcomes:
            click.echo(f"  {click.style(icon, fg=color)} {_describe(outcome)}")

    if summary.failed:
        click.echo("")
        click.secho(
            "Some items failed. You can retry by running the same command again.",
            fg="yellow",
        )


__all__ = [
    "summarize",
    "Reporter",
    "ConsoleReporter",
    "render_summary",
]

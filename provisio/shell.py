"""Shell rc integration for catalogs that define a shell block."""

import logging
from pathlib import Path

from provisio.data_loader import Catalog, ItemSpec, build_detector
from provisio.orchestrator import DetectResult, RunReport
from provisio.orchestrator.detection import find_command
from provisio.rcfile import write_block

_logging = logging.getLogger(__name__)


def _section_applies(section, extra_dirs: tuple[str, ...]) -> bool:
    if section.when_command and not find_command(section.when_command, extra_dirs=extra_dirs):
        return False
    if section.unless_command and find_command(section.unless_command, extra_dirs=extra_dirs):
        return False
    return True


def _is_present(spec: ItemSpec, report: RunReport) -> bool:
    """Trust a satisfied outcome from this run; otherwise ask the system.

    Items outside an --only selection, and items whose reinstall failed,
    may still be installed.
    """
    outcome = report.outcome_for(spec.name)
    if outcome and outcome.kind.satisfied:
        return True
    return build_detector(spec)() == DetectResult.PRESENT


def build_shell_lines(catalog: Catalog, report: RunReport) -> list[str]:
    """Lines for the catalog's rc block given what is now present."""
    lines = [f"# {catalog.description}"]
    extra_dirs = ("~/.local/bin",)

    if catalog.shell_block:
        for section in catalog.shell_block.sections:
            if _section_applies(section, extra_dirs):
                lines.extend(section.lines)

    for spec in catalog.items:
        if spec.shell_init and _is_present(spec, report):
            lines.append(spec.shell_init)

    return lines


def apply_shell_integration(catalog: Catalog, report: RunReport, rc_path: Path) -> bool:
    """Rewrite the catalog's marked rc block after a run that changed something.

    Returns True if the rc file was modified.
    """
    if catalog.shell_block is None or not report.changed:
        return False
    changed = write_block(rc_path, catalog.shell_block.marker, build_shell_lines(catalog, report))
    if changed:
        _logging.debug(f"Updated shell block {catalog.shell_block.marker} in {rc_path}")
    return changed


__all__ = [
    "build_shell_lines",
    "apply_shell_integration",
]

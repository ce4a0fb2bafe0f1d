"""Install actions: the opaque side-effecting half of an item."""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

from provisio.errors import ItemFailure
from provisio.execution import INSTALL_TIMEOUT, run_command_async

from .models import InstallResult

_logging = logging.getLogger(__name__)


class RiskLevel(Enum):
    SAFE = "safe"
    INTERACTIVE = "interactive"
    DANGEROUS = "dangerous"


def infer_risk_level(commands: list[str]) -> RiskLevel:
    """Classify install commands: remote scripts piped to a shell are dangerous."""
    pipe_pattern = re.compile(r"\|.*\b(sh|bash)\b", re.IGNORECASE)
    risk = RiskLevel.SAFE
    for command in commands:
        if pipe_pattern.search(command):
            return RiskLevel.DANGEROUS
        if (
            "apt-get install" in command
            or "apt install" in command
            or "npm install" in command
            or "sudo " in command
        ):
            risk = RiskLevel.INTERACTIVE
    return risk


def shell_installer(
    commands: list[str], timeout: int = INSTALL_TIMEOUT, debug: bool = False
) -> Callable[[], Awaitable[InstallResult]]:
    """Run ``commands`` in order, stopping at the first non-zero exit."""

    async def install() -> InstallResult:
        for command in commands:
            output, returncode = await run_command_async(
                command, timeout=timeout, debug=debug
            )
            if returncode != 0:
                _logging.debug(f"Command failed ({returncode}): {command}")
                detail = output.splitlines()[-1] if output else "no output"
                return InstallResult.failure(
                    f"'{command}' exited with {returncode}: {detail}"
                )
        return InstallResult.ok()

    return install


@dataclass(frozen=True)
class AutostartEntry:
    file_name: str
    name: str
    exec_path: str
    comment: str = ""

    def render(self) -> str:
        lines = [
            "[Desktop Entry]",
            "Type=Application",
            f"Name={self.name}",
            f"Comment={self.comment}",
            f"Exec={os.path.expanduser(self.exec_path)}",
            "Hidden=false",
            "NoDisplay=false",
            "X-GNOME-Autostart-enabled=true",
        ]
        return "\n".join(lines) + "\n"


def autostart_installer(
    entry: AutostartEntry, autostart_dir: Path
) -> Callable[[], InstallResult]:
    """Write an XDG autostart desktop entry, replacing any previous one."""

    def install() -> InstallResult:
        target = autostart_dir / entry.file_name
        try:
            autostart_dir.mkdir(parents=True, exist_ok=True)
            if target.exists():
                _logging.debug(f"Removing old autostart entry: {target}")
                target.unlink()
            target.write_text(entry.render())
        except OSError as e:
            raise ItemFailure(f"cannot write {target}: {e.strerror or e}") from e
        return InstallResult.ok()

    return install


__all__ = [
    "RiskLevel",
    "infer_risk_level",
    "shell_installer",
    "AutostartEntry",
    "autostart_installer",
]

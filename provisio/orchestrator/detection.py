"""Detectors: cheap, side-effect-free presence checks."""

import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Callable

from .models import DetectResult

SUBPROCESS_TIMEOUT = 5


def _as_result(present: bool) -> DetectResult:
    return DetectResult.PRESENT if present else DetectResult.ABSENT


def find_command(*names: str, extra_dirs: tuple[str, ...] = ()) -> str | None:
    """Return the path of the first of ``names`` found on PATH or in ``extra_dirs``."""
    for name in names:
        path = shutil.which(name)
        if path:
            return path
        for directory in extra_dirs:
            candidate = Path(os.path.expanduser(directory)) / name
            if candidate.is_file() and os.access(candidate, os.X_OK):
                return str(candidate)
    return None


def command_exists(
    *names: str, extra_dirs: tuple[str, ...] = ()
) -> Callable[[], DetectResult]:
    """Present when any of the binaries is available.

    Distributions sometimes rename binaries (``fdfind``, ``batcat``); pass
    every accepted name. ``extra_dirs`` covers user-local install locations
    that may not be on PATH yet, such as ``~/.local/bin``.
    """

    def detect() -> DetectResult:
        return _as_result(find_command(*names, extra_dirs=extra_dirs) is not None)

    return detect


def is_package_installed(package: str) -> bool:
    try:
        result = subprocess.run(
            ["dpkg-query", "-W", "-f=${Status}", package],
            capture_output=True,
            timeout=SUBPROCESS_TIMEOUT,
            text=True,
        )
    except (subprocess.TimeoutExpired, OSError):
        return False
    status = result.stdout.split()
    return result.returncode == 0 and bool(status) and status[-1] == "installed"


def package_installed(*packages: str) -> Callable[[], DetectResult]:
    """Present when every listed dpkg package is installed."""

    def detect() -> DetectResult:
        return _as_result(all(is_package_installed(p) for p in packages))

    return detect


def path_exists(*paths: str) -> Callable[[], DetectResult]:
    """Present when every listed path exists (``~`` is expanded)."""

    def detect() -> DetectResult:
        return _as_result(all(Path(os.path.expanduser(p)).exists() for p in paths))

    return detect


def check_command(command: str) -> Callable[[], DetectResult]:
    """Present when a shell command exits 0."""

    def detect() -> DetectResult:
        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                timeout=SUBPROCESS_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, OSError):
            return DetectResult.ABSENT
        return _as_result(result.returncode == 0)

    return detect


def extract_version(output: str) -> str | None:
    patterns = [
        r"(\d+\.\d+\.\d+)",
        r"(\d+\.\d+)",
    ]

    for pattern in patterns:
        match = re.search(pattern, output)
        if match:
            return match.group(1)

    stripped = output.strip()
    if re.match(r"^[\d.]+$", stripped):
        return stripped

    return None


def get_version(version_command: str) -> str | None:
    try:
        result = subprocess.run(
            version_command,
            shell=True,
            capture_output=True,
            timeout=SUBPROCESS_TIMEOUT,
            text=True,
        )
    except (subprocess.TimeoutExpired, OSError):
        return None

    if result.returncode != 0:
        return None
    output = result.stdout.strip() or result.stderr.strip()
    return extract_version(output)


def is_version_satisfied(version: str | None, min_version: str | None) -> bool:
    if not version:
        return False
    if not min_version:
        return True

    from packaging import version as pkg_version

    try:
        return pkg_version.parse(version) >= pkg_version.parse(min_version)
    except pkg_version.InvalidVersion:
        return True


def with_min_version(
    detector: Callable[[], DetectResult], version_command: str, min_version: str
) -> Callable[[], DetectResult]:
    """Wrap a detector so that an outdated install counts as absent."""

    def detect() -> DetectResult:
        if detector() == DetectResult.ABSENT:
            return DetectResult.ABSENT
        return _as_result(is_version_satisfied(get_version(version_command), min_version))

    return detect


__all__ = [
    "find_command",
    "command_exists",
    "is_package_installed",
    "package_installed",
    "path_exists",
    "check_command",
    "extract_version",
    "get_version",
    "is_version_satisfied",
    "with_min_version",
]

"""Pytest fixtures and utilities for provisio tests."""

import json
from pathlib import Path
from typing import Generator

import pytest

from provisio.data_loader import clear_cache
from provisio.orchestrator import (
    DetectResult,
    InstallableItem,
    InstallResult,
    Reporter,
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Point every user-level path at a temporary home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("PROVISIO_CONFIG", str(home / ".config" / "provisio" / "catalogs.json"))
    monkeypatch.setenv("PROVISIO_RC_FILE", str(home / ".bashrc"))
    clear_cache()
    yield home
    clear_cache()


@pytest.fixture
def write_catalogs(isolated_env: Path):
    """Write a user catalog file and return its path."""

    def _write(catalogs: dict) -> Path:
        path = isolated_env / ".config" / "provisio" / "catalogs.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"catalogs": catalogs}))
        clear_cache()
        return path

    return _write


class FakeTool:
    """A scripted item whose detect/install calls are counted."""

    def __init__(
        self,
        name: str,
        present: bool = False,
        install_ok: bool = True,
        becomes_present: bool = True,
        raises: Exception | None = None,
        log: list | None = None,
    ):
        self.name = name
        self.present = present
        self.install_ok = install_ok
        self.becomes_present = becomes_present
        self.raises = raises
        self.detect_calls = 0
        self.install_calls = 0
        self.log = log if log is not None else []

    def detect(self) -> DetectResult:
        self.detect_calls += 1
        self.log.append(("detect", self.name))
        return DetectResult.PRESENT if self.present else DetectResult.ABSENT

    def install(self) -> InstallResult:
        self.install_calls += 1
        self.log.append(("install", self.name))
        if self.raises is not None:
            raise self.raises
        if not self.install_ok:
            return InstallResult.failure(f"{self.name} install error")
        if self.becomes_present:
            self.present = True
        return InstallResult.ok()

    def item(self, depends_on: tuple[str, ...] = (), requires_confirmation: bool = True):
        return InstallableItem(
            name=self.name,
            detect=self.detect,
            install=self.install,
            depends_on=depends_on,
            requires_confirmation=requires_confirmation,
        )


@pytest.fixture
def fake_tool():
    """Factory for FakeTool instances sharing one call log."""
    log: list = []

    def _create(name: str, **kwargs) -> FakeTool:
        return FakeTool(name, log=log, **kwargs)

    _create.log = log
    return _create


class RecordingReporter(Reporter):
    def __init__(self):
        self.events: list[tuple] = []

    def item_started(self, item, index, total):
        self.events.append(("started", item.name, index, total))

    def item_detected(self, item, present):
        self.events.append(("detected", item.name, present))

    def consent_invalid(self, item, answer):
        self.events.append(("invalid", item.name, answer))

    def item_finished(self, item, outcome):
        self.events.append(("finished", item.name, outcome.kind))


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()

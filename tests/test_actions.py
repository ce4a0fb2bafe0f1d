"""Tests for install actions."""

import asyncio

import pytest

from provisio.errors import ItemFailure
from provisio.orchestrator import (
    AutostartEntry,
    RiskLevel,
    autostart_installer,
    infer_risk_level,
    shell_installer,
)


def test_risk_level_inference():
    assert infer_risk_level(["git clone https://x"]) == RiskLevel.SAFE
    assert infer_risk_level(["sudo apt-get install -y bat"]) == RiskLevel.INTERACTIVE
    assert infer_risk_level(["npm install -g x"]) == RiskLevel.INTERACTIVE
    assert (
        infer_risk_level(["sudo apt-get update", "curl -sSfL https://x/install.sh | sh"])
        == RiskLevel.DANGEROUS
    )
    assert infer_risk_level(["curl -fsSL https://x | sudo -E bash -"]) == RiskLevel.DANGEROUS
    assert infer_risk_level([]) == RiskLevel.SAFE


def test_shell_installer_success(tmp_path):
    marker = tmp_path / "done"
    install = shell_installer(["true", f"touch '{marker}'"])

    result = asyncio.run(install())

    assert result.success is True
    assert marker.exists()


def test_shell_installer_stops_at_first_failure(tmp_path):
    marker = tmp_path / "never"
    install = shell_installer(["echo broken >&2; exit 3", f"touch '{marker}'"])

    result = asyncio.run(install())

    assert result.success is False
    assert "exited with 3" in result.reason
    assert "broken" in result.reason
    assert not marker.exists()


def test_shell_installer_timeout():
    install = shell_installer(["sleep 5"], timeout=1)

    result = asyncio.run(install())

    assert result.success is False
    assert "timed out" in result.reason


def test_autostart_entry_render(isolated_env):
    entry = AutostartEntry(
        file_name="workspace.desktop",
        name="Workspace",
        exec_path="~/Desktop/launch.sh",
        comment="Opens apps",
    )

    text = entry.render()

    assert text.startswith("[Desktop Entry]\n")
    assert "Name=Workspace\n" in text
    assert f"Exec={isolated_env}/Desktop/launch.sh\n" in text
    assert "X-GNOME-Autostart-enabled=true\n" in text


def test_autostart_installer_replaces_old_entry(tmp_path):
    autostart_dir = tmp_path / "autostart"
    autostart_dir.mkdir()
    (autostart_dir / "workspace.desktop").write_text("stale")
    entry = AutostartEntry("workspace.desktop", "Workspace", "/opt/launch.sh")

    result = autostart_installer(entry, autostart_dir)()

    assert result.success is True
    content = (autostart_dir / "workspace.desktop").read_text()
    assert "stale" not in content
    assert "Exec=/opt/launch.sh" in content


def test_autostart_installer_write_error(tmp_path):
    blocker = tmp_path / "autostart"
    blocker.write_text("a file where a directory should be")
    entry = AutostartEntry("workspace.desktop", "Workspace", "/opt/launch.sh")

    with pytest.raises(ItemFailure, match="cannot write"):
        autostart_installer(entry, blocker)()

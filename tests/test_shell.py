"""Tests for shell rc integration."""

import pytest

from provisio.data_loader import get_catalog
from provisio.orchestrator import DetectResult, ItemOutcome, OutcomeKind, RunReport
from provisio.rcfile import read_block
from provisio.shell import apply_shell_integration, build_shell_lines


def _report(**kinds):
    return RunReport(tuple(ItemOutcome(name, kind) for name, kind in kinds.items()))


@pytest.fixture
def available(mocker):
    """Pretend exactly the given commands are on PATH."""

    def _set(*names):
        mocker.patch(
            "provisio.shell.find_command",
            side_effect=lambda name, extra_dirs=(): f"/usr/bin/{name}" if name in names else None,
        )

    return _set


@pytest.fixture
def installed(mocker):
    """Pretend exactly the given catalog items are installed on the system."""

    def _set(*names):
        def detector_for(spec, autostart_dir=None):
            present = spec.name in names
            return lambda: DetectResult.PRESENT if present else DetectResult.ABSENT

        return mocker.patch("provisio.shell.build_detector", side_effect=detector_for)

    return _set


def test_lines_for_debian_names(available):
    available("eza", "batcat", "fdfind")
    catalog = get_catalog("cli-tools")

    lines = build_shell_lines(catalog, _report(eza=OutcomeKind.INSTALLED))

    assert lines[0] == f"# {catalog.description}"
    assert "alias ls='eza'" in lines
    assert "alias bat='batcat'" in lines
    assert "alias fd='fdfind'" in lines


def test_aliases_skipped_when_real_names_exist(available):
    available("bat", "batcat", "fd", "fdfind")

    lines = build_shell_lines(get_catalog("cli-tools"), _report(bat=OutcomeKind.INSTALLED))

    assert "alias bat='batcat'" not in lines
    assert "alias fd='fdfind'" not in lines
    assert "alias ls='eza'" not in lines


def test_shell_init_only_for_satisfied_items(available, installed):
    available()
    installed()
    report = _report(
        fzf=OutcomeKind.ALREADY_PRESENT,
        zoxide=OutcomeKind.FAILED,
    )

    lines = build_shell_lines(get_catalog("cli-tools"), report)

    assert "[ -f ~/.fzf.bash ] && source ~/.fzf.bash" in lines
    assert 'eval "$(zoxide init bash)"' not in lines


def test_apply_writes_block(available, installed, isolated_env):
    available("eza")
    installed()
    rc = isolated_env / ".bashrc"
    rc.write_text("export EDITOR=vim\n")

    changed = apply_shell_integration(
        get_catalog("cli-tools"), _report(eza=OutcomeKind.INSTALLED), rc
    )

    assert changed is True
    assert "alias ls='eza'" in read_block(rc, "MODERN-CLI-TOOLS")
    assert rc.read_text().startswith("export EDITOR=vim\n")


def test_apply_skipped_when_nothing_changed(available, isolated_env):
    available("eza")
    rc = isolated_env / ".bashrc"

    changed = apply_shell_integration(
        get_catalog("cli-tools"), _report(eza=OutcomeKind.ALREADY_PRESENT), rc
    )

    assert changed is False
    assert not rc.exists()


def test_apply_ignores_catalog_without_block(isolated_env):
    rc = isolated_env / ".bashrc"

    changed = apply_shell_integration(
        get_catalog("google-drive"),
        _report(**{"gnome-online-accounts": OutcomeKind.INSTALLED}),
        rc,
    )

    assert changed is False
    assert not rc.exists()


def test_satisfied_outcome_skips_system_check(available, installed):
    available()
    detector = installed()

    lines = build_shell_lines(get_catalog("cli-tools"), _report(zoxide=OutcomeKind.INSTALLED))

    assert 'eval "$(zoxide init bash)"' in lines
    assert "zoxide" not in [c.args[0].name for c in detector.call_args_list]


def test_items_outside_the_run_keep_their_init_lines(available, installed, isolated_env):
    available()
    installed("fzf", "zoxide")
    catalog = get_catalog("cli-tools")
    rc = isolated_env / ".bashrc"
    apply_shell_integration(catalog, _report(zoxide=OutcomeKind.INSTALLED), rc)

    # a later run restricted to ripgrep
    apply_shell_integration(catalog, _report(ripgrep=OutcomeKind.INSTALLED), rc)

    block = read_block(rc, "MODERN-CLI-TOOLS")
    assert 'eval "$(zoxide init bash)"' in block
    assert "[ -f ~/.fzf.bash ] && source ~/.fzf.bash" in block


def test_failed_reinstall_keeps_init_line_of_installed_tool(available, installed):
    available()
    installed("zoxide")
    report = _report(fzf=OutcomeKind.UPDATED, zoxide=OutcomeKind.FAILED)

    lines = build_shell_lines(get_catalog("cli-tools"), report)

    assert "[ -f ~/.fzf.bash ] && source ~/.fzf.bash" in lines
    assert 'eval "$(zoxide init bash)"' in lines


def test_absent_items_get_no_init_line(available, installed):
    available()
    installed()

    lines = build_shell_lines(
        get_catalog("cli-tools"), _report(zoxide=OutcomeKind.SKIPPED_BY_USER)
    )

    assert 'eval "$(zoxide init bash)"' not in lines
    assert "[ -f ~/.fzf.bash ] && source ~/.fzf.bash" not in lines

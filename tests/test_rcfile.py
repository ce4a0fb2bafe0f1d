"""Tests for marked-block rc file editing."""

import os

from provisio.rcfile import read_block, write_block

MARKER = "MODERN-CLI-TOOLS"


def test_write_creates_file(tmp_path):
    rc = tmp_path / ".bashrc"

    assert write_block(rc, MARKER, ["alias ls='eza'"]) is True
    assert rc.read_text() == (
        "# >>> MODERN-CLI-TOOLS >>>\nalias ls='eza'\n# <<< MODERN-CLI-TOOLS <<<\n"
    )


def test_write_appends_after_blank_line(tmp_path):
    rc = tmp_path / ".bashrc"
    rc.write_text("export EDITOR=vim\n")

    write_block(rc, MARKER, ["alias ls='eza'"])

    lines = rc.read_text().splitlines()
    assert lines[:3] == ["export EDITOR=vim", "", "# >>> MODERN-CLI-TOOLS >>>"]


def test_write_replaces_in_place(tmp_path):
    rc = tmp_path / ".bashrc"
    rc.write_text(
        "before\n# >>> MODERN-CLI-TOOLS >>>\nold\n# <<< MODERN-CLI-TOOLS <<<\nafter\n"
    )

    write_block(rc, MARKER, ["new one", "new two"])

    assert rc.read_text() == (
        "before\n# >>> MODERN-CLI-TOOLS >>>\nnew one\nnew two\n"
        "# <<< MODERN-CLI-TOOLS <<<\nafter\n"
    )


def test_write_unchanged_returns_false(tmp_path):
    rc = tmp_path / ".bashrc"
    write_block(rc, MARKER, ["a", "b"])
    before = rc.read_text()

    assert write_block(rc, MARKER, ["a", "b"]) is False
    assert rc.read_text() == before


def test_repeated_writes_keep_single_block(tmp_path):
    rc = tmp_path / ".bashrc"
    rc.write_text("# user settings\n")

    for lines in (["a"], ["b"], ["b", "c"]):
        write_block(rc, MARKER, lines)

    text = rc.read_text()
    assert text.count("# >>> MODERN-CLI-TOOLS >>>") == 1
    assert read_block(rc, MARKER) == ["b", "c"]
    assert text.startswith("# user settings\n")


def test_write_preserves_mode(tmp_path):
    rc_dir = tmp_path / "rc"
    rc_dir.mkdir()
    rc = rc_dir / ".bashrc"
    rc.write_text("x\n")
    os.chmod(rc, 0o600)

    write_block(rc, MARKER, ["a"])

    assert rc.stat().st_mode & 0o777 == 0o600
    assert [p.name for p in rc_dir.iterdir()] == [".bashrc"]


def test_unterminated_block_is_replaced(tmp_path):
    rc = tmp_path / ".bashrc"
    rc.write_text("keep\n# >>> MODERN-CLI-TOOLS >>>\nbroken\n")

    assert read_block(rc, MARKER) == ["broken"]
    write_block(rc, MARKER, ["fixed"])

    assert rc.read_text() == (
        "keep\n# >>> MODERN-CLI-TOOLS >>>\nfixed\n# <<< MODERN-CLI-TOOLS <<<\n"
    )


def test_other_markers_untouched(tmp_path):
    rc = tmp_path / ".bashrc"
    write_block(rc, "OTHER", ["other"])
    write_block(rc, MARKER, ["mine"])

    assert read_block(rc, "OTHER") == ["other"]
    assert read_block(rc, MARKER) == ["mine"]


def test_read_missing(tmp_path):
    assert read_block(tmp_path / "nope", MARKER) is None
    rc = tmp_path / ".bashrc"
    rc.write_text("plain\n")
    assert read_block(rc, MARKER) is None


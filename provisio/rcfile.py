"""Marked-block editing of shell rc files.

A block is delimited by ``# >>> MARKER >>>`` and ``# <<< MARKER <<<``.
Writing replaces an existing block in place or appends a new one; the file
is rewritten through a temporary sibling and ``os.replace`` so a reader
never sees a half-written rc file.
"""

import logging
import os
import tempfile
from pathlib import Path

_logging = logging.getLogger(__name__)


def _start(marker: str) -> str:
    return f"# >>> {marker} >>>"


def _end(marker: str) -> str:
    return f"# <<< {marker} <<<"


def _split(text: str, marker: str) -> tuple[list[str], list[str] | None, list[str]]:
    """Return (before, block body or None, after) for the first marked block."""
    lines = text.splitlines()
    start, end = _start(marker), _end(marker)
    try:
        begin = lines.index(start)
    except ValueError:
        return lines, None, []
    try:
        finish = lines.index(end, begin + 1)
    except ValueError:
        # unterminated block: treat everything after the start marker as the block
        return lines[:begin], lines[begin + 1 :], []
    return lines[:begin], lines[begin + 1 : finish], lines[finish + 1 :]


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_block(path: Path, marker: str) -> list[str] | None:
    if not path.exists():
        return None
    _, block, _ = _split(path.read_text(encoding="utf-8"), marker)
    return block


def write_block(path: Path, marker: str, lines: list[str]) -> bool:
    """Replace or append the marked block. Returns False if nothing changed."""
    text = path.read_text(encoding="utf-8") if path.exists() else ""
    before, block, after = _split(text, marker)
    if block == lines:
        return False

    new_block = [_start(marker), *lines, _end(marker)]
    if block is None:
        if before and before[-1].strip():
            before = [*before, ""]
        result = [*before, *new_block]
    else:
        result = [*before, *new_block, *after]

    _atomic_write(path, "\n".join(result) + "\n")
    _logging.debug(f"Wrote {len(lines)} line(s) to block {marker} in {path}")
    return True


__all__ = [
    "read_block",
    "write_block",
]

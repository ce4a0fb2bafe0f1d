"""Filesystem locations used by provisio."""

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/provisio"""
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "provisio"


def get_packaged_catalog_path() -> Path:
    """Return path to the bundled catalogs (read-only fallback)"""
    return Path(__file__).parent / "data" / "catalogs.json"


def get_catalog_path() -> Path:
    """Return the user catalog file path.

    Priority:
    1. PROVISIO_CONFIG environment variable (if set)
    2. ~/.config/provisio/catalogs.json
    """
    if "PROVISIO_CONFIG" in os.environ:
        return Path(os.environ["PROVISIO_CONFIG"])
    return get_config_dir() / "catalogs.json"


def get_rc_path() -> Path:
    """Return the interactive shell rc file that receives shell blocks."""
    if "PROVISIO_RC_FILE" in os.environ:
        return Path(os.environ["PROVISIO_RC_FILE"])
    return Path.home() / ".bashrc"


def get_autostart_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "autostart"


__all__ = [
    "get_config_dir",
    "get_packaged_catalog_path",
    "get_catalog_path",
    "get_rc_path",
    "get_autostart_dir",
]

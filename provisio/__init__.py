"""Idempotent, interactive workstation provisioning."""

import logging

from provisio.config import ConfigError, load_config
from provisio.errors import (
    ConsentInputError,
    ItemFailure,
    PreconditionError,
    ProvisioError,
    format_error,
    format_suggestion,
)
from provisio.execution import DEFAULT_TIMEOUT, INSTALL_TIMEOUT, run_command_async
from provisio.paths import get_catalog_path, get_config_dir, get_packaged_catalog_path

__version__ = "0.3.0"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Configure the provisio logger: DEBUG with --debug, WARNING otherwise."""
    logger = logging.getLogger("provisio")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    # rebind to the current stderr; it may have been swapped since the last call
    for handler in list(logger.handlers):
        if getattr(handler, "_provisio", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._provisio = True
    logger.addHandler(handler)


__all__ = [
    "__version__",
    "setup_logging",
    "ConfigError",
    "load_config",
    "ProvisioError",
    "PreconditionError",
    "ItemFailure",
    "ConsentInputError",
    "format_error",
    "format_suggestion",
    "DEFAULT_TIMEOUT",
    "INSTALL_TIMEOUT",
    "run_command_async",
    "get_catalog_path",
    "get_config_dir",
    "get_packaged_catalog_path",
]

"""Logging helpers shared across comexwatch modules."""

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ROOT_LOGGER = "comexwatch"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the comexwatch root logger."""
    if not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """
    Send log records to stderr and set the comexwatch log level.

    Leaves existing root handlers alone, so embedding applications keep
    their own logging setup.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(format=_LOG_FORMAT, stream=sys.stderr)
    logging.getLogger(_ROOT_LOGGER).setLevel(level)

"""Logger helpers shared by the hooks and the command line tools."""

from __future__ import annotations

import logging

__all__ = ["get_logger", "configure_logging", "LOG_FORMAT"]

ROOT_LOGGER = "bytelego"
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``bytelego`` hierarchy."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler for scripts."""

    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)

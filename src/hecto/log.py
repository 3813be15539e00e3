"""Logging helpers.

The editor owns the terminal while it runs, so records never go to the
console. By default they are discarded; a log file can be attached with
:func:`configure_logging`.

Example:
    >>> from hecto.log import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("row %d recomputed", 3)
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "hecto"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``hecto.`` namespace.

    Example:
        >>> get_logger("syntax").name
        'hecto.syntax'
    """
    if not (name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(log_file: str | None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Send ``hecto`` records to ``log_file``. Returns the attached handler, if any."""
    if not log_file:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(level)
    return handler

"""Minimal logging utilities for mathfence.

Library modules only ask for loggers; handlers are installed by the CLI
through configure_logging(). An mdBook preprocessor owns stdout for the
book JSON, so log output always goes to stderr.

Example:
    >>> from mathfence.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Rendering chapter")
"""

from __future__ import annotations

import logging
import os
import sys

LOG_ENV_VAR = "MATHFENCE_LOG"
LOG_FORMAT = "%(asctime)s [%(levelname)s] (%(name)s): %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "mathfence." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'mathfence.mymodule'
    """
    if not (name == "mathfence" or name.startswith("mathfence.")):
        name = f"mathfence.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """Install a stderr handler on the "mathfence" logger.

    Args:
        level: Level name; falls back to $MATHFENCE_LOG, then INFO.
            Unknown names fall back to INFO.
    """
    name = (level or os.environ.get(LOG_ENV_VAR) or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger("mathfence")
    root.setLevel(resolved)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(resolved)

"""Logging setup for the service process.

The engine modules only ever call ``logging.getLogger(__name__)``; handlers and
levels are installed here, once, by whoever owns the process.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Oracle clients log their own request summaries; per-connection noise is dropped
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> int:
    """Install a stdout handler on the root logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case.
            Unknown names fall back to INFO.

    Returns:
        The numeric level that was applied
    """
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return numeric_level


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)

"""
Logging configuration for costoflife.

Library modules only call get_logger('costoflife.<module>'). Handlers are
attached once, by the CLI, through configure_logging().
"""

import logging
import os
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = 'costoflife'
DEFAULT_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'

_configured = False


def parse_level(level: Union[int, str, None]) -> int:
    """
    Resolve a logging level.

    Args:
        level: An int, a level name ('DEBUG', 'info') or a numeric string.
            None falls back to COSTOFLIFE_LOG_LEVEL, then WARNING.

    Returns:
        Numeric logging level
    """
    numeric = _level_from_value(level)
    if numeric is None:
        numeric = _level_from_value(os.environ.get('COSTOFLIFE_LOG_LEVEL'))
    return logging.WARNING if numeric is None else numeric


def _level_from_value(level: Union[int, str, None]) -> Optional[int]:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return None


def configure_logging(level: Union[int, str, None] = None, fmt: Optional[str] = None,
                      stream: Optional[IO[str]] = None) -> None:
    """
    Attach a single StreamHandler to the package logger (first call only).

    Args:
        level: Logging level (see parse_level)
        fmt: Optional format string (default: DEFAULT_FORMAT)
        stream: Output stream (default: stderr)
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)

    # Drop placeholder NullHandlers so records are not swallowed
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    numeric_level = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; the package logger gets a NullHandler until configured."""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)

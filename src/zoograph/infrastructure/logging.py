"""
Logging setup.

Provides consistent logging configuration for the command line entry points.
Library code never configures logging itself; it only emits through module
loggers or an injected logger.
"""

import logging
import sys
from typing import Optional

from ..core.exceptions import ConfigurationError

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: str) -> int:
    """
    Translate a level name into a logging level.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The numeric logging level

    Raises:
        ConfigurationError: If the name is not a known level
    """
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ConfigurationError(f"Unknown log level: {level}")
    return value


def setup_logging(level: str = "WARNING", format_string: Optional[str] = None) -> None:
    """
    Setup logging for the process.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_string: Custom format string (uses default if None)
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

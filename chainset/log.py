"""
Logging setup for scripts that use chainset.

The library only creates module loggers under the ``chainset`` namespace and
never attaches handlers itself. setup_logging() is for entry points (the
example and benchmark scripts, or an application's main) that want to see
those records.
"""

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "CHAINSET_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _resolve_level(level: Union[int, str, None]) -> int:
    """Numeric level from an int, a level name, or CHAINSET_LOG_LEVEL."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv(LOG_LEVEL_ENV, "WARNING")).upper()
    value = logging.getLevelName(name)
    # getLevelName() returns "Level X" for unknown names
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: Union[int, str, None] = None) -> None:
    """
    Send chainset log records to stderr.

    Args:
        level: Level for the ``chainset`` logger, as a number or a name.
            Defaults to CHAINSET_LOG_LEVEL, then WARNING.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("chainset").setLevel(_resolve_level(level))


__all__ = ["setup_logging"]

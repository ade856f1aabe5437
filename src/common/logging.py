"""Logger setup shared by the site engine modules.

Each module asks for its own named logger. The level comes from
``settings.logging.level`` (``LOG_LEVEL`` in the environment) unless the
caller passes one.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configured_level() -> int:
    """Numeric level for ``settings.logging.level``; unknown names mean INFO."""
    level = logging.getLevelName(settings.logging.level.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    level: Optional[int] = None,
    module_name: str = "studio_site",
) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use.

    Args:
        level: Explicit level. Defaults to the configured one.
        module_name: Logger name, usually the package name.
    """
    logger = logging.getLogger(module_name)
    if logger.handlers:
        return logger

    if level is None:
        level = configured_level()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger

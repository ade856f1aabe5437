# Common utilities and shared modules
"""
Shared components used by the content pipeline and the page pipeline:
- Data models (Pydantic schemas)
- Error taxonomy
- Logging configuration
- Project configuration
"""

from .config import settings, Settings, PROJECT_ROOT, DATA_DIR
from .errors import (
    ContentUnavailable,
    MalformedUrl,
    MissingElement,
    SchemaViolationError,
    SiteEngineError,
)
from .logging import setup_logging

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ContentUnavailable",
    "MalformedUrl",
    "MissingElement",
    "SchemaViolationError",
    "SiteEngineError",
    "setup_logging",
]

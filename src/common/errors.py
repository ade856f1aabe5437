"""Error taxonomy shared by the content and page pipelines.

Only the validation entry point treats an error as fatal. Everything else is
recovered at the boundary where it is raised.
"""

from __future__ import annotations


class SiteEngineError(Exception):
    """Base class for all site engine errors."""


class ContentUnavailable(SiteEngineError):
    """The content document could not be fetched or parsed."""


class SchemaViolationError(SiteEngineError):
    """The content document does not satisfy the content schema."""

    def __init__(self, violations: list) -> None:
        self.violations = list(violations)
        super().__init__(f"{len(self.violations)} content schema violation(s)")


class MalformedUrl(SiteEngineError, ValueError):
    """A URL could not be parsed relative to the page location."""


class MissingElement(SiteEngineError, LookupError):
    """A render or tracking target is not present in the page."""

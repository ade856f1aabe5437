"""Homepage pipeline: one page load from static markup to tracked links."""

from .app import HomePage

__all__ = ["HomePage"]

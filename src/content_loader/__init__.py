"""Content loading for the homepage pipeline."""

from .loader import ContentLoader, NO_CACHE_HEADERS, resolve_content_url

__all__ = ["ContentLoader", "NO_CACHE_HEADERS", "resolve_content_url"]

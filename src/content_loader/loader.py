"""Content loader for the homepage.

Fetches the site content document once per call and degrades to ``None`` on
any failure so the page keeps its static markup. Loaded content is not
validated here; the page applies it optimistically.

Usage:
    loader = ContentLoader("https://studio.example/assets/data/site-content.json")
    content = loader.load()
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlsplit
from urllib.request import url2pathname

import requests

from src.common.config import PROJECT_ROOT, settings
from src.common.errors import ContentUnavailable
from src.common.logging import setup_logging

logger = setup_logging(module_name="content_loader")

# Every fetch bypasses intermediate caches so edits show up immediately
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}


def resolve_content_url(content_url: str, page_url: str) -> str:
    """Resolve a scheme-less content URL against an http(s) page location.

    Content served next to the page is fetched from the page's origin, the
    same way a browser resolves a relative fetch. Anything else (absolute
    URLs, pages not served over http(s), unparsable input) is returned as is.
    """
    try:
        if urlsplit(content_url).scheme:
            return content_url
        if urlsplit(page_url).scheme.lower() not in ("http", "https"):
            return content_url
        return urljoin(page_url, content_url)
    except ValueError:
        return content_url


class ContentLoader:
    """Loads the content document over HTTP(S) or from a local path.

    The HTTP session is injected so callers (and tests) control transport.
    Exactly one attempt is made per ``load()`` call: no retries, no cache.
    """

    def __init__(
        self,
        content_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.content_url = content_url or settings.content.content_url
        self._session = session or requests.Session()

    def load(self) -> dict[str, Any] | None:
        """Fetch and parse the content document.

        Returns:
            Parsed document, or None when it is unavailable.
        """
        try:
            return self._fetch()
        except ContentUnavailable as exc:
            logger.warning("Failed to load site content JSON; using static fallbacks. %s", exc)
            return None

    def _fetch(self) -> Any:
        try:
            remote = self._is_remote(self.content_url)
            path = None if remote else self._local_path(self.content_url)
        except ValueError as exc:
            raise ContentUnavailable(f"Malformed content URL {self.content_url!r}: {exc}") from exc

        if path is None:
            return self._fetch_remote(self.content_url)
        return self._read_local(path)

    def _fetch_remote(self, url: str) -> Any:
        try:
            response = self._session.get(url, headers=NO_CACHE_HEADERS)
        except requests.RequestException as exc:
            raise ContentUnavailable(f"Request failed: {exc}") from exc

        if not response.ok:
            raise ContentUnavailable(f"Unexpected status: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise ContentUnavailable(f"Invalid JSON: {exc}") from exc

    @staticmethod
    def _read_local(path: Path) -> Any:
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, ValueError) as exc:
            # ValueError covers undecodable bytes and embedded NULs
            raise ContentUnavailable(f"Cannot read {path}: {exc}") from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ContentUnavailable(f"Invalid JSON in {path.name}: {exc}") from exc

    @staticmethod
    def _is_remote(url: str) -> bool:
        return urlsplit(url).scheme.lower() in ("http", "https")

    @staticmethod
    def _local_path(url: str) -> Path:
        """Resolve file:// URLs and relative paths against the project root."""
        parts = urlsplit(url)
        if parts.scheme.lower() == "file":
            return Path(url2pathname(parts.path))
        path = Path(url)
        if path.is_absolute():
            return path
        return PROJECT_ROOT / path

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> ContentLoader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

"""Attribution URL building for booking links.

Pure functions: the same (url, source, defaults, page URL) always produce
the same href, so an href can be recomputed at any time instead of being
patched in place.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from src.common.errors import MalformedUrl

logger = logging.getLogger(__name__)

_MAILTO_RE = re.compile(r"^mailto:", re.IGNORECASE)
_HTTP_RE = re.compile(r"^https?:", re.IGNORECASE)

DEFAULT_PAGE_URL = "http://localhost/"


def is_mailto_url(url: str) -> bool:
    return bool(_MAILTO_RE.match(url or ""))


def is_http_url(url: str) -> bool:
    return bool(_HTTP_RE.match(url or ""))


def _resolve(url: str, page_url: str):
    """Resolve ``url`` against the page location.

    Raises:
        MalformedUrl: If either URL cannot be parsed.
    """
    try:
        parts = urlsplit(urljoin(page_url, url.strip()))
        parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise MalformedUrl(url) from exc
    return parts


def _set_param(pairs: list[tuple[str, str]], key: str, value: str) -> list[tuple[str, str]]:
    """Replace the first ``key`` in place, drop repeats, append when absent."""
    result: list[tuple[str, str]] = []
    replaced = False
    for k, v in pairs:
        if k == key:
            if not replaced:
                result.append((k, value))
                replaced = True
            continue
        result.append((k, v))
    if not replaced:
        result.append((key, value))
    return result


def with_tracking_params(
    url: str,
    params: dict[str, str],
    page_url: str = DEFAULT_PAGE_URL,
) -> str:
    """Merge tracking params into an http(s) URL's query string.

    Existing keys with the same name are overwritten, all other keys are kept
    in their original order. Empty param values are skipped. Relative URLs are
    made absolute against ``page_url``.

    Returns:
        The decorated absolute URL, or ``url`` unchanged when it is empty,
        unparsable, or does not resolve to http(s).
    """
    if not url:
        return url

    try:
        parts = _resolve(url, page_url)
    except MalformedUrl:
        logger.debug("Leaving malformed URL untouched: %r", url)
        return url

    if parts.scheme.lower() not in ("http", "https"):
        return url

    pairs = parse_qsl(parts.query, keep_blank_values=True)
    for key, value in params.items():
        if value:
            pairs = _set_param(pairs, key, value)

    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc, path, urlencode(pairs), parts.fragment))


def with_mailto_params(url: str) -> str:
    """Strip the query from a mailto URL so only the address remains."""
    if not url:
        return url

    try:
        address = urlsplit(url.strip()).path
    except ValueError:
        return url
    return f"mailto:{address}"


def build_cta_href(
    url: str,
    source: str,
    default_params: dict[str, str],
    page_url: str = DEFAULT_PAGE_URL,
) -> str:
    """Build the href for a booking anchor.

    Args:
        url: Base booking URL (http(s), relative, or mailto).
        source: Anchor source tag, sent as ``utm_content``.
        default_params: Shared attribution params (utm_source/medium/campaign).
        page_url: Current page location for resolving relative URLs.

    Returns:
        Decorated URL; never raises.
    """
    if is_mailto_url(url):
        return with_mailto_params(url)

    return with_tracking_params(
        url,
        {**default_params, "utm_content": source},
        page_url,
    )

"""Booking link manager: current booking URL and tracked anchors.

Owns the page's "current booking URL" and keeps every ``.js-booking-link``
anchor's href derived from ``(data-base-href, data-source)``. Whenever the
booking URL changes, every tracked anchor is rebuilt; whenever an anchor is
clicked, its href is rebuilt again before it is reported.

Usage:
    links = BookingLinkManager(soup, page_url="https://studio.example/")
    links.bind_all()
    links.set_booking_url("https://calendly.com/studio/intro")
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from src.common.config import settings
from src.common.dom import class_list
from src.common.logging import setup_logging

from .builder import DEFAULT_PAGE_URL, build_cta_href, is_http_url
from .models import UNKNOWN_SOURCE, LinkClick, TrackedLink, UTMParams

logger = setup_logging(module_name="cta_links")

BOOKING_LINK_SELECTOR = ".js-booking-link"


class BookingLinkManager:
    """Keeps booking anchors in sync with the current booking URL.

    One instance exists per page load. The booking URL starts at the
    configured default and is replaced when content is applied.
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        booking_url: str | None = None,
        utm_defaults: dict[str, str] | None = None,
        page_url: str = DEFAULT_PAGE_URL,
    ) -> None:
        self.soup = soup
        self.page_url = page_url
        self.utm = UTMParams.from_dict(
            settings.site.utm_defaults if utm_defaults is None else utm_defaults
        )
        self._booking_url = booking_url or settings.site.booking_url

    @property
    def booking_url(self) -> str:
        """The booking URL new anchors are built from."""
        return self._booking_url

    # --- URL Building ---

    def build_href(self, url: str, source: str) -> str:
        """Decorate ``url`` for an anchor with the given source tag."""
        return build_cta_href(url, source, self.utm.to_params(), self.page_url)

    def tracked_link(self, anchor: Tag) -> TrackedLink:
        """Derive the attribution state of an anchor."""
        base_href = anchor.get("data-base-href") or anchor.get("href") or ""
        source = anchor.get("data-source") or UNKNOWN_SOURCE
        return TrackedLink(
            base_href=base_href,
            source=source,
            current_href=self.build_href(base_href, source),
            opens_new_context=is_http_url(base_href),
        )

    def tracked_links(self) -> list[TrackedLink]:
        return [self.tracked_link(a) for a in self.soup.select(BOOKING_LINK_SELECTOR)]

    # --- Anchor Updates ---

    def set_booking_url(self, booking_url: str) -> None:
        """Switch the booking URL and rebuild every tracked anchor."""
        self._booking_url = booking_url
        anchors = self.soup.select(BOOKING_LINK_SELECTOR)
        for anchor in anchors:
            anchor["data-base-href"] = booking_url
            source = anchor.get("data-source") or UNKNOWN_SOURCE
            anchor["href"] = self.build_href(booking_url, source)
            self._apply_target(anchor, booking_url)

        logger.info("Booking URL set to %s (%d anchors updated)", booking_url, len(anchors))

    def decorate(self, anchor: Tag, source: str) -> Tag:
        """Attach the current booking URL to a freshly created anchor."""
        anchor["data-source"] = source
        anchor["data-base-href"] = self._booking_url
        anchor["href"] = self.build_href(self._booking_url, source)
        if is_http_url(self._booking_url):
            anchor["target"] = "_blank"
            anchor["rel"] = "noopener"
        return anchor

    def update_href(self, anchor: Tag) -> str:
        """Recompute an anchor's href from its base href and source."""
        link = self.tracked_link(anchor)
        anchor["href"] = link.current_href
        return link.current_href

    def bind_all(self) -> list[Tag]:
        """Mark unbound booking anchors as tracked and normalize their hrefs.

        Returns:
            Anchors bound by this call (already bound anchors are skipped).
        """
        bound: list[Tag] = []
        for anchor in self.soup.select(BOOKING_LINK_SELECTOR):
            if anchor.get("data-bound") == "1":
                continue
            anchor["data-bound"] = "1"
            anchor["data-base-href"] = anchor.get("data-base-href") or anchor.get("href") or ""
            self.update_href(anchor)
            bound.append(anchor)
        return bound

    def click(self, anchor: Tag) -> LinkClick:
        """Handle a click: rebuild the href and describe the click."""
        href = self.update_href(anchor)
        classes = class_list(anchor)

        case_card = anchor.find_parent(class_="case-card")
        section = anchor.find_parent("section")
        body = self.soup.body

        section_id = ""
        if section is not None and section.get("id"):
            section_id = section["id"]
        elif body is not None and body.get("data-page"):
            section_id = body["data-page"]

        return LinkClick(
            href=href,
            source=anchor.get("data-source") or UNKNOWN_SOURCE,
            case_id=case_card.get("data-case-id", "") if case_card is not None else "",
            label=anchor.get_text().strip(),
            section=section_id or "site",
            classes=classes,
        )

    @staticmethod
    def _apply_target(anchor: Tag, booking_url: str) -> None:
        if is_http_url(booking_url):
            anchor["target"] = "_blank"
            anchor["rel"] = "noopener"
        else:
            anchor.attrs.pop("target", None)
            anchor.attrs.pop("rel", None)

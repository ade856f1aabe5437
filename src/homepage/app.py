"""Homepage pipeline: wires content, rendering, links and analytics.

Mirrors one page load: send the page view, prepare reveal and sticky CTA
behaviour, load and apply content on the home page, start viewport
tracking, then bind booking links. Host events (clicks, viewport
observations, scroll, resize, animation frames) are fed in as method calls.

Usage:
    page = HomePage(html, location=PageLocation(href=url), transport=beacon)
    page.init()
    page.click(page.soup.select_one(".js-booking-link"))
    output = page.html()
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from bs4 import Tag

from src.analytics.gateway import AnalyticsGateway
from src.analytics.models import AnalyticsState, IntersectionEntry, OptionalTransport, SeenSet
from src.analytics.tracker import VisibilityTracker
from src.analytics.viewport import FrameCallback, StickyCtaVisibility, Viewport
from src.common.config import settings
from src.common.dom import parse_page
from src.common.logging import setup_logging
from src.common.models import PageLocation
from src.content_loader.loader import ContentLoader, resolve_content_url
from src.cta_links.manager import BookingLinkManager
from src.cta_links.models import LinkClick
from src.page_renderer.renderer import ContentRenderer
from src.page_renderer.reveal import RevealAnimator

logger = setup_logging(module_name="homepage")

HOME_PAGE = "home"
CASE_SECTION_ID = "case-studies"
CASE_SECTION_NAME = "case_studies"


class HomePage:
    """One page load of the studio site.

    Per-load state (page view flag, booking URL, seen-sets) is created here
    and lives exactly as long as this object.
    """

    def __init__(
        self,
        html: str,
        location: PageLocation | None = None,
        transport: OptionalTransport = None,
        loader: ContentLoader | None = None,
        viewport: Viewport | None = None,
        observer_available: bool = True,
        today: date | None = None,
    ) -> None:
        self.location = location or PageLocation()
        self.soup = parse_page(html)
        self.loader = loader
        self.viewport = viewport or Viewport()
        self.observer_available = observer_available
        self.today = today or date.today()

        self.analytics = AnalyticsGateway(self.location, transport, AnalyticsState())
        self.links = BookingLinkManager(self.soup, page_url=self.location.href)
        self.reveal = RevealAnimator(self.soup, observer_available)
        self.renderer = ContentRenderer(self.soup, self.links, on_list_rendered=self.reveal.scan)

        self.seen_case_cards = SeenSet()
        self.seen_sections = SeenSet()
        self.case_card_tracker: VisibilityTracker | None = None
        self.case_section_tracker: VisibilityTracker | None = None
        self.sticky_cta: StickyCtaVisibility | None = None
        self.content: dict | None = None
        self._frames: list[FrameCallback] = []

    @property
    def page(self) -> str:
        body = self.soup.body
        if body is not None and body.get("data-page"):
            return body["data-page"]
        return "unknown"

    # --- Page Load ---

    def init(self) -> None:
        """Run the page-load sequence."""
        self.analytics.init(page=self.page)

        self.set_current_year()
        self.reveal.scan()
        self.setup_sticky_cta()

        if self.page == HOME_PAGE:
            content = self._load_content()
            if content:
                self.content = content
                self.renderer.apply(content)

            self.setup_case_tracking()
            self.setup_case_section_tracking()

        self.links.bind_all()

    def _load_content(self) -> dict | None:
        """Load content through the injected loader, or a page-owned one.

        A page-owned loader fetches the configured content URL relative to
        the page location and is closed right after the fetch.
        """
        if self.loader is not None:
            return self.loader.load()

        content_url = resolve_content_url(settings.content.content_url, self.location.href)
        with ContentLoader(content_url) as loader:
            return loader.load()

    def set_current_year(self) -> None:
        for node in self.soup.select(".js-year"):
            node.string = str(self.today.year)

    def setup_sticky_cta(self) -> None:
        element = self.soup.select_one(".js-sticky-cta")
        if element is None:
            return
        self.sticky_cta = StickyCtaVisibility(element, self.viewport, self._frames.append)

    def setup_case_tracking(self) -> None:
        if not self.observer_available:
            return

        cards = self.soup.select(".case-card")
        if not cards:
            return

        self.case_card_tracker = VisibilityTracker(
            settings.tracking.case_card_threshold,
            on_visible=self._on_case_card_visible,
            seen=self.seen_case_cards,
            name="case_card",
        )
        for card in cards:
            self.case_card_tracker.observe(card, card.get("data-case-id", ""))

    def setup_case_section_tracking(self) -> None:
        if not self.observer_available:
            return

        section = self.soup.find(id=CASE_SECTION_ID)
        if section is None:
            return

        self.case_section_tracker = VisibilityTracker(
            settings.tracking.case_section_threshold,
            on_visible=lambda section_name, _target: self.analytics.track_section_view(section_name),
            seen=self.seen_sections,
            name="case_section",
        )
        self.case_section_tracker.observe(section, CASE_SECTION_NAME)

    def _on_case_card_visible(self, case_id: str, card: Tag) -> None:
        heading = card.find("h3")
        title = heading.get_text() if heading is not None else ""
        self.analytics.track_case_card_view(case_id, title)

    # --- Host Events ---

    def click(self, anchor: Tag) -> LinkClick:
        """A visitor clicked a booking anchor."""
        link_click = self.links.click(anchor)
        self.analytics.handle_click(link_click)
        return link_click

    def intersect(self, entries: Iterable[IntersectionEntry]) -> list[str]:
        """Deliver viewport observations to every tracker.

        Returns:
            Entity ids that fired.
        """
        entries = list(entries)
        fired: list[str] = []
        trackers = [self.case_card_tracker, self.case_section_tracker, self.reveal.tracker]
        for tracker in trackers:
            if tracker is not None:
                fired.extend(tracker.handle(entries))
        return fired

    def scroll(self, scroll_y: float) -> None:
        if self.sticky_cta is not None:
            self.sticky_cta.on_scroll(scroll_y)
        else:
            self.viewport.scroll_y = scroll_y

    def resize(self, inner_height: float) -> None:
        if self.sticky_cta is not None:
            self.sticky_cta.on_resize(inner_height)
        else:
            self.viewport.inner_height = inner_height

    def run_frame(self) -> int:
        """Run callbacks scheduled for the next animation frame."""
        frames, self._frames = self._frames, []
        for callback in frames:
            callback()
        return len(frames)

    def html(self) -> str:
        return str(self.soup)

"""Analytics gateway: the only path from the page to the transport.

Wraps an optional third-party beacon. When the beacon is missing the
gateway logs events on local development hosts and stays silent elsewhere.

Usage:
    gateway = AnalyticsGateway(PageLocation(href=url), transport=beacon)
    gateway.init(page="home")
    gateway.track_outbound_booking(href, "hero_cta")
"""

from __future__ import annotations

from src.common.config import settings
from src.common.logging import setup_logging
from src.common.models import AnalyticsEvent, EventName, PageLocation
from src.cta_links.models import LinkClick

from .models import AnalyticsState, OptionalTransport

logger = setup_logging(module_name="analytics")

UTM_QUERY_KEYS = ("utm_source", "utm_medium", "utm_campaign")


class AnalyticsGateway:
    """Emits analytics events for one page load.

    ``init`` sends exactly one page view per page load, guarded by
    ``AnalyticsState``. Every ``track*`` call is fire-and-forget with no
    deduplication; callers that need at-most-once semantics (viewport
    tracking) keep their own seen-sets.
    """

    def __init__(
        self,
        location: PageLocation | None = None,
        transport: OptionalTransport = None,
        state: AnalyticsState | None = None,
        dev_hosts: list[str] | None = None,
    ) -> None:
        self.location = location or PageLocation()
        self.transport = transport
        self.state = state or AnalyticsState()
        self.dev_hosts = list(dev_hosts if dev_hosts is not None else settings.analytics.dev_hosts)

    @property
    def is_dev_host(self) -> bool:
        return self.location.hostname in self.dev_hosts

    # --- Delivery ---

    def send(self, event_name: str, payload: dict[str, str]) -> None:
        """Forward an event to the transport, or log it on dev hosts."""
        event = AnalyticsEvent(name=event_name, payload=payload)

        if self.transport is not None:
            self.transport(event.name, event.payload)
            return

        if self.is_dev_host:
            logger.info("[analytics] %s %s", event.name, event.payload)

    # --- Page View ---

    def utm_params(self) -> dict[str, str]:
        """UTM params of the current page, empty strings when absent."""
        return {key: self.location.query_param(key) for key in UTM_QUERY_KEYS}

    def init(self, page: str | None = None) -> bool:
        """Send the page view once per page load.

        Returns:
            True if this call sent the page view.
        """
        if self.state.page_view_sent:
            return False

        self.send(
            EventName.PAGE_VIEW.value,
            {
                "page": page or "unknown",
                "referrer": self.location.referrer or "",
                **self.utm_params(),
            },
        )
        self.state.page_view_sent = True
        return True

    # --- Events ---

    def track(self, event_name: str, payload: dict[str, str] | None = None) -> None:
        self.send(event_name, dict(payload or {}))

    def track_case_card_view(self, case_id: str, case_title: str = "") -> None:
        if not case_id:
            return
        self.send(
            EventName.CASE_CARD_VIEW.value,
            {"case_id": case_id, "case_title": case_title or ""},
        )

    def track_case_cta_click(self, case_id: str, cta_label: str = "") -> None:
        if not case_id:
            return
        self.send(
            EventName.CASE_CTA_CLICK.value,
            {"case_id": case_id, "cta_label": cta_label or ""},
        )

    def track_sticky_cta_click(self, location: str = "", source_section: str = "") -> None:
        self.send(
            EventName.STICKY_BOOKING_CTA_CLICK.value,
            {
                "location": location or "floating",
                "source_section": source_section or "unknown",
            },
        )

    def track_outbound_booking(self, destination: str, source: str = "") -> None:
        self.send(
            EventName.OUTBOUND_BOOKING_CLICK.value,
            {"destination": destination or "", "source": source or "unknown"},
        )

    def track_section_view(self, section_id: str) -> None:
        if not section_id:
            return
        self.send(EventName.CASE_STUDY_SECTION_VIEW.value, {"section": section_id})

    def handle_click(self, click: LinkClick) -> None:
        """Report a booking link click and its CTA-specific event."""
        self.track_outbound_booking(click.href, click.source)

        if click.is_case_cta:
            self.track_case_cta_click(click.case_id, click.label)

        if click.is_sticky_cta:
            self.track_sticky_cta_click("floating", click.section)

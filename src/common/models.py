"""Shared data models for the studio site engine.

These models define the contracts between the content pipeline, the page
renderer and the analytics layer. All modules import from here.
"""

from __future__ import annotations

from enum import Enum
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, Field


# === Enums ===

class AudienceType(str, Enum):
    """Who a case study was built for."""
    INTERNAL = "Internal"
    EXTERNAL = "External"


class Confidentiality(str, Enum):
    """Confidentiality tier controlling the redaction notice."""
    PUBLIC = "public"
    ANONYMIZED = "anonymized"
    RESTRICTED = "restricted"


class EventName(str, Enum):
    """Analytics event names sent through the transport."""
    PAGE_VIEW = "page_view"
    CASE_CARD_VIEW = "case_card_view"
    CASE_CTA_CLICK = "case_cta_click"
    STICKY_BOOKING_CTA_CLICK = "sticky_booking_cta_click"
    OUTBOUND_BOOKING_CLICK = "outbound_booking_click"
    CASE_STUDY_SECTION_VIEW = "case_study_section_view"


# Root keys every content document must carry, in traversal order
REQUIRED_ROOT_KEYS = (
    "site",
    "trust_signals",
    "cta",
    "capabilities",
    "process_steps",
    "case_studies",
    "seo",
)


# === Page context ===

class PageLocation(BaseModel):
    """The URL the page was loaded from, plus its referrer."""
    href: str = "http://localhost/"
    referrer: str = ""

    @property
    def hostname(self) -> str:
        return urlsplit(self.href).hostname or ""

    def query_param(self, name: str) -> str:
        """First value of a query parameter, or an empty string."""
        values = parse_qs(urlsplit(self.href).query).get(name)
        return values[0] if values else ""


class AnalyticsEvent(BaseModel):
    """A single event handed to the transport."""
    name: str
    payload: dict[str, str] = Field(default_factory=dict)

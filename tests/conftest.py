"""Shared test fixtures for the studio site engine."""

import copy
import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.dom import parse_page
from src.cta_links.manager import BookingLinkManager


SAMPLE_CONTENT = {
    "site": {
        "studio_name": "HuTech Studio",
        "hero_headline": "Prototype the product before you fund the team.",
        "hero_subhead": "Working prototypes in weeks, not quarters.",
        "booking_url": "https://calendly.com/hutech/intro",
        "contact_email": "as@hutech.ventures",
    },
    "trust_signals": [
        {"label": "Prototypes shipped", "value": "40+"},
        {"label": "Median time to demo", "value": "3 weeks"},
        {"label": "Industries", "value": "Fintech, health"},
        {"label": "Team", "value": "Senior engineers"},
    ],
    "cta": {
        "primary_label": "Email the studio",
        "secondary_label": "See the work",
        "email_subject": "Prototype inquiry",
        "email_body_template": "Hi, we would like to talk.",
    },
    "capabilities": [
        {"title": "Discovery sprints", "description": "Two-week problem framing with real users."},
        {"title": "Working prototypes", "description": "Clickable software your users can try."},
        {"title": "Handover", "description": "Documentation and pairing for your team."},
    ],
    "process_steps": [
        {"step": "01", "title": "Frame", "description": "Pick one measurable outcome."},
        {"step": "02", "title": "Build", "description": "Ship weekly increments with real data."},
        {"step": "03", "title": "Decide", "description": "Scale, pivot or stop based on evidence."},
    ],
    "case_studies": [
        {
            "id": "claims-triage",
            "title": "Claims triage assistant",
            "audience_type": "Internal",
            "problem": "Adjusters spent hours sorting claims.",
            "prototype": "A triage queue inside the claims tool.",
            "outcome": "Backlog cleared in two weeks.",
            "metrics": "38% less handling time.",
            "confidentiality": "anonymized",
            "redaction_note": "Client name withheld.",
            "cta_label": "Discuss a similar challenge",
        },
        {
            "id": "driver-onboarding",
            "title": "Driver onboarding app",
            "audience_type": "External",
            "problem": "Drivers dropped out before their first shift.",
            "prototype": "A mobile onboarding flow.",
            "outcome": "Completion rose during the pilot.",
            "metrics": "52% to 71% completion.",
            "confidentiality": "public",
            "redaction_note": "No redactions.",
            "cta_label": "Plan an onboarding prototype",
        },
    ],
    "seo": {
        "title": "HuTech Studio | Prototype-first incubation",
        "description": "Working prototypes for internal and external products.",
        "og_title": "HuTech Studio",
        "og_description": "Prototype the product before you fund the team.",
        "canonical_url": "https://studio.hutech.ventures/",
    },
}


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_content() -> dict:
    """Return a valid content document (deep copy, safe to mutate)."""
    return copy.deepcopy(SAMPLE_CONTENT)


@pytest.fixture
def home_html(project_root) -> str:
    """Return the static homepage markup."""
    return (project_root / "fixtures" / "home.html").read_text(encoding="utf-8")


@pytest.fixture
def soup(home_html):
    """Parsed homepage markup."""
    return parse_page(home_html)


@pytest.fixture
def links(soup) -> BookingLinkManager:
    """Booking link manager on the parsed homepage."""
    return BookingLinkManager(
        soup,
        booking_url="mailto:as@hutech.ventures",
        utm_defaults={
            "utm_source": "incubation_studio_site",
            "utm_medium": "website",
            "utm_campaign": "studio_launch",
        },
        page_url="https://studio.hutech.ventures/",
    )


class RecordingTransport:
    """Analytics transport that records every event it receives."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def __call__(self, event_name: str, payload: dict) -> None:
        self.events.append((event_name, dict(payload)))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, event_name: str) -> list[dict]:
        return [payload for name, payload in self.events if name == event_name]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()

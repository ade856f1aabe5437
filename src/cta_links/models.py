"""Data models for the CTA link module."""

from __future__ import annotations

from dataclasses import dataclass, field


UNKNOWN_SOURCE = "unknown"


@dataclass
class UTMParams:
    """Campaign attribution parameters shared by every booking link."""
    source: str = "incubation_studio_site"
    medium: str = "website"
    campaign: str = "studio_launch"

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> UTMParams:
        return cls(
            source=data.get("utm_source", ""),
            medium=data.get("utm_medium", ""),
            campaign=data.get("utm_campaign", ""),
        )

    def to_params(self, content: str = "") -> dict[str, str]:
        """Query parameters in the order they are appended to a URL."""
        params = {
            "utm_source": self.source,
            "utm_medium": self.medium,
            "utm_campaign": self.campaign,
        }
        if content:
            params["utm_content"] = content
        return params


@dataclass
class TrackedLink:
    """Attribution state of one rendered booking anchor.

    ``current_href`` is derived from ``base_href`` and ``source`` and is never
    edited on its own.
    """
    base_href: str
    source: str = UNKNOWN_SOURCE
    current_href: str = ""
    opens_new_context: bool = False


@dataclass
class LinkClick:
    """A click on a tracked anchor, as seen by the analytics layer."""
    href: str
    source: str
    case_id: str = ""
    label: str = ""
    section: str = ""
    classes: list[str] = field(default_factory=list)

    @property
    def is_case_cta(self) -> bool:
        return "js-case-cta" in self.classes

    @property
    def is_sticky_cta(self) -> bool:
        return "js-sticky-cta" in self.classes

"""Data models for the analytics module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from src.common.models import AnalyticsEvent, EventName

# Third-party beacon: (event_name, payload) -> None. May be absent.
Transport = Callable[[str, dict[str, str]], None]
OptionalTransport = Optional[Transport]


@dataclass
class AnalyticsState:
    """Per-page-load analytics state.

    Created once with the page and never reset; ``page_view_sent`` flips to
    True on the first ``init`` call.
    """
    page_view_sent: bool = False


@dataclass(frozen=True)
class IntersectionEntry:
    """One viewport observation of a target element."""
    target: Any
    is_intersecting: bool
    intersection_ratio: float = 0.0


class SeenSet:
    """Entity identifiers that already produced their event.

    Grows monotonically; entries are never removed.
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def mark(self, entity_id: str) -> bool:
        """Add ``entity_id``; return False when it was already present."""
        if entity_id in self._ids:
            return False
        self._ids.add(entity_id)
        return True


__all__ = [
    "AnalyticsEvent",
    "AnalyticsState",
    "EventName",
    "IntersectionEntry",
    "OptionalTransport",
    "SeenSet",
    "Transport",
]

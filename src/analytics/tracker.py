"""Viewport-triggered tracking with at-most-once emission.

The host feeds ``IntersectionEntry`` messages into ``VisibilityTracker.handle``;
the tracker decides whether an entry qualifies, records the entity in its
seen-set, emits once and stops observing the element. Threshold checks and
deduplication are plain Python and need no browser to test.

Usage:
    tracker = VisibilityTracker(0.55, on_visible=lambda case_id, card: ...)
    tracker.observe(card, "case-alpha")
    tracker.handle([IntersectionEntry(card, True, 0.6)])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .models import IntersectionEntry, SeenSet

logger = logging.getLogger(__name__)

OnVisible = Callable[[str, Any], None]


@dataclass
class _Observation:
    target: Any
    entity_id: str


class VisibilityTracker:
    """Tracks one concern (case cards, a section, reveal animations).

    Args:
        threshold: Minimum intersection ratio for an entry to qualify.
        on_visible: Called with (entity_id, target) on the first qualifying
            observation of each entity.
        seen: Seen-set shared across re-registrations of the same concern.
        require_ratio: When False, any intersecting entry qualifies and
            ``threshold`` only tells the host when to deliver entries.
        name: Label used in log messages.
    """

    def __init__(
        self,
        threshold: float,
        on_visible: OnVisible,
        seen: SeenSet | None = None,
        require_ratio: bool = True,
        name: str = "visibility",
    ) -> None:
        self.threshold = threshold
        self.on_visible = on_visible
        self.seen = seen if seen is not None else SeenSet()
        self.require_ratio = require_ratio
        self.name = name
        # Keyed by object identity; DOM nodes do not hash by identity
        self._observed: dict[int, _Observation] = {}

    @property
    def observed_targets(self) -> list[Any]:
        return [obs.target for obs in self._observed.values()]

    def is_observing(self, target: Any) -> bool:
        return id(target) in self._observed

    def observe(self, target: Any, entity_id: str) -> None:
        self._observed[id(target)] = _Observation(target=target, entity_id=entity_id)

    def unobserve(self, target: Any) -> None:
        self._observed.pop(id(target), None)

    def disconnect(self) -> None:
        self._observed.clear()

    def prune(self, keep: Callable[[Any], bool]) -> int:
        """Stop observing every target for which ``keep`` returns False.

        Returns:
            Number of observations dropped.
        """
        stale = [key for key, obs in self._observed.items() if not keep(obs.target)]
        for key in stale:
            del self._observed[key]
        return len(stale)

    def qualifies(self, entry: IntersectionEntry) -> bool:
        if not entry.is_intersecting:
            return False
        if not self.require_ratio:
            return True
        return entry.intersection_ratio >= self.threshold

    def handle(self, entries: Iterable[IntersectionEntry]) -> list[str]:
        """Process a batch of observations.

        Returns:
            Entity ids that emitted during this batch.
        """
        fired: list[str] = []
        for entry in entries:
            observation = self._observed.get(id(entry.target))
            if observation is None or not self.qualifies(entry):
                continue

            self.unobserve(entry.target)

            entity_id = observation.entity_id
            if not entity_id or not self.seen.mark(entity_id):
                logger.debug("%s: skipping %r (missing or already seen)", self.name, entity_id)
                continue

            self.on_visible(entity_id, entry.target)
            fired.append(entity_id)

        return fired

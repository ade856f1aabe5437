"""Reveal-on-scroll animations for ``[data-reveal]`` elements."""

from __future__ import annotations

import itertools
import logging

from bs4 import BeautifulSoup, Tag

from src.analytics.tracker import VisibilityTracker
from src.common.config import settings
from src.common.dom import add_class, is_attached

logger = logging.getLogger(__name__)

REVEAL_SELECTOR = "[data-reveal]"
REVEAL_CLASS = "reveal"
VISIBLE_CLASS = "is-visible"


class RevealAnimator:
    """Watches reveal targets and marks them visible the first time they show.

    ``scan`` is safe to call after every list render: elements already
    watched carry ``data-reveal-observed`` and are not registered twice.
    Without viewport observation every target is shown immediately.
    """

    def __init__(self, soup: BeautifulSoup, observer_available: bool = True) -> None:
        self.soup = soup
        self.observer_available = observer_available
        self.tracker = VisibilityTracker(
            settings.tracking.reveal_threshold,
            on_visible=self._reveal,
            require_ratio=False,
            name="reveal",
        )
        self._keys = itertools.count(1)

    def scan(self) -> list[Tag]:
        """Register unwatched reveal targets.

        Watches on targets removed from the page (cleared by a list
        re-render) are dropped first.

        Returns:
            Targets registered by this call.
        """
        dropped = self.tracker.prune(lambda target: is_attached(self.soup, target))
        if dropped:
            logger.debug("Dropped %d detached reveal target(s)", dropped)

        targets = self.soup.select(REVEAL_SELECTOR)
        if not targets:
            return []

        for target in targets:
            add_class(target, REVEAL_CLASS)

        if not self.observer_available:
            for target in targets:
                add_class(target, VISIBLE_CLASS)
            return []

        registered: list[Tag] = []
        for target in targets:
            if target.get("data-reveal-observed"):
                continue
            target["data-reveal-observed"] = "1"
            self.tracker.observe(target, f"reveal-{next(self._keys)}")
            registered.append(target)

        logger.debug("Watching %d new reveal target(s)", len(registered))
        return registered

    @staticmethod
    def _reveal(entity_id: str, target: Tag) -> None:
        add_class(target, VISIBLE_CLASS)

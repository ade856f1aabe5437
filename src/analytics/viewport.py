"""Scroll-driven UI state: frame throttling and the sticky booking CTA."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from bs4 import Tag

from src.common.config import settings
from src.common.dom import has_class, toggle_class

FrameCallback = Callable[[], None]
RequestFrame = Callable[[FrameCallback], None]

VISIBLE_CLASS = "is-visible"


@dataclass
class Viewport:
    """Scroll position and size reported by the host."""
    scroll_y: float = 0.0
    inner_height: float = 800.0


def js_round(value: float) -> int:
    """Round half up, like the browser does for pixel offsets."""
    return int(math.floor(value + 0.5))


class ScrollThrottle:
    """Coalesces bursts of scroll events into one update per frame.

    ``on_scroll`` schedules ``update`` through ``request_frame`` unless a
    frame is already pending; the pending flag clears when the frame runs.
    """

    def __init__(self, update: FrameCallback, request_frame: RequestFrame) -> None:
        self._update = update
        self._request_frame = request_frame
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def on_scroll(self) -> bool:
        """Returns True if this event scheduled a frame."""
        if self._pending:
            return False
        self._pending = True
        self._request_frame(self._run)
        return True

    def _run(self) -> None:
        self._pending = False
        self._update()


class StickyCtaVisibility:
    """Shows the floating booking CTA once the visitor scrolls past the hero."""

    def __init__(
        self,
        element: Tag,
        viewport: Viewport,
        request_frame: RequestFrame,
        min_offset: int | None = None,
        viewport_ratio: float | None = None,
    ) -> None:
        self.element = element
        self.viewport = viewport
        self.min_offset = settings.tracking.sticky_min_offset if min_offset is None else min_offset
        self.viewport_ratio = (
            settings.tracking.sticky_viewport_ratio if viewport_ratio is None else viewport_ratio
        )
        self.threshold = self._compute_threshold()
        self.throttle = ScrollThrottle(self.update_visibility, request_frame)
        self.update_visibility()

    def _compute_threshold(self) -> int:
        return max(self.min_offset, js_round(self.viewport.inner_height * self.viewport_ratio))

    @property
    def is_visible(self) -> bool:
        return has_class(self.element, VISIBLE_CLASS)

    def update_visibility(self) -> None:
        toggle_class(self.element, VISIBLE_CLASS, self.viewport.scroll_y > self.threshold)

    def on_scroll(self, scroll_y: float) -> bool:
        self.viewport.scroll_y = scroll_y
        return self.throttle.on_scroll()

    def on_resize(self, inner_height: float) -> None:
        self.viewport.inner_height = inner_height
        self.threshold = self._compute_threshold()
        self.update_visibility()

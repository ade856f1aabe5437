"""Tests for viewport-triggered tracking.

Tests cover:
- Threshold qualification
- At-most-once emission per entity, across re-registration
- Elements stop being observed once they qualify
- Missing entity ids never emit
"""

from unittest.mock import MagicMock

import pytest

from src.analytics.models import IntersectionEntry, SeenSet
from src.analytics.tracker import VisibilityTracker
from src.common.dom import parse_page


# === Fixtures ===


@pytest.fixture
def cards():
    soup = parse_page(
        '<body><article class="case-card" data-case-id="alpha"></article>'
        '<article class="case-card" data-case-id="beta"></article></body>'
    )
    return soup.select(".case-card")


@pytest.fixture
def on_visible():
    return MagicMock()


@pytest.fixture
def tracker(on_visible) -> VisibilityTracker:
    return VisibilityTracker(0.55, on_visible=on_visible, name="case_card")


# === Tests ===


class TestQualification:
    @pytest.mark.parametrize("intersecting,ratio,expected", [
        (True, 0.55, True),
        (True, 0.9, True),
        (True, 0.54, False),
        (False, 1.0, False),
    ])
    def test_threshold(self, tracker, intersecting, ratio, expected):
        assert tracker.qualifies(IntersectionEntry(object(), intersecting, ratio)) is expected

    def test_ratio_not_required(self, on_visible):
        tracker = VisibilityTracker(0.15, on_visible=on_visible, require_ratio=False)
        assert tracker.qualifies(IntersectionEntry(object(), True, 0.0))
        assert not tracker.qualifies(IntersectionEntry(object(), False, 0.5))


class TestHandle:
    def test_fires_once_and_unobserves(self, tracker, cards, on_visible):
        alpha = cards[0]
        tracker.observe(alpha, "alpha")

        assert tracker.handle([IntersectionEntry(alpha, True, 0.6)]) == ["alpha"]
        on_visible.assert_called_once_with("alpha", alpha)
        assert not tracker.is_observing(alpha)

        assert tracker.handle([IntersectionEntry(alpha, True, 0.9)]) == []
        assert on_visible.call_count == 1

    def test_below_threshold_keeps_observing(self, tracker, cards, on_visible):
        alpha = cards[0]
        tracker.observe(alpha, "alpha")

        assert tracker.handle([IntersectionEntry(alpha, True, 0.3)]) == []
        assert tracker.is_observing(alpha)
        assert tracker.handle([IntersectionEntry(alpha, True, 0.7)]) == ["alpha"]

    def test_duplicate_entries_in_one_batch(self, tracker, cards, on_visible):
        alpha = cards[0]
        tracker.observe(alpha, "alpha")
        entry = IntersectionEntry(alpha, True, 0.8)

        assert tracker.handle([entry, entry]) == ["alpha"]
        on_visible.assert_called_once()

    def test_seen_set_survives_reregistration(self, cards, on_visible):
        seen = SeenSet()
        first = VisibilityTracker(0.55, on_visible=on_visible, seen=seen)
        first.observe(cards[0], "alpha")
        first.handle([IntersectionEntry(cards[0], True, 0.6)])

        second = VisibilityTracker(0.55, on_visible=on_visible, seen=seen)
        second.observe(cards[0], "alpha")
        assert second.handle([IntersectionEntry(cards[0], True, 0.6)]) == []
        assert on_visible.call_count == 1
        assert "alpha" in seen

    def test_distinct_entities_each_fire(self, tracker, cards):
        tracker.observe(cards[0], "alpha")
        tracker.observe(cards[1], "beta")

        fired = tracker.handle([
            IntersectionEntry(cards[1], True, 0.6),
            IntersectionEntry(cards[0], True, 0.6),
        ])
        assert fired == ["beta", "alpha"]

    def test_missing_entity_id_never_fires(self, tracker, cards, on_visible):
        tracker.observe(cards[0], "")
        assert tracker.handle([IntersectionEntry(cards[0], True, 1.0)]) == []
        on_visible.assert_not_called()
        assert not tracker.is_observing(cards[0])

    def test_unobserved_target_ignored(self, tracker, cards, on_visible):
        assert tracker.handle([IntersectionEntry(cards[0], True, 1.0)]) == []
        on_visible.assert_not_called()

    def test_disconnect(self, tracker, cards):
        tracker.observe(cards[0], "alpha")
        tracker.observe(cards[1], "beta")
        tracker.disconnect()
        assert tracker.observed_targets == []

    def test_prune_drops_rejected_targets(self, tracker, cards):
        tracker.observe(cards[0], "alpha")
        tracker.observe(cards[1], "beta")

        assert tracker.prune(lambda target: target is cards[1]) == 1
        assert tracker.observed_targets == [cards[1]]
        assert tracker.prune(lambda target: True) == 0


class TestSeenSet:
    def test_mark(self):
        seen = SeenSet()
        assert seen.mark("alpha") is True
        assert seen.mark("alpha") is False
        assert len(seen) == 1

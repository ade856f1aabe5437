"""Tests for reveal-on-scroll animations."""

from src.analytics.models import IntersectionEntry
from src.common.dom import class_list, is_attached, parse_page
from src.page_renderer.renderer import ContentRenderer
from src.page_renderer.reveal import RevealAnimator


PAGE = """
<body>
  <section id="one" data-reveal></section>
  <section id="two" data-reveal class="hero"></section>
  <section id="three"></section>
</body>
"""


class TestRevealAnimator:
    def test_scan_registers_targets_once(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup)

        registered = animator.scan()
        assert [t["id"] for t in registered] == ["one", "two"]
        assert all(t["data-reveal-observed"] == "1" for t in registered)
        assert "reveal" in class_list(soup.find(id="two"))
        assert "hero" in class_list(soup.find(id="two"))

        assert animator.scan() == []
        assert len(animator.tracker.observed_targets) == 2

    def test_new_targets_picked_up_on_rescan(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup)
        animator.scan()

        soup.find(id="three")["data-reveal"] = ""
        assert [t["id"] for t in animator.scan()] == ["three"]

    def test_any_intersection_reveals(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup)
        animator.scan()
        target = soup.find(id="one")

        animator.tracker.handle([IntersectionEntry(target, True, 0.01)])

        assert "is-visible" in class_list(target)
        assert not animator.tracker.is_observing(target)

    def test_not_intersecting_stays_hidden(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup)
        animator.scan()
        target = soup.find(id="one")

        animator.tracker.handle([IntersectionEntry(target, False, 0.0)])

        assert "is-visible" not in class_list(target)
        assert animator.tracker.is_observing(target)

    def test_without_observer_everything_is_visible(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup, observer_available=False)

        assert animator.scan() == []
        for section_id in ("one", "two"):
            assert "is-visible" in class_list(soup.find(id=section_id))
        assert "is-visible" not in class_list(soup.find(id="three"))

    def test_detached_targets_dropped_on_rescan(self):
        soup = parse_page(PAGE)
        animator = RevealAnimator(soup)
        animator.scan()

        soup.find(id="one").extract()
        animator.scan()

        assert [t["id"] for t in animator.tracker.observed_targets] == ["two"]

    def test_rerendered_lists_do_not_accumulate_watches(self, soup, links, sample_content):
        animator = RevealAnimator(soup)
        renderer = ContentRenderer(soup, links, on_list_rendered=animator.scan)

        renderer.apply(sample_content)
        first_cards = soup.select(".case-card")
        renderer.apply(sample_content)

        observed = animator.tracker.observed_targets
        assert len(observed) == len(soup.select("[data-reveal]"))
        assert all(is_attached(soup, target) for target in observed)
        assert not any(animator.tracker.is_observing(card) for card in first_cards)

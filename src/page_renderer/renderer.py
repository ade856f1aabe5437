"""
Content Renderer for the studio homepage.
Applies a loaded content document to the page markup.
"""

from pathlib import Path
from typing import Any, Callable, Optional

from bs4 import BeautifulSoup, Tag
from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.common.config import settings
from src.common.dom import parse_fragment, require_element, set_meta, set_text
from src.common.errors import MissingElement
from src.common.logging import setup_logging
from src.cta_links.manager import BookingLinkManager

logger = setup_logging(module_name="page_renderer")

DEFAULT_METRICS = "Evidence is available on request."
DEFAULT_REDACTION_NOTE = "Sensitive implementation details are intentionally redacted."
DEFAULT_CASE_CTA_LABEL = "Discuss a similar challenge"

# Page element ids the renderer writes to
HERO_HEADLINE_ID = "hero-headline"
HERO_SUBHEAD_ID = "hero-subhead"
CONTACT_EMAIL_ID = "contact-email"
TRUST_SIGNAL_LIST_ID = "trust-signal-list"
CAPABILITY_LIST_ID = "capability-list"
PROCESS_GRID_ID = "process-grid"
CASE_GRID_ID = "case-grid"


def _text(value: Any) -> str:
    """Only non-empty strings are written into the page."""
    return value if isinstance(value, str) else ""


def _is_object_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and all(isinstance(v, dict) for v in value)


class ContentRenderer:
    """
    Renders the content document into the homepage markup.

    Each section step runs independently and is skipped when its section is
    absent, empty or the wrong shape, or when its target element is missing.
    List sections are cleared before rendering, so ``apply`` can run again on
    the same page without duplicating content.

    Usage:
        renderer = ContentRenderer(soup, links)
        renderer.apply(content)
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        links: BookingLinkManager,
        on_list_rendered: Optional[Callable[[], None]] = None,
        templates_dir: Optional[Path] = None,
    ):
        """
        Initialize the content renderer.

        Args:
            soup: Parsed page markup, mutated in place.
            links: Booking link manager owning the current booking URL.
            on_list_rendered: Called after a list with reveal targets is
                              rendered (re-registers reveal watches).
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.soup = soup
        self.links = links
        self.on_list_rendered = on_list_rendered
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.cta_config = {
            "primary_label": settings.site.primary_label,
            "secondary_label": settings.site.secondary_label,
            "helper_text": settings.site.helper_text,
        }

    def apply(self, content: dict[str, Any]) -> None:
        """
        Apply a content document to the page.

        Steps run in a fixed order; the booking URL is updated before any
        list is rendered so new case CTAs pick up the right base href.

        Args:
            content: Parsed content document (not required to be valid)
        """
        if not isinstance(content, dict):
            logger.warning("Content document is not an object; keeping static markup")
            return

        site = content.get("site")
        if not isinstance(site, dict):
            site = {}

        steps: list[tuple[str, Callable[[], None]]] = [
            ("hero", lambda: self.apply_hero(site)),
            ("cta", lambda: self.apply_cta(content.get("cta"), site.get("contact_email"), site.get("booking_url"))),
            ("brand_distinction", lambda: self.apply_brand_distinction(content.get("brand_distinction"))),
            ("trust_signals", lambda: self.render_trust_signals(content.get("trust_signals"))),
            ("capabilities", lambda: self.render_capabilities(content.get("capabilities"))),
            ("process_steps", lambda: self.render_process_steps(content.get("process_steps"))),
            ("case_studies", lambda: self.render_case_studies(content.get("case_studies"))),
            ("seo", lambda: self.apply_seo(content.get("seo"))),
            ("studio_name", lambda: self.apply_studio_name(site.get("studio_name"))),
        ]

        for name, step in steps:
            try:
                step()
            except MissingElement as exc:
                logger.debug("Skipping %s step: element #%s not found", name, exc)

    # --- Text sections ---

    def apply_hero(self, site: dict[str, Any]) -> None:
        set_text(self.soup, HERO_HEADLINE_ID, _text(site.get("hero_headline")))
        set_text(self.soup, HERO_SUBHEAD_ID, _text(site.get("hero_subhead")))

        contact_email = _text(site.get("contact_email"))
        set_text(self.soup, CONTACT_EMAIL_ID, contact_email)

        link = self.soup.find(id=CONTACT_EMAIL_ID)
        if link is not None and contact_email:
            link["href"] = f"mailto:{contact_email}"

    def apply_cta(self, cta: Any, contact_email: Any, fallback_url: Any) -> None:
        """Update CTA labels and switch the booking URL.

        The contact email wins over ``site.booking_url``.
        """
        if isinstance(cta, dict):
            self.cta_config = {**self.cta_config, **cta}

            primary = _text(self.cta_config.get("primary_label"))
            set_text(self.soup, "hero-email-cta", primary)
            set_text(self.soup, "final-email-cta", primary)
            set_text(self.soup, "hero-secondary-cta", _text(self.cta_config.get("secondary_label")))
            set_text(self.soup, "hero-cta-helper", _text(self.cta_config.get("helper_text")))

        if _text(contact_email):
            self.links.set_booking_url(f"mailto:{contact_email}")
            return

        if _text(fallback_url):
            self.links.set_booking_url(fallback_url)

    def apply_brand_distinction(self, brand_distinction: Any) -> None:
        if not isinstance(brand_distinction, dict):
            return

        set_text(self.soup, "brand-distinction-text", _text(brand_distinction.get("message")))

        link = require_element(self.soup, "hutech-tech-link")
        url = _text(brand_distinction.get("hutech_tech_url"))
        if url.strip():
            link["href"] = url
            link.attrs.pop("hidden", None)
        else:
            link["hidden"] = ""

    def apply_seo(self, seo: Any) -> None:
        if not isinstance(seo, dict):
            return

        title = _text(seo.get("title"))
        if title:
            self._set_title(title)

        set_meta(self.soup, 'meta[name="description"]', _text(seo.get("description")))
        set_meta(self.soup, 'meta[property="og:title"]', _text(seo.get("og_title")))
        set_meta(self.soup, 'meta[property="og:description"]', _text(seo.get("og_description")))
        set_meta(self.soup, 'meta[name="twitter:title"]', _text(seo.get("og_title")))
        set_meta(self.soup, 'meta[name="twitter:description"]', _text(seo.get("og_description")))

        canonical_url = _text(seo.get("canonical_url"))
        if canonical_url:
            canonical = self.soup.select_one('link[rel="canonical"]')
            if canonical is not None:
                canonical["href"] = canonical_url

    def apply_studio_name(self, studio_name: Any) -> None:
        studio_name = _text(studio_name)
        if not studio_name:
            return
        for node in self.soup.select(".brand span"):
            node.string = studio_name

    # --- List sections ---

    def render_trust_signals(self, trust_signals: Any) -> None:
        if not _is_object_list(trust_signals):
            return
        self._render_list(TRUST_SIGNAL_LIST_ID, "trust_signals.html", trust_signals=trust_signals)

    def render_capabilities(self, capabilities: Any) -> None:
        if not _is_object_list(capabilities):
            return
        self._render_list(CAPABILITY_LIST_ID, "capabilities.html", capabilities=capabilities)

    def render_process_steps(self, process_steps: Any) -> None:
        if not _is_object_list(process_steps):
            return
        self._render_list(PROCESS_GRID_ID, "process_steps.html", process_steps=process_steps)
        self._notify_list_rendered()

    def render_case_studies(self, case_studies: Any) -> None:
        if not _is_object_list(case_studies):
            return

        grid = self._render_list(
            CASE_GRID_ID,
            "case_cards.html",
            case_studies=case_studies,
            default_metrics=DEFAULT_METRICS,
            default_redaction_note=DEFAULT_REDACTION_NOTE,
            default_cta_label=DEFAULT_CASE_CTA_LABEL,
        )
        for anchor in grid.select(".js-case-cta"):
            self.links.decorate(anchor, anchor["data-source"])

        self._notify_list_rendered()

    # --- Helpers ---

    def _render_list(self, container_id: str, template_name: str, **context: Any) -> Tag:
        """Replace a container's children with a rendered template."""
        container = require_element(self.soup, container_id)
        html = self.env.get_template(template_name).render(**context)

        container.clear()
        for node in parse_fragment(html):
            container.append(node)

        logger.debug("Rendered %s into #%s", template_name, container_id)
        return container

    def _notify_list_rendered(self) -> None:
        if self.on_list_rendered is not None:
            self.on_list_rendered()

    def _set_title(self, title: str) -> None:
        if self.soup.title is not None:
            self.soup.title.string = title
            return
        head = self.soup.head
        if head is not None:
            tag = self.soup.new_tag("title")
            tag.string = title
            head.append(tag)

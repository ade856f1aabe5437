"""CLI entry point for previewing the homepage with a content document.

Usage:
    python -m src.homepage.main --html index.html --output preview.html
    python -m src.homepage.main --html index.html \\
        --content assets/data/site-content.json --page-url http://localhost:8000/
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from src.common.config import settings
from src.common.models import PageLocation
from src.content_loader.loader import ContentLoader

from .app import HomePage

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Homepage preview renderer")
    parser.add_argument("--html", type=str, required=True, help="Static homepage markup")
    parser.add_argument(
        "--content",
        type=str,
        default=settings.content.content_url,
        help="Content document path or URL",
    )
    parser.add_argument(
        "--page-url",
        type=str,
        default="http://localhost/",
        help="URL the page is served from (used for relative links)",
    )
    parser.add_argument("--output", type=str, help="Output HTML path (default: stdout)")
    args = parser.parse_args(argv)

    html = Path(args.html).read_text(encoding="utf-8")

    with ContentLoader(args.content) as loader:
        page = HomePage(html, location=PageLocation(href=args.page_url), loader=loader)
        page.init()

    if page.content is None:
        logger.warning("No content applied; output keeps the static markup")

    output = page.html()
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info("Output written to %s", args.output)
    else:
        print(output)


if __name__ == "__main__":
    main()

"""CLI entry point for the content validator.

Gates a build or deploy step: exits 1 with a numbered list of problems on
stderr when the content document is broken, 0 otherwise.

Usage:
    python -m src.content_validator.main
    python -m src.content_validator.main --content assets/data/site-content.json \\
        --schema assets/data/site-content.schema.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from src.common.config import settings

from .models import format_violations
from .validator import ContentValidator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _read_json(path: Path, label: str):
    """Parse a JSON file, reporting failures on stderr.

    Returns:
        Tuple of (ok, parsed value).
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        print(f"Invalid JSON in {label}: not valid UTF-8 ({exc})", file=sys.stderr)
        return False, None
    except (OSError, ValueError) as exc:
        print(f"Validation script failed: cannot read {path}: {exc}", file=sys.stderr)
        return False, None

    try:
        return True, json.loads(raw)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in {label}: {exc}", file=sys.stderr)
        return False, None


def run(content_path: Path, schema_path: Path, schema_title: str) -> int:
    """Validate the content document and return the process exit code."""
    ok, content = _read_json(content_path, content_path.name)
    if not ok:
        return 1

    ok, schema = _read_json(schema_path, schema_path.name)
    if not ok:
        return 1

    if not isinstance(schema, dict) or schema.get("title") != schema_title:
        print(
            f"Unexpected schema metadata. Ensure {schema_path.name} is present and valid.",
            file=sys.stderr,
        )
        return 1

    violations = ContentValidator().validate(content)
    if violations:
        print("Content validation failed:", file=sys.stderr)
        for line in format_violations(violations):
            print(line, file=sys.stderr)
        logger.debug("Validation failed with %d violation(s)", len(violations))
        return 1

    print("Content validation passed.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Site content validator")
    parser.add_argument(
        "--content",
        type=str,
        default=settings.content.content_path,
        help="Path to the site content JSON document",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=settings.content.schema_path,
        help="Path to the site content schema metadata JSON",
    )
    args = parser.parse_args(argv)

    return run(Path(args.content), Path(args.schema), settings.content.schema_title)


if __name__ == "__main__":
    sys.exit(main())

# Page Renderer Module
# Applies the content document to the homepage markup

from .renderer import (
    ContentRenderer,
    DEFAULT_CASE_CTA_LABEL,
    DEFAULT_METRICS,
    DEFAULT_REDACTION_NOTE,
)
from .reveal import RevealAnimator

__all__ = [
    "ContentRenderer",
    "DEFAULT_CASE_CTA_LABEL",
    "DEFAULT_METRICS",
    "DEFAULT_REDACTION_NOTE",
    "RevealAnimator",
]

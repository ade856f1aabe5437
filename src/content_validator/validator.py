"""Schema checks for the site content document.

Walks the document in a fixed order (root keys, site, trust_signals, cta,
capabilities, process_steps, case_studies, seo) and collects every defect
instead of stopping at the first one. The validator is pure: it never raises
for a malformed document and has no knowledge of files or processes.

Usage:
    validator = ContentValidator()
    violations = validator.validate(document)
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit

from src.common.errors import SchemaViolationError
from src.common.models import REQUIRED_ROOT_KEYS, AudienceType, Confidentiality

from .models import ROOT_PATH, Violation

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
STEP_PATTERN = re.compile(r"[0-9]{2}")
CASE_ID_PATTERN = re.compile(r"[a-z0-9-]+")

SITE_KEYS = ("studio_name", "hero_headline", "hero_subhead", "booking_url", "contact_email")
CTA_KEYS = ("primary_label", "secondary_label", "email_subject", "email_body_template")
SEO_KEYS = ("title", "description", "og_title", "og_description", "canonical_url")
CASE_STUDY_KEYS = (
    "id",
    "title",
    "audience_type",
    "problem",
    "prototype",
    "outcome",
    "metrics",
    "confidentiality",
    "redaction_note",
    "cta_label",
)

MIN_TRUST_SIGNALS = 4
MIN_CAPABILITIES = 3
PROCESS_STEP_COUNT = 3
MIN_CASE_STUDIES = 1

VALID_AUDIENCE = {a.value for a in AudienceType}
VALID_CONFIDENTIALITY = {c.value for c in Confidentiality}


# --- Predicates ---

def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def has_min_length(value: Any, minimum: int) -> bool:
    return isinstance(value, str) and len(value.strip()) >= minimum


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_http_url(value: str) -> bool:
    """Absolute http(s) URL with a well-formed host."""
    try:
        parts = urlsplit(value.strip())
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return (
        parts.scheme.lower() in ("http", "https")
        and bool(parts.hostname)
        and not any(ch.isspace() for ch in parts.netloc)
    )


def is_valid_contact_uri(value: str) -> bool:
    """Absolute http(s) URL or a mailto: URI with an address."""
    if value[:7].lower() == "mailto:":
        return len(value) > 7 and not any(ch.isspace() for ch in value)
    return is_valid_http_url(value)


class ContentValidator:
    """Validates a parsed content document against the site content schema.

    A malformed parent (wrong type) produces a single violation and its
    child checks are skipped. Format checks (email, URLs, step numbers,
    case ids) only run once the field passed its non-empty string check.
    """

    def validate(self, document: Any) -> list[Violation]:
        """Run all checks and return violations in traversal order.

        Args:
            document: Parsed JSON content (any type).

        Returns:
            List of Violation, empty when the document is valid.
        """
        if not is_object(document):
            return [Violation(ROOT_PATH, "Root content must be an object.")]

        violations: list[Violation] = []
        for key in REQUIRED_ROOT_KEYS:
            if key not in document:
                violations.append(Violation(key, f"Missing required root key: {key}"))

        checks = (
            ("site", self._check_site),
            ("trust_signals", self._check_trust_signals),
            ("cta", self._check_cta),
            ("capabilities", self._check_capabilities),
            ("process_steps", self._check_process_steps),
            ("case_studies", self._check_case_studies),
            ("seo", self._check_seo),
        )
        for key, check in checks:
            # Absent keys were already reported above
            if key in document:
                violations.extend(check(document[key]))

        logger.debug("Content validation found %d violation(s)", len(violations))
        return violations

    def validate_or_raise(self, document: Any) -> None:
        """Raise SchemaViolationError when the document has any violation."""
        violations = self.validate(document)
        if violations:
            raise SchemaViolationError(violations)

    # --- Sections ---

    def _check_site(self, site: Any) -> list[Violation]:
        if not is_object(site):
            return [Violation("site", "site must be an object.")]

        violations = self._check_required_strings(site, "site", SITE_KEYS)

        booking_url = site.get("booking_url")
        if is_non_empty_string(booking_url) and not is_valid_contact_uri(booking_url):
            violations.append(
                Violation("site.booking_url", "site.booking_url must be a valid http(s) or mailto URI.")
            )

        contact_email = site.get("contact_email")
        if is_non_empty_string(contact_email) and not is_valid_email(contact_email):
            violations.append(
                Violation("site.contact_email", "site.contact_email must be a valid email address.")
            )

        return violations

    def _check_trust_signals(self, trust_signals: Any) -> list[Violation]:
        if not isinstance(trust_signals, list):
            return [Violation("trust_signals", "trust_signals must be an array.")]

        violations: list[Violation] = []
        if len(trust_signals) < MIN_TRUST_SIGNALS:
            violations.append(
                Violation("trust_signals", f"trust_signals must include at least {MIN_TRUST_SIGNALS} entries.")
            )

        for index, signal in enumerate(trust_signals):
            prefix = f"trust_signals[{index}]"
            if not is_object(signal):
                violations.append(Violation(prefix, f"{prefix} must be an object."))
                continue
            violations.extend(self._check_min_lengths(signal, prefix, {"label": 3, "value": 3}))

        return violations

    def _check_cta(self, cta: Any) -> list[Violation]:
        if not is_object(cta):
            return [Violation("cta", "cta must be an object.")]
        return self._check_required_strings(cta, "cta", CTA_KEYS)

    def _check_capabilities(self, capabilities: Any) -> list[Violation]:
        if not isinstance(capabilities, list):
            return [Violation("capabilities", "capabilities must be an array.")]

        violations: list[Violation] = []
        if len(capabilities) < MIN_CAPABILITIES:
            violations.append(
                Violation("capabilities", f"capabilities must include at least {MIN_CAPABILITIES} entries.")
            )

        for index, capability in enumerate(capabilities):
            prefix = f"capabilities[{index}]"
            if not is_object(capability):
                violations.append(Violation(prefix, f"{prefix} must be an object."))
                continue
            violations.extend(
                self._check_min_lengths(capability, prefix, {"title": 3, "description": 10})
            )

        return violations

    def _check_process_steps(self, process_steps: Any) -> list[Violation]:
        if not isinstance(process_steps, list):
            return [Violation("process_steps", "process_steps must be an array.")]

        violations: list[Violation] = []
        if len(process_steps) != PROCESS_STEP_COUNT:
            violations.append(
                Violation("process_steps", f"process_steps must include exactly {PROCESS_STEP_COUNT} steps.")
            )

        for index, step in enumerate(process_steps):
            prefix = f"process_steps[{index}]"
            if not is_object(step):
                violations.append(Violation(prefix, f"{prefix} must be an object."))
                continue

            number = step.get("step")
            if not (isinstance(number, str) and STEP_PATTERN.fullmatch(number)):
                violations.append(
                    Violation(f"{prefix}.step", f"{prefix}.step must match two-digit format (01, 02, ...).")
                )
            violations.extend(self._check_min_lengths(step, prefix, {"title": 3, "description": 10}))

        return violations

    def _check_case_studies(self, case_studies: Any) -> list[Violation]:
        if not isinstance(case_studies, list):
            return [Violation("case_studies", "case_studies must be an array.")]

        violations: list[Violation] = []
        if len(case_studies) < MIN_CASE_STUDIES:
            violations.append(
                Violation("case_studies", f"case_studies must include at least {MIN_CASE_STUDIES} entry.")
            )

        seen_ids: set[str] = set()
        for index, case_study in enumerate(case_studies):
            prefix = f"case_studies[{index}]"
            if not is_object(case_study):
                violations.append(Violation(prefix, f"{prefix} must be an object."))
                continue

            violations.extend(self._check_required_strings(case_study, prefix, CASE_STUDY_KEYS))

            case_id = case_study.get("id")
            if is_non_empty_string(case_id):
                if not CASE_ID_PATTERN.fullmatch(case_id):
                    violations.append(
                        Violation(f"{prefix}.id", f"{prefix}.id must match /^[a-z0-9-]+$/.")
                    )
                if case_id in seen_ids:
                    violations.append(
                        Violation(
                            f"{prefix}.id",
                            f"{prefix}.id must be unique; duplicate id '{case_id}' found.",
                        )
                    )
                seen_ids.add(case_id)

            audience = case_study.get("audience_type")
            if is_non_empty_string(audience) and audience not in VALID_AUDIENCE:
                violations.append(
                    Violation(f"{prefix}.audience_type", f"{prefix}.audience_type must be Internal or External.")
                )

            confidentiality = case_study.get("confidentiality")
            if is_non_empty_string(confidentiality) and confidentiality not in VALID_CONFIDENTIALITY:
                violations.append(
                    Violation(
                        f"{prefix}.confidentiality",
                        f"{prefix}.confidentiality must be one of public|anonymized|restricted.",
                    )
                )

        return violations

    def _check_seo(self, seo: Any) -> list[Violation]:
        if not is_object(seo):
            return [Violation("seo", "seo must be an object.")]

        violations = self._check_required_strings(seo, "seo", SEO_KEYS)

        canonical_url = seo.get("canonical_url")
        if is_non_empty_string(canonical_url) and not is_valid_http_url(canonical_url):
            violations.append(
                Violation("seo.canonical_url", "seo.canonical_url must be a valid http(s) URL.")
            )

        return violations

    # --- Field helpers ---

    @staticmethod
    def _check_required_strings(
        obj: dict, prefix: str, keys: tuple[str, ...]
    ) -> list[Violation]:
        return [
            Violation(f"{prefix}.{key}", f"{prefix}.{key} must be a non-empty string.")
            for key in keys
            if not is_non_empty_string(obj.get(key))
        ]

    @staticmethod
    def _check_min_lengths(
        obj: dict, prefix: str, minimums: dict[str, int]
    ) -> list[Violation]:
        return [
            Violation(f"{prefix}.{key}", f"{prefix}.{key} must be at least {minimum} characters.")
            for key, minimum in minimums.items()
            if not has_min_length(obj.get(key), minimum)
        ]


def validate_content(document: Any) -> list[Violation]:
    """Convenience function to validate a content document."""
    return ContentValidator().validate(document)

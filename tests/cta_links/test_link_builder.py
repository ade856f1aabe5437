"""Tests for booking link URL building.

Tests cover:
- UTM parameter merging and overwriting
- Idempotent re-decoration and source changes
- mailto query stripping
- Relative URL resolution against the page location
- Malformed and non-http URLs pass through unchanged
"""

import pytest

from src.cta_links.builder import (
    build_cta_href,
    is_http_url,
    is_mailto_url,
    with_mailto_params,
    with_tracking_params,
)
from src.cta_links.models import UTMParams


PAGE_URL = "https://studio.hutech.ventures/about"
DEFAULTS = UTMParams().to_params()
UTM_QUERY = "utm_source=incubation_studio_site&utm_medium=website&utm_campaign=studio_launch"


# === Tracking params ===


class TestWithTrackingParams:
    def test_appends_params_in_order(self):
        result = with_tracking_params(
            "https://calendly.com/hutech/intro",
            {**DEFAULTS, "utm_content": "hero_primary"},
        )
        assert result == (
            f"https://calendly.com/hutech/intro?{UTM_QUERY}&utm_content=hero_primary"
        )

    def test_overwrites_existing_keys_in_place(self):
        result = with_tracking_params(
            "https://calendly.com/hutech?ref=abc&utm_source=newsletter",
            DEFAULTS,
        )
        assert result == (
            "https://calendly.com/hutech?ref=abc&utm_source=incubation_studio_site"
            "&utm_medium=website&utm_campaign=studio_launch"
        )

    def test_keeps_blank_existing_values(self):
        result = with_tracking_params("https://example.com/?a=&b=1", {"utm_content": "x"})
        assert result == "https://example.com/?a=&b=1&utm_content=x"

    def test_skips_empty_param_values(self):
        result = with_tracking_params(
            "https://example.com/book",
            {"utm_source": "", "utm_content": "final_cta"},
        )
        assert result == "https://example.com/book?utm_content=final_cta"

    def test_empty_path_becomes_root(self):
        result = with_tracking_params("https://calendly.com", {"utm_content": "x"})
        assert result == "https://calendly.com/?utm_content=x"

    def test_keeps_fragment(self):
        result = with_tracking_params("https://example.com/a#top", {"utm_content": "x"})
        assert result == "https://example.com/a?utm_content=x#top"

    def test_relative_url_resolved_against_page(self):
        result = with_tracking_params("/book", {"utm_content": "x"}, PAGE_URL)
        assert result == "https://studio.hutech.ventures/book?utm_content=x"

    @pytest.mark.parametrize("url", ["http://[::1", "https://example.com:port/"])
    def test_malformed_url_unchanged(self, url):
        assert with_tracking_params(url, DEFAULTS) == url

    @pytest.mark.parametrize("url", ["tel:+4712345678", "javascript:void(0)"])
    def test_non_http_url_unchanged(self, url):
        assert with_tracking_params(url, DEFAULTS) == url

    def test_empty_url_unchanged(self):
        assert with_tracking_params("", DEFAULTS) == ""


# === mailto ===


class TestMailto:
    def test_strips_query(self):
        assert with_mailto_params("mailto:as@hutech.ventures?subject=Hello&body=Hi") == (
            "mailto:as@hutech.ventures"
        )

    def test_plain_address(self):
        assert with_mailto_params("mailto:as@hutech.ventures") == "mailto:as@hutech.ventures"

    def test_detection_is_case_insensitive(self):
        assert is_mailto_url("MAILTO:as@hutech.ventures")
        assert not is_mailto_url("https://calendly.com")
        assert is_http_url("HTTPS://calendly.com")
        assert not is_http_url("mailto:as@hutech.ventures")
        assert not is_http_url("")


# === CTA href ===


class TestBuildCtaHref:
    def test_http_url_gets_source_as_content(self):
        result = build_cta_href("https://calendly.com/hutech/intro", "case_card_alpha", DEFAULTS)
        assert result.endswith("&utm_content=case_card_alpha")
        assert result.startswith(f"https://calendly.com/hutech/intro?{UTM_QUERY}")

    def test_mailto_has_no_tracking_params(self):
        result = build_cta_href("mailto:as@hutech.ventures?subject=Hi", "hero_primary", DEFAULTS)
        assert result == "mailto:as@hutech.ventures"

    def test_idempotent(self):
        once = build_cta_href("https://calendly.com/hutech?ref=abc", "hero_primary", DEFAULTS, PAGE_URL)
        twice = build_cta_href(once, "hero_primary", DEFAULTS, PAGE_URL)
        assert twice == once

    def test_source_change_replaces_content(self):
        first = build_cta_href("https://calendly.com/hutech", "hero_primary", DEFAULTS)
        second = build_cta_href(first, "final_cta", DEFAULTS)
        assert second.count("utm_content=") == 1
        assert second.endswith("utm_content=final_cta")

    def test_relative_url(self):
        result = build_cta_href("book", "final_cta", DEFAULTS, PAGE_URL)
        assert result == f"https://studio.hutech.ventures/book?{UTM_QUERY}&utm_content=final_cta"


class TestUTMParams:
    def test_from_dict_roundtrip_order(self):
        params = UTMParams.from_dict({
            "utm_campaign": "launch",
            "utm_source": "site",
            "utm_medium": "web",
        })
        assert list(params.to_params("hero").items()) == [
            ("utm_source", "site"),
            ("utm_medium", "web"),
            ("utm_campaign", "launch"),
            ("utm_content", "hero"),
        ]

    def test_content_omitted_when_empty(self):
        assert "utm_content" not in UTMParams().to_params()

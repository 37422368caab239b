"""Tests for the download-endpoint allow-list."""

from __future__ import annotations

import pytest

from acfkey.matcher import ACF_PRO_DOWNLOAD_URL, UrlMatcher


class TestUrlMatcher:
    def test_endpoint_constant(self) -> None:
        assert ACF_PRO_DOWNLOAD_URL == (
            "https://connect.advancedcustomfields.com/index.php?p=pro&a=download"
        )

    def test_exact_endpoint_matches(self) -> None:
        assert UrlMatcher().matches(ACF_PRO_DOWNLOAD_URL)

    @pytest.mark.parametrize(
        "url",
        [
            "https://connect.advancedcustomfields.com/index.php?p=pro&a=download&t=6.2.4",
            "https://connect.advancedcustomfields.com/index.php?a=download&p=pro",
            "https://CONNECT.AdvancedCustomFields.com/index.php?p=pro&a=download",
            "https://connect.advancedcustomfields.com:443/index.php?p=pro&a=download",
        ],
    )
    def test_documented_variants_match(self, url: str) -> None:
        assert UrlMatcher().matches(url)

    @pytest.mark.parametrize(
        "url",
        [
            "another-url",
            "",
            "https://packagist.org/packages/advanced-custom-fields/advanced-custom-fields-pro",
            "http://connect.advancedcustomfields.com/index.php?p=pro&a=download",
            "https://connect.advancedcustomfields.com/index.php?p=pro",
            "https://connect.advancedcustomfields.com/index.php?p=free&a=download",
            "https://connect.advancedcustomfields.com/other.php?p=pro&a=download",
            "https://connect.advancedcustomfields.com/index.php",
            "https://connect.advancedcustomfields.com:8443/index.php?p=pro&a=download",
            "https://connect.advancedcustomfields.com.evil.example/index.php?p=pro&a=download",
            "https://evil.example/index.php?p=pro&a=download",
            "https://evil.example/?u=https://connect.advancedcustomfields.com/index.php?p=pro&a=download",
            "https://downloads.wordpress.org/plugin/advanced-custom-fields.zip",
        ],
    )
    def test_other_urls_do_not_match(self, url: str) -> None:
        assert not UrlMatcher().matches(url)

    def test_custom_endpoint(self) -> None:
        matcher = UrlMatcher("https://vendor.example/download?p=pro")
        assert matcher.matches("https://vendor.example/download?p=pro")
        assert matcher.matches("https://vendor.example/download?p=pro&v=2")
        assert not matcher.matches(ACF_PRO_DOWNLOAD_URL)

    def test_endpoint_property(self) -> None:
        assert UrlMatcher().endpoint == ACF_PRO_DOWNLOAD_URL

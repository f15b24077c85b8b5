"""Tests for wsg_check.services.url_guard."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from wsg_check.services.url_guard import check_private_network, check_scheme, validate_url


class TestCheckScheme:

    @pytest.mark.parametrize("url", ["https://example.com/", "http://example.com/page"])
    def test_http_urls_pass(self, url):
        assert check_scheme(url) is None

    @pytest.mark.parametrize("url", ["ftp://example.com/", "file:///etc/passwd", "example.com"])
    def test_other_schemes_fail(self, url):
        assert "Invalid scheme" in check_scheme(url)

    def test_empty_host_fails(self):
        assert check_scheme("https:///path") == "Empty hostname"


class TestPrivateNetwork:

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost/",
            "http://127.0.0.1/",
            "http://10.1.2.3/",
            "http://192.168.0.10/admin",
            "http://169.254.169.254/latest/meta-data",
            "http://[::1]/",
        ],
    )
    def test_blocked_targets(self, url):
        assert check_private_network(url) is not None

    def test_public_ip_allowed(self):
        assert check_private_network("http://93.184.216.34/") is None

    def test_hostname_resolving_to_private_ip(self):
        with patch("wsg_check.services.url_guard.socket.gethostbyname", return_value="10.0.0.5"):
            assert "blocked range" in check_private_network("http://intranet.example/")


class TestValidateUrl:

    def test_private_allowed_unless_blocking(self):
        assert validate_url("http://127.0.0.1/") is None
        assert validate_url("http://127.0.0.1/", block_private_networks=True) is not None

    def test_scheme_checked_first(self):
        assert "Invalid scheme" in validate_url("ftp://127.0.0.1/", block_private_networks=True)

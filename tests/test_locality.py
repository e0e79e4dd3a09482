"""Tests for page_loader.services.locality.is_local."""

import pytest

from page_loader.services.locality import is_local

_PAGE = "https://example.com/a/b"


class TestIsLocal:
    @pytest.mark.parametrize(
        "ref",
        [
            "/img/x.png",
            "img/x.png",
            "../x.css",
            "https://example.com/x.js",
            "http://example.com/x.js",
            "//example.com/x.js",
            "/x.png?v=1#frag",
        ],
    )
    def test_same_host_is_local(self, ref):
        assert is_local(_PAGE, ref) is True

    @pytest.mark.parametrize("ref", ["", None])
    def test_empty_reference_is_not_local(self, ref):
        assert is_local(_PAGE, ref) is False

    def test_data_uri_is_not_local(self):
        assert is_local(_PAGE, "data:image/png;base64,iVBORw0KGgo=") is False

    def test_other_host_is_not_local(self):
        assert is_local(_PAGE, "https://other.com/y.png") is False

    def test_subdomain_is_not_local(self):
        assert is_local(_PAGE, "https://cdn.example.com/y.png") is False

    def test_different_port_is_not_local(self):
        assert is_local(_PAGE, "https://example.com:8443/y.png") is False

    def test_host_comparison_ignores_case(self):
        assert is_local(_PAGE, "https://EXAMPLE.com/y.png") is True

    def test_malformed_reference_is_not_local_and_does_not_raise(self, caplog):
        assert is_local(_PAGE, "http://[::1/broken") is False
        assert "unparsable reference" in caplog.text

    def test_explicit_default_port_is_local(self):
        assert is_local(_PAGE, "https://example.com:443/x.png") is True

    def test_surrounding_whitespace_is_ignored(self):
        assert is_local(_PAGE, "  /img/x.png\n") is True

    @pytest.mark.parametrize("ref", ["   ", "\n\t", "\x00 "])
    def test_blank_reference_is_not_local(self, ref):
        assert is_local(_PAGE, ref) is False

    def test_reference_the_client_cannot_request_is_not_local(self, caplog):
        assert is_local(_PAGE, "/img/x\x01.png") is False
        assert "unparsable reference" in caplog.text

# =============================================================================
# tests/test_origin_fetcher.py - Origin Fetcher Tests
# =============================================================================

import httpx
import pytest

from app.exceptions import OriginUnavailableError
from core.services.origin_fetcher import OriginFetcher


def _fetcher(handler) -> OriginFetcher:
    return OriginFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)), timeout=2)


class TestFetch:
    """Tests for OriginFetcher.fetch."""

    def test_success_returns_bytes_and_type(self):
        fetcher = _fetcher(lambda request: httpx.Response(
            200, content=b"img", headers={"content-type": "image/jpeg; charset=binary"}
        ))

        image = fetcher.fetch("https://origin.test/1.jpg")

        assert image.content == b"img"
        assert image.content_type == "image/jpeg"

    def test_missing_content_type_defaults(self):
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"img"))

        assert fetcher.fetch("https://origin.test/1").content_type == "application/octet-stream"

    @pytest.mark.parametrize("status_code", [301, 404, 500, 503])
    def test_non_success_raises(self, status_code):
        """Any non-2xx status is an origin failure."""
        fetcher = _fetcher(lambda request: httpx.Response(status_code))

        with pytest.raises(OriginUnavailableError) as exc_info:
            fetcher.fetch("https://origin.test/1")

        assert exc_info.value.status_code == 502
        assert exc_info.value.details["upstream_status"] == status_code

    @pytest.mark.parametrize("error", [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ])
    def test_transport_error_raises(self, error):
        def handler(request):
            raise error

        with pytest.raises(OriginUnavailableError) as exc_info:
            _fetcher(handler).fetch("https://origin.test/1")

        assert "upstream_status" not in exc_info.value.details

    def test_single_attempt(self):
        """The fetcher never retries."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(OriginUnavailableError):
            _fetcher(handler).fetch("https://origin.test/1")

        assert len(calls) == 1


class TestFetchJson:
    """Tests for OriginFetcher.fetch_json."""

    def test_decodes_json(self):
        fetcher = _fetcher(lambda request: httpx.Response(200, json={"data": {"id": 2}}))

        assert fetcher.fetch_json("https://directory.test/users/2") == {"data": {"id": 2}}

    def test_invalid_json_raises(self):
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(OriginUnavailableError):
            fetcher.fetch_json("https://directory.test/users/2")

# =============================================================================
# core/services/origin_fetcher.py - Outbound Origin Requests
# =============================================================================
# Single-shot GET requests against external origins (default avatar images,
# user directory). Non-success responses and transport errors are reported
# uniformly as OriginUnavailableError. Nothing here retries.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import settings
from app.exceptions import OriginUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FetchedImage:
    """Raw bytes returned by an origin, with the reported content type."""
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE


class OriginFetcher:
    """
    Fetches resources from external HTTP origins.

    A shared httpx.Client may be injected (tests pass one backed by
    httpx.MockTransport); otherwise a short-lived client is used per call.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self._client = client
        self.timeout = timeout if timeout is not None else settings.ORIGIN_TIMEOUT_SECONDS

    def fetch(self, url: str, timeout: float | None = None) -> FetchedImage:
        """
        Fetch raw bytes from an origin.

        Args:
            url: Absolute URL to GET
            timeout: Per-call timeout in seconds (defaults to the fetcher's)

        Returns:
            FetchedImage with content and content type

        Raises:
            OriginUnavailableError: On network failure, timeout or non-2xx status
        """
        response = self._get(url, timeout)
        content_type = response.headers.get("content-type", DEFAULT_CONTENT_TYPE)
        content_type = content_type.split(";")[0].strip() or DEFAULT_CONTENT_TYPE

        logger.info(f"Fetched {len(response.content)} bytes from origin: {url}")
        return FetchedImage(content=response.content, content_type=content_type)

    def fetch_json(self, url: str, timeout: float | None = None) -> Any:
        """
        Fetch and decode a JSON document from an origin.

        Raises:
            OriginUnavailableError: On network failure, non-2xx status or invalid JSON
        """
        response = self._get(url, timeout)
        try:
            return response.json()
        except ValueError as e:
            raise OriginUnavailableError(url, f"invalid JSON: {e}")

    def _get(self, url: str, timeout: float | None) -> httpx.Response:
        effective_timeout = timeout if timeout is not None else self.timeout

        try:
            if self._client is not None:
                response = self._client.get(url, timeout=effective_timeout)
            else:
                with httpx.Client(timeout=effective_timeout) as client:
                    response = client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Origin request failed: {url} - {e}")
            raise OriginUnavailableError(url, str(e) or e.__class__.__name__)

        if not response.is_success:
            logger.warning(f"Origin returned HTTP {response.status_code}: {url}")
            raise OriginUnavailableError(
                url,
                f"HTTP {response.status_code}",
                upstream_status=response.status_code,
            )

        return response

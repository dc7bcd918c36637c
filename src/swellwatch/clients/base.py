"""Base async HTTP client for plain-text upstream feeds.

Every source client inherits from this base to get consistent behavior:
- Async/await for non-blocking I/O
- Connection pooling across candidate URLs
- One request per call: fallback is the caller's job, not a retry loop here
- Transport failures normalized to SourceError

Usage:
    class MyFeedClient(BaseAsyncClient):
        def __init__(self, timeout: float = 10.0):
            super().__init__(headers={"User-Agent": "my-agent"}, timeout=timeout)

    async with MyFeedClient() as client:
        text = await client.get_text("https://example.com/feed.txt")
"""

import logging

import httpx

from swellwatch.errors import SourceError


logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 500


class BaseAsyncClient:
    """Base async HTTP client returning decoded response text.

    Args:
        headers: Default headers for all requests
        timeout: Request timeout in seconds (default: 10)
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.headers = headers or {}
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseAsyncClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=2, max_connections=4),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_text(self, url: str) -> str:
        """GET a URL and return its body as text.

        Args:
            url: Absolute URL to fetch

        Returns:
            Decoded response body

        Raises:
            SourceError: On non-success status, timeout or network error
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        logger.debug("GET %s", url)

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise SourceError(f"Request timeout after {self.timeout:g}s: {e}") from e
        except httpx.HTTPError as e:
            raise SourceError(f"Network error: {e}") from e

        logger.debug("Response: %d for %s", response.status_code, url)

        if not response.is_success:
            raise SourceError(
                f"{response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
                response_body=response.text[:_ERROR_BODY_LIMIT],
            )

        # httpx decodes with errors="replace", so text access cannot fail
        return response.text

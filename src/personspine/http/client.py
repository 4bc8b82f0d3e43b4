"""HTTP client for enrichment providers.

Provides an async HTTP client with:
- A hard timeout on every request
- Optional client-side rate limiting
- Connection pooling shared by all providers
- Typed errors separating transport failures from bad statuses

No retries are made; a failed call is reported to the caller as is.

Example:
    >>> from personspine.http import HttpClient
    >>>
    >>> async with HttpClient(timeout=5.0) as client:
    ...     response = await client.get("https://api.agify.io/", params={"name": "Zahar"})
    ...     payload = response.json()
"""

from __future__ import annotations

from typing import Any

import httpx

from personspine.http.rate_limiter import RateLimiter


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""


class HttpTransportError(HttpClientError):
    """Raised when the request could not be sent or timed out."""

    def __init__(self, url: str, reason: str, timed_out: bool = False):
        self.url = url
        self.reason = reason
        self.timed_out = timed_out
        super().__init__(f"Request to {url} failed: {reason}")


class HttpStatusError(HttpClientError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code} from {url} {reason}".rstrip())


class HttpClient:
    """Async HTTP client with timeout and optional rate limiting.

    Example:
        >>> async with HttpClient(timeout=5.0, rate_limit=10.0) as client:
        ...     response = await client.get("https://api.genderize.io/", params={"name": "Anna"})

    Attributes:
        rate_limit: Requests per second limit (None = unlimited)
        user_agent: User-Agent header value
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "",
        rate_limit: float | None = None,
        user_agent: str = "PersonSpine/1.0",
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL for relative requests
            rate_limit: Maximum requests per second, None to disable
            user_agent: User-Agent header
            timeout: Request timeout, applied to connect, read, write and pool
            headers: Additional default headers
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self._base_url = base_url
        self._rate_limiter = RateLimiter(rate_limit) if rate_limit else None
        self._user_agent = user_agent
        self._timeout = timeout
        self._extra_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def rate_limit(self) -> float | None:
        """Current rate limit (requests per second)."""
        return self._rate_limiter.rate if self._rate_limiter else None

    @property
    def user_agent(self) -> str:
        """User-Agent header value."""
        return self._user_agent

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/json",
            **self._extra_headers,
        }

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a single bounded request.

        Raises:
            HttpTransportError: On timeout or connection failure
            HttpStatusError: On a non-2xx response
        """
        client = self._ensure_client()

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise HttpTransportError(url, f"timeout: {e}", timed_out=True) from e
        except httpx.RequestError as e:
            raise HttpTransportError(url, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise HttpStatusError(url, response.status_code, response.reason_phrase)
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request.

        Args:
            url: URL (relative or absolute)
            **kwargs: Additional arguments for httpx (e.g. ``params``)

        Returns:
            HTTP response
        """
        return await self._request("GET", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """Get JSON content from URL.

        Raises:
            ValueError: If the body is not valid JSON
        """
        response = await self.get(url, **kwargs)
        return response.json()


__all__ = [
    "HttpClient",
    "HttpClientError",
    "HttpStatusError",
    "HttpTransportError",
]

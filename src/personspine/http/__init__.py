"""PersonSpine HTTP utilities.

Provides the bounded HTTP client used to call enrichment providers.

Example:
    >>> import asyncio
    >>> from personspine.http import RateLimiter, HttpClient
    >>> asyncio.run(RateLimiter(rate=10.0).acquire())  # 10 requests/second
    0.0
    >>>
    >>> async with HttpClient(timeout=5.0) as client:
    ...     response = await client.get("https://api.agify.io/", params={"name": "Anna"})
"""

from personspine.http.client import HttpClient, HttpClientError, HttpStatusError, HttpTransportError
from personspine.http.rate_limiter import RateLimiter

__all__ = [
    "HttpClient",
    "HttpClientError",
    "HttpStatusError",
    "HttpTransportError",
    "RateLimiter",
]

# =============================================================================
# Page Fetcher
# =============================================================================
"""
Retrieve job listing pages, directly or through a readability proxy.

Many ATS pages are rendered client-side or block simple clients, so a
direct GET that fails, times out or returns a near-empty body is retried
once through a readability proxy that renders the page and serves it as
plain text. Both attempts are bounded by a timeout and a response size
cap.

Usage:
    async with PageFetcher() as fetcher:
        page = await fetcher.fetch("https://jobs.lever.co/acme/123")
        print(page.source)   # "direct" or "proxy-fallback"
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional

import httpx
from bs4 import UnicodeDammit


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_DIRECT_TIMEOUT = 20.0  # seconds
DEFAULT_PROXY_TIMEOUT = 25.0  # seconds
DEFAULT_MAX_RESPONSE_BYTES = 3 * 1024 * 1024
DEFAULT_MIN_DIRECT_LENGTH = 1000  # characters
DEFAULT_PROXY_URL = "https://r.jina.ai/"

FetchMethod = Literal["direct", "proxy-fallback"]


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class ExtractionError(Exception):
    """Base exception for job extraction errors."""

    pass


class FetchError(ExtractionError):
    """Error fetching a listing page."""

    pass


class ResponseTooLargeError(FetchError):
    """Response body exceeded the size cap."""

    pass


# -----------------------------------------------------------------------------
# Fetched Page
# -----------------------------------------------------------------------------
@dataclass
class FetchedPage:
    """
    A retrieved listing page.

    Attributes:
        html: Page markup, or plain text when served by the proxy.
        source: Which retrieval path succeeded.
    """

    html: str
    source: FetchMethod


# -----------------------------------------------------------------------------
# Page Fetcher Class
# -----------------------------------------------------------------------------
class PageFetcher:
    """
    Fetches listing pages with a direct-then-proxy fallback.

    Attributes:
        http_client: Async HTTP client used for both attempts.
        direct_timeout: Timeout for the direct attempt in seconds.
        proxy_timeout: Timeout for the proxy attempt in seconds.
        max_response_bytes: Size cap applied to every response body.
        min_direct_length: Direct bodies must be longer than this to be kept.
        proxy_url: Base URL of the readability proxy.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        direct_timeout: float = DEFAULT_DIRECT_TIMEOUT,
        proxy_timeout: float = DEFAULT_PROXY_TIMEOUT,
        max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
        min_direct_length: int = DEFAULT_MIN_DIRECT_LENGTH,
        proxy_url: str = DEFAULT_PROXY_URL,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            http_client: Optional pre-configured httpx client.
            user_agent: User agent string for requests.
            direct_timeout: Direct request timeout in seconds.
            proxy_timeout: Proxy request timeout in seconds.
            max_response_bytes: Maximum accepted body size.
            min_direct_length: Minimum direct body length in characters.
            proxy_url: Readability proxy base URL.
        """
        self._owned_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            },
            follow_redirects=True,
        )
        self.direct_timeout = direct_timeout
        self.proxy_timeout = proxy_timeout
        self.max_response_bytes = max_response_bytes
        self.min_direct_length = min_direct_length
        self.proxy_url = proxy_url

    async def close(self) -> None:
        """Close the HTTP client if owned by this fetcher."""
        if self._owned_client and self.http_client:
            await self.http_client.aclose()
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> "PageFetcher":
        """Support async context manager protocol."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up on context exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------
    async def fetch(self, url: str) -> FetchedPage:
        """
        Fetch a listing page, falling back to the readability proxy.

        Args:
            url: Listing URL.

        Returns:
            The fetched page labeled with the path that succeeded.

        Raises:
            FetchError: If both the direct and the proxy attempts fail.
        """
        try:
            html = await self.fetch_direct(url)
            if len(html) > self.min_direct_length:
                return FetchedPage(html=html, source="direct")
            logger.info(
                f"Direct fetch of {url} returned {len(html)} characters, "
                "retrying through proxy"
            )
        except FetchError as e:
            logger.warning(f"Direct fetch of {url} failed, retrying through proxy: {e}")

        try:
            text = await self.fetch_via_proxy(url)
        except FetchError as e:
            raise FetchError(f"Direct and proxy fetch failed for {url}: {e}") from e

        return FetchedPage(html=text, source="proxy-fallback")

    async def fetch_direct(
        self,
        url: str,
        timeout: Optional[float] = None,
        max_bytes: Optional[int] = None,
    ) -> str:
        """
        Fetch a page directly, accepting only HTML or text bodies.

        Args:
            url: Page URL.
            timeout: Override of the direct timeout.
            max_bytes: Override of the size cap.

        Returns:
            Decoded response body.

        Raises:
            FetchError: On network errors, timeouts, HTTP errors,
                non-text content or an oversized body.
        """
        body, content_type = await self._get(
            url,
            timeout=timeout or self.direct_timeout,
            max_bytes=max_bytes or self.max_response_bytes,
        )
        if content_type and not ("html" in content_type or "text" in content_type):
            raise FetchError(f"Unsupported content type: {content_type}")
        return body

    async def fetch_via_proxy(
        self,
        url: str,
        timeout: Optional[float] = None,
        max_bytes: Optional[int] = None,
    ) -> str:
        """
        Fetch a page through the readability proxy.

        Args:
            url: Original page URL.
            timeout: Override of the proxy timeout.
            max_bytes: Override of the size cap.

        Returns:
            Text served by the proxy.

        Raises:
            FetchError: If the proxy request fails.
        """
        body, _ = await self._get(
            self.build_proxy_url(url),
            timeout=timeout or self.proxy_timeout,
            max_bytes=max_bytes or self.max_response_bytes,
        )
        return body

    def build_proxy_url(self, url: str) -> str:
        """
        Rewrite a URL for the readability proxy.

        "https://acme.com/jobs/1" becomes
        "https://r.jina.ai/http://acme.com/jobs/1".
        """
        without_scheme = re.sub(r"^https?://", "", url, flags=re.IGNORECASE)
        return f"{self.proxy_url.rstrip('/')}/http://{without_scheme}"

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    async def _get(self, url: str, timeout: float, max_bytes: int) -> tuple[str, str]:
        """
        GET a URL within an overall deadline.

        httpx applies its timeout to each connect and read, so a server
        trickling bytes could otherwise hold the request open indefinitely.

        Args:
            url: URL to fetch.
            timeout: Deadline for the whole request in seconds.
            max_bytes: Maximum body size.

        Returns:
            Tuple of (decoded body, lower-cased content type).

        Raises:
            FetchError: If the request fails, overruns the deadline or the
                body is too large.
        """
        try:
            return await asyncio.wait_for(self._read(url, timeout, max_bytes), timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request exceeded {timeout}s deadline") from e

    async def _read(self, url: str, timeout: float, max_bytes: int) -> tuple[str, str]:
        """Stream a response body under the size cap and decode it."""
        try:
            async with self.http_client.stream("GET", url, timeout=timeout) as response:
                if response.status_code >= 400:
                    raise FetchError(
                        f"HTTP {response.status_code}: {response.reason_phrase}"
                    )

                declared = response.headers.get("content-length")
                if declared and declared.isdigit() and int(declared) > max_bytes:
                    raise ResponseTooLargeError(
                        f"Response of {declared} bytes exceeds {max_bytes} byte limit"
                    )

                chunks: list[bytes] = []
                received = 0
                async for chunk in response.aiter_bytes():
                    received += len(chunk)
                    if received > max_bytes:
                        raise ResponseTooLargeError(
                            f"Response exceeds {max_bytes} byte limit"
                        )
                    chunks.append(chunk)

                content_type = response.headers.get("content-type", "").lower()
                text = decode_body(
                    b"".join(chunks),
                    charset=response.charset_encoding,
                    is_html="html" in content_type,
                )
                return text, content_type

        except httpx.TimeoutException as e:
            raise FetchError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise FetchError(f"Request failed: {e}") from e


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------
def decode_body(body: bytes, charset: Optional[str] = None, is_html: bool = True) -> str:
    """
    Decode a response body.

    A charset from the Content-Type header wins. Otherwise the encoding is
    sniffed from a byte order mark or a <meta charset> declaration before
    falling back to UTF-8 and Windows-1252.

    Args:
        body: Raw response bytes.
        charset: Charset declared in the response headers, if any.
        is_html: Whether to look for an in-document declaration.

    Returns:
        Decoded text.
    """
    if charset:
        try:
            return body.decode(charset, errors="replace")
        except LookupError:
            logger.debug(f"Unknown charset {charset!r}, sniffing instead")

    dammit = UnicodeDammit(body, is_html=is_html)
    if dammit.unicode_markup is None:
        return body.decode("utf-8", errors="replace")
    return dammit.unicode_markup

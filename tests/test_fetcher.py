# =============================================================================
# Page Fetcher Tests
# =============================================================================
"""
Unit tests for the direct-then-proxy page fetcher.

These tests verify that the fetcher correctly:
- Accepts long direct bodies
- Falls back to the proxy on short bodies, HTTP errors and network errors
- Fails when both paths fail
- Enforces the response size cap, overall deadline and content type check
- Decodes bodies using header or in-document charsets
"""

import asyncio

import httpx
import pytest

from jobpilot.services.extraction.fetcher import (
    FetchError,
    PageFetcher,
    ResponseTooLargeError,
    decode_body,
)
from tests.conftest import html_response, text_response


LONG_HTML = "<html><body>" + "<p>Build reliable services.</p>" * 60 + "</body></html>"
PROXY_TEXT = "Backend Engineer\nAcme\nBuild reliable services."


class TestFetch:
    """Tests for PageFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_long_direct_body_is_accepted(self, make_fetcher) -> None:
        """Test that a long direct body is returned as direct."""
        fetcher = make_fetcher(lambda request: html_response(LONG_HTML))

        page = await fetcher.fetch("https://acme.com/jobs/1")

        assert page.source == "direct"
        assert page.html == LONG_HTML

    @pytest.mark.asyncio
    async def test_short_direct_body_uses_proxy(self, make_fetcher) -> None:
        """Test that a 50-character direct body triggers the proxy."""
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            if request.url.host == "r.jina.ai":
                return text_response(PROXY_TEXT)
            return html_response("x" * 50)

        fetcher = make_fetcher(handler)

        page = await fetcher.fetch("https://acme.com/jobs/1")

        assert page.source == "proxy-fallback"
        assert page.html == PROXY_TEXT
        assert requested == [
            "https://acme.com/jobs/1",
            "https://r.jina.ai/http://acme.com/jobs/1",
        ]

    @pytest.mark.asyncio
    async def test_http_error_uses_proxy(self, make_fetcher) -> None:
        """Test that a failing direct response falls back to the proxy."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "r.jina.ai":
                return text_response(PROXY_TEXT)
            return html_response("Forbidden", status_code=403)

        page = await make_fetcher(handler).fetch("https://acme.com/jobs/1")

        assert page.source == "proxy-fallback"

    @pytest.mark.asyncio
    async def test_network_error_uses_proxy(self, make_fetcher) -> None:
        """Test that a network error falls back to the proxy."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "r.jina.ai":
                return text_response(PROXY_TEXT)
            raise httpx.ConnectError("connection refused", request=request)

        page = await make_fetcher(handler).fetch("https://acme.com/jobs/1")

        assert page.source == "proxy-fallback"

    @pytest.mark.asyncio
    async def test_both_paths_fail(self, make_fetcher) -> None:
        """Test that a failed proxy fetch fails the request."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            await make_fetcher(handler).fetch("https://acme.com/jobs/1")

        assert "Direct and proxy fetch failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_is_fetch_error(self, make_fetcher) -> None:
        """Test that timeouts surface as fetch errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FetchError, match="timed out"):
            await make_fetcher(handler).fetch_direct("https://acme.com/jobs/1")


class TestFetchLimits:
    """Tests for size and content type limits."""

    @pytest.mark.asyncio
    async def test_oversized_body_rejected(self, make_fetcher) -> None:
        """Test that a body over the cap is rejected."""
        fetcher = make_fetcher(
            lambda request: html_response(LONG_HTML),
            max_response_bytes=100,
        )

        with pytest.raises(ResponseTooLargeError):
            await fetcher.fetch_direct("https://acme.com/jobs/1")

    @pytest.mark.asyncio
    async def test_oversized_direct_body_uses_proxy(self, make_fetcher) -> None:
        """Test that exceeding the cap on the direct path falls back."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "r.jina.ai":
                return text_response("ok")
            return html_response(LONG_HTML)

        fetcher = make_fetcher(handler, max_response_bytes=100)

        page = await fetcher.fetch("https://acme.com/jobs/1")

        assert page.source == "proxy-fallback"
        assert page.html == "ok"

    @pytest.mark.asyncio
    async def test_non_text_content_rejected(self, make_fetcher) -> None:
        """Test that binary content is not accepted as a page."""
        fetcher = make_fetcher(
            lambda request: httpx.Response(
                200, content=b"%PDF-1.7", headers={"content-type": "application/pdf"}
            )
        )

        with pytest.raises(FetchError, match="Unsupported content type"):
            await fetcher.fetch_direct("https://acme.com/jobs/1.pdf")


    @pytest.mark.asyncio
    async def test_slow_body_exceeds_deadline(self, make_fetcher) -> None:
        """Test that a body trickled past the timeout fails the request."""

        async def trickle():
            for _ in range(20):
                await asyncio.sleep(0.05)
                yield b"<p>Build reliable services.</p>"

        fetcher = make_fetcher(
            lambda request: httpx.Response(
                200, content=trickle(), headers={"content-type": "text/html"}
            ),
            direct_timeout=0.2,
        )

        with pytest.raises(FetchError, match="deadline"):
            await fetcher.fetch_direct("https://acme.com/jobs/1")


class TestDecodeBody:
    """Tests for decode_body."""

    def test_header_charset(self) -> None:
        """Test that a header charset is used as given."""
        assert decode_body("café".encode("latin-1"), charset="latin-1") == "café"

    def test_meta_charset(self) -> None:
        """Test that an in-document charset is honoured without a header charset."""
        body = '<html><head><meta charset="iso-8859-1"></head><body>Café</body></html>'

        assert "Café" in decode_body(body.encode("latin-1"))

    def test_unknown_header_charset(self) -> None:
        """Test that an unknown header charset falls back to sniffing."""
        body = '<meta charset="utf-8"><p>Zürich</p>'.encode("utf-8")

        assert "Zürich" in decode_body(body, charset="not-a-charset")

    @pytest.mark.asyncio
    async def test_fetch_uses_meta_charset(self, make_fetcher) -> None:
        """Test that fetched pages declaring a charset in markup decode cleanly."""
        body = '<html><head><meta charset="iso-8859-1"></head><body>Montréal</body></html>'
        fetcher = make_fetcher(
            lambda request: httpx.Response(
                200, content=body.encode("latin-1"), headers={"content-type": "text/html"}
            )
        )

        html = await fetcher.fetch_direct("https://acme.com/jobs/1")

        assert "Montréal" in html


class TestProxyUrl:
    """Tests for build_proxy_url."""

    def test_rewrites_scheme(self) -> None:
        """Test the proxy URL rewriting scheme."""
        fetcher = PageFetcher(http_client=httpx.AsyncClient())

        assert fetcher.build_proxy_url("https://acme.com/jobs/1?x=1") == (
            "https://r.jina.ai/http://acme.com/jobs/1?x=1"
        )

    def test_custom_proxy_base(self) -> None:
        """Test a configured proxy base URL."""
        fetcher = PageFetcher(
            http_client=httpx.AsyncClient(), proxy_url="https://reader.internal"
        )

        assert fetcher.build_proxy_url("http://acme.com/a") == (
            "https://reader.internal/http://acme.com/a"
        )

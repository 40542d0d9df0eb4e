"""Tests for sitemap resolution and its fallback to the root URL."""

import httpx
import pytest

from docrag.core.errors import UpstreamFetchError
from docrag.core.sitemap import SitemapResolver, parse_sitemap

SITEMAP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://ex.com/</loc></url>
  <url><loc> https://ex.com/docs/install </loc></url>
  <url><loc>https://ex.com/search?a=1&amp;b=2</loc></url>
</urlset>
"""


def _resolver(handler) -> SitemapResolver:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SitemapResolver(http_client=client)


class TestParseSitemap:
    def test_locs_in_document_order(self):
        assert parse_sitemap(SITEMAP_XML) == [
            "https://ex.com/",
            "https://ex.com/docs/install",
            "https://ex.com/search?a=1&b=2",
        ]

    def test_no_locs_raises(self):
        with pytest.raises(UpstreamFetchError):
            parse_sitemap("<html><body>Not found</body></html>")


class TestSitemapResolver:
    async def test_returns_sitemap_urls(self):
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=SITEMAP_XML)

        urls = await _resolver(handler).resolve("https://ex.com")

        assert requested == ["https://ex.com/sitemap-pages.xml"]
        assert urls == [
            "https://ex.com/",
            "https://ex.com/docs/install",
            "https://ex.com/search?a=1&b=2",
        ]

    async def test_trailing_slashes_are_normalized(self):
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=SITEMAP_XML)

        await _resolver(handler).resolve("https://ex.com///")

        assert requested == ["https://ex.com/sitemap-pages.xml"]

    async def test_unreachable_sitemap_falls_back_to_root(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _resolver(handler).resolve("https://ex.com") == ["https://ex.com"]

    async def test_timeout_falls_back_to_root(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert await _resolver(handler).resolve("https://ex.com/") == ["https://ex.com/"]

    async def test_error_status_falls_back_to_root(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="not found")

        assert await _resolver(handler).resolve("https://ex.com") == ["https://ex.com"]

    async def test_unparsable_body_falls_back_to_root(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>soft 404</html>")

        assert await _resolver(handler).resolve("https://ex.com") == ["https://ex.com"]

    async def test_single_attempt_without_retry(self):
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(503)

        await _resolver(handler).resolve("https://ex.com")

        assert attempts == 1

    async def test_custom_sitemap_path(self):
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=SITEMAP_XML)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        resolver = SitemapResolver(sitemap_path="/sitemap.xml", http_client=client)
        await resolver.resolve("https://ex.com")

        assert requested == ["https://ex.com/sitemap.xml"]

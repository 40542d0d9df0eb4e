"""Sitemap resolution: turn a site root into a list of pages to crawl."""

import html
import logging
import re

import httpx

from docrag.core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)

# <loc> entries of a sitemap, in document order
LOC_PATTERN = re.compile(r"<loc>(.*?)</loc>", re.DOTALL | re.IGNORECASE)


def parse_sitemap(xml: str) -> list[str]:
    """Extract the ``<loc>`` URLs from sitemap XML.

    Args:
        xml: Sitemap document text.

    Returns:
        URLs in document order, trimmed and entity-unescaped.

    Raises:
        UpstreamFetchError: If the document contains no ``<loc>`` entries.
    """
    urls = [html.unescape(m.strip()) for m in LOC_PATTERN.findall(xml)]
    urls = [u for u in urls if u]
    if not urls:
        raise UpstreamFetchError("sitemap contains no <loc> entries")
    return urls


class SitemapResolver:
    """Resolves a site root to its declared page list.

    Fetches ``{root}/sitemap-pages.xml`` once, without retries. Any failure
    falls back to ``[root]`` so a missing sitemap still indexes the root page.
    """

    def __init__(
        self,
        sitemap_path: str = "sitemap-pages.xml",
        timeout: float = 20.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.sitemap_path = sitemap_path.lstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def sitemap_url(self, root: str) -> str:
        """Return the sitemap URL for a site root."""
        return f"{root.rstrip('/')}/{self.sitemap_path}"

    async def resolve(self, root: str) -> list[str]:
        """Return the sitemap's page URLs, or ``[root]`` if unavailable."""
        url = self.sitemap_url(root)
        try:
            urls = await self._fetch(url)
        except UpstreamFetchError as e:
            logger.warning("Sitemap unavailable, falling back to root %s: %s", root, e)
            return [root]

        logger.info("Sitemap %s lists %d pages", url, len(urls))
        return urls

    async def _fetch(self, url: str) -> list[str]:
        client = self._http_client or httpx.AsyncClient(timeout=self.timeout)
        should_close = self._http_client is None

        try:
            response = await client.get(url, timeout=self.timeout, follow_redirects=True)
            if not response.is_success:
                raise UpstreamFetchError(f"{url} returned {response.status_code}")
            return parse_sitemap(response.text)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamFetchError(f"{url}: {e!r}") from e
        finally:
            if should_close:
                await client.aclose()

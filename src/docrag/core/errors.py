"""Exceptions raised by the ingestion and search pipelines."""


class DocRAGError(Exception):
    """Base class for all DocRAG errors."""


class ValidationError(DocRAGError):
    """A required request field is missing or blank."""


class UpstreamFetchError(DocRAGError):
    """The sitemap could not be fetched or parsed.

    Never escapes :class:`~docrag.core.sitemap.SitemapResolver`; it falls
    back to the root URL instead.
    """


class RenderError(DocRAGError):
    """A page could not be rendered by the headless browser."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Failed to render {url}: {message}")
        self.url = url


class EmbeddingError(DocRAGError):
    """The embedding provider failed (auth, rate limit, network, bad payload)."""


class Unauthorized(DocRAGError):
    """Missing or wrong bearer token."""

"""Shared pytest fixtures and fakes for the ingestion and search pipelines."""

import string

import pytest

from docrag.core.errors import EmbeddingError, RenderError
from docrag.core.extractor import ContentExtractor
from docrag.core.ingest import IngestionPipeline
from docrag.core.search import SearchService
from docrag.core.vectorstore import VectorStore


def letter_vector(text: str) -> list[float]:
    """Deterministic 27-dim embedding: letter frequencies plus a bias term."""
    lowered = text.lower()
    return [float(lowered.count(c)) for c in string.ascii_lowercase] + [1.0]


def page_html(title: str, body: str) -> str:
    return (
        f"<html><head><title>{title}</title><script>var x = 1;</script></head>"
        f"<body><nav>Home | Docs</nav><main><p>{body}</p></main>"
        f"<footer>Copyright</footer></body></html>"
    )


class FakeResolver:
    """Returns a fixed URL list for every root."""

    def __init__(self, urls: list[str]):
        self.urls = urls
        self.calls: list[str] = []

    async def resolve(self, root: str) -> list[str]:
        self.calls.append(root)
        return list(self.urls)


class FakeRenderer:
    """Serves canned HTML; URLs in ``failing`` raise RenderError."""

    def __init__(self, pages: dict[str, str], failing: set[str] | None = None):
        self.pages = pages
        self.failing = failing or set()
        self.calls: list[str] = []

    async def render(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing:
            raise RenderError(url, "navigation timeout")
        return self.pages[url]


class FakeEmbedder:
    """Letter-frequency embedder that records each batch it receives."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail:
            raise EmbeddingError("rate limited")
        return [letter_vector(t) for t in texts]


class ShrinkingEmbedder(FakeEmbedder):
    """Returns 10-dim vectors from the second call on, like a swapped model."""

    async def embed(self, texts: list[str]) -> list[list[float]]:
        vectors = await super().embed(texts)
        if len(self.calls) > 1:
            return [v[:10] for v in vectors]
        return vectors


SITE_PAGES = {
    "https://ex.com/docs/install": page_html(
        "Installation", "Installation guide. " + "Run pip install to set up the package. " * 60
    ),
    "https://ex.com/docs/usage": page_html(
        "Usage", "Usage notes. " + "Call the search endpoint with a query. " * 40
    ),
    "https://ex.com/blog/x": page_html("Blog", "Release announcement for the new version."),
}


@pytest.fixture()
def store() -> VectorStore:
    return VectorStore()


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def renderer() -> FakeRenderer:
    return FakeRenderer(SITE_PAGES)


@pytest.fixture()
def resolver() -> FakeResolver:
    return FakeResolver(list(SITE_PAGES))


@pytest.fixture()
def pipeline(resolver, renderer, embedder, store) -> IngestionPipeline:
    return IngestionPipeline(
        resolver=resolver,
        renderer=renderer,
        extractor=ContentExtractor(),
        embedder=embedder,
        store=store,
    )


@pytest.fixture()
def search_service(embedder, store) -> SearchService:
    return SearchService(embedder, store)

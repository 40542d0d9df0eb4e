"""Ingestion pipeline: site root to stored, embedded chunks."""

import logging
from dataclasses import dataclass, field
from typing import Literal

from docrag.core.chunker import chunk_text
from docrag.core.embeddings import EmbeddingClient, embed_in_batches
from docrag.core.errors import EmbeddingError, RenderError, ValidationError
from docrag.core.extractor import ContentExtractor
from docrag.core.renderer import PageRenderer
from docrag.core.sitemap import SitemapResolver
from docrag.core.vectorstore import ChunkRecord, VectorStore

logger = logging.getLogger(__name__)

# characters that may follow an allowlist prefix at a path boundary
_BOUNDARY_CHARS = ("/", "?", "#")


def is_allowed(url: str, allowlist: list[str]) -> bool:
    """Check whether a URL falls under any allowlist prefix.

    Matching respects path boundaries: ``https://ex.com`` admits
    ``https://ex.com/docs`` but not ``https://ex.com-other``.
    """
    for prefix in allowlist:
        if not prefix or not url.startswith(prefix):
            continue
        rest = url[len(prefix) :]
        if not rest or prefix.endswith("/") or rest.startswith(_BOUNDARY_CHARS):
            return True
    return False


@dataclass
class PageStatus:
    """Outcome of processing one resolved URL."""

    url: str
    status: Literal["ingested", "skipped", "failed"]
    chunks: int = 0
    error: str | None = None


@dataclass
class IngestResult:
    """Summary of one ingestion request."""

    namespace: str
    pages: int
    chunks: int
    statuses: list[PageStatus] = field(default_factory=list)


class IngestionPipeline:
    """Crawls a site and stores embedded chunks of its pages.

    URLs are processed one at a time. Each page's records are appended to
    the store as soon as they are embedded, so a failure part-way through
    leaves the earlier pages indexed.
    """

    def __init__(
        self,
        resolver: SitemapResolver,
        renderer: PageRenderer,
        extractor: ContentExtractor,
        embedder: EmbeddingClient,
        store: VectorStore,
        chunk_size: int = 1000,
        chunk_overlap: int = 150,
        batch_size: int = 64,
        continue_on_error: bool = False,
    ):
        """Initialize the ingestion pipeline.

        Args:
            resolver: Resolves a site root to page URLs.
            renderer: Renders a page to HTML.
            extractor: Extracts title and text from HTML.
            embedder: The embedding provider.
            store: Where records are appended.
            chunk_size: Chunk length in characters.
            chunk_overlap: Overlap between consecutive chunks.
            batch_size: Maximum texts per embedding call.
            continue_on_error: Record a failed page and move on instead
                of aborting the request.
        """
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        self.resolver = resolver
        self.renderer = renderer
        self.extractor = extractor
        self.embedder = embedder
        self.store = store
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.batch_size = batch_size
        self.continue_on_error = continue_on_error

    async def ingest(
        self,
        url: str,
        allowlist: list[str] | None = None,
        namespace: str = "default",
    ) -> IngestResult:
        """Crawl ``url`` and append its chunks to ``namespace``.

        Args:
            url: Site root.
            allowlist: URL prefixes eligible for indexing (defaults to ``[url]``).
            namespace: Target namespace.

        Returns:
            IngestResult where ``pages`` counts every resolved URL and
            ``chunks`` counts the records appended.

        Raises:
            ValidationError: If ``url`` is blank.
            RenderError: If a page fails to render and errors abort.
            EmbeddingError: If embedding fails and errors abort.
        """
        if not url or not url.strip():
            raise ValidationError("url required")
        if allowlist is None:
            allowlist = [url]

        urls = await self.resolver.resolve(url)
        result = IngestResult(namespace=namespace, pages=len(urls), chunks=0)

        for page_url in urls:
            if not is_allowed(page_url, allowlist):
                logger.debug("Skipping %s (not in allowlist)", page_url)
                result.statuses.append(PageStatus(url=page_url, status="skipped"))
                continue

            try:
                added = await self._ingest_page(page_url, namespace)
            except (RenderError, EmbeddingError) as e:
                if not self.continue_on_error:
                    logger.error(
                        "Ingestion of %s aborted at %s after %d chunks: %s",
                        url,
                        page_url,
                        result.chunks,
                        e,
                    )
                    raise
                logger.warning("Failed to ingest %s: %s", page_url, e)
                result.statuses.append(
                    PageStatus(url=page_url, status="failed", error=str(e))
                )
                continue

            result.chunks += added
            result.statuses.append(
                PageStatus(url=page_url, status="ingested", chunks=added)
            )

        logger.info(
            "Ingested %s into '%s': %d pages, %d chunks",
            url,
            namespace,
            result.pages,
            result.chunks,
        )
        return result

    async def _ingest_page(self, url: str, namespace: str) -> int:
        """Render, extract, chunk, embed and store a single page."""
        html = await self.renderer.render(url)
        content = self.extractor.extract(html, url)

        texts = list(chunk_text(content.text, self.chunk_size, self.chunk_overlap))
        if not texts:
            logger.info("No text extracted from %s", url)
            return 0

        embeddings = await embed_in_batches(self.embedder, texts, self.batch_size)

        expected = self.store.dimension(namespace) or len(embeddings[0])
        for embedding in embeddings:
            if len(embedding) != expected:
                raise EmbeddingError(
                    f"Embedder returned a {len(embedding)}-dim vector for {url}, "
                    f"namespace '{namespace}' holds {expected}-dim vectors"
                )

        records = [
            ChunkRecord(
                text=text,
                url=url,
                title=content.title,
                section=content.section,
                embedding=embedding,
            )
            for text, embedding in zip(texts, embeddings)
        ]
        added = self.store.append(namespace, records)
        logger.debug("Stored %d chunks from %s", added, url)
        return added

"""Semantic search over a namespace of the vector store."""

import logging

from docrag.core.embeddings import EmbeddingClient
from docrag.core.errors import EmbeddingError, ValidationError
from docrag.core.vectorstore import SearchHit, VectorStore

logger = logging.getLogger(__name__)


class SearchService:
    """Embeds a query and ranks stored chunks against it."""

    def __init__(self, embedder: EmbeddingClient, store: VectorStore):
        self.embedder = embedder
        self.store = store

    async def search(
        self,
        query: str,
        top_k: int = 5,
        namespace: str = "default",
    ) -> list[SearchHit]:
        """Return the ``top_k`` chunks most similar to ``query``.

        An empty namespace returns no hits without calling the embedder.

        Raises:
            ValidationError: If ``query`` is blank.
            EmbeddingError: If the query could not be embedded.
        """
        if not query or not query.strip():
            raise ValidationError("query required")

        if self.store.count(namespace) == 0:
            logger.debug("Namespace '%s' is empty, skipping embedding", namespace)
            return []

        vectors = await self.embedder.embed([query])
        expected = self.store.dimension(namespace)
        if len(vectors) != 1 or len(vectors[0]) != expected:
            raise EmbeddingError(
                f"Query embedding does not match namespace '{namespace}' "
                f"dimension {expected}"
            )
        query_embedding = vectors[0]
        hits = self.store.search(namespace, query_embedding, top_k)

        logger.info(
            "Search in '%s' returned %d hits (top_k=%d)", namespace, len(hits), top_k
        )
        return hits

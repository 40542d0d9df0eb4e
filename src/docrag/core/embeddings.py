"""Embedding providers: sentence-transformers locally, or an HTTP endpoint."""

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from docrag.core.errors import EmbeddingError

if TYPE_CHECKING:
    from docrag.config import Settings

logger = logging.getLogger(__name__)


class EmbeddingClient(Protocol):
    """Converts a batch of texts to vectors, one provider call per batch."""

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed ``texts``, returning one vector per text in the same order.

        Raises:
            EmbeddingError: If the provider call fails.
        """
        ...


class SentenceTransformerEmbedder:
    """Wrapper for a sentence-transformers embedding model."""

    def __init__(self, model_name: str = "all-mpnet-base-v2"):
        """Initialize the embedder with the specified model.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Default is 'all-mpnet-base-v2' which provides good
                       quality embeddings for semantic search.
        """
        from sentence_transformers import SentenceTransformer

        self.model = SentenceTransformer(model_name)
        self.model_name = model_name

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            embeddings = await asyncio.to_thread(
                self.model.encode, texts, convert_to_numpy=True
            )
        except Exception as e:
            raise EmbeddingError(f"{self.model_name} failed to encode: {e}") from e
        return [emb.tolist() for emb in embeddings]

    @property
    def dimension(self) -> int:
        """Return the dimension of the embedding vectors."""
        return self.model.get_sentence_embedding_dimension()


class HTTPEmbedder:
    """Generates embeddings via an OpenAI-compatible ``/embeddings`` API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def model_name(self) -> str:
        return self._model

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        url = f"{self._base_url}/embeddings"
        payload: dict[str, Any] = {"model": self._model, "input": texts}

        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None

        try:
            response = await client.post(url, headers=self._get_headers(), json=payload)
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Embedding request to {url} failed: {e!r}") from e
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            error_text = response.text[:500]
            logger.error("Embedding API error %d: %s", response.status_code, error_text)
            raise EmbeddingError(
                f"Embedding API returned {response.status_code}: {error_text}"
            )

        try:
            data = response.json()["data"]
            # Sort by index to ensure correct ordering
            data.sort(key=lambda item: item.get("index", 0))
            result = [[float(x) for x in item["embedding"]] for item in data]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise EmbeddingError(f"Malformed embedding response: {e!r}") from e

        if len(result) != len(texts):
            raise EmbeddingError(
                f"Embedding API returned {len(result)} vectors for {len(texts)} texts"
            )

        logger.debug(
            "Generated %d embeddings (model=%s, dims=%d)",
            len(result),
            self._model,
            len(result[0]),
        )
        return result


async def embed_in_batches(
    client: EmbeddingClient,
    texts: Sequence[str],
    batch_size: int = 64,
) -> list[list[float]]:
    """Embed texts in consecutive batches of at most ``batch_size``.

    Batches are sent one after another and the vectors are concatenated,
    so the output lines up with ``texts``.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    vectors: list[list[float]] = []
    for start in range(0, len(texts), batch_size):
        batch = list(texts[start : start + batch_size])
        batch_vectors = await client.embed(batch)
        if len(batch_vectors) != len(batch):
            raise EmbeddingError(
                f"Embedder returned {len(batch_vectors)} vectors for {len(batch)} texts"
            )
        vectors.extend(batch_vectors)
    return vectors


def build_embedder(settings: "Settings") -> EmbeddingClient:
    """Create the embedding client selected by ``settings.embedding_provider``."""
    if settings.embedding_provider == "http":
        return HTTPEmbedder(
            api_key=settings.embedding_api_key,
            model=settings.embedding_model,
            base_url=settings.embedding_base_url,
            timeout=settings.embedding_timeout,
        )
    return SentenceTransformerEmbedder(model_name=settings.embedding_model)

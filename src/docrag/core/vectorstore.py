"""In-memory, namespace-partitioned vector store with cosine ranking."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)

COSINE_EPSILON = 1e-9


@dataclass(frozen=True)
class ChunkRecord:
    """A stored chunk of a page together with its embedding."""

    text: str
    url: str
    title: str
    section: str = ""
    embedding: list[float] = field(default_factory=list, repr=False)


@dataclass
class SearchHit:
    """A ranked search result."""

    text: str
    url: str
    title: str
    section: str
    score: float


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity ``dot(a, b) / (|a| * |b| + 1e-9)``."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    return float(va @ vb / (np.linalg.norm(va) * np.linalg.norm(vb) + COSINE_EPSILON))


class VectorStore:
    """Append-only chunk store partitioned by namespace.

    Namespaces are created on first append. Reading a namespace that was
    never written behaves as reading an empty one. Records are never
    modified or removed; the store lives as long as the process.
    """

    def __init__(self, text_limit: int = 900):
        """Initialize the vector store.

        Args:
            text_limit: Maximum characters of chunk text returned per hit.
        """
        self.text_limit = text_limit
        self._namespaces: dict[str, list[ChunkRecord]] = {}

    def append(self, namespace: str, records: Iterable[ChunkRecord]) -> int:
        """Add records to the end of a namespace.

        Identical records are not deduplicated.

        Args:
            namespace: Target namespace, created if absent.
            records: Records to store, in order.

        Returns:
            Number of records appended.

        Raises:
            ValueError: If an embedding's dimension differs from the
                namespace's existing records.
        """
        records = list(records)
        if not records:
            return 0

        existing = self._namespaces.get(namespace)
        dimension = len(existing[0].embedding) if existing else len(records[0].embedding)
        for record in records:
            if len(record.embedding) != dimension:
                raise ValueError(
                    f"Embedding dimension {len(record.embedding)} does not match "
                    f"namespace '{namespace}' dimension {dimension}"
                )

        self._namespaces.setdefault(namespace, []).extend(records)
        logger.debug("Appended %d records to namespace '%s'", len(records), namespace)
        return len(records)

    def search(
        self,
        namespace: str,
        query_vector: Sequence[float],
        top_k: int = 5,
    ) -> list[SearchHit]:
        """Rank a namespace's records by cosine similarity to a query vector.

        Ties keep insertion order. Returned text is truncated to
        ``text_limit`` characters.

        Args:
            namespace: Namespace to search.
            query_vector: The query embedding.
            top_k: Maximum number of hits.

        Returns:
            Up to ``top_k`` hits, highest score first.
        """
        records = list(self._namespaces.get(namespace, ()))
        if not records or top_k <= 0:
            return []

        matrix = np.asarray([r.embedding for r in records], dtype=np.float64)
        query = np.asarray(query_vector, dtype=np.float64)
        scores = (matrix @ query) / (
            np.linalg.norm(matrix, axis=1) * np.linalg.norm(query) + COSINE_EPSILON
        )

        # stable sort on the negated scores keeps insertion order for ties
        order = np.argsort(-scores, kind="stable")[:top_k]

        return [
            SearchHit(
                text=records[i].text[: self.text_limit],
                url=records[i].url,
                title=records[i].title,
                section=records[i].section,
                score=float(scores[i]),
            )
            for i in order
        ]

    def count(self, namespace: str) -> int:
        """Return the number of records in a namespace (0 if absent)."""
        return len(self._namespaces.get(namespace, ()))

    def dimension(self, namespace: str) -> int | None:
        """Return the embedding dimension of a namespace, or None if empty."""
        records = self._namespaces.get(namespace)
        return len(records[0].embedding) if records else None

    def namespaces(self) -> list[str]:
        """Return the names of all non-empty namespaces."""
        return [name for name, records in self._namespaces.items() if records]

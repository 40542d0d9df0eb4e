"""Core ingestion and search components."""

from docrag.core.chunker import chunk_text
from docrag.core.embeddings import HTTPEmbedder, SentenceTransformerEmbedder
from docrag.core.extractor import ContentExtractor, ExtractionPolicy
from docrag.core.ingest import IngestionPipeline
from docrag.core.renderer import PlaywrightRenderer
from docrag.core.search import SearchService
from docrag.core.sitemap import SitemapResolver
from docrag.core.vectorstore import ChunkRecord, SearchHit, VectorStore

__all__ = [
    "ChunkRecord",
    "ContentExtractor",
    "ExtractionPolicy",
    "HTTPEmbedder",
    "IngestionPipeline",
    "PlaywrightRenderer",
    "SearchHit",
    "SearchService",
    "SentenceTransformerEmbedder",
    "SitemapResolver",
    "VectorStore",
    "chunk_text",
]

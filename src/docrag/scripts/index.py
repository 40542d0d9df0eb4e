"""Script to crawl a website into an in-process index and query it."""

import argparse
import asyncio
import sys

from docrag.config import Settings, get_settings
from docrag.core.embeddings import build_embedder
from docrag.core.errors import DocRAGError
from docrag.core.extractor import ContentExtractor
from docrag.core.ingest import IngestionPipeline
from docrag.core.renderer import PlaywrightRenderer
from docrag.core.search import SearchService
from docrag.core.sitemap import SitemapResolver
from docrag.core.vectorstore import VectorStore
from docrag.logging_config import setup_logging


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Ingest the site, then answer each query. Returns the exit code."""
    print("Loading embedding model...")
    embedder = build_embedder(settings)
    store = VectorStore(text_limit=settings.search_text_limit)

    pipeline = IngestionPipeline(
        resolver=SitemapResolver(
            sitemap_path=settings.sitemap_path,
            timeout=settings.sitemap_timeout,
        ),
        renderer=PlaywrightRenderer(timeout=settings.render_timeout),
        extractor=ContentExtractor(settings.extraction_policy),
        embedder=embedder,
        store=store,
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
        batch_size=settings.embedding_batch_size,
        continue_on_error=settings.ingest_continue_on_error,
    )

    print(f"Indexing: {args.url}")
    try:
        result = await pipeline.ingest(
            args.url,
            allowlist=args.allow or None,
            namespace=args.namespace,
        )
    except DocRAGError as e:
        print(f"Error: {e}")
        print(f"  Chunks stored before failure: {store.count(args.namespace)}")
        return 1

    if args.verbose:
        for status in result.statuses:
            line = f"  [{status.status}] {status.url}"
            if status.chunks:
                line += f" ({status.chunks} chunks)"
            if status.error:
                line += f" - {status.error}"
            print(line)

    print()
    print("Indexing complete!")
    print(f"  Pages resolved: {result.pages}")
    print(f"  Chunks indexed: {result.chunks}")
    print(f"  Namespace count: {store.count(args.namespace)}")

    service = SearchService(embedder, store)
    for query in args.query:
        print(f"\n{'=' * 60}")
        print(f"Query: {query}")
        try:
            hits = await service.search(query, top_k=args.top_k, namespace=args.namespace)
        except DocRAGError as e:
            print(f"Error: {e}")
            return 1
        if not hits:
            print("  No hits.")
        for i, hit in enumerate(hits, 1):
            print(f"\n{i}. {hit.title} <{hit.url}> (score: {hit.score:.3f})")
            print(f"   {hit.text[:200]}")

    return 0


def main():
    """Main entry point for the indexing script."""
    parser = argparse.ArgumentParser(
        description="Crawl a website, embed its pages and run test queries"
    )
    parser.add_argument("url", help="Site root to crawl")
    parser.add_argument(
        "--allow",
        action="append",
        default=[],
        metavar="PREFIX",
        help="URL prefix to index (repeatable, defaults to the site root)",
    )
    parser.add_argument("--namespace", default="default", help="Target namespace")
    parser.add_argument(
        "--query",
        "-q",
        action="append",
        default=[],
        help="Query to run after indexing (repeatable)",
    )
    parser.add_argument("--top-k", type=int, default=None, help="Hits per query")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print per-page status",
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.top_k is None:
        args.top_k = settings.default_top_k
    setup_logging(settings)

    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()

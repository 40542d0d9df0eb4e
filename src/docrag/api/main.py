"""FastAPI application for the DocRAG ingest and search API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from docrag.api.models import ErrorResponse
from docrag.api.routes.debug import router as debug_router
from docrag.api.routes.ingest import router as ingest_router
from docrag.api.routes.search import router as search_router
from docrag.config import Settings, get_settings
from docrag.core.embeddings import EmbeddingClient, build_embedder
from docrag.core.errors import Unauthorized, ValidationError
from docrag.core.extractor import ContentExtractor
from docrag.core.ingest import IngestionPipeline
from docrag.core.renderer import PageRenderer, PlaywrightRenderer
from docrag.core.search import SearchService
from docrag.core.sitemap import SitemapResolver
from docrag.core.vectorstore import VectorStore
from docrag.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    store: VectorStore | None = None,
    embedder: EmbeddingClient | None = None,
    renderer: PageRenderer | None = None,
    resolver: SitemapResolver | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators not passed in are built from settings when the app
    starts up.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)

        app.state.store = store or VectorStore(text_limit=settings.search_text_limit)
        app_embedder = embedder or build_embedder(settings)

        app.state.pipeline = IngestionPipeline(
            resolver=resolver
            or SitemapResolver(
                sitemap_path=settings.sitemap_path,
                timeout=settings.sitemap_timeout,
            ),
            renderer=renderer or PlaywrightRenderer(timeout=settings.render_timeout),
            extractor=ContentExtractor(settings.extraction_policy),
            embedder=app_embedder,
            store=app.state.store,
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            batch_size=settings.embedding_batch_size,
            continue_on_error=settings.ingest_continue_on_error,
        )
        app.state.search_service = SearchService(app_embedder, app.state.store)

        logger.info(
            "DocRAG ready (embedding_provider=%s, model=%s, auth=%s)",
            settings.embedding_provider,
            settings.embedding_model,
            "on" if settings.api_key else "off",
        )
        yield

    app = FastAPI(
        title="DocRAG API",
        description="Website crawling and semantic search over embedded chunks",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="invalid request", detail=detail).model_dump(),
        )

    @app.exception_handler(Unauthorized)
    async def unauthorized_handler(request: Request, exc: Unauthorized):
        return JSONResponse(status_code=401, content=ErrorResponse(error="Unauthorized").model_dump())

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        """Liveness probe."""
        return "ok"

    app.include_router(ingest_router)
    app.include_router(search_router)
    app.include_router(debug_router)

    return app


# Create app instance for uvicorn
app = create_app()

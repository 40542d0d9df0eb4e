"""Ingestion routes."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docrag.api.auth import require_bearer
from docrag.api.models import ErrorResponse, IngestRequest, IngestResponse, PageStatusModel
from docrag.core.errors import EmbeddingError, RenderError
from docrag.core.ingest import IngestionPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingest"], dependencies=[Depends(require_bearer)])


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ingest(request: IngestRequest, http_request: Request):
    """Crawl a site and index its pages into a namespace."""
    pipeline: IngestionPipeline = http_request.app.state.pipeline

    try:
        result = await pipeline.ingest(
            request.url or "",
            allowlist=request.allowlist,
            namespace=request.namespace,
        )
    except (RenderError, EmbeddingError) as e:
        logger.exception("Ingestion of %s failed", request.url)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e)).model_dump(),
        )

    return IngestResponse(
        namespace=result.namespace,
        pages=result.pages,
        chunks=result.chunks,
        statuses=[
            PageStatusModel(url=s.url, status=s.status, chunks=s.chunks, error=s.error)
            for s in result.statuses
        ],
    )

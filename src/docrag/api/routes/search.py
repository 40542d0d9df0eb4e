"""Search routes."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docrag.api.auth import require_bearer
from docrag.api.models import ErrorResponse, Hit, SearchRequest, SearchResponse
from docrag.core.errors import EmbeddingError
from docrag.core.search import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"], dependencies=[Depends(require_bearer)])


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def search(request: SearchRequest, http_request: Request):
    """Return the chunks most similar to a query."""
    service: SearchService = http_request.app.state.search_service
    top_k = request.top_k
    if top_k is None:
        top_k = http_request.app.state.settings.default_top_k

    try:
        hits = await service.search(
            request.query or "",
            top_k=top_k,
            namespace=request.namespace,
        )
    except EmbeddingError as e:
        logger.exception("Query embedding failed")
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error="embedding_failed", detail=str(e)).model_dump(),
        )

    return SearchResponse(
        hits=[
            Hit(text=h.text, url=h.url, title=h.title, section=h.section, score=h.score)
            for h in hits
        ]
    )

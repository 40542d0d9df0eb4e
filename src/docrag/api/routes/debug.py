"""Store inspection routes."""

from fastapi import APIRouter, Depends, Query, Request

from docrag.api.auth import require_bearer
from docrag.api.models import CountResponse, NamespacesResponse

router = APIRouter(prefix="/debug", tags=["debug"], dependencies=[Depends(require_bearer)])


@router.get("/count", response_model=CountResponse)
async def count(
    request: Request,
    namespace: str = Query("default", description="Namespace to count"),
) -> CountResponse:
    """Number of chunks stored in a namespace."""
    return CountResponse(namespace=namespace, chunks=request.app.state.store.count(namespace))


@router.get("/namespaces", response_model=NamespacesResponse)
async def namespaces(request: Request) -> NamespacesResponse:
    """List namespaces holding at least one chunk."""
    return NamespacesResponse(namespaces=request.app.state.store.namespaces())

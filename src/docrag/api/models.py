"""API request/response models."""

from pydantic import BaseModel, Field


class IngestRequest(BaseModel):
    """Request body for the ingest endpoint."""

    url: str | None = Field(None, description="Site root to crawl")
    allowlist: list[str] | None = Field(
        None, description="URL prefixes eligible for indexing (defaults to [url])"
    )
    namespace: str = Field("default", description="Target namespace")


class PageStatusModel(BaseModel):
    """Per-URL outcome of an ingestion."""

    url: str
    status: str
    chunks: int
    error: str | None = None


class IngestResponse(BaseModel):
    """Response body for a successful ingestion."""

    ok: bool = True
    namespace: str
    pages: int
    chunks: int
    statuses: list[PageStatusModel] = []


class SearchRequest(BaseModel):
    """Request body for the search endpoint."""

    query: str | None = Field(None, description="Free-text query")
    top_k: int | None = Field(
        None, ge=0, description="Maximum number of hits (defaults to default_top_k)"
    )
    namespace: str = Field("default", description="Namespace to search")


class Hit(BaseModel):
    """A ranked chunk returned by search."""

    text: str
    url: str
    title: str
    section: str
    score: float


class SearchResponse(BaseModel):
    """Response body for the search endpoint."""

    hits: list[Hit]


class CountResponse(BaseModel):
    """Number of chunks stored in a namespace."""

    namespace: str
    chunks: int


class NamespacesResponse(BaseModel):
    """Non-empty namespaces in the store."""

    namespaces: list[str]


class ErrorResponse(BaseModel):
    """Body returned for any failed request."""

    ok: bool = False
    error: str
    detail: str | None = None

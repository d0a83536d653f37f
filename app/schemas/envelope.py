"""
Catalog API — Response Envelope Schemas
=========================================

What:  Pydantic descriptions of the uniform JSON envelope.
How:   Used as `responses=` models on routes so the OpenAPI document shows
       the envelope; the envelope itself is built by app/responses.py.

Envelope:
    {
        "success": true,            # status_code < 400
        "message": "Success",
        "data": ...,                # success path only, omitted when null
        "errors": {...}             # error path only, omitted when null
    }

Paginated `data`:
    {
        "items": [...],
        "pagination": {
            "total": 100, "count": 15, "per_page": 15,
            "current_page": 1, "total_pages": 7,
            "links": {"next": "...", "prev": null, "first": "...", "last": "..."}
        }
    }
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationLinks(BaseModel):
    next: Optional[str] = None
    prev: Optional[str] = None
    first: Optional[str] = None
    last: Optional[str] = None


class PaginationMeta(BaseModel):
    total: Optional[int] = Field(default=None, description="Records across all pages")
    count: int = Field(description="Records on this page")
    per_page: Optional[int] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None
    links: PaginationLinks = Field(default_factory=PaginationLinks)


class PaginatedData(BaseModel, Generic[T]):
    items: List[T]
    pagination: PaginationMeta


class SuccessEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    errors: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check payload, returned inside the envelope's `data`."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

"""
Common Pydantic models for pagination and responses.

Item models describe the usual shape of a record for the OpenAPI schema.
Records are schemaless, so list and detail routes return them as stored and
extra fields are allowed.
"""
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class DocumentModel(BaseModel):
    """Base for store records. Fields are camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., description="Record ID")
    created_at: Optional[datetime] = Field(None, description="When the record was created")


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(..., description="Current page number (1-indexed)")
    limit: int = Field(..., description="Items per page (1-100)")
    total: int = Field(..., description="Total number of matching items")
    total_pages: int = Field(..., description="Total number of pages")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    meta: PaginationMeta
    data: List[T]


class DataResponse(BaseModel, Generic[T]):
    """Single-object response wrapper."""

    data: T


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Error envelope returned by the global exception handlers."""

    error: ErrorDetail

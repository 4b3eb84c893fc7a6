"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: camelCase aliases on the wire, snake_case in Python, ORM-readable
- Pagination: Query parameters and response metadata
- Generic Responses: PaginatedResponse[T], MessageResponse
- Health: HealthCheckResponse, HealthResponse

Wire Format:
============
Every field is exposed under its camelCase alias:

    class FeedEntry(BaseSchema):
        image_url: str          →  "imageUrl"
        detail_path: str        →  "detailPath"

Requests accept either spelling (populate_by_name); responses are
serialized by alias because FastAPI's response_model_by_alias defaults
to True.
"""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Generic type for paginated responses
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - alias_generator: snake_case attributes, camelCase JSON
    - from_attributes: build responses straight from ORM models
    - populate_by_name: accept both attribute names and aliases
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    Pagination query parameters (`?page=2&limit=20`).

    Example:
        @router.get("/discover")
        async def discover(pagination: Pagination):
            items = await service.discover(pagination.offset, pagination.limit)
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Rows to skip before this page."""
        return (self.page - 1) * self.limit


class PaginationMeta(BaseSchema):
    """Pagination metadata in paginated responses."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")
    has_more: bool = Field(description="Whether a following page exists")

    @classmethod
    def create(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        """Build metadata, deriving total_pages and has_more."""
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_more=page < total_pages,
        )


class PaginatedResponse(BaseSchema, Generic[DataT]):
    """
    Generic paginated response.

    Example:
        PaginatedResponse[DiscoverItemResponse](
            data=[item1, item2],
            pagination=PaginationMeta.create(page=1, limit=20, total=2),
        )
    """

    data: list[DataT]
    pagination: PaginationMeta


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseSchema):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthCheckResponse(BaseModel):
    """Liveness response polled by the keep-alive pinger."""

    status: str = "UP"


class HealthResponse(BaseSchema):
    """Detailed health response."""

    status: str = "healthy"
    service: str = "audio-vault"
    version: str = "1.0.0"
    database: str = "unknown"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

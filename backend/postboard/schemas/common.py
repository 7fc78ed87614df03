"""
Postboard Backend — Shared Pydantic Schemas
=============================================

What:  Base model, pagination metadata, and error/health/message responses
       shared by every resource.
Why:   The JSON contract uses camelCase (`currentPage`, `createdAt`) while the
       Python side stays snake_case; one base class does the aliasing.

Schemas are separate from SQLAlchemy models because:
    1. We control exactly what data is exposed (never the password hash)
    2. Views embed data from more than one table (post + author)
"""

import math
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all API schemas: camelCase on the wire, snake_case in Python."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


# ══════════════════════════════════════════════════════════════════════════
# Pagination
# ══════════════════════════════════════════════════════════════════════════

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PageRequest(ApiModel):
    """
    What:  Normalized page/limit pair for offset pagination.
    How:   Built by `from_query` from raw query-string values; anything that
           is not a positive integer falls back to the default.
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, page: Optional[str], limit: Optional[str]) -> "PageRequest":
        return cls(
            page=_positive_int(page, DEFAULT_PAGE),
            limit=min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT),
        )


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class Pagination(ApiModel):
    """Pagination metadata returned next to every list."""

    current_page: int = Field(description="The page that was returned (1-based)")
    total_pages: int = Field(description="ceil(total / perPage)")
    total: int = Field(description="Total number of items across all pages")
    per_page: int = Field(description="Page size used for this response")

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "Pagination":
        return cls(
            current_page=request.page,
            total_pages=math.ceil(total / request.limit),
            total=total,
            per_page=request.limit,
        )


# ══════════════════════════════════════════════════════════════════════════
# Generic responses
# ══════════════════════════════════════════════════════════════════════════


class AuthorView(ApiModel):
    """A user as embedded in posts and comments."""

    id: str
    username: str
    email: str


class MessageResponse(ApiModel):
    message: str


class ErrorResponse(ApiModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "Invalid token",
            "code": "unauthenticated",
            "requestId": "3f2a9c1d"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(ApiModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

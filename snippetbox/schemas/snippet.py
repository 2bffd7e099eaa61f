"""
Snippetbox — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the JSON API contract.
Why:   Input parsing, response serialization, and OpenAPI docs in one place.
How:   FastAPI validates request bodies against these models and serializes
       return values through them.

Design Decision:
    Schemas are separate from the SQLAlchemy model so the store can hand out
    plain, detached values. SnippetResponse also normalizes timestamps to
    UTC-aware datetimes, since some drivers (SQLite) return naive ones.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetResponse(BaseModel):
    """
    What:  Full representation of a stored snippet.
    Who:   Returned by SnippetStore.get()/latest(), GET /api/snippets/{id},
           and passed to the HTML templates.
    """
    id: int = Field(description="Snippet identifier")
    title: str = Field(description="Snippet title (max 100 characters)")
    content: str = Field(description="Snippet body")
    created_at: datetime = Field(description="When the snippet was created (UTC ISO 8601)")
    expires_at: datetime = Field(description="When the snippet stops being served (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "expires_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC; convert aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class SnippetListResponse(BaseModel):
    """
    What:  Wrapper for the latest-snippets endpoint.
    Who:   Returned by GET /api/snippets.
    """
    snippets: List[SnippetResponse] = Field(
        description="Up to 10 unexpired snippets, newest first"
    )


class SnippetCreateResponse(BaseModel):
    """
    What:  Response after creating a snippet.
    Who:   Returned by POST /api/snippets with HTTP 201 Created.
    """
    message: str = Field(
        default="Snippet created successfully",
        description="Human-readable success message",
    )
    snippet: SnippetResponse = Field(description="The stored snippet")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreateRequest(BaseModel):
    """
    What:  JSON body for POST /api/snippets.

    Only the shape is checked here; the business rules (non-blank, length,
    permitted expiry) run through SnippetCreateForm so the HTML form and the
    API report identical messages.
    """
    title: str = Field(default="", description="Snippet title")
    content: str = Field(default="", description="Snippet body")
    expires_at: int = Field(default=365, description="Days until expiry: 1, 7 or 365")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all JSON API errors.

    Example:
        {
            "error": "not_found",
            "message": "snippet with ID '42' was not found",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

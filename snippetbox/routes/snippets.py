"""
Snippetbox — Snippets JSON API
===============================

What:  Handles GET /api/snippets (latest), GET /api/snippets/{id} (detail),
       and POST /api/snippets (create).
How:   Same SnippetStore and SnippetCreateForm as the HTML pages; only the
       response format differs.

Caching Strategy:
    - GET /api/snippets: no-store (the list changes as snippets are added and expire)
    - GET /api/snippets/{id}: private, short max-age (content is immutable,
      but the snippet disappears once it expires)
"""

import logging

from fastapi import APIRouter, Depends, Path, Response

from snippetbox.dependencies import get_snippet_store
from snippetbox.exceptions import ValidationError
from snippetbox.forms import SnippetCreateForm
from snippetbox.schemas.snippet import (
    ErrorResponse,
    SnippetCreateRequest,
    SnippetCreateResponse,
    SnippetListResponse,
    SnippetResponse,
)
from snippetbox.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Snippets"])


@router.get(
    "/snippets",
    response_model=SnippetListResponse,
    responses={
        200: {"description": "Latest unexpired snippets", "model": SnippetListResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the latest snippets",
    description="Returns up to 10 unexpired snippets, newest first.",
)
async def list_snippets(
    response: Response,
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetListResponse:
    snippets = await store.latest()
    response.headers["Cache-Control"] = "no-store"
    return SnippetListResponse(snippets=snippets)


@router.get(
    "/snippets/{snippet_id}",
    response_model=SnippetResponse,
    responses={
        200: {"description": "Snippet details", "model": SnippetResponse},
        404: {"description": "Snippet not found or expired", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single snippet by ID",
)
async def get_snippet(
    response: Response,
    snippet_id: int = Path(description="Snippet identifier"),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetResponse:
    snippet = await store.get(snippet_id)
    response.headers["Cache-Control"] = "private, max-age=60"
    return snippet


@router.post(
    "/snippets",
    status_code=201,
    response_model=SnippetCreateResponse,
    responses={
        201: {"description": "Snippet created", "model": SnippetCreateResponse},
        400: {"description": "Invalid title, content or expiry", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a snippet",
    description=(
        "Stores a new snippet. Title must be non-blank and at most 100 characters, "
        "content must be non-blank, and expires_at must be 1, 7 or 365 days."
    ),
)
async def create_snippet(
    body: SnippetCreateRequest,
    response: Response,
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetCreateResponse:
    """
    Validate and store a snippet.

    Every field is checked before responding, so a 400 lists all field
    problems in details.field_errors.
    """
    form = SnippetCreateForm(
        title=body.title,
        content=body.content,
        expires_at=body.expires_at,
    )
    if not form.validate():
        raise ValidationError(
            message="Snippet could not be created",
            field_errors=form.field_errors,
        )

    snippet_id = await store.insert(form.title, form.content, form.expires_at)
    snippet = await store.get(snippet_id)

    response.headers["Location"] = f"/api/snippets/{snippet_id}"
    return SnippetCreateResponse(snippet=snippet)

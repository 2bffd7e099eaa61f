"""
Snippetbox — HTML Page Handlers
================================

What:  Server-rendered pages: home, snippet view, and the create form.
How:   Parses path/form input, delegates to SnippetStore, renders a Jinja2 page.

Routes:
    GET  /                    → latest snippets
    GET  /snippet/view/{id}   → one snippet (404 when missing, expired, or id invalid)
    GET  /snippet/create      → empty form
    POST /snippet/create      → validate; 422 + re-rendered form, or 303 redirect

NotFoundError and StorageError raised here are turned into plain-text
responses by the handlers registered in main.py.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from snippetbox.dependencies import get_snippet_store
from snippetbox.exceptions import NotFoundError
from snippetbox.forms import SnippetCreateForm
from snippetbox.rendering import render
from snippetbox.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"], include_in_schema=False)


def parse_snippet_id(raw: str) -> int:
    """
    Positive integer from a path segment, or NotFoundError.

    Only an optional sign followed by ASCII digits is accepted; int() alone
    would also take "1_0", " 1" and non-ASCII (e.g. Arabic-Indic) digits.
    """
    digits = raw[1:] if raw[:1] in ("+", "-") else raw
    if not (digits.isascii() and digits.isdigit()):
        raise NotFoundError(resource="snippet", resource_id=raw)
    snippet_id = int(raw)
    if snippet_id < 1:
        raise NotFoundError(resource="snippet", resource_id=raw)
    return snippet_id


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    store: SnippetStore = Depends(get_snippet_store),
) -> HTMLResponse:
    snippets = await store.latest()
    return render(request, 200, "home.html", snippets=snippets)


@router.get("/snippet/view/{snippet_id}", response_class=HTMLResponse)
async def snippet_view(
    request: Request,
    snippet_id: str,
    store: SnippetStore = Depends(get_snippet_store),
) -> HTMLResponse:
    snippet = await store.get(parse_snippet_id(snippet_id))
    return render(request, 200, "view.html", snippet=snippet)


@router.get("/snippet/create", response_class=HTMLResponse)
async def snippet_create(request: Request) -> HTMLResponse:
    return render(request, 200, "create.html", form=SnippetCreateForm())


@router.post("/snippet/create")
async def snippet_create_post(
    request: Request,
    title: str = Form(default=""),
    content: str = Form(default=""),
    expires_at: str = Form(default=""),
    store: SnippetStore = Depends(get_snippet_store),
):
    """
    Create a snippet from the submitted form.

    All checks run before deciding, so the re-rendered form shows every
    problem at once. The store is only called for a valid form.
    """
    form = SnippetCreateForm.from_fields(title, content, expires_at)
    if not form.validate():
        logger.info("Snippet form rejected: fields=%s", sorted(form.field_errors))
        return render(request, 422, "create.html", form=form)

    snippet_id = await store.insert(form.title, form.content, form.expires_at)
    return RedirectResponse(url=f"/snippet/view/{snippet_id}", status_code=303)

"""
Snippetbox — FastAPI Dependencies
==================================

What:  Hands route handlers the SnippetStore built by the application factory.
Why:   Handlers never reach for a global pool; tests swap the store through
       app.dependency_overrides[get_snippet_store].
"""

from fastapi import Request

from snippetbox.services.snippet_store import SnippetStore


def get_snippet_store(request: Request) -> SnippetStore:
    return request.app.state.snippets

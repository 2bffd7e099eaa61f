# Routes package init
"""
Snippetbox — Routes Package
============================

Route Inventory:
    - pages.py:     GET  /                     (latest snippets page)
                    GET  /snippet/view/{id}    (snippet page)
                    GET  /snippet/create       (create form)
                    POST /snippet/create       (submit form)
    - snippets.py:  GET  /api/snippets         (latest snippets, JSON)
                    GET  /api/snippets/{id}    (one snippet, JSON)
                    POST /api/snippets         (create, JSON)
    - health.py:    GET  /health               (service health check)

Routes stay thin: parse input, call SnippetStore, format the response.
"""

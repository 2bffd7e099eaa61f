# Middleware package init
"""
Snippetbox — Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Security Headers] → [GZip] → Route Handler

    1. Request ID first, so every later log line carries it
    2. Logging measures everything below it, including header/compression work
    3. Security headers are set on every response, error pages included
"""

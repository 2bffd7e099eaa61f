"""
Snippetbox — Security Headers Middleware
=========================================

What:  Adds a fixed set of browser security headers to every response.
Why:   Pages render user-submitted text; the CSP restricts scripts and styles
       to our own origin (plus Google Fonts) as a second line behind Jinja2
       autoescaping.

Responses built by the catch-all Exception handler bypass this middleware
(Starlette serves them from ServerErrorMiddleware, outside the user
middleware stack), so that handler calls apply_security_headers() itself.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' fonts.googleapis.com; "
        "font-src fonts.gstatic.com"
    ),
    "Referrer-Policy": "origin-when-cross-origin",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "deny",
    # Disables legacy browser XSS auditors
    "X-XSS-Protection": "0",
    "Server": "Snippetbox",
}


def apply_security_headers(response: Response) -> Response:
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        return apply_security_headers(response)

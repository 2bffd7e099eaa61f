"""
Snippetbox — HTML Template Rendering
=====================================

What:  Jinja2 template environment plus the render() helper used by page routes.
Why:   Every page shares the base layout and needs the same default data
       (current year for the footer), so this is done in one place.
How:   Jinja2Templates loads and caches templates from snippetbox/templates.
       render() adds the default template data and returns an HTMLResponse
       with the requested status code.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"


def human_date(value: Optional[datetime]) -> str:
    """Format a timestamp as '02 Jan 2006 at 15:04' in UTC; '' for None."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%d %b %Y at %H:%M")


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["human_date"] = human_date


def render(request: Request, status_code: int, page: str, **data: Any) -> HTMLResponse:
    """Render pages/<page> inside the base layout."""
    context = {"current_year": datetime.now(timezone.utc).year}
    context.update(data)
    return templates.TemplateResponse(
        request,
        f"pages/{page}",
        context,
        status_code=status_code,
    )

"""
Snippetbox — Application Package Initializer
=============================================

What: Marks the `snippetbox` directory as a Python package.
Why:  Enables module imports like `from snippetbox.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │    Routes (HTML pages + JSON API)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Forms & Validator (input rules)   │  ← Field-level checks as data
    ├─────────────────────────────────────┤
    │     Services (SnippetStore)         │  ← Insert / Get / Latest
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

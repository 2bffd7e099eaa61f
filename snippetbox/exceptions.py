"""
Snippetbox — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios the web layer
       must tell apart.
Why:   "No live snippet with that id" and "the database is unavailable" need
       different responses (404 vs 500), so they are distinct types rather
       than one generic error.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) turn them into
       responses with the right status code.

Exception Hierarchy:
    SnippetboxError (base)
    ├── ValidationError   → 400 Bad Request (JSON API input rejected)
    ├── NotFoundError     → 404 Not Found (missing or expired snippet)
    └── StorageError      → 500 Internal Server Error (database failure)

Form validation itself never raises: field failures are collected as data on
the Validator and only the JSON API converts them into a ValidationError.
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SnippetboxError):
    """
    Raised when a JSON API request body fails the create-form checks.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Snippet could not be created",
            "details": {"field_errors": {"title": "This field cannot be blank"}}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field_errors:
            ctx["field_errors"] = dict(field_errors)
        super().__init__(message=message, context=ctx)
        self.field_errors = dict(field_errors or {})


class NotFoundError(SnippetboxError):
    """
    Raised when no live record matches a lookup.

    When:  SnippetStore.get() finds no row with the id, or the row has expired.
    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageError(SnippetboxError):
    """
    Raised when a database operation fails.

    When:  Connection lost, malformed query, constraint violation, etc.
    HTTP:  500 Internal Server Error

    The original driver exception is chained as __cause__ and logged
    server-side; the client only ever sees a generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation

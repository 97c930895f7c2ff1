"""
NoteKeeper Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the recoverable error kinds.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the matching HTTP status code.
Who:   Raised by the tag matcher and the note service; caught by handlers.

Exception Hierarchy:
    NoteKeeperError (base)       → 500 Internal Server Error
    ├── NotFoundError            → 404 Not Found
    ├── InvalidInputError        → 400 Bad Request (plain text body)
    └── SearchPatternError       → 400 Bad Request

The note store itself never raises: absence is reported as ``None`` (or
``False`` for removal) and converted into NotFoundError by the service layer.
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
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


class NotFoundError(NoteKeeperError):
    """
    Raised when a referenced note id is absent from the store.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class InvalidInputError(NoteKeeperError):
    """
    Raised when a tag payload is not an array.

    HTTP:    400 Bad Request, with the message as a plain-text body.
    """

    def __init__(
        self,
        message: str = "you must pass in an array of tags",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SearchPatternError(NoteKeeperError):
    """
    Raised when a search query is not a valid match expression.

    Only reachable in ``pattern`` search mode, where the query is compiled
    as a regular expression.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        query: str,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Search query '{query}' is not a valid pattern"
        if reason:
            message = f"{message}: {reason}"
        ctx = context or {}
        ctx["query"] = query
        super().__init__(message=message, context=ctx)
        self.query = query

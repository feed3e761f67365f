"""
LivDaily Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios the API exposes.
How:   Each exception carries a user-safe message and an optional context dict.
       Global handlers in main.py translate them into JSON error responses.
Who:   Raised by services and dependencies; caught by the global handlers.

Exception Hierarchy:
    LivDailyError (base)
    ├── ValidationError          → 400 Bad Request
    ├── UnauthorizedError        → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── DatabaseError            → 500 Internal Server Error
    └── LLMServiceError          → 503 Service Unavailable
"""

from typing import Any, Dict, Optional


class LivDailyError(Exception):
    """
    Base exception for all LivDaily application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LivDailyError):
    """
    Raised when client input breaks a business rule.

    Schema-level problems are already rejected by FastAPI with 422; this one
    covers rules the schema cannot express (e.g. an unknown role name).
    HTTP: 400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(LivDailyError):
    """
    Raised by the session gate when the bearer token is missing, malformed,
    unknown or expired, and by sign-in on bad credentials.
    HTTP: 401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(LivDailyError):
    """
    Raised when an authenticated caller touches a record it does not own,
    or a non-admin calls an admin route.
    HTTP: 403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have permission to access this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(LivDailyError):
    """
    Raised when a requested record does not exist.

    SQLAlchemy returns None for missing rows; services convert that into this
    exception so the global handler can answer 404.
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


class ConflictError(LivDailyError):
    """Raised when a unique value is already taken (e.g. sign-up email). HTTP 409."""

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LLMServiceError(LivDailyError):
    """
    Raised when the LLM (Gemini) call fails or returns an unusable payload.

    HTTP: 503 Service Unavailable. The client may retry later.
    """

    def __init__(
        self,
        message: str = "AI generation service is temporarily unavailable",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(LivDailyError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the context is
    logged server-side only.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(LivDailyError):
    """Raised when a client exceeds the per-IP request rate limit. HTTP 429."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after

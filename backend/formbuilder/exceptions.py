"""
FormBuilder Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure cases of each operation.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services and the authentication gate; caught by global handlers.

Exception Hierarchy:
    FormBuilderError (base)
    ├── ConflictError            → 400 Bad Request (username already taken)
    ├── InvalidCredentialsError  → 401 Unauthorized (login failed)
    ├── UnauthorizedError        → 401 Unauthorized (missing/invalid bearer)
    ├── ForbiddenError           → 403 Forbidden (caller does not own the form)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class FormBuilderError(Exception):
    """
    Base exception for all FormBuilder application errors.

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


class ConflictError(FormBuilderError):
    """
    Raised when a registration uses a username that already exists.

    HTTP: 400 Bad Request. Existing clients check for 400 on duplicate
    registration, so this is not a 409.
    """

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(FormBuilderError):
    """
    Raised when a login names an unknown user or gives the wrong password.

    The message is the same for both cases so a caller cannot probe which
    usernames exist.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(FormBuilderError):
    """
    Raised by the authentication gate.

    When:    Authorization header missing or malformed, token signature or
             expiry invalid, or the token's account no longer exists.
    HTTP:    401 Unauthorized with `WWW-Authenticate: Bearer`.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(FormBuilderError):
    """
    Raised when an authenticated caller touches a form owned by someone else.

    `action` completes the message ("You do not have permission to <action>
    this <resource>"), so a read is not described as a modification.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        action: str = "modify",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You do not have permission to {action} this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        ctx["action"] = action
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotFoundError(FormBuilderError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so the handler can answer 404.
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


class DatabaseError(FormBuilderError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the original
    exception type goes into `context` and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
PetSoft Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific errors for every failure an action can meet.
Why:   Each class carries the user-facing message and HTTP status of its
       condition, so the action boundary and the global handlers can flatten
       any of them into one `{"message": ...}` body.
How:   Each exception carries a message and an optional context dict. Context
       is logged server-side and never returned to the client.
Who:   Raised by services, the session provider and the payment gateway;
       carried inside `Err` results by the validation pipeline and the
       ownership guard; caught by actions and by the handlers in main.py.

Exception Hierarchy:
    PetSoftError (base)
    ├── InvalidInputError            → 400 (failed structural/semantic validation)
    ├── InvalidCredentialsError      → 401 (session provider rejected credentials)
    ├── AuthenticationRequiredError  → 303 to the login page (no session)
    ├── UnauthorizedError            → 403 (record exists, caller is not owner)
    ├── NotFoundError                → 404 (referenced record absent)
    ├── ConflictError                → 409 (uniqueness violation on create)
    ├── RateLimitExceededError       → 429
    └── DependencyFailureError       → 500 (any other storage/provider error)
        ├── DatabaseError            → 500
        ├── SessionProviderError     → 500
        └── PaymentGatewayError      → 502
"""

from typing import Any, Dict, Optional


class PetSoftError(Exception):
    """
    Base exception for all PetSoft application errors.

    Attributes:
        message:     User-facing error description (safe to return in a response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status used when this error reaches the client
        error_code:  Machine-readable error identifier
    """

    status_code: int = 500
    error_code: str = "server_error"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class InvalidInputError(PetSoftError):
    """
    Raised (or carried in an `Err`) when client input fails validation.

    The message stays generic; the per-field pydantic errors live in
    `context["errors"]` for logging.
    """

    status_code = 400
    error_code = "invalid_input"
    default_message = "Invalid pet data."


class InvalidCredentialsError(PetSoftError):
    """Email/password pair did not match an account."""

    status_code = 401
    error_code = "invalid_credentials"
    default_message = "Invalid credentials."


class AuthenticationRequiredError(PetSoftError):
    """
    No valid session accompanied a request to a protected route.

    Converted into a redirect to the login page by the global handler.
    """

    status_code = 401
    error_code = "authentication_required"
    default_message = "Authentication required."


class UnauthorizedError(PetSoftError):
    """The record exists but belongs to another user."""

    status_code = 403
    error_code = "unauthorized"
    default_message = "Unauthorized."


class NotFoundError(PetSoftError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; the ownership guard turns
    that None into this error.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "pet",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found.", context=ctx)


class ConflictError(PetSoftError):
    """A unique constraint rejected the insert (duplicate signup email)."""

    status_code = 409
    error_code = "conflict"
    default_message = "Email already exists."


class RateLimitExceededError(PetSoftError):
    """Raised when a client exceeds the per-IP request rate limit."""

    status_code = 429
    error_code = "rate_limit_exceeded"

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


class DependencyFailureError(PetSoftError):
    """
    A collaborator (database, session provider, payment gateway) failed.

    Security Note:
        The message returned to the client is always generic. The driver or
        provider error is logged server-side only.
    """

    status_code = 500
    error_code = "dependency_failure"
    default_message = "A required service failed. Please try again later."


class DatabaseError(DependencyFailureError):
    """Raised when database operations fail unexpectedly."""

    error_code = "database_error"
    default_message = "A database error occurred. Please try again later."


class SessionProviderError(DependencyFailureError):
    """The session provider could not complete a login for reasons other than bad credentials."""

    error_code = "session_provider_error"
    default_message = "could not log in."


class PaymentGatewayError(DependencyFailureError):
    """The hosted payment provider rejected or failed the request."""

    status_code = 502
    error_code = "payment_gateway_error"
    default_message = "could not create checkout session."

"""
Laundry API Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every error the API reports.
Why:   Services raise; one set of global handlers (registered in main.py)
       turns each exception into the right status code and JSON body.
How:   Each class carries a message, an optional context dict (logged,
       never returned), its HTTP status, and knows its response body.
Who:   Raised by the security layer and services; caught by handlers.

Exception Hierarchy:
    LaundryError (base)
    ├── ValidationError            → 400 {error}
    │   └── ProtectedRecordError   → 400 {message}
    ├── ConflictError              → 400 {error}
    ├── AuthError
    │   ├── MissingTokenError      → 403 {auth: false, message}
    │   ├── InvalidTokenError      → 401 {auth: false, message}
    │   │   └── ExpiredTokenError  → 401 {auth: false, message}
    │   ├── InvalidCredentialsError→ 401 {auth: false, token: null, error}
    │   └── ForbiddenError         → 403 {message}
    ├── NotFoundError              → 404 {message}
    │   ├── ReferenceNotFoundError → 404 {error}
    │   └── NoRowsAffectedError    → 400 {error}
    └── StoreError                 → 500 {error}

The body shapes are part of the public API contract the frontend relies
on, which is why some errors answer under "error" and others "message".
"""

from typing import Any, Dict, Optional


class LaundryError(Exception):
    """
    Base exception for all Laundry API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    body_key: str = "error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        """JSON body returned to the client."""
        return {self.body_key: self.message}


class ValidationError(LaundryError):
    """
    Raised when client input is missing or malformed.

    When:    Empty required field, password too long for bcrypt, bad role.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request body",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ProtectedRecordError(ValidationError):
    """
    Raised when a request targets the owner record in a way nobody may.

    When:    DELETE /admin/users/1, by anyone.
    HTTP:    400 Bad Request, reported under "message".
    """

    body_key = "message"


class ConflictError(LaundryError):
    """
    Raised when a write hits a uniqueness or reference constraint.

    When:    Registering an already-used username/email, deleting a product
             that transactions still point to.
    HTTP:    400 Bad Request
    """

    status_code = 400


class AuthError(LaundryError):
    """Base for authentication and authorization failures."""

    status_code = 401
    body_key = "message"

    def to_content(self) -> Dict[str, Any]:
        return {"auth": False, "message": self.message}


class MissingTokenError(AuthError):
    """No Authorization header on a protected route (HTTP 403)."""

    status_code = 403

    def __init__(self, message: str = "No token provided", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidTokenError(AuthError):
    """Malformed header, bad signature, or undecodable token (HTTP 401)."""

    def __init__(self, message: str = "Invalid token", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ExpiredTokenError(InvalidTokenError):
    """Token signature is fine but its exp claim is in the past (HTTP 401)."""

    def __init__(self, message: str = "Token expired", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(AuthError):
    """
    Raised by login when the username or the password does not match.

    Why one class for both cases: the response must not reveal which of
    the two was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid username or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    def to_content(self) -> Dict[str, Any]:
        return {"auth": False, "token": None, "error": self.message}


class ForbiddenError(AuthError):
    """Authenticated, but the role or target record is off limits (HTTP 403)."""

    status_code = 403

    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message}


class NotFoundError(LaundryError):
    """
    Raised when a requested entity does not exist.

    When:    GET /products/{id} with an unknown id.
    HTTP:    404 Not Found
    """

    status_code = 404
    body_key = "message"

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=message or f"{resource} not found", context=ctx)
        self.resource = resource


class ReferenceNotFoundError(NotFoundError):
    """
    Raised when a write names a related entity that does not exist.

    When:    POST /transactions with an unknown customerId or productId.
    HTTP:    404 Not Found, reported under "error".
    """

    body_key = "error"

    def __init__(self, resource: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(resource=resource, message=f"{resource} ID not found", context=context)


class NoRowsAffectedError(NotFoundError):
    """
    Raised when an update or delete matched zero rows.

    HTTP:    400 Bad Request (the id in the path did not match anything)
    """

    status_code = 400
    body_key = "error"

    def __init__(self, resource: str, action: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            resource=resource,
            message=f"No rows {action}. {resource} ID not found",
            context=context,
        )
        self.action = action


class StoreError(LaundryError):
    """
    Raised when the store fails in a way no other class describes.

    When:    Disk I/O error, locked database, unexpected constraint.
    HTTP:    500 Internal Server Error, carrying the driver's message.
    """

    status_code = 500

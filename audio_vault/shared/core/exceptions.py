"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    VaultException (base)
       │
       ├── AuthenticationError (401)    ← Missing/invalid/expired token, bad credentials
       ├── AuthorizationError (403)     ← Valid user, wrong owner
       ├── NotFoundError (404)          ← Resource not found
       │      ├── UserNotFoundError
       │      ├── ItemNotFoundError
       │      └── WildFindNotFoundError
       ├── ValidationError (400)        ← Invalid input data
       │      └── InvalidOperationError ← Well-formed but disallowed (e.g. self-follow)
       ├── ConflictError (409)          ← Resource already exists
       │      └── DuplicateResourceError
       ├── RateLimitError (429)         ← AI provider throttling
       └── ExternalServiceError (502)   ← AI / storage provider failure
              └── AnalysisUnavailableError

Usage:
======
    from audio_vault.shared.core.exceptions import NotFoundError, ValidationError

    # Raise with automatic status code
    raise NotFoundError("User", user_id)
    # Results in: {"error": {"code": "NOT_FOUND", "message": "User with id 'abc' not found"}}

    # Raise with additional details
    raise ValidationError("Invalid email format", details={"field": "email"})

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "User with id 'abc-123' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class VaultException(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(VaultException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Missing or invalid credentials
    - Token expired or malformed
    - Token refers to a user that no longer exists
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(VaultException):
    """
    Authorization failed error (403 Forbidden).

    Raised when user is authenticated but does not own the resource.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(VaultException):
    """
    Resource not found error (404 Not Found).

    Base class for all "not found" errors with automatic message formatting.

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)


class ItemNotFoundError(NotFoundError):
    """Audio item not found error."""

    def __init__(self, item_id: str) -> None:
        super().__init__(resource="Item", resource_id=item_id)


class WildFindNotFoundError(NotFoundError):
    """Saved find not found error."""

    def __init__(self, find_id: str) -> None:
        super().__init__(resource="Find", resource_id=find_id)


class NothingIdentifiedError(NotFoundError):
    """The AI found no equipment in a submitted photo."""

    def __init__(
        self,
        message: str = (
            "The AI could not identify any distinct items in the image. "
            "Please try a clearer photo or a different angle."
        ),
    ) -> None:
        VaultException.__init__(self, message=message, status_code=404, error_code="NOT_FOUND")


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(VaultException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class InvalidOperationError(ValidationError):
    """
    Operation is well-formed but not allowed (400).

    Example:
        raise InvalidOperationError("You cannot follow yourself.")
    """

    def __init__(
        self,
        message: str = "Invalid operation",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, error_code="INVALID_OPERATION")


class ConflictError(VaultException):
    """
    Resource conflict error (409 Conflict).

    Raised when operation conflicts with existing resource.

    Example:
        raise ConflictError("Email already registered")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """
    Duplicate resource error.

    Specific case of conflict when trying to create duplicate resource.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITING & UPSTREAM ERRORS (429, 502)
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimitError(VaultException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Includes retry_after hint for clients.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if retry_after:
            extra_details["retry_after_seconds"] = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=extra_details,
        )


class ExternalServiceError(VaultException):
    """
    Upstream provider error (502 Bad Gateway).

    Raised when the AI provider or object storage fails. The message is
    generic; provider details go to the logs, not to the client.
    """

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        error_code: str = "UPSTREAM_ERROR",
    ) -> None:
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(
            message=message or f"{service_name} service error",
            status_code=502,
            error_code=error_code,
            details=extra_details,
        )


class AnalysisUnavailableError(ExternalServiceError):
    """
    The AI analysis gateway could not produce a result.

    Covers provider outages, timeouts and unparseable model output.
    """

    def __init__(
        self,
        message: str = "AI analysis is currently unavailable. Please try again later.",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            service_name="ai",
            message=message,
            details=details,
            error_code="ANALYSIS_UNAVAILABLE",
        )

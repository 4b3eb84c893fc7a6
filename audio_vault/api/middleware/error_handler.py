"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Audio item with id 'abc-123' not found",
            "details": {}
        }
    }

Exception Handling:
===================
1. VaultException subclasses → Use their status_code and to_dict()
2. RequestValidationError / Pydantic ValidationError → 400 with field errors
3. Other exceptions → 500 with generic message (details hidden)

Usage:
======
    from audio_vault.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from audio_vault.shared.core.exceptions import VaultException
from audio_vault.shared.core.logging import logger


def _field_errors(errors: Sequence[Any]) -> list[dict[str, str]]:
    """Reduce pydantic error dicts to JSON-safe {field, message, type} entries."""
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def _validation_response(errors: list[dict[str, str]]) -> JSONResponse:
    message = "Request validation failed"
    if errors:
        first = errors[0]
        message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": message,
                "details": {"errors": errors},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(VaultException)
    async def vault_exception_handler(
        request: Request,
        exc: VaultException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from VaultException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        headers = None
        retry_after = exc.details.get("retry_after_seconds")
        if retry_after:
            headers = {"Retry-After": str(retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle malformed request bodies, query strings and form fields.

        FastAPI answers these with 422 by default; the API reports them as 400.
        """
        errors = _field_errors(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors raised inside handlers.

        Multipart item payloads are validated by hand after the form is read,
        so their errors arrive here rather than as RequestValidationError.
        """
        errors = _field_errors(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )

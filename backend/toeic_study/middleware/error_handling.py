"""
Error Handling Middleware

Provides consistent, informative error responses across the API.

Features:
- Standardized error response format (see models.base.ErrorDetail)
- Correlation IDs for log tracking
- Sanitized responses (hides internal details unless debug is on)
- Custom exception classes for service errors
- Endpoint decorator that turns unexpected failures into 500s

Usage:
    from toeic_study.middleware.error_handling import ServiceError, setup_error_handling

    # Add middleware to app
    setup_error_handling(app, debug=settings.DEBUG)

    # Raise custom exceptions from services
    raise ValidationError("Session ends before it starts", details={...})

Exception handling hierarchy:
    - HTTPException: Left to FastAPI's built-in handler
    - ServiceError: Structured JSON response with the error's status code
    - Exception: Catch-all for unexpected errors → sanitized 500 response
"""

import functools
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from toeic_study.models.base import ErrorDetail

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Custom Exceptions
# =============================================================================


class ServiceError(Exception):
    """
    Base exception for service errors.

    Provides consistent error handling with:
    - HTTP status code
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise ServiceError("Dashboard unavailable", status_code=503)
    """

    status_code: int = 500
    error_code: str = "service_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code
        self.details = details


class ValidationError(ServiceError):
    """
    Data validation error.

    Raised when records pass schema validation but are inconsistent.
    """

    status_code = 422
    error_code = "validation_error"


def _new_error_id() -> str:
    return str(uuid4())[:8]


def _error_body(
    error_code: str,
    message: str,
    error_id: str,
    details: Optional[dict] = None,
) -> dict[str, Any]:
    return ErrorDetail(
        error=error_code,
        message=message,
        error_id=error_id,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


# =============================================================================
# Error Handling Middleware
# =============================================================================


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    - Catches unhandled exceptions
    - Logs with correlation ID
    - Returns consistent error format
    - Hides internal details unless debug is on
    """

    def __init__(self, app, debug: bool = False):
        """
        Initialize middleware.

        Args:
            app: FastAPI/Starlette application
            debug: Whether to include details and stack traces in responses
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request and handle any errors."""
        error_id = _new_error_id()

        try:
            return await call_next(request)

        except HTTPException:
            # Let FastAPI handle HTTP exceptions
            raise

        except ServiceError as e:
            logger.error(
                f"[{error_id}] {e.error_code}: {e.message}",
                extra={
                    "error_id": error_id,
                    "error_code": e.error_code,
                    "path": request.url.path,
                    "method": request.method,
                    "details": e.details,
                },
            )
            return JSONResponse(
                status_code=e.status_code,
                content=_error_body(
                    e.error_code,
                    e.message,
                    error_id,
                    e.details if self.debug else None,
                ),
            )

        except Exception as e:
            logger.error(
                f"[{error_id}] Unhandled error: {type(e).__name__}: {e}",
                extra={
                    "error_id": error_id,
                    "path": request.url.path,
                    "method": request.method,
                    "traceback": traceback.format_exc(),
                },
            )
            details = None
            if self.debug:
                details = {
                    "exception": type(e).__name__,
                    "message": str(e),
                    "traceback": traceback.format_exc(),
                }
            return JSONResponse(
                status_code=500,
                content=_error_body(
                    "internal_server_error",
                    "An unexpected error occurred",
                    error_id,
                    details,
                ),
            )


# =============================================================================
# Setup Function
# =============================================================================


def setup_error_handling(app: FastAPI, debug: bool = False) -> None:
    """
    Configure error handling on the FastAPI app.

    ServiceErrors raised inside route handlers are rendered by an exception
    handler; the middleware covers everything else, including failures in
    other middleware.

    Args:
        app: FastAPI application instance
        debug: Whether to include details in responses
    """

    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        error_id = _new_error_id()
        logger.warning(
            f"[{error_id}] {exc.error_code} on {request.method} {request.url.path}: {exc.message}"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                exc.error_code,
                exc.message,
                error_id,
                exc.details if debug else None,
            ),
        )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    logger.info(f"Error handling middleware enabled (debug={debug})")


# =============================================================================
# Endpoint Decorator
# =============================================================================


def handle_endpoint_errors(
    operation: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorate an async route handler with consistent error handling.

    HTTPException and ServiceError pass through untouched. Anything else is
    logged with the operation name and converted into a 500 HTTPException.

    Args:
        operation: Human-readable operation name used in logs and messages.

    Example:
        @router.get("/tiers")
        @handle_endpoint_errors("List level tiers")
        async def list_tiers(): ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except (HTTPException, ServiceError):
                raise
            except Exception as e:
                logger.exception(f"{operation} failed: {type(e).__name__}: {e}")
                raise HTTPException(status_code=500, detail=f"{operation} failed")

        return wrapper

    return decorator

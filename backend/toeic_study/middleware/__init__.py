"""
Middleware Package

Provides FastAPI middleware for:
- Error handling
- Endpoint error wrapping

Usage:
    from toeic_study.middleware import setup_error_handling, handle_endpoint_errors

    setup_error_handling(app, debug=settings.DEBUG)
"""

from toeic_study.middleware.error_handling import (
    ErrorHandlingMiddleware,
    ServiceError,
    ValidationError,
    handle_endpoint_errors,
    setup_error_handling,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "ServiceError",
    "ValidationError",
    "handle_endpoint_errors",
    "setup_error_handling",
]

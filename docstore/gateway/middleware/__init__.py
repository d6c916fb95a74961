"""
Gateway Middleware Module

Custom middleware for authentication, request tracing, logging, and error handling.
"""
from .auth import BearerAuthMiddleware
from .request_logging import RequestLoggingMiddleware
from .error_handler import ErrorHandlingMiddleware, error_response
from .request_id import RequestIDMiddleware

__all__ = [
    "BearerAuthMiddleware",
    "RequestLoggingMiddleware",
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "error_response"
]

"""
Error Handling Middleware

Last line of defence: converts anything that escaped the route handlers into
the JSON error envelope.
"""
import traceback
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from ...core.logging_config import get_logger
from ...api.exceptions import DocstoreError, handle_business_exception

logger = get_logger(__name__)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    """Render the {"error": ...} body shared by every failure."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that provides centralized error handling.

    - Business exceptions (DocstoreError) → their own status code
    - Unexpected exceptions → 500 with the exception message
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except DocstoreError as e:
            http_exception = handle_business_exception(e)
            logger.warning(f"Business exception for {request.method} {request.url.path}: {e.message}")
            return error_response(http_exception.status_code, http_exception.detail)

        except Exception as e:
            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}")
            logger.debug(f"Traceback:\n{traceback.format_exc()}")
            return error_response(500, f"Unexpected error: {e}")

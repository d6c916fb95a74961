"""
Request Logging Middleware

Logs all incoming requests and responses with timing information.
"""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable, List, Optional
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs method, path, status code and duration of each request.

    The root liveness probe is skipped to reduce noise. Query strings are not
    logged because document paths can be sensitive.
    """

    def __init__(self, app, skip_paths: Optional[List[str]] = None):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            skip_paths: Exact paths to skip logging (e.g., ["/"])
        """
        super().__init__(app)
        self.skip_paths = skip_paths if skip_paths is not None else ["/"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None)
        request_id_str = f" [{request_id}]" if request_id else ""

        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.info(f"→ {method} {path}{request_id_str}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(f"{method} {path} → exception after {duration_ms:.2f}ms{request_id_str}: {e}")
            raise

        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        log = logger.info if status_code < 500 else logger.error
        log(f"{method} {path} → {status_code} ({duration_ms:.2f}ms){request_id_str}")

        return response

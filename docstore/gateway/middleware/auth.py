"""
Bearer Token Authentication Middleware

Rejects every request except the root liveness probe unless it carries
Authorization: Bearer <DOCSTORE_API_TOKEN>. Runs before routing, so a
rejected request never reaches GitHub.
"""
import secrets
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from ...api.exceptions import ServerMisconfiguredError, UnauthorizedError
from ...core.config import DocstoreSettings
from ...core.logging_config import get_logger
from .error_handler import error_response

logger = get_logger(__name__)

OPEN_PATHS = {"/"}
SAFE_METHODS = {"GET", "HEAD"}


def is_open_route(method: str, path: str) -> bool:
    return path in OPEN_PATHS and method.upper() in SAFE_METHODS


def check_bearer_token(settings: DocstoreSettings, authorization: str) -> None:
    """
    Compare the Authorization header with the configured token.

    Raises:
        ServerMisconfiguredError: If DOCSTORE_API_TOKEN is not set
        UnauthorizedError: If the header is missing or differs in any byte
    """
    if not settings.api_token:
        raise ServerMisconfiguredError("DOCSTORE_API_TOKEN is not configured")
    expected = f"Bearer {settings.api_token}".encode("utf-8")
    if not secrets.compare_digest((authorization or "").encode("utf-8"), expected):
        raise UnauthorizedError()


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Static bearer token check for every protected route."""

    def __init__(self, app, settings: DocstoreSettings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        if is_open_route(request.method, request.url.path):
            return await call_next(request)

        try:
            check_bearer_token(self.settings, request.headers.get("Authorization", ""))
        except ServerMisconfiguredError as e:
            logger.error(e.message)
            return error_response(e.status_code, e.message)
        except UnauthorizedError as e:
            logger.warning(f"Rejected {request.method} {request.url.path}: {e.message}")
            return error_response(e.status_code, e.message)

        return await call_next(request)

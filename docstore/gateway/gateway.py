"""
API Gateway

Main gateway class that orchestrates routing, middleware and error rendering.
Acts as the single entry point for all API requests.
"""
from typing import Optional, List
from fastapi import FastAPI, APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..api.dto import HealthDTO
from ..api.exceptions import DocstoreError
from ..core.config import CORS_ORIGINS, DocstoreSettings
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import (
    BearerAuthMiddleware,
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    error_response
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing, middleware and error rendering.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, auth, logging, request ids, error handling)
    - Render every failure as {"error": "..."}
    - Register routers and the liveness probe
    """

    def __init__(
        self,
        settings: DocstoreSettings,
        title: str = "Docstore API",
        description: str = "Document store backed by a GitHub repository",
        version: str = "1.0.0",
        lifespan=None
    ):
        """
        Initialize API Gateway.

        Args:
            settings: Process configuration (bearer token for the auth middleware)
            title: API title
            description: API description
            version: API version
            lifespan: Optional startup/shutdown context manager
        """
        self.settings = settings
        self.title = title
        self.description = description
        self.version = version

        # /docs is the document collection, so the interactive docs UIs stay off
        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url=None,
            redoc_url=None,
            openapi_url="/openapi.json",
            lifespan=lifespan
        )

        self.app.state.limiter = limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        self._register_exception_handlers()

        logger.info("API Gateway initialized")

    def _register_exception_handlers(self):
        """Render business, HTTP and validation errors with the shared envelope."""

        @self.app.exception_handler(DocstoreError)
        async def docstore_error_handler(request: Request, exc: DocstoreError):
            if exc.status_code >= 500:
                logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            else:
                logger.debug(f"{request.method} {request.url.path}: {exc.status_code} {exc.message}")
            return error_response(exc.status_code, exc.message)

        @self.app.exception_handler(StarletteHTTPException)
        async def http_error_handler(request: Request, exc: StarletteHTTPException):
            message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
            return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

        @self.app.exception_handler(RequestValidationError)
        async def validation_error_handler(request: Request, exc: RequestValidationError):
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            return error_response(400, problems or "Bad request")

    def setup_middleware(self):
        """
        Configure all middleware.

        Starlette runs the last added middleware first, so the order below is
        innermost to outermost: authentication sees the request after it has
        a request id and inside the error boundary.
        """
        logger.info("Setting up middleware...")

        self.app.add_middleware(BearerAuthMiddleware, settings=self.settings)
        logger.debug("  → Bearer authentication middleware added")

        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("✅ All middleware configured")

    def register_router(
        self,
        router: APIRouter,
        prefix: str = "",
        tags: Optional[List[str]] = None
    ):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        logger.info(f"Registered router at prefix '{prefix or '/'}'")

    def register_health_endpoints(self):
        """Register the unauthenticated liveness probe."""

        @self.app.api_route("/", methods=["GET", "HEAD"], response_model=HealthDTO)
        async def root():
            """Liveness probe; does not touch GitHub."""
            return {"status": "ok"}

        logger.info("Health check endpoint registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .core.config import ENVIRONMENT, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE, DocstoreSettings
from .core.logging_config import setup_logging, get_logger
from .gateway import APIGateway
from .routers import documents, echo
from .services.document_service import DocumentService
from .services.storage import GitHubContentStore
from .utils.paths import normalize_base_dir

setup_logging()
logger = get_logger(__name__)


def create_app(
    settings: Optional[DocstoreSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when None
        transport: Optional httpx transport for the GitHub adapter (tests)
    """
    settings = settings or DocstoreSettings.from_env()
    store = GitHubContentStore(settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info("Starting Docstore...")
        logger.info(f"  → Environment: {ENVIRONMENT}")
        logger.info(f"  → Base directory: {normalize_base_dir(settings)}")
        logger.info(f"  → Branch: {settings.github_branch}")
        logger.info(f"  → API token: {'Configured' if settings.api_token else 'NOT CONFIGURED'}")
        logger.info(f"  → Rate limit: {f'{RATE_LIMIT_PER_MINUTE}/minute' if RATE_LIMIT_ENABLED else 'disabled'}")
        if not settings.api_token:
            logger.warning("DOCSTORE_API_TOKEN is not set; every protected route will answer 500")
        await store.initialize()
        logger.info("=" * 60)
        yield
        await store.close()
        logger.info("Docstore shutdown complete")

    gateway = APIGateway(settings=settings, lifespan=lifespan)
    gateway.setup_middleware()
    gateway.register_health_endpoints()
    gateway.register_router(documents.router, tags=["Documents"])
    gateway.register_router(echo.router, tags=["Diagnostics"])

    app = gateway.get_app()
    app.state.document_service = DocumentService(store, settings)
    return app


app = create_app()

"""
Shared dependencies for routers.

Services are built once in create_app() and stored on app.state; handlers
reach them through get_document_service (dependency injection).
"""
from fastapi import Request

from ..services.document_service import DocumentService


def get_document_service(request: Request) -> DocumentService:
    """Get document service (dependency injection)."""
    service = getattr(request.app.state, "document_service", None)
    if service is None:
        raise RuntimeError("Document service not initialized")
    return service

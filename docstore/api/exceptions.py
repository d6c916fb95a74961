"""
Custom exceptions for the document store.
Separates business exceptions from HTTP exceptions.
"""
from typing import Optional

from fastapi import HTTPException, status


class DocstoreError(Exception):
    """Base class for errors the gateway renders as JSON."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(DocstoreError):
    """Raised when the bearer token is missing or does not match."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ServerMisconfiguredError(DocstoreError):
    """Raised when the service itself lacks required configuration."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server is misconfigured"


class DocumentValidationError(DocstoreError):
    """Raised for malformed request bodies or a directory where a file was expected."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class DocumentNotFoundError(DocstoreError):
    """Raised when the document or directory does not exist in the repository."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Document not found"


class BackingStoreError(DocstoreError):
    """Raised when GitHub answers with a non-2xx status other than 404."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, upstream_status: int, message: Optional[str] = None):
        self.upstream_status = upstream_status
        super().__init__(message or f"GitHub API error {upstream_status}")


class RevisionConflictError(BackingStoreError):
    """
    Raised when GitHub rejects a write because the supplied sha is stale.
    Rendered like any other backing-store failure.
    """


class TransportError(DocstoreError):
    """Raised when GitHub cannot be reached at all."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Could not reach GitHub"


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, DocstoreError):
        return HTTPException(status_code=e.status_code, detail=e.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Internal error")

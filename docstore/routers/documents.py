"""
Documents Router - Handles document CRUD operations.

Routes:
    GET    /docs?dir=<dir>     - List a directory (root when dir is omitted)
    GET    /docs/{path}        - Read a document
    PUT    /docs/{path}        - Create or update a document
    DELETE /docs/{path}        - Delete a document
    POST   /delete             - Delete a document named in the body

/d/{path} is a short alias of /docs/{path}. Paths are logical: relative to
the configured base directory, which never appears in responses.
"""
from fastapi import APIRouter, Depends, Query, Request

from ..api.bodies import read_json_body
from ..api.dto import (
    DeleteByPathRequest,
    DeleteDocumentRequest,
    DeleteResultDTO,
    DirectoryListingDTO,
    DocumentDTO,
    PutDocumentRequest,
    WriteResultDTO
)
from ..api.mappers import CommitMapper, DocumentMapper, ListingMapper
from ..middleware.rate_limit import rate_limit_per_minute
from ..services.document_service import DocumentService
from .dependencies import get_document_service

router = APIRouter()


@router.get("/docs", response_model=DirectoryListingDTO)
@rate_limit_per_minute
async def list_documents(
    request: Request,
    directory: str = Query("", alias="dir"),
    service: DocumentService = Depends(get_document_service)
):
    """
    List the entries of a logical directory.

    A path that turns out to be a file is returned as a one-element listing.

    Example Response:
        {"items": [{"name": "canon.md", "path": "ftl/canon.md", "type": "file"},
                   {"name": "notes", "path": "ftl/notes/", "type": "dir"}]}
    """
    entries = await service.list(directory)
    return ListingMapper.to_listing(entries)


@router.get("/docs/{doc_path:path}", response_model=DocumentDTO)
@router.get("/d/{doc_path:path}", response_model=DocumentDTO, include_in_schema=False)
@rate_limit_per_minute
async def get_document(
    request: Request,
    doc_path: str,
    service: DocumentService = Depends(get_document_service)
):
    """
    Read a document and return its decoded text.

    Status Codes:
        200: Success
        400: Path is a directory
        404: Document not found
    """
    document = await service.get(doc_path)
    return DocumentMapper.to_dto(document)


@router.put("/docs/{doc_path:path}", response_model=WriteResultDTO)
@router.put("/d/{doc_path:path}", response_model=WriteResultDTO, include_in_schema=False)
@rate_limit_per_minute
async def put_document(
    request: Request,
    doc_path: str,
    service: DocumentService = Depends(get_document_service)
):
    """
    Create or update a document.

    Body: {"content": "<text>", "message": "<optional commit message>"}
    """
    body = await read_json_body(request, PutDocumentRequest)
    result = await service.put(doc_path, body.content, body.message)
    return CommitMapper.to_write_dto(result)


@router.delete("/docs/{doc_path:path}", response_model=DeleteResultDTO)
@router.delete("/d/{doc_path:path}", response_model=DeleteResultDTO, include_in_schema=False)
@rate_limit_per_minute
async def delete_document(
    request: Request,
    doc_path: str,
    service: DocumentService = Depends(get_document_service)
):
    """Delete a document. Body is optional: {"message": "<commit message>"}."""
    body = await read_json_body(request, DeleteDocumentRequest, required=False)
    result = await service.delete(doc_path, body.message)
    return CommitMapper.to_delete_dto(result)


@router.post("/delete", response_model=DeleteResultDTO)
@rate_limit_per_minute
async def delete_document_by_body(
    request: Request,
    service: DocumentService = Depends(get_document_service)
):
    """
    Delete a document named in the body, for clients that cannot send
    a DELETE with a body.

    Body: {"path": "<logical or base-prefixed path>", "message": "<optional>"}
    """
    body = await read_json_body(request, DeleteByPathRequest)
    result = await service.delete(body.path, body.message)
    return CommitMapper.to_delete_dto(result)

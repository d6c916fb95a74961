"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel, StrictStr
from typing import List, Optional


class PutDocumentRequest(BaseModel):
    """Body of PUT /docs/{path}."""
    content: StrictStr
    message: Optional[StrictStr] = None


class DeleteDocumentRequest(BaseModel):
    """Body of DELETE /docs/{path}; the body itself is optional."""
    message: Optional[StrictStr] = None


class DeleteByPathRequest(BaseModel):
    """Body of POST /delete."""
    path: StrictStr
    message: Optional[StrictStr] = None


class DirectoryEntryDTO(BaseModel):
    name: str
    path: str
    type: str


class DirectoryListingDTO(BaseModel):
    items: List[DirectoryEntryDTO]


class DocumentDTO(BaseModel):
    """Document DTO for API responses."""
    path: str
    name: str
    sha: str
    content: str


class CommitDTO(BaseModel):
    sha: str
    message: Optional[str] = None


class WriteResultDTO(BaseModel):
    """Response DTO for PUT."""
    path: str
    name: Optional[str] = None
    sha: Optional[str] = None
    commit: CommitDTO


class DeleteResultDTO(BaseModel):
    """Response DTO for DELETE and POST /delete."""
    path: str
    commit: CommitDTO


class HealthDTO(BaseModel):
    status: str

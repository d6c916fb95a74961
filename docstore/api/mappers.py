"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import List
from ..domain.entities import CommitResult, DirectoryEntry, DocumentRecord
from .dto import (
    CommitDTO,
    DeleteResultDTO,
    DirectoryEntryDTO,
    DirectoryListingDTO,
    DocumentDTO,
    WriteResultDTO
)


class DocumentMapper:
    """Maps between DocumentRecord and DocumentDTO."""

    @staticmethod
    def to_dto(document: DocumentRecord) -> DocumentDTO:
        """Convert domain entity to DTO."""
        return DocumentDTO(
            path=document.path,
            name=document.name,
            sha=document.sha,
            content=document.content
        )


class ListingMapper:
    """Maps directory entries to the listing envelope."""

    @staticmethod
    def to_dto(entry: DirectoryEntry) -> DirectoryEntryDTO:
        return DirectoryEntryDTO(name=entry.name, path=entry.path, type=entry.type.value)

    @staticmethod
    def to_listing(entries: List[DirectoryEntry]) -> DirectoryListingDTO:
        return DirectoryListingDTO(items=[ListingMapper.to_dto(entry) for entry in entries])


class CommitMapper:
    """Maps CommitResult to the PUT and DELETE response shapes."""

    @staticmethod
    def to_commit_dto(result: CommitResult) -> CommitDTO:
        return CommitDTO(sha=result.commit_sha, message=result.commit_message)

    @staticmethod
    def to_write_dto(result: CommitResult) -> WriteResultDTO:
        return WriteResultDTO(
            path=result.path,
            name=result.name,
            sha=result.sha,
            commit=CommitMapper.to_commit_dto(result)
        )

    @staticmethod
    def to_delete_dto(result: CommitResult) -> DeleteResultDTO:
        return DeleteResultDTO(path=result.path, commit=CommitMapper.to_commit_dto(result))

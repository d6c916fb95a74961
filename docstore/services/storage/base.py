"""
Abstract base class for content-store adapters.
An adapter speaks the backing store's wire protocol for one repository path
at a time; path mapping and upsert rules live in DocumentService.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ...domain.entities import EntryType
from ...domain.value_objects import RepositoryPath, RevisionSha


@dataclass(frozen=True)
class RemoteObject:
    """A file or directory as reported by the backing store."""
    path: RepositoryPath
    name: str
    type: EntryType
    sha: RevisionSha
    content: Optional[str] = None
    encoding: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RemoteObject":
        return cls(
            path=RepositoryPath(payload.get("path") or ""),
            name=payload.get("name") or "",
            type=EntryType.from_wire(payload.get("type")),
            sha=RevisionSha(payload.get("sha") or ""),
            content=payload.get("content"),
            encoding=payload.get("encoding")
        )


@dataclass(frozen=True)
class SingleObject:
    """Retrieval answered with one object: the path is a file."""
    item: RemoteObject

    def as_list(self) -> List[RemoteObject]:
        return [self.item]


@dataclass(frozen=True)
class ObjectListing:
    """Retrieval answered with an array: the path is a directory."""
    items: List[RemoteObject]

    def as_list(self) -> List[RemoteObject]:
        return list(self.items)


ContentsResponse = Union[SingleObject, ObjectListing]


@dataclass(frozen=True)
class RemoteCommit:
    """Commit created by a write or delete."""
    sha: str
    message: Optional[str]
    content: Optional[RemoteObject] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RemoteCommit":
        commit = payload.get("commit") or {}
        content = payload.get("content")
        return cls(
            sha=commit.get("sha") or "",
            message=commit.get("message"),
            content=RemoteObject.from_payload(content) if isinstance(content, dict) else None
        )


class ContentStoreInterface(ABC):
    """
    Abstract interface for content-store operations.

    Implementations raise DocumentNotFoundError for an absent path,
    BackingStoreError for other non-2xx answers and TransportError when the
    store cannot be reached. None of them retry.
    """

    @abstractmethod
    async def retrieve(self, repository_path: RepositoryPath) -> ContentsResponse:
        """
        Read a file or a directory listing.

        Args:
            repository_path: Path inside the repository

        Returns:
            SingleObject for a file, ObjectListing for a directory
        """
        pass

    @abstractmethod
    async def write(
        self,
        repository_path: RepositoryPath,
        encoded_content: str,
        message: str,
        sha: Optional[RevisionSha] = None
    ) -> RemoteCommit:
        """
        Create or update a file.

        Args:
            repository_path: Path inside the repository
            encoded_content: File body, already base64 encoded
            message: Commit message
            sha: Current revision marker; required when the file exists

        Returns:
            The commit that recorded the change
        """
        pass

    @abstractmethod
    async def remove(
        self,
        repository_path: RepositoryPath,
        message: str,
        sha: RevisionSha
    ) -> RemoteCommit:
        """Delete a file at the given revision."""
        pass

    @abstractmethod
    async def initialize(self):
        """Verify configuration before serving traffic."""
        pass

    @abstractmethod
    async def close(self):
        """Release resources held by the adapter."""
        pass

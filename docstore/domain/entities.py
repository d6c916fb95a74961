"""
Domain entities - Core business objects.
These represent what a request reads or writes, not the GitHub wire format.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .value_objects import LogicalPath, RepositoryPath, RevisionSha


class EntryType(str, Enum):
    """Kind of object found at a repository path."""
    FILE = "file"
    DIRECTORY = "dir"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> "EntryType":
        """Anything GitHub reports that is not a directory is listed as a file."""
        return cls.DIRECTORY if value == cls.DIRECTORY.value else cls.FILE


@dataclass(frozen=True)
class DocumentRecord:
    """
    Document entity - the result of reading one file.
    Built fresh per read and never mutated.
    """
    repository_path: RepositoryPath
    path: LogicalPath
    name: str
    sha: RevisionSha
    content: str


@dataclass(frozen=True)
class DirectoryEntry:
    """One item of a directory listing."""
    name: str
    path: LogicalPath
    type: EntryType


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a write or delete committed to the backing store."""
    path: LogicalPath
    repository_path: RepositoryPath
    commit_sha: str
    commit_message: Optional[str]
    name: Optional[str] = None
    sha: Optional[RevisionSha] = None

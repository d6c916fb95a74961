"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import CommitResult, DirectoryEntry, DocumentRecord, EntryType
from .value_objects import LogicalPath, RepositoryPath, RevisionSha

__all__ = [
    "CommitResult",
    "DirectoryEntry",
    "DocumentRecord",
    "EntryType",
    "LogicalPath",
    "RepositoryPath",
    "RevisionSha"
]

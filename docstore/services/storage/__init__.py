"""
Content-store abstraction layer.
The document service talks to the backing store only through ContentStoreInterface.
"""
from .base import (
    ContentStoreInterface,
    ContentsResponse,
    ObjectListing,
    RemoteCommit,
    RemoteObject,
    SingleObject
)
from .github_storage import GitHubContentStore

__all__ = [
    "ContentStoreInterface",
    "ContentsResponse",
    "ObjectListing",
    "RemoteCommit",
    "RemoteObject",
    "SingleObject",
    "GitHubContentStore"
]

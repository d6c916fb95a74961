"""
Document Service - logical-path document operations on top of a content store.

Every mutation first reads the current revision marker of its target and
hands it to the store. That read is a best-effort precondition, not a lock:
a concurrent writer can still move the file in between, in which case the
store rejects the write and RevisionConflictError reaches the caller.
"""
import posixpath
from typing import List, Optional

from .storage.base import ContentStoreInterface, ObjectListing, RemoteCommit, RemoteObject
from ..api.exceptions import DocumentNotFoundError, DocumentValidationError
from ..core.config import DocstoreSettings
from ..core.logging_config import get_logger
from ..domain.entities import CommitResult, DirectoryEntry, DocumentRecord, EntryType
from ..domain.value_objects import LogicalPath, RepositoryPath
from ..utils.encoding import from_base64, to_base64
from ..utils.paths import normalize_base_dir, to_logical_path, to_repository_path

logger = get_logger(__name__)


class DocumentService:
    """
    Create, read, update, delete and list documents by logical path.
    No retries: every failure from the store propagates to the caller.
    """

    def __init__(self, store: ContentStoreInterface, settings: DocstoreSettings):
        """
        Initialize document service with dependencies.

        Args:
            store: Content store adapter (dependency injection)
            settings: Process configuration; only the base directory is used here
        """
        self._store = store
        self._base_dir = normalize_base_dir(settings)

    def repository_path(self, logical_path: str) -> RepositoryPath:
        return to_repository_path(self._base_dir, logical_path)

    def logical_path(self, repository_path: str) -> LogicalPath:
        return to_logical_path(self._base_dir, repository_path)

    async def _discover(self, repository_path: RepositoryPath) -> RemoteObject:
        """
        Fetch the object currently stored at a path.

        Raises:
            DocumentNotFoundError: If nothing exists at the path
            DocumentValidationError: If the path is a directory
        """
        response = await self._store.retrieve(repository_path)
        if isinstance(response, ObjectListing) or response.item.type is EntryType.DIRECTORY:
            raise DocumentValidationError("Requested path is not a file")
        return response.item

    async def get(self, logical_path: str) -> DocumentRecord:
        """
        Read one document.

        Raises:
            DocumentNotFoundError: If the document does not exist
            DocumentValidationError: If the path is a directory or not text
        """
        repository_path = self.repository_path(logical_path)
        try:
            item = await self._discover(repository_path)
        except DocumentNotFoundError as e:
            raise DocumentNotFoundError("Document not found") from e

        if item.content is None:
            raise DocumentValidationError("Requested path is not a file")
        if item.encoding != "base64":
            # GitHub leaves files over 1 MB out of the contents response
            raise DocumentValidationError(
                f"Document content is not available inline (encoding '{item.encoding}')"
            )

        stored_path = item.path or repository_path
        return DocumentRecord(
            repository_path=stored_path,
            path=self.logical_path(stored_path),
            name=item.name or posixpath.basename(stored_path),
            sha=item.sha,
            content=from_base64(item.content)
        )

    async def put(
        self,
        logical_path: str,
        content: str,
        message: Optional[str] = None
    ) -> CommitResult:
        """
        Create the document if absent, update it otherwise.

        A failed discovery read other than "not found" aborts the write.

        Args:
            logical_path: Document path relative to the base directory
            content: New text content
            message: Commit message; defaults to "Create <path>" / "Update <path>"

        Returns:
            CommitResult with the new revision marker and commit metadata
        """
        repository_path = self.repository_path(logical_path)
        existing_sha = None
        try:
            existing = await self._discover(repository_path)
            existing_sha = existing.sha or None
        except DocumentNotFoundError:
            logger.debug(f"No existing document at {repository_path}, creating")

        verb = "Update" if existing_sha else "Create"
        commit_message = message or f"{verb} {repository_path}"

        try:
            commit = await self._store.write(
                repository_path,
                to_base64(content),
                commit_message,
                sha=existing_sha
            )
        except DocumentNotFoundError as e:
            raise DocumentNotFoundError("Repository or branch not found") from e

        logger.info(f"{verb}d {repository_path} (commit {commit.sha})")
        return self._commit_result(repository_path, commit)

    async def delete(self, logical_path: str, message: Optional[str] = None) -> CommitResult:
        """
        Delete a document at its current revision.

        Raises:
            DocumentNotFoundError: If the document does not exist; no delete is issued
        """
        repository_path = self.repository_path(logical_path)
        try:
            existing = await self._discover(repository_path)
            commit = await self._store.remove(
                repository_path,
                message or f"Delete {repository_path}",
                existing.sha
            )
        except DocumentNotFoundError as e:
            raise DocumentNotFoundError("Document not found") from e

        logger.info(f"Deleted {repository_path} (commit {commit.sha})")
        return CommitResult(
            path=self.logical_path(repository_path),
            repository_path=repository_path,
            commit_sha=commit.sha,
            commit_message=commit.message
        )

    async def list(self, logical_directory: str = "") -> List[DirectoryEntry]:
        """
        List a directory; a file path yields a one-element listing.

        Entry paths are logical, directories end with a slash.
        """
        repository_path = self.repository_path(logical_directory)
        try:
            response = await self._store.retrieve(repository_path)
        except DocumentNotFoundError as e:
            raise DocumentNotFoundError("Directory not found") from e

        return [self._entry(item) for item in response.as_list()]

    def _entry(self, item: RemoteObject) -> DirectoryEntry:
        path = self.logical_path(item.path)
        if item.type is EntryType.DIRECTORY:
            path = LogicalPath(path.rstrip("/") + "/")
        return DirectoryEntry(name=item.name, path=path, type=item.type)

    def _commit_result(self, repository_path: RepositoryPath, commit: RemoteCommit) -> CommitResult:
        written = commit.content
        stored_path = written.path if written and written.path else repository_path
        return CommitResult(
            path=self.logical_path(stored_path),
            repository_path=stored_path,
            commit_sha=commit.sha,
            commit_message=commit.message,
            name=(written.name if written and written.name else posixpath.basename(stored_path)),
            sha=written.sha if written else None
        )

"""
GitHub contents API adapter implementing ContentStoreInterface.
Every document lives as a file in one repository branch; every mutation is a commit.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ...api.exceptions import (
    BackingStoreError,
    DocumentNotFoundError,
    RevisionConflictError,
    ServerMisconfiguredError,
    TransportError
)
from ...core.config import DocstoreSettings
from ...core.logging_config import get_logger
from ...domain.value_objects import RepositoryPath, RevisionSha
from .base import (
    ContentStoreInterface,
    ContentsResponse,
    ObjectListing,
    RemoteCommit,
    RemoteObject,
    SingleObject
)

logger = get_logger(__name__)


class GitHubContentStore(ContentStoreInterface):
    """
    GitHub contents API adapter.

    Each operation opens its own short-lived httpx session, so nothing is
    shared between requests.
    """

    ACCEPT = "application/vnd.github+json"
    API_VERSION = "2022-11-28"

    def __init__(
        self,
        settings: DocstoreSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the GitHub adapter.

        Args:
            settings: Repository, branch and credential configuration
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self.settings = settings
        self._transport = transport

    async def initialize(self):
        """Log missing repository settings; requests fail until they are set."""
        missing = self.settings.missing_github_settings()
        if missing:
            logger.warning(f"GitHub content store not fully configured, missing: {', '.join(missing)}")
        else:
            logger.info(
                f"GitHub content store: {self.settings.github_owner}/{self.settings.github_repo} "
                f"@ {self.settings.github_branch}"
            )

    async def close(self):
        """Close storage connection (no-op, sessions are per operation)."""
        pass

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.github_token}",
            "Accept": self.ACCEPT,
            "User-Agent": self.settings.user_agent,
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.github_api_base,
            headers=self._headers(),
            timeout=self.settings.github_timeout,
            transport=self._transport
        )

    def _contents_url(self, repository_path: RepositoryPath) -> str:
        owner = quote(self.settings.github_owner, safe="")
        repo = quote(self.settings.github_repo, safe="")
        return f"/repos/{owner}/{repo}/contents/{quote(repository_path, safe='/')}"

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _request(
        self,
        method: str,
        repository_path: RepositoryPath,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Issue one call against the contents endpoint of a repository path.

        Raises:
            ServerMisconfiguredError: If owner, repo or token are not configured
            DocumentNotFoundError: On 404
            RevisionConflictError: On 409 (stale sha)
            BackingStoreError: On any other non-2xx status
            TransportError: If GitHub cannot be reached
        """
        missing = self.settings.missing_github_settings()
        if missing:
            raise ServerMisconfiguredError(f"GitHub is not configured: missing {', '.join(missing)}")

        url = self._contents_url(repository_path)
        try:
            async with self._client() as client:
                response = await client.request(method, url, params=params, json=body)
        except httpx.RequestError as e:
            logger.error(f"GitHub {method} {repository_path} failed: {e}")
            raise TransportError(f"Could not reach GitHub: {e}")

        logger.debug(f"GitHub {method} {repository_path} → {response.status_code}")
        payload = self._parse_body(response)
        if response.is_success:
            return payload

        message = None
        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])

        if response.status_code == 404:
            raise DocumentNotFoundError(message or "Not Found")
        if response.status_code == 409:
            raise RevisionConflictError(response.status_code, message)
        raise BackingStoreError(response.status_code, message)

    async def retrieve(self, repository_path: RepositoryPath) -> ContentsResponse:
        payload = await self._request(
            "GET",
            repository_path,
            params={"ref": self.settings.github_branch}
        )
        if isinstance(payload, list):
            return ObjectListing(items=[RemoteObject.from_payload(item) for item in payload])
        if isinstance(payload, dict):
            return SingleObject(item=RemoteObject.from_payload(payload))
        raise BackingStoreError(200, "Unexpected response from GitHub contents API")

    async def write(
        self,
        repository_path: RepositoryPath,
        encoded_content: str,
        message: str,
        sha: Optional[RevisionSha] = None
    ) -> RemoteCommit:
        body = {
            "message": message,
            "content": encoded_content,
            "branch": self.settings.github_branch,
        }
        if sha:
            body["sha"] = sha
        payload = await self._request("PUT", repository_path, body=body)
        return RemoteCommit.from_payload(payload if isinstance(payload, dict) else {})

    async def remove(
        self,
        repository_path: RepositoryPath,
        message: str,
        sha: RevisionSha
    ) -> RemoteCommit:
        body = {
            "message": message,
            "sha": sha,
            "branch": self.settings.github_branch,
        }
        payload = await self._request("DELETE", repository_path, body=body)
        return RemoteCommit.from_payload(payload if isinstance(payload, dict) else {})

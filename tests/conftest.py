"""
Docstore test suite — shared fixtures.

GitHub is replaced by FakeGitHub, an in-memory contents API served through
httpx.MockTransport. Every call the service makes is recorded in
FakeGitHub.calls so tests can assert on the exact traffic.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import base64
import hashlib
import json
import os
import posixpath
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Must be set before docstore.core.config is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from fastapi.testclient import TestClient

from docstore.core.config import DocstoreSettings
from docstore.main import create_app
from docstore.services.document_service import DocumentService
from docstore.services.storage import GitHubContentStore

API_TOKEN = "api-token"
CONTENTS_PREFIX = "/repos/owner/repo/contents/"


@dataclass
class RecordedCall:
    method: str
    path: str
    params: Dict[str, str]
    body: Optional[Dict[str, Any]]
    headers: Dict[str, str]
    raw_url: str


@dataclass
class FakeGitHub:
    """
    In-memory stand-in for the GitHub contents API of owner/repo.

    files maps repository paths to their text. scripted maps an HTTP method
    to a fixed (status, payload) answer and overrides the in-memory behaviour
    for that method.
    """
    files: Dict[str, str] = field(default_factory=dict)
    scripted: Dict[str, Tuple[int, Any]] = field(default_factory=dict)
    calls: List[RecordedCall] = field(default_factory=list)
    commit_counter: int = 0

    @staticmethod
    def sha_of(text: str) -> str:
        return hashlib.sha1(text.encode("utf-8")).hexdigest()

    def calls_for(self, method: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.method == method]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        assert path.startswith(CONTENTS_PREFIX), f"unexpected GitHub URL {request.url}"
        repo_path = path[len(CONTENTS_PREFIX):]
        self.calls.append(RecordedCall(
            method=request.method,
            path=repo_path,
            params=dict(request.url.params),
            body=body,
            headers=dict(request.headers),
            raw_url=str(request.url),
        ))

        if request.method in self.scripted:
            status, payload = self.scripted[request.method]
            return httpx.Response(status, json=payload)

        handler = getattr(self, f"_{request.method.lower()}")
        return handler(repo_path, body)

    def _file_payload(self, repo_path: str, with_content: bool = True) -> Dict[str, Any]:
        text = self.files[repo_path]
        payload = {
            "type": "file",
            "path": repo_path,
            "name": posixpath.basename(repo_path),
            "sha": self.sha_of(text),
        }
        if with_content:
            # GitHub wraps base64 bodies across lines
            payload["content"] = base64.encodebytes(text.encode("utf-8")).decode("ascii")
            payload["encoding"] = "base64"
        return payload

    def _get(self, repo_path: str, body: Any) -> httpx.Response:
        if repo_path in self.files:
            return httpx.Response(200, json=self._file_payload(repo_path))

        prefix = repo_path.rstrip("/") + "/"
        children: Dict[str, Dict[str, Any]] = {}
        for stored in sorted(self.files):
            if not stored.startswith(prefix):
                continue
            head = stored[len(prefix):].split("/", 1)[0]
            child_path = prefix + head
            if child_path in self.files:
                children[head] = self._file_payload(child_path, with_content=False)
            else:
                children[head] = {"type": "dir", "path": child_path, "name": head, "sha": "tree-" + head}
        if not children:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=list(children.values()))

    def _commit(self, message: str) -> Dict[str, Any]:
        self.commit_counter += 1
        return {"sha": f"commit-{self.commit_counter}", "message": message}

    def _put(self, repo_path: str, body: Dict[str, Any]) -> httpx.Response:
        existing = self.files.get(repo_path)
        if existing is not None:
            if "sha" not in body:
                return httpx.Response(422, json={"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
            if body["sha"] != self.sha_of(existing):
                return httpx.Response(409, json={"message": f"{repo_path} does not match {body['sha']}"})
        text = base64.b64decode(body["content"]).decode("utf-8")
        self.files[repo_path] = text
        return httpx.Response(200 if existing is not None else 201, json={
            "content": self._file_payload(repo_path, with_content=False),
            "commit": self._commit(body["message"]),
        })

    def _delete(self, repo_path: str, body: Dict[str, Any]) -> httpx.Response:
        existing = self.files.get(repo_path)
        if existing is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if body.get("sha") != self.sha_of(existing):
            return httpx.Response(409, json={"message": f"{repo_path} does not match {body.get('sha')}"})
        del self.files[repo_path]
        return httpx.Response(200, json={"content": None, "commit": self._commit(body["message"])})


@pytest.fixture
def settings():
    return DocstoreSettings(
        github_token="fake-token",
        github_owner="owner",
        github_repo="repo",
        github_branch="main",
        docs_base_dir="docs",
        api_token=API_TOKEN,
    )


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def store(settings, github):
    return GitHubContentStore(settings, transport=github.transport())


@pytest.fixture
def service(store, settings):
    return DocumentService(store, settings)


@pytest.fixture
def app(settings, github):
    return create_app(settings=settings, transport=github.transport())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {API_TOKEN}"}

"""
Docstore CLI — run the service and talk to a running instance.

Commands:
- docstore serve         — Start the API with uvicorn
- docstore call          — Send one authenticated request and print the response
- docstore smoke-delete  — Create, update, read back and delete a scratch document

The client commands read DOCSTORE_URL and DOCSTORE_API_TOKEN from the
environment; env.local in the working directory fills in whichever is missing.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

import httpx
from dotenv import load_dotenv


class DocstoreClientError(Exception):
    """Raised when a call to a running docstore does not return 2xx."""

    def __init__(self, method: str, path: str, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request {method} {path} failed with status {status_code}")


class DocstoreClient:
    """Thin bearer-authenticated client for the docstore HTTP API."""

    def __init__(self, http: httpx.Client, token: str):
        self._http = http
        self._headers = {"Authorization": f"Bearer {token}"}

    def request(self, method: str, path: str, data: Optional[str] = None) -> httpx.Response:
        headers = dict(self._headers)
        if data:
            headers["Content-Type"] = "application/json"
        return self._http.request(method, path, headers=headers, content=data or None)

    def call(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        """Send a request and return the decoded JSON body; raise on non-2xx."""
        data = json.dumps(payload) if payload is not None else None
        response = self.request(method, path, data)
        if not response.is_success:
            raise DocstoreClientError(method, path, response.status_code, response.text)
        return response.json()


def _connection_from_env() -> Optional[Tuple[str, str]]:
    """Return (base url, token), or None after reporting what is missing."""
    if not os.getenv("DOCSTORE_URL") or not os.getenv("DOCSTORE_API_TOKEN"):
        load_dotenv("env.local")
    for name in ("DOCSTORE_URL", "DOCSTORE_API_TOKEN"):
        if not os.getenv(name):
            print(f"{name} environment variable is not set", file=sys.stderr)
            return None
    return os.environ["DOCSTORE_URL"], os.environ["DOCSTORE_API_TOKEN"]


def cmd_call(client: DocstoreClient, method: str, path: str, data: Optional[str]) -> int:
    """Print status line and body; exit code 0 only for 2xx."""
    response = client.request(method.upper(), path, data)
    print(f"HTTP {response.status_code}")
    print(response.text)
    return 0 if response.is_success else 1


def cmd_smoke_delete(client: DocstoreClient, now: Optional[datetime] = None) -> int:
    """
    Exercise the full document lifecycle against a running instance.

    Uses a timestamped scratch path so repeated runs never collide.
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y%m%d%H%M%S")
    logical_path = f"tmp-{stamp}/delete-test-{stamp}.md"
    api_path = f"/d/{logical_path}"
    print(f"Using temporary document path: {api_path}")

    try:
        print("Creating document...")
        client.call("PUT", api_path, {
            "content": f"Initial delete test created at {now.isoformat()}",
            "message": f"Create {logical_path}",
        })
        print("Document created.")

        print("Updating document...")
        updated_content = f"Updated delete test at {now.isoformat()}"
        client.call("PUT", api_path, {"content": updated_content, "message": f"Update {logical_path}"})
        print("Document updated.")

        print("Reading document for verification...")
        document = client.call("GET", api_path)
        if document.get("content") != updated_content:
            print("Content mismatch after update.")
            print(f"Expected: {updated_content}")
            print(f"Actual:   {document.get('content')}")
            return 1
        print("Read content matches updated content.")

        print("Deleting document...")
        client.call("DELETE", api_path, {"message": f"Delete {logical_path}"})
        print("Document deleted.")
    except DocstoreClientError as e:
        print(str(e), file=sys.stderr)
        print(e.body, file=sys.stderr)
        return 1

    print("Delete workflow completed successfully.")
    return 0


def cmd_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("docstore.main:app", host=host, port=port)
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docstore",
        description="Docstore — documents in a GitHub repository over HTTP",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")

    call_parser = subparsers.add_parser("call", help="Send one request to a running docstore")
    call_parser.add_argument("method", nargs="?", default="GET", help="HTTP method (default: GET)")
    call_parser.add_argument("path", nargs="?", default="/docs", help="Request path (default: /docs)")
    call_parser.add_argument("data", nargs="?", default=None, help="JSON body for PUT/POST")

    subparsers.add_parser("smoke-delete", help="Run the create/update/read/delete workflow")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "serve":
        return cmd_serve(args.host, args.port)

    connection = _connection_from_env()
    if connection is None:
        return 1

    base_url, token = connection
    with httpx.Client(base_url=base_url, timeout=30.0) as http:
        client = DocstoreClient(http, token)
        if args.command == "call":
            return cmd_call(client, args.method, args.path, args.data)
        return cmd_smoke_delete(client)


if __name__ == "__main__":
    sys.exit(main())

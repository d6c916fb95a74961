"""
Echo Router - diagnostic endpoint that reflects the request back.
Useful for checking what a proxy in front of the service forwards.
"""
from fastapi import APIRouter, Request

router = APIRouter()

REDACTED_HEADERS = {"authorization", "cookie"}


@router.api_route("/echo", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def echo(request: Request):
    """Return method, path, query, headers (credentials redacted) and raw body."""
    raw = await request.body()
    headers = {
        name: ("[redacted]" if name in REDACTED_HEADERS else value)
        for name, value in request.headers.items()
    }
    return {
        "method": request.method,
        "pathname": request.url.path,
        "query": dict(request.query_params),
        "headers": headers,
        "body": raw.decode("utf-8", errors="replace")
    }

"""
Request body parsing for the document routes.

Bodies are read by hand instead of through FastAPI's Body() so that a
missing or malformed body is reported as a 400 with the {"error"} envelope.
"""
import json
from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .exceptions import DocumentValidationError

BodyT = TypeVar("BodyT", bound=BaseModel)


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        if item["type"] == "missing":
            problems.append(f"Field '{field}' is required")
        else:
            problems.append(f"Field '{field}': {item['msg']}")
    return "; ".join(problems)


async def read_json_body(request: Request, model: Type[BodyT], required: bool = True) -> BodyT:
    """
    Parse and validate a JSON object body.

    Args:
        request: Incoming request
        model: Pydantic model describing the body
        required: When False, an empty or unparseable body yields model()

    Raises:
        DocumentValidationError: If the body is required but absent or not
            a JSON object, or if a field fails validation
    """
    raw = await request.body()
    try:
        data = json.loads(raw) if raw.strip() else None
    except ValueError:
        data = None

    if not isinstance(data, dict):
        if required:
            raise DocumentValidationError("Expected JSON body")
        return model()

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DocumentValidationError(_describe(e))

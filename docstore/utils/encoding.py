"""
Text codec for the contents API, which carries file bodies as base64.
"""
import base64
import binascii

from ..api.exceptions import DocumentValidationError


def to_base64(text: str) -> str:
    """Encode text as UTF-8 and then base64."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def from_base64(encoded: str) -> str:
    """
    Decode base64 content returned by GitHub back to text.

    GitHub wraps the encoded body at 60 columns, so line breaks are
    removed before decoding.

    Raises:
        DocumentValidationError: If the payload is not base64 or not UTF-8 text
    """
    compact = "".join((encoded or "").split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DocumentValidationError(f"Document content is not valid base64: {e}")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise DocumentValidationError("Document content is not UTF-8 text")

"""
HTTP routers for the document store.
"""
from . import documents, echo

__all__ = ["documents", "echo"]

"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from typing import NewType

# Client-facing path, relative to the configured base directory
LogicalPath = NewType("LogicalPath", str)
# Storage-layer path, prefixed with the base directory
RepositoryPath = NewType("RepositoryPath", str)
# Opaque revision marker assigned by the backing store
RevisionSha = NewType("RevisionSha", str)

"""
Path mapping between the logical document namespace and repository paths.

Pure functions: no I/O, and no exceptions for string input.
"""
from typing import Union

from ..core.config import DEFAULT_BASE_DIR, DocstoreSettings
from ..domain.value_objects import LogicalPath, RepositoryPath


def normalize_base_dir(config: Union[DocstoreSettings, str, None]) -> str:
    """
    Strip trailing slashes from the configured base directory.

    Accepts either the settings object or the raw configured value.
    Falls back to the default directory when unset or empty.
    """
    if isinstance(config, DocstoreSettings):
        config = config.docs_base_dir
    base = (config or "").rstrip("/")
    return base or DEFAULT_BASE_DIR


def strip_leading_slashes(path: str) -> str:
    return (path or "").lstrip("/")


def to_repository_path(config: Union[DocstoreSettings, str, None], logical_path: str) -> RepositoryPath:
    """
    Map a logical path onto the repository.

    Input that already carries the base directory prefix is returned as-is,
    so applying this twice gives the same result as applying it once.

    Examples (base "docs"):
        ""                 -> "docs"
        "/ftl/canon.md"    -> "docs/ftl/canon.md"
        "docs/ftl/canon.md" -> "docs/ftl/canon.md"
    """
    base = normalize_base_dir(config)
    if not logical_path or logical_path == "/":
        return RepositoryPath(base)

    cleaned = strip_leading_slashes(logical_path)
    if not cleaned:
        return RepositoryPath(base)
    if cleaned == base or cleaned.startswith(base + "/"):
        return RepositoryPath(cleaned)
    return RepositoryPath(f"{base}/{cleaned}")


def to_logical_path(config: Union[DocstoreSettings, str, None], repository_path: str) -> LogicalPath:
    """
    Inverse of to_repository_path.

    Paths outside the base directory are returned unchanged.
    """
    base = normalize_base_dir(config)
    if repository_path == base:
        return LogicalPath("")
    prefix = base + "/"
    if repository_path.startswith(prefix):
        return LogicalPath(repository_path[len(prefix):])
    return LogicalPath(repository_path)

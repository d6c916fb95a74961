"""
Utility functions - path mapping and content encoding.
These can be used across all layers.
"""
from .encoding import from_base64, to_base64
from .paths import normalize_base_dir, strip_leading_slashes, to_logical_path, to_repository_path

__all__ = [
    "from_base64",
    "to_base64",
    "normalize_base_dir",
    "strip_leading_slashes",
    "to_logical_path",
    "to_repository_path"
]

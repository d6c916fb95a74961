"""
Docstore - an HTTP document store that keeps its documents in a GitHub repository.
"""
__version__ = "1.0.0"

"""Data models for highlighted code selections.

This module defines the value types passed through the docstring pipeline:
- SourceSnippet: The highlighted text plus its language and location
- normalize_language: Maps host language identifiers to recognized tags
- language_for_path: Derives a host language identifier from a file path
"""

from .source_snippet import (
    JAVA,
    OTHER,
    PYTHON,
    SourceSnippet,
    language_for_path,
    normalize_language,
)

__all__ = [
    "SourceSnippet",
    "normalize_language",
    "language_for_path",
    "PYTHON",
    "JAVA",
    "OTHER",
]

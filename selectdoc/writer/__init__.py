"""Module for writing generated docstrings to source files.

This module provides the atomic insert-above-line edit used when a
generated docstring is applied to a file on disk.
"""

from .docstring_writer import DocstringWriter

__all__ = ["DocstringWriter"]

"""Local chat model integration for docstring generation."""

from .chat_client import ChatClient
from .prompt_builder import PromptBuilder, select_prompt
from .response_parser import ResponseParser, extract_docstring, sanitize

__all__ = [
    "ChatClient",
    "PromptBuilder",
    "ResponseParser",
    "select_prompt",
    "sanitize",
    "extract_docstring",
]

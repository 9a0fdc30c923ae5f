"""Abstract editor host used by the docstring generator.

The generator never touches files or terminals directly. It asks a host for
the active selection, reports through the host's notifications, and hands
the final text to the host for insertion.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.source_snippet import SourceSnippet


class EditorHost(ABC):
    """Interface to the editor that owns the document and the selection."""

    @abstractmethod
    def get_selection(self) -> Optional[SourceSnippet]:
        """Return the active selection, or None when no editor is active.

        An active editor with nothing highlighted returns a snippet whose
        ``is_empty`` is True.
        """

    @abstractmethod
    def show_information_message(self, message: str) -> None:
        """Show an informational notice to the user."""

    @abstractmethod
    def show_error_message(self, message: str) -> None:
        """Show an error notice to the user."""

    @abstractmethod
    def insert_text(self, line: int, text: str) -> None:
        """Insert text at column 0 of ``line`` (0-based) as one atomic edit.

        Raises
        ------
        OSError
            If the edit could not be applied. The document must be left
            unchanged in that case.
        """

"""Docstring generation pipeline.

Runs one generate command end to end: capture the selection, build the
prompt, call the chat model, clean the reply and insert the docstring at the
start of the selection's first line. Each failure path ends the run with a
user-facing notice and no document edit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .editor.host import EditorHost
from .llm.chat_client import ChatClient
from .llm.prompt_builder import PromptBuilder
from .llm.response_parser import ResponseParser
from .models.source_snippet import SourceSnippet

logger = logging.getLogger(__name__)

NO_EDITOR_MESSAGE = "No active text editor found."
EMPTY_SELECTION_MESSAGE = (
    "Please highlight the function(s) you want to generate a docstring for."
)
EMPTY_RESPONSE_MESSAGE = "Could not generate a docstring."


class GenerationStatus(Enum):
    """Outcome of a generation run."""

    INSERTED = "inserted"
    NO_EDITOR = "no_editor"
    EMPTY_SELECTION = "empty_selection"
    MODEL_ERROR = "model_error"
    EMPTY_RESPONSE = "empty_response"
    INSERT_ERROR = "insert_error"
    SELECTION_ERROR = "selection_error"


@dataclass
class GenerationResult:
    """Result of DocstringGenerator.generate.

    Attributes:
        status: How the run ended.
        docstring: Final docstring text when one was produced.
        error: Exception raised while reading the selection, calling the
            model or inserting the text, if any.
    """

    status: GenerationStatus
    docstring: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.status is GenerationStatus.INSERTED


def generate_docstring_text(
    snippet: SourceSnippet, client: ChatClient, prompt_builder: PromptBuilder
) -> str:
    """Build the prompt, query the model and clean the reply.

    Args:
        snippet: Highlighted code and its language.
        client: Chat client used for the single model request.
        prompt_builder: Builder producing the language-specific prompt.

    Returns:
        The cleaned docstring, or an empty string when the model gave
        nothing usable.

    Raises:
        Exception: Whatever the chat client raises; nothing is retried.
    """
    prompt = prompt_builder.build_prompt(snippet.text, snippet.language)
    response = client.chat(prompt)

    response = (response or "").strip()
    if not response:
        return ""
    return ResponseParser.clean(response, snippet.language)


class DocstringGenerator:
    """
    Orchestrates a single docstring generation command.

    Parameters
    ----------
    client : ChatClient
        Chat client configured with the model and endpoint to use.
    prompt_builder : PromptBuilder, optional
        Prompt builder. Defaults to PromptBuilder().

    Notes
    -----
    The generator keeps no state between runs. Concurrent runs against the
    same document are not coordinated.
    """

    def __init__(self, client: ChatClient, prompt_builder: Optional[PromptBuilder] = None):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    def generate(self, host: EditorHost) -> GenerationResult:
        """
        Generate a docstring for the host's selection and insert it.

        Parameters
        ----------
        host : EditorHost
            Provides the selection, notifications and the document edit.

        Returns
        -------
        GenerationResult
            ``INSERTED`` with the docstring on success, otherwise the status
            of the failure path that was taken.
        """
        try:
            snippet = host.get_selection()
        except (OSError, ValueError) as e:
            logger.exception("Failed to read the selection")
            host.show_error_message(f"Error reading selection: {e}")
            return GenerationResult(GenerationStatus.SELECTION_ERROR, error=e)

        if snippet is None:
            host.show_information_message(NO_EDITOR_MESSAGE)
            return GenerationResult(GenerationStatus.NO_EDITOR)

        if snippet.is_empty:
            host.show_information_message(EMPTY_SELECTION_MESSAGE)
            return GenerationResult(GenerationStatus.EMPTY_SELECTION)

        logger.debug("Generating docstring for %r", snippet)

        try:
            docstring = generate_docstring_text(snippet, self.client, self.prompt_builder)
        except Exception as e:
            logger.exception("Chat model request failed")
            host.show_error_message(f"Error generating docstring: {e}")
            return GenerationResult(GenerationStatus.MODEL_ERROR, error=e)

        if not docstring:
            host.show_information_message(EMPTY_RESPONSE_MESSAGE)
            return GenerationResult(GenerationStatus.EMPTY_RESPONSE)

        try:
            host.insert_text(snippet.start_line, docstring + "\n")
        except (OSError, ValueError) as e:
            logger.exception("Failed to insert docstring")
            host.show_error_message(f"Error inserting docstring: {e}")
            return GenerationResult(
                GenerationStatus.INSERT_ERROR, docstring=docstring, error=e
            )

        return GenerationResult(GenerationStatus.INSERTED, docstring=docstring)

"""
Chat client for the locally running model server.

This module sends a single non-streaming chat request to a local Ollama
server through its Anthropic-compatible Messages endpoint.
"""

import logging
from typing import Optional

import anthropic
from anthropic.types import TextBlock

from ..config import ChatConfig

logger = logging.getLogger(__name__)


class ChatClient:
    """
    Client for requesting docstrings from a local chat model.

    Parameters
    ----------
    config : ChatConfig, optional
        Model identifier, endpoint and limits. Defaults to ChatConfig().
    client : anthropic.Anthropic, optional
        Pre-built SDK client. Built from ``config`` when omitted.

    Notes
    -----
    No retries are attempted: the SDK client is created with
    ``max_retries=0`` and failures propagate to the caller.
    """

    def __init__(
        self,
        config: Optional[ChatConfig] = None,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.config = config or ChatConfig()
        self.client = client or anthropic.Anthropic(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self.config.model

    def chat(self, prompt: str) -> str:
        """
        Send a prompt as a single user message and return the reply text.

        Parameters
        ----------
        prompt : str
            The complete prompt, including few-shot examples and the snippet.

        Returns
        -------
        str
            Concatenated text blocks of the reply. Empty when the reply has
            no text content (for example only thinking blocks).

        Raises
        ------
        anthropic.APIConnectionError
            If the local server is unreachable.
        anthropic.APIStatusError
            If the server rejects the request (unknown model, bad input).
        """
        logger.debug(
            "Requesting completion from %s at %s", self.config.model, self.config.base_url
        )
        message = self.client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": prompt,
                }
            ],
            stream=False,
            timeout=self.config.timeout,
        )

        # Thinking blocks are skipped; inline <think> tags are handled later
        texts = []
        for block in message.content:
            if isinstance(block, TextBlock):
                texts.append(block.text)
            elif getattr(block, "type", None) == "text" and hasattr(block, "text"):
                # For duck-typing compatibility (e.g., test mocks)
                texts.append(block.text)

        content = "".join(texts)
        logger.debug("Received %d characters from %s", len(content), self.config.model)
        return content

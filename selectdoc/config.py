"""Configuration for the local chat model connection.

Settings are explicit values handed to the chat client rather than module
constants, so tests and callers can swap the model or endpoint freely.
Precedence is CLI flag > environment variable > default.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_MODEL = "deepseek-r1:latest"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MAX_TOKENS = 4096

ENV_MODEL = "SELECTDOC_MODEL"
ENV_HOST = "OLLAMA_HOST"
ENV_MAX_TOKENS = "SELECTDOC_MAX_TOKENS"


def normalize_base_url(host: str) -> str:
    """Turn an OLLAMA_HOST style value into a base URL.

    Accepts bare hosts ('localhost'), host:port pairs ('0.0.0.0:11434') and
    full URLs. A missing scheme becomes http, a missing port becomes 11434.
    """
    value = host.strip().rstrip("/")
    if not value:
        raise ValueError("Host must not be empty")
    if "://" not in value:
        value = f"http://{value}"
    scheme, rest = value.split("://", 1)
    hostpart = rest.split("/", 1)[0]
    if ":" not in hostpart.rsplit("]", 1)[-1]:
        value = f"{scheme}://{hostpart}:11434" + rest[len(hostpart):]
    return value


@dataclass(frozen=True)
class ChatConfig:
    """Settings for talking to the local chat endpoint.

    Attributes:
        model: Model identifier sent with every request.
        base_url: Root URL of the local Ollama server.
        stream: Whether to stream the response. Only False is supported.
        max_tokens: Upper bound on generated tokens, reasoning included.
        timeout: Request timeout in seconds; None waits indefinitely.
        api_key: Placeholder credential; Ollama accepts any value.
    """

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    stream: bool = False
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: Optional[float] = None
    api_key: str = "ollama"

    def __post_init__(self):
        if self.stream:
            raise ValueError("Streaming responses are not supported")
        if not self.model:
            raise ValueError("Model identifier must not be empty")
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ChatConfig":
        """Build a config from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            ChatConfig with any SELECTDOC_MODEL, OLLAMA_HOST and
            SELECTDOC_MAX_TOKENS values applied.

        Raises:
            ValueError: If SELECTDOC_MAX_TOKENS is not a positive integer.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        model = env.get(ENV_MODEL)
        if model:
            kwargs["model"] = model

        host = env.get(ENV_HOST)
        if host:
            kwargs["base_url"] = normalize_base_url(host)

        max_tokens = env.get(ENV_MAX_TOKENS)
        if max_tokens:
            try:
                kwargs["max_tokens"] = int(max_tokens)
            except ValueError:
                raise ValueError(
                    f"{ENV_MAX_TOKENS} must be an integer, got '{max_tokens}'"
                )

        return cls(**kwargs)

    def with_overrides(self, **overrides) -> "ChatConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "base_url" in changes:
            changes["base_url"] = normalize_base_url(changes["base_url"])
        return replace(self, **changes)

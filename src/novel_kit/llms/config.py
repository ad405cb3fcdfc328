# src/novel_kit/llms/config.py

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for LLM clients.

    Immutable. Explicit. No magic defaults from environment.
    """

    provider: Literal["openai", "anthropic"]
    model: str
    api_key: str | None = None  # Falls back to provider's env var
    base_url: str | None = None  # OpenAI-compatible endpoints only
    timeout: float = 60.0
    max_retries: int = 3

    @property
    def normalized_base_url(self) -> str | None:
        """Base URL without trailing slashes, always ending in "/v1"."""
        if not self.base_url:
            return None
        url = self.base_url.rstrip("/")
        if url.endswith("/v1"):
            url = url[: -len("/v1")]
        return f"{url}/v1"

"""Abstract LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional, Union
from ..config import Config
from ..models import ChatMessage


MessageLike = Union[ChatMessage, Mapping[str, str]]


class ProviderError(RuntimeError):
    """Raised when the model backend is unreachable or returns a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def to_message_dicts(messages: Iterable[MessageLike]) -> list[dict[str, str]]:
    """Normalize messages into the role/content dicts sent over the wire."""
    normalized = []
    for message in messages:
        if isinstance(message, ChatMessage):
            normalized.append({"role": message.role, "content": message.content})
        else:
            normalized.append({"role": message["role"], "content": message["content"]})
    return normalized


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    model_name: str

    @abstractmethod
    def chat(self, messages: Iterable[MessageLike]) -> str:
        """Send role-tagged messages and return the response text.

        Args:
            messages: Ordered system/user/assistant turns

        Returns:
            The model's text response

        Raises:
            ProviderError: If the call fails for any reason
        """
        pass


def create_llm_provider(config: Config) -> LLMProvider:
    """Build the provider variant selected by the configuration.

    Args:
        config: Application configuration

    Returns:
        LocalProvider for ollama/lmstudio, GeminiProvider for gemini
    """
    from .litellm_provider import GeminiProvider, LocalProvider

    if config.provider == "gemini":
        return GeminiProvider(
            model_name=config.resolved_model,
            api_key=config.api_key,
            max_retries=config.max_retries,
            timeout=config.timeout,
        )

    return LocalProvider(
        model_name=config.resolved_model,
        url=config.resolved_url,
        api_key=config.api_key,
        max_retries=config.max_retries,
        timeout=config.timeout,
    )

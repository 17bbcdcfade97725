"""LLM provider abstraction layer."""

from .provider import LLMProvider, ProviderError, create_llm_provider
from .litellm_provider import LiteLLMProvider, LocalProvider, GeminiProvider

__all__ = [
    "LLMProvider",
    "ProviderError",
    "create_llm_provider",
    "LiteLLMProvider",
    "LocalProvider",
    "GeminiProvider",
]

"""LiteLLM-backed provider variants."""

import logging
from typing import Any, Iterable, Optional
import litellm
from .provider import LLMProvider, MessageLike, ProviderError, to_message_dicts

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_SUFFIX = "/chat/completions"

# OpenAI-compatible local servers ignore the key, but the client requires one.
LOCAL_API_KEY_PLACEHOLDER = "not-needed"


class LiteLLMProvider(LLMProvider):
    """Shared completion call and error mapping for LiteLLM models."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: int = 0,
        timeout: int = 120,
    ):
        self.model_name = model_name
        self.api_key = api_key
        self.base_url = base_url
        self.max_retries = max_retries
        self.timeout = timeout

    @property
    def litellm_model(self) -> str:
        """Model identifier in LiteLLM's ``provider/model`` form."""
        return self.model_name

    def chat(self, messages: Iterable[MessageLike]) -> str:
        """Run one chat completion.

        Raises:
            ProviderError: On authentication, rate limit, connection,
                timeout or malformed-response failures
        """
        kwargs: dict[str, Any] = {
            "model": self.litellm_model,
            "messages": to_message_dicts(messages),
            "stream": False,
            "max_retries": self.max_retries,
            "timeout": self.timeout,
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["api_base"] = self.base_url

        logger.debug(
            "Calling %s with %d messages (api_base=%s)",
            kwargs["model"],
            len(kwargs["messages"]),
            self.base_url,
        )

        try:
            response = litellm.completion(**kwargs)
        except litellm.AuthenticationError as e:
            raise ProviderError(
                f"{self.provider_label} authentication failed: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e
        except litellm.RateLimitError as e:
            raise ProviderError(
                f"Rate limit exceeded for {self.model_name}",
                status_code=getattr(e, "status_code", None),
            ) from e
        except litellm.Timeout as e:
            raise ProviderError(
                f"{self.provider_label} did not respond within {self.timeout}s"
            ) from e
        except litellm.APIConnectionError as e:
            raise ProviderError(f"Could not reach {self.provider_label}: {e}") from e
        except Exception as e:
            raise ProviderError(
                f"AI server error: {e}", status_code=getattr(e, "status_code", None)
            ) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise ProviderError(f"Malformed response from {self.provider_label}") from e

        return content or ""

    @property
    def provider_label(self) -> str:
        return "LLM provider"


class LocalProvider(LiteLLMProvider):
    """OpenAI-compatible local endpoint (Ollama, LM Studio)."""

    def __init__(
        self,
        model_name: str,
        url: Optional[str],
        api_key: Optional[str] = None,
        max_retries: int = 0,
        timeout: int = 120,
    ):
        if not url:
            raise ValueError("A URL is required for a local provider")
        super().__init__(
            model_name=model_name,
            api_key=api_key or LOCAL_API_KEY_PLACEHOLDER,
            base_url=self._api_base(url),
            max_retries=max_retries,
            timeout=timeout,
        )
        self.url = url

    @staticmethod
    def _api_base(url: str) -> str:
        """Turn a full chat-completions URL into an API base."""
        base = url.rstrip("/")
        if base.endswith(CHAT_COMPLETIONS_SUFFIX):
            base = base[: -len(CHAT_COMPLETIONS_SUFFIX)]
        return base

    @property
    def litellm_model(self) -> str:
        return f"openai/{self.model_name}"

    @property
    def provider_label(self) -> str:
        return f"local AI server at {self.url}"


class GeminiProvider(LiteLLMProvider):
    """Hosted Google Gemini API."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str],
        max_retries: int = 0,
        timeout: int = 120,
    ):
        if not api_key:
            raise ValueError(
                "Gemini requires an API key: run 'code-agent config' or set GEMINI_API_KEY"
            )
        super().__init__(
            model_name=model_name,
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
        )

    @property
    def litellm_model(self) -> str:
        if self.model_name.startswith("gemini/"):
            return self.model_name
        return f"gemini/{self.model_name}"

    @property
    def provider_label(self) -> str:
        return "Gemini"

"""Configuration management for the code agent."""

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError


load_dotenv()

logger = logging.getLogger(__name__)


Provider = Literal["ollama", "lmstudio", "gemini"]

PROVIDERS: tuple[str, ...] = ("ollama", "lmstudio", "gemini")

DEFAULT_EXTENSIONS = [
    "ts",
    "tsx",
    "js",
    "jsx",
    "py",
    "java",
    "go",
    "rs",
    "cpp",
    "c",
    "h",
]

DEFAULT_IGNORED_DIRS = [
    ".git",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    ".pytest_cache",
]

PROVIDER_DEFAULTS: dict[str, dict[str, Optional[str]]] = {
    "ollama": {
        "url": "http://localhost:11434/v1/chat/completions",
        "model": "llama3.1:8b",
    },
    "lmstudio": {
        "url": "http://localhost:1234/v1/chat/completions",
        "model": "local-model",
    },
    "gemini": {
        "url": None,
        "model": "gemini-2.5-flash",
    },
}

CONFIG_FILENAME = "config.json"


class ConfigError(ValueError):
    """Raised when the persisted configuration cannot be read."""


class Config(BaseModel):
    """Application configuration."""

    # LLM Settings
    provider: Provider = Field(default="ollama")
    url: Optional[str] = Field(default=None)
    model: Optional[str] = Field(default=None)
    api_key: Optional[str] = Field(default=None)
    timeout: int = Field(default=120)
    max_retries: int = Field(default=0)

    # Indexer Settings
    extensions: list[str] = Field(default_factory=lambda: DEFAULT_EXTENSIONS.copy())
    ignored_dirs: list[str] = Field(default_factory=lambda: DEFAULT_IGNORED_DIRS.copy())
    respect_gitignore: bool = Field(default=False)

    # Selection Settings
    max_relevant_files: int = Field(default=5)

    @property
    def resolved_url(self) -> Optional[str]:
        """Configured URL, or the provider's default endpoint."""
        return self.url or PROVIDER_DEFAULTS[self.provider]["url"]

    @property
    def resolved_model(self) -> str:
        """Configured model name, or the provider's default model."""
        return self.model or PROVIDER_DEFAULTS[self.provider]["model"] or ""

    def with_env_overrides(self, provider_override: Optional[str] = None) -> "Config":
        """Return a copy with values taken from environment variables.

        Args:
            provider_override: Provider chosen on the command line; wins over
                CODE_AGENT_PROVIDER
        """
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        updates: dict = {}

        provider = provider_override or os.getenv("CODE_AGENT_PROVIDER")
        if provider:
            if provider not in PROVIDERS:
                raise ConfigError(
                    f"Unknown provider '{provider}' in CODE_AGENT_PROVIDER "
                    f"(expected one of: {', '.join(PROVIDERS)})"
                )
            updates["provider"] = provider
            if provider != self.provider:
                # Saved url/model belong to the previous provider
                updates["url"] = None
                updates["model"] = None

        url = os.getenv("CODE_AGENT_URL")
        if url:
            updates["url"] = url

        model = os.getenv("CODE_AGENT_MODEL")
        if model:
            updates["model"] = model

        updates["timeout"] = _parse_int(os.getenv("CODE_AGENT_TIMEOUT"), self.timeout)

        effective_provider = updates.get("provider", self.provider)
        if effective_provider == "gemini" and not self.api_key and os.getenv("GEMINI_API_KEY"):
            updates["api_key"] = os.getenv("GEMINI_API_KEY")

        return self.model_copy(update=updates)


def config_dir() -> Path:
    """Per-user directory holding the persisted configuration."""
    override = os.getenv("CODE_AGENT_HOME")
    if override:
        return Path(override)
    return Path.home() / ".code-agent"


def config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def default_config() -> Config:
    """Local provider configuration used when nothing has been saved."""
    defaults = PROVIDER_DEFAULTS["ollama"]
    return Config(provider="ollama", url=defaults["url"], model=defaults["model"])


def load_config(path: Optional[Path] = None) -> Config:
    """Load the persisted configuration.

    Args:
        path: Config file to read (defaults to the per-user location)

    Returns:
        The stored Config, or the default local configuration if no file exists

    Raises:
        ConfigError: If the file exists but is not valid configuration JSON
    """
    path = path or config_path()
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return default_config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    """Persist configuration as indented JSON and return the file path."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
    logger.info("Saved configuration to %s", path)
    return path

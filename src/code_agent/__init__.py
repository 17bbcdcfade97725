"""Code Agent - feed relevant source files to an LLM and apply its edits."""

__version__ = "0.1.0"

from .config import Config, load_config, save_config
from .models import (
    IndexedFile,
    ScoredFile,
    ExtractedBlock,
    ChatMessage,
    AgentReply,
)
from .codebase import Codebase, find_relevant
from .editing import ChangeApplier, classify_edit_intent, extract_blocks
from .llm import LLMProvider, ProviderError, create_llm_provider
from .agent import CodeAgent

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "IndexedFile",
    "ScoredFile",
    "ExtractedBlock",
    "ChatMessage",
    "AgentReply",
    "Codebase",
    "find_relevant",
    "ChangeApplier",
    "classify_edit_intent",
    "extract_blocks",
    "LLMProvider",
    "ProviderError",
    "create_llm_provider",
    "CodeAgent",
]

"""Code agent session: selection, prompting and edit extraction."""

import logging
from pathlib import Path
from typing import List, Optional
from .codebase.indexer import Codebase
from .codebase.relevance import find_relevant
from .config import Config
from .context import build_files_bundle, build_project_structure, build_relevant_context
from .editing.applier import ChangeApplier
from .editing.intent import IntentClassifier, classify_edit_intent
from .editing.parser import extract_blocks
from .llm.prompts import (
    CHAT_SYSTEM_PROMPT,
    FIX_PROMPT,
    GENERATE_PROMPT,
    REFACTOR_PROMPT,
    REVIEW_PROMPT,
)
from .llm.provider import LLMProvider
from .models import AgentReply, ChatMessage

logger = logging.getLogger(__name__)


class CodeAgent:
    """One interactive session against a codebase.

    Usage:
        agent = CodeAgent(repo_path, config, create_llm_provider(config))
        agent.index()
        reply = agent.chat("rename the user model")
        if reply.proposes_changes and user_confirms():
            agent.apply(reply)
    """

    def __init__(
        self,
        root: str | Path,
        config: Config,
        llm: LLMProvider,
        classify_intent: IntentClassifier = classify_edit_intent,
    ):
        """Initialize the agent.

        Args:
            root: Codebase root directory
            config: Application configuration
            llm: Model backend
            classify_intent: Decides whether a chat reply proposes edits
        """
        self.root = Path(root)
        self.config = config
        self.llm = llm
        self.classify_intent = classify_intent
        self.codebase = Codebase.from_config(self.root, config)
        self.applier = ChangeApplier(self.root)
        self.history: List[ChatMessage] = []

    def index(self) -> int:
        """Re-index the codebase and return the number of files."""
        self.codebase.index()
        return self.codebase.file_count()

    def clear_history(self) -> None:
        self.history = []

    def build_context(self, message: str) -> str:
        relevant = find_relevant(
            message, self.codebase.files(), limit=self.config.max_relevant_files
        )
        logger.debug("Selected %s for context", [f.path for f in relevant])
        return build_relevant_context(relevant)

    def chat(self, message: str) -> AgentReply:
        """Send one conversational turn with relevant files as context.

        The user turn is dropped again if the model call fails, so the
        history never ends on an unanswered message.
        """
        context = self.build_context(message)
        system = ChatMessage(role="system", content=CHAT_SYSTEM_PROMPT.format(context=context))

        self.history.append(ChatMessage(role="user", content=message))
        try:
            response = self.llm.chat([system, *self.history])
        except Exception:
            self.history.pop()
            raise
        self.history.append(ChatMessage(role="assistant", content=response))

        return AgentReply(
            text=response,
            blocks=extract_blocks(response),
            proposes_changes=self.classify_intent(response),
        )

    def review(self, paths: Optional[List[str]] = None) -> AgentReply:
        """Review the given indexed paths, or the whole codebase."""
        self.codebase.index()
        targets = paths if paths else self.codebase.all_paths()
        content = build_files_bundle(self.codebase, targets)
        response = self._ask(REVIEW_PROMPT.format(content=content))
        return AgentReply(text=response)

    def fix(self, path: str) -> AgentReply:
        """Ask for a bug-fixed version of one file, read fresh from disk."""
        content = self.codebase.read_file(path)
        response = self._ask(FIX_PROMPT.format(file=path, content=content))
        return self._edit_reply(response)

    def refactor(self, path: str, suggestion: Optional[str] = None) -> AgentReply:
        """Ask for a refactored version of one file, read fresh from disk."""
        content = self.codebase.read_file(path)
        focus = f" with focus on: {suggestion}" if suggestion else ""
        response = self._ask(REFACTOR_PROMPT.format(file=path, focus=focus, content=content))
        return self._edit_reply(response)

    def generate(
        self,
        description: str,
        kind: str = "app",
        framework: Optional[str] = None,
    ) -> AgentReply:
        """Generate new files from a description, given the project layout."""
        self.codebase.index()
        prompt = GENERATE_PROMPT.format(
            kind=kind or "application",
            description=description,
            framework_line=f"Framework: {framework}\n" if framework else "",
            context=build_project_structure(self.codebase.all_paths()),
        )
        return self._edit_reply(self._ask(prompt))

    def apply(self, reply: AgentReply) -> List[str]:
        """Write the reply's file blocks and return the written paths."""
        return self.applier.apply(reply.blocks)

    def _ask(self, prompt: str) -> str:
        return self.llm.chat([ChatMessage(role="user", content=prompt)])

    @staticmethod
    def _edit_reply(response: str) -> AgentReply:
        blocks = extract_blocks(response)
        return AgentReply(
            text=response,
            blocks=blocks,
            proposes_changes=any(block.file_path for block in blocks),
        )

"""Core data models for the code agent."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field


Role = Literal["system", "user", "assistant"]


class IndexedFile(BaseModel):
    """A source file loaded by the indexer."""

    path: str  # relative to the codebase root, POSIX separators
    content: str


class ScoredFile(IndexedFile):
    """An indexed file with its relevance score for one query."""

    score: int = 0


class ExtractedBlock(BaseModel):
    """A fenced code block pulled out of a model response."""

    file_path: Optional[str] = None
    code: str


class ChatMessage(BaseModel):
    """A single role-tagged conversation turn."""

    role: Role
    content: str


class AgentReply(BaseModel):
    """Model output for one agent operation plus the edits it carries."""

    text: str
    blocks: List[ExtractedBlock] = Field(default_factory=list)
    proposes_changes: bool = False

    @property
    def file_blocks(self) -> List[ExtractedBlock]:
        """Blocks that name a target file."""
        return [block for block in self.blocks if block.file_path]

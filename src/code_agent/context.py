"""Prompt context assembly from indexed files."""

from typing import Iterable, List
from .codebase.indexer import Codebase
from .models import IndexedFile

PROJECT_STRUCTURE_LIMIT = 10


def format_file_block(path: str, content: str) -> str:
    """Render one file as a path header followed by a fenced block."""
    return f"File: {path}\n```\n{content}\n```"


def build_relevant_context(files: Iterable[IndexedFile]) -> str:
    """Render selected files for the chat system prompt."""
    return "\n\n".join(format_file_block(f.path, f.content) for f in files)


def build_files_bundle(codebase: Codebase, paths: Iterable[str]) -> str:
    """Render the given indexed paths; unknown paths render empty."""
    return "\n\n".join(
        format_file_block(path, codebase.get(path) or "") for path in paths
    )


def build_project_structure(paths: List[str], limit: int = PROJECT_STRUCTURE_LIMIT) -> str:
    """Summarise the project layout from the first indexed paths."""
    structure = "\n".join(paths[:limit])
    return f"Current project structure:\n{structure}"

"""Codebase indexing and relevance selection."""

from .indexer import Codebase
from .relevance import find_relevant, rank_files, score_files, tokenize

__all__ = [
    "Codebase",
    "find_relevant",
    "rank_files",
    "score_files",
    "tokenize",
]

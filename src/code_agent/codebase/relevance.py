"""Keyword relevance scoring over indexed files."""

import re
from typing import Iterable, List, Mapping, Union
from ..models import IndexedFile, ScoredFile

PATH_MATCH_WEIGHT = 10
CONTENT_MATCH_WEIGHT = 1
DEFAULT_MAX_RESULTS = 5

_WHITESPACE = re.compile(r"\s")

FileSource = Union[Mapping[str, str], Iterable[IndexedFile]]


def tokenize(query: str) -> List[str]:
    """Split a query into lowercase tokens.

    Every whitespace character is a separator, so repeated tokens are kept
    and an empty query yields a single empty token.
    """
    return _WHITESPACE.split(query.lower())


def _iter_files(files: FileSource) -> Iterable[IndexedFile]:
    if isinstance(files, Mapping):
        return (IndexedFile(path=path, content=content) for path, content in files.items())
    return files


def score_files(query: str, files: FileSource) -> List[ScoredFile]:
    """Score every file against the query, in mapping order.

    Each token adds PATH_MATCH_WEIGHT when it is a substring of the
    lowercased path and CONTENT_MATCH_WEIGHT when it is a substring of the
    lowercased content.
    """
    tokens = tokenize(query)
    scored: List[ScoredFile] = []

    for indexed in _iter_files(files):
        lower_path = indexed.path.lower()
        lower_content = indexed.content.lower()
        score = 0
        for token in tokens:
            if token in lower_path:
                score += PATH_MATCH_WEIGHT
            if token in lower_content:
                score += CONTENT_MATCH_WEIGHT
        scored.append(ScoredFile(path=indexed.path, content=indexed.content, score=score))

    return scored


def rank_files(
    query: str, files: FileSource, limit: int = DEFAULT_MAX_RESULTS
) -> List[ScoredFile]:
    """Non-zero scores, highest first, ties in mapping order."""
    matches = [scored for scored in score_files(query, files) if scored.score > 0]
    matches.sort(key=lambda scored: scored.score, reverse=True)
    return matches[:limit]


def find_relevant(
    query: str, files: FileSource, limit: int = DEFAULT_MAX_RESULTS
) -> List[IndexedFile]:
    """Return up to ``limit`` files most relevant to the query.

    Args:
        query: Free-text user request
        files: Indexed mapping (path -> content) or IndexedFile sequence
        limit: Maximum number of files returned

    Returns:
        Files sorted by descending score; files scoring zero are dropped
    """
    return [
        IndexedFile(path=scored.path, content=scored.content)
        for scored in rank_files(query, files, limit)
    ]

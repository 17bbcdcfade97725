"""Heuristics deciding whether a response proposes file changes."""

from typing import Callable

IntentClassifier = Callable[[str], bool]

EDIT_KEYWORDS = ("edit", "create", "modify")


def classify_edit_intent(text: str) -> bool:
    """True when the response has a fence and mentions an edit keyword."""
    if "```" not in text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in EDIT_KEYWORDS)

"""Response parsing and change application."""

from .applier import ChangeApplier
from .intent import IntentClassifier, classify_edit_intent
from .parser import extract_blocks

__all__ = [
    "ChangeApplier",
    "IntentClassifier",
    "classify_edit_intent",
    "extract_blocks",
]

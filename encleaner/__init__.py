"""encleaner
Rule-based correction engine for English prose.

Features:
- dictionary spell checking with ranked suggestions (rapidfuzz + pyspellchecker word list)
- heuristic scanner: spelling, capitalization, repeated words, punctuation, spacing
- suggestions with alternatives, applied back onto the text without offset drift
- word-level diff between original and corrected text
- bounded undo/redo history and an editing session tying it all together
- CLI interface
"""
from .checker import Issue, Scanner, check_text, check_file, check_paths
from .differ import DiffSegment, diff_words
from .errors import (
    EngineError,
    IndexOutOfRangeError,
    MalformedInputError,
    OverlappingCorrectionsError,
)
from .fixer import Correction, apply_corrections, apply_suggestions
from .history import TextHistory
from .session import EditingSession
from .spellcheck import SpellChecker, default_checker
from .suggestions import Suggestion, build_suggestions

__all__ = [
    "Issue",
    "Scanner",
    "check_text",
    "check_file",
    "check_paths",
    "Suggestion",
    "build_suggestions",
    "Correction",
    "apply_corrections",
    "apply_suggestions",
    "DiffSegment",
    "diff_words",
    "TextHistory",
    "EditingSession",
    "SpellChecker",
    "default_checker",
    "EngineError",
    "MalformedInputError",
    "OverlappingCorrectionsError",
    "IndexOutOfRangeError",
]

__version__ = "0.1.0"

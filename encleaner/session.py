"""One editing session: current text, its suggestions, and undo/redo.

Wires the engine together the way an editor uses it:
scan -> suggestions -> accept -> new text -> history snapshot -> diff.

Suggestions are recomputed after every text change and never carried over,
so accepted offsets always refer to the text they were scanned from.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Set, Union

from .checker import Scanner
from .config import EngineConfig
from .differ import DEFAULT_WINDOW, DiffSegment, diff_words
from .errors import ensure_text
from .fixer import apply_corrections, select_non_overlapping
from .history import DEFAULT_MAX_SIZE, TextHistory
from .spellcheck import DEFAULT_SUGGESTION_LIMIT, SpellChecker, default_checker
from .suggestions import Suggestion, SuggestionBuilder

logger = logging.getLogger(__name__)

SuggestionRef = Union[str, Suggestion]


class EditingSession:
    def __init__(
        self,
        text: str = "",
        spell_checker: SpellChecker | None = None,
        max_history: int = DEFAULT_MAX_SIZE,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        diff_window: int = DEFAULT_WINDOW,
    ):
        checker = default_checker() if spell_checker is None else spell_checker
        self._scanner = Scanner(checker)
        self._builder = SuggestionBuilder(checker, limit=suggestion_limit)
        self.diff_window = diff_window
        self.history = TextHistory(max_history)
        self._text = ensure_text(text)
        self._suggestions: Optional[List[Suggestion]] = None
        self._dismissed: Set[str] = set()
        self.history.push(self._text)

    @classmethod
    def from_config(
        cls,
        cfg: EngineConfig,
        text: str = "",
        spell_checker: SpellChecker | None = None,
    ) -> "EditingSession":
        """Session sized by ``[tool.encleaner]`` settings (history, suggestions, diff window, word lists)."""
        return cls(
            text,
            spell_checker=default_checker(cfg.dict_files) if spell_checker is None else spell_checker,
            max_history=cfg.history_size,
            suggestion_limit=cfg.suggestion_limit,
            diff_window=cfg.diff_window,
        )

    @property
    def text(self) -> str:
        return self._text

    @property
    def suggestions(self) -> List[Suggestion]:
        if self._suggestions is None:
            issues = self._scanner.scan(self._text)
            self._suggestions = self._builder.build(issues, self._text)
        return [s for s in self._suggestions if s.id not in self._dismissed]

    def _replace_text(self, text: str) -> None:
        self._text = text
        self._suggestions = None
        self._dismissed.clear()

    def set_text(self, text: str) -> bool:
        """Replace the text; returns False (and records nothing) when unchanged."""
        ensure_text(text)
        if text == self._text:
            return False
        self._replace_text(text)
        self.history.push(text)
        return True

    def _resolve(self, refs: Iterable[SuggestionRef]) -> List[Suggestion]:
        by_id = {s.id: s for s in self.suggestions}
        out = []
        for ref in refs:
            key = ref.id if isinstance(ref, Suggestion) else ref
            if key not in by_id:
                raise KeyError(f"unknown or stale suggestion: {key}")
            out.append(by_id[key])
        return out

    def accept(
        self,
        refs: Iterable[SuggestionRef],
        replacements: Mapping[str, str] | None = None,
    ) -> List[DiffSegment]:
        """Apply suggestions (by id or object); ``replacements`` maps id -> chosen alternative."""
        chosen = replacements or {}
        picked = self._resolve(refs)
        before = self._text
        after = apply_corrections(before, [s.to_correction(chosen.get(s.id)) for s in picked])
        logger.debug("accepted %d suggestion(s)", len(picked))
        self.set_text(after)
        return diff_words(before, after, window=self.diff_window)

    def accept_all(self, category: str | None = None) -> List[DiffSegment]:
        candidates = [s for s in self.suggestions if category is None or s.category == category]
        return self.accept(select_non_overlapping(candidates))

    def dismiss(self, ref: SuggestionRef) -> None:
        (suggestion,) = self._resolve([ref])
        self._dismissed.add(suggestion.id)

    def undo(self) -> Optional[str]:
        text = self.history.undo()
        if text is not None:
            self._replace_text(text)
        return text

    def redo(self) -> Optional[str]:
        text = self.history.redo()
        if text is not None:
            self._replace_text(text)
        return text

    def clear(self) -> None:
        self.history.clear()
        self._replace_text("")
        self.history.push("")


__all__ = ["EditingSession"]

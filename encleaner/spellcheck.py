"""Dictionary-backed spell checking for single tokens.

- The word list is folded to lower case and frozen once; lookups are
  case-insensitive set containment.
- Suggestions come from rapidfuzz: every dictionary word within an optimal
  string alignment distance of 2 (so ``teh`` -> ``the`` is one edit), closest
  first, ties broken by word frequency and then dictionary order.
- The default list is the English frequency dictionary bundled with
  pyspellchecker. Personal word lists can be layered on top.

Word list formats:
- plain text: one word per line (UTF-8), lines starting with ``#`` ignored
- JSON / YAML: ``{"words": ["word", ...]}`` or a bare list
"""
from __future__ import annotations

import functools
import json
import logging
import re
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence

import yaml
from rapidfuzz import process
from rapidfuzz.distance import OSA
from spellchecker import SpellChecker as _FrequencyDictionary

logger = logging.getLogger(__name__)

MAX_EDIT_DISTANCE = 2
DEFAULT_SUGGESTION_LIMIT = 3

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'"})
_LETTER_RE = re.compile(r"[^\W\d_]")
# 's / 'd / 'll / 're / 've / 'm / n't
_CONTRACTION_TAILS = {"s", "d", "ll", "re", "ve", "m", "t"}


def _fold(word: str) -> str:
    return word.translate(_APOSTROPHES).lower()


def _contraction_heads(word: str) -> List[str]:
    head, sep, tail = word.partition("'")
    if not sep or not head or tail not in _CONTRACTION_TAILS:
        return []
    heads = [head]
    if tail == "t" and head.endswith("n"):
        heads.append(head[:-1])  # don't -> do, isn't -> is
    return heads


def match_case(template: str, word: str) -> str:
    """Give ``word`` the casing pattern of ``template`` (UPPER, Proper or as-is)."""
    if len(template) > 1 and template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


class SpellChecker:
    """Read-only correctness oracle over a frozen word list.

    Build it once per process and pass it around; it holds no mutable state
    after construction, so concurrent readers need no locking.

    ``frequencies`` (word -> corpus count) ranks suggestions at equal edit
    distance, most frequent first. Words without a count rank as 0.
    """

    def __init__(
        self,
        words: Iterable[str],
        max_distance: int = MAX_EDIT_DISTANCE,
        frequencies: Mapping[str, int] | None = None,
    ):
        folded = {_fold(w.strip()) for w in words if w and w.strip()}
        self._words: FrozenSet[str] = frozenset(folded)
        self._vocab: List[str] = sorted(self._words)
        self._freq: Dict[str, int] = {}
        for word, count in (frequencies or {}).items():
            key = _fold(word)
            if key in self._words:
                self._freq[key] = max(self._freq.get(key, 0), int(count))
        self.max_distance = max_distance

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and _fold(word) in self._words

    def correct(self, word: str) -> bool:
        if not isinstance(word, str) or not _LETTER_RE.search(word):
            return False
        folded = _fold(word)
        if folded in self._words:
            return True
        return any(head in self._words for head in _contraction_heads(folded))

    def suggest(self, word: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[str]:
        if not isinstance(word, str) or limit <= 0 or not self._vocab:
            return []
        if not _LETTER_RE.search(word):
            return []
        folded = _fold(word)
        hits = process.extract(
            folded,
            self._vocab,
            scorer=OSA.distance,
            limit=None,
            score_cutoff=self.max_distance,
        )
        # (choice, distance, index): closest, then most frequent, then dictionary order
        hits = sorted(
            (h for h in hits if h[0] != folded),
            key=lambda h: (h[1], -self._freq.get(h[0], 0), h[2]),
        )
        out: List[str] = []
        for candidate, _distance, _index in hits:
            cased = match_case(word, candidate)
            if cased not in out:
                out.append(cased)
            if len(out) >= limit:
                break
        return out

    def with_words(self, words: Iterable[str]) -> "SpellChecker":
        return SpellChecker(
            list(self._vocab) + list(words),
            max_distance=self.max_distance,
            frequencies=self._freq,
        )


def _words_from_data(data, source: Path) -> List[str]:
    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise ValueError(f"{source}: word list must be a list or a mapping with 'words'")
    return [str(w) for w in data if w is not None]


def load_dict(paths: Iterable[str | Path]) -> List[str]:
    words: List[str] = []
    for p in paths:
        path = Path(p)
        if not path.is_file():
            raise FileNotFoundError(str(path))
        text = path.read_text(encoding="utf-8-sig")
        suffix = path.suffix.lower()
        if suffix == ".json":
            words.extend(_words_from_data(json.loads(text), path))
        elif suffix in {".yaml", ".yml"}:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: invalid YAML: {e}") from e
            words.extend(_words_from_data(data, path))
        else:
            for line in text.splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                words.append(line)
    return sorted(set(words))


@functools.lru_cache(maxsize=1)
def default_frequencies() -> Dict[str, int]:
    """Word -> count from pyspellchecker's bundled English frequency list."""
    return dict(_FrequencyDictionary(language="en").word_frequency.dictionary)


def default_words() -> List[str]:
    """English words from pyspellchecker's bundled frequency list."""
    return list(default_frequencies())


@functools.lru_cache(maxsize=None)
def _cached_checker(extra_paths: tuple) -> SpellChecker:
    words = default_words()
    if extra_paths:
        words.extend(load_dict(extra_paths))
    checker = SpellChecker(words, frequencies=default_frequencies())
    logger.info("spell checker ready: %d words (%d personal lists)", len(checker), len(extra_paths))
    return checker


def default_checker(extra_paths: Sequence[str | Path] = ()) -> SpellChecker:
    """Process-wide checker over the default dictionary plus personal lists."""
    return _cached_checker(tuple(str(p) for p in extra_paths))


__all__ = [
    "SpellChecker",
    "MAX_EDIT_DISTANCE",
    "DEFAULT_SUGGESTION_LIMIT",
    "match_case",
    "load_dict",
    "default_words",
    "default_frequencies",
    "default_checker",
]

"""Rule set of the issue scanner.

Each rule is a generator over ``(text, tokens, speller)`` yielding plain hit
dicts (offset, length, kind, rule_id, message, severity). ``RULES`` fixes the
order the checks run in; the scanner relies on it to break offset ties.

The rules are regex heuristics, not a grammar parser. Their output is
expected to stay stable between releases.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Tuple

from .spellcheck import SpellChecker

SPELLING = "spelling"
CAPITALIZATION = "capitalization"
REPEATED_WORD = "repeated_word"
PUNCTUATION = "punctuation"
SENTENCE_START = "sentence_start"

KINDS = (SPELLING, CAPITALIZATION, REPEATED_WORD, PUNCTUATION, SENTENCE_START)

SENTENCE_TERMINATORS = ".!?"
MIN_SPELL_LENGTH = 3

_WORD = r"[^\W\d_]+(?:['’][^\W\d_]+)*"
_TOKEN_RE = re.compile(_WORD)
_REPEAT_RE = re.compile(r"(?<![\w'’])(" + _WORD + r")\s+\1(?![\w'’])", re.IGNORECASE)
_TERMINATOR_RUN_RE = re.compile(r"[.!?]+")
_MULTI_SPACE_RE = re.compile(r" {2,}")
# the pronoun stays upper case mid-sentence (I, I'm, I'll ...)
_ALWAYS_CAPITALIZED = {"i"}
# proper nouns the default word list carries in lower case
PROPER_NOUNS = frozenset("""
monday tuesday wednesday thursday friday saturday sunday
january february march april may june july august september october november december
christmas easter
english french german spanish italian portuguese dutch russian polish greek
swedish norwegian danish finnish irish scottish welsh british european
american canadian mexican brazilian australian african asian indian
chinese japanese korean arabic hebrew hindi latin turkish
""".split())


@dataclass(frozen=True)
class Token:
    text: str
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


Hit = Dict[str, Any]


def tokenize(text: str) -> List[Token]:
    return [Token(m.group(0), m.start(), m.end() - m.start()) for m in _TOKEN_RE.finditer(text)]


def sentence_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Rough sentences; a run of . ! ? stays with the sentence before it."""
    start = 0
    for m in _TERMINATOR_RUN_RE.finditer(text):
        yield start, m.end()
        start = m.end()
    if start < len(text):
        yield start, len(text)


def at_sentence_start(text: str, offset: int) -> bool:
    i = offset - 1
    while i >= 0 and text[i].isspace():
        i -= 1
    return i < 0 or text[i] in SENTENCE_TERMINATORS


def _hit(offset: int, length: int, kind: str, rule_id: str, message: str, severity: str) -> Hit:
    return {
        "offset": offset,
        "length": length,
        "kind": kind,
        "rule_id": rule_id,
        "message": message,
        "severity": severity,
    }


def check_spelling(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    for tok in tokens:
        if tok.length < MIN_SPELL_LENGTH or speller.correct(tok.text):
            continue
        yield _hit(tok.offset, tok.length, SPELLING, "SPELL_UNKNOWN",
                   f'"{tok.text}" may be misspelled', "WARN")


def check_repeated_words(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    for m in _REPEAT_RE.finditer(text):
        yield _hit(m.start(), m.end() - m.start(), REPEATED_WORD, "REPEATED_WORD",
                   f'"{m.group(1).lower()}" is repeated', "WARN")


def check_sentence_start(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    for start, end in sentence_spans(text):
        pos = start
        while pos < end and text[pos].isspace():
            pos += 1
        if pos < end and text[pos].islower():
            yield _hit(pos, 1, SENTENCE_START, "SENTENCE_START",
                       "Sentences should start with a capital letter", "WARN")


def check_terminal_punctuation(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    trimmed = text.rstrip()
    if not trimmed.strip() or trimmed[-1] in SENTENCE_TERMINATORS:
        return
    # zero-width: the fix is an insertion right after the last visible character
    yield _hit(len(trimmed), 0, PUNCTUATION, "PUNCT_TERMINAL",
               "Consider ending the sentence with punctuation", "INFO")


def _is_mixed_case(word: str) -> bool:
    return any(c.isupper() for c in word[1:]) and any(c.islower() for c in word)


def check_capitalization(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    for tok in tokens:
        if at_sentence_start(text, tok.offset):
            continue
        word = tok.text
        if _is_mixed_case(word):
            yield _hit(tok.offset, tok.length, CAPITALIZATION, "CAP_MIXED",
                       f'"{word}" has unusual mixed casing', "INFO")
        elif word[0].isupper() and not word.isupper():
            head = re.split(r"['’]", word, maxsplit=1)[0].lower()
            if head in _ALWAYS_CAPITALIZED or head in PROPER_NOUNS:
                continue
            if speller.correct(word.lower()):
                yield _hit(tok.offset, tok.length, CAPITALIZATION, "CAP_LOWER",
                           f'"{word}" should be lowercase here', "INFO")


def check_multiple_spaces(text: str, tokens: List[Token], speller: SpellChecker) -> Iterator[Hit]:
    for m in _MULTI_SPACE_RE.finditer(text):
        yield _hit(m.start(), m.end() - m.start(), PUNCTUATION, "SPACE_MULTI",
                   "Remove extra spaces", "INFO")


Rule = Callable[[str, List[Token], SpellChecker], Iterator[Hit]]

RULES: List[Tuple[str, Rule]] = [
    ("spelling", check_spelling),
    ("repeated_word", check_repeated_words),
    ("sentence_start", check_sentence_start),
    ("terminal_punctuation", check_terminal_punctuation),
    ("capitalization", check_capitalization),
    ("multiple_spaces", check_multiple_spaces),
]


def run_rules(text: str, speller: SpellChecker) -> Iterator[Hit]:
    tokens = tokenize(text)
    for _name, rule in RULES:
        yield from rule(text, tokens, speller)


__all__ = [
    "Token",
    "tokenize",
    "sentence_spans",
    "at_sentence_start",
    "run_rules",
    "RULES",
    "KINDS",
    "PROPER_NOUNS",
    "SPELLING",
    "CAPITALIZATION",
    "REPEATED_WORD",
    "PUNCTUATION",
    "SENTENCE_START",
]

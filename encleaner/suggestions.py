"""Turn scanner issues into presentation-ready suggestions.

One suggestion per issue, same order. Alternatives are ordered best first and
the primary replacement is always the first alternative when there is one.
Ids are built from kind, offset and length only, so scanning the same text
twice yields the same ids. Explanations are fixed templates over the rule and
the offending text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .checker import Issue
from .errors import IndexOutOfRangeError, ensure_text
from .fixer import Correction
from .spellcheck import DEFAULT_SUGGESTION_LIMIT, SpellChecker, default_checker

CATEGORY_BY_RULE = {
    "SPELL_UNKNOWN": "spelling",
    "SENTENCE_START": "capitalization",
    "CAP_MIXED": "capitalization",
    "CAP_LOWER": "capitalization",
    "PUNCT_TERMINAL": "punctuation",
    "SPACE_MULTI": "spacing",
    "REPEATED_WORD": "repeated_word",
}
CATEGORIES = ("spelling", "capitalization", "punctuation", "spacing", "repeated_word")

RULE_DESCRIPTIONS = {
    "SPELL_UNKNOWN": "Spell check",
    "SENTENCE_START": "Sentence capitalization",
    "CAP_MIXED": "Mixed casing",
    "CAP_LOWER": "Capital letter mid-sentence",
    "PUNCT_TERMINAL": "Sentence punctuation",
    "SPACE_MULTI": "Double spacing",
    "REPEATED_WORD": "Repeated words",
}

CONFIDENCE = {
    "SPELL_UNKNOWN": 0.8,
    "SENTENCE_START": 0.9,
    "CAP_MIXED": 0.6,
    "CAP_LOWER": 0.6,
    "PUNCT_TERMINAL": 0.7,
    "SPACE_MULTI": 0.9,
    "REPEATED_WORD": 0.8,
}

TERMINATORS = (".", "?", "!")
_FIRST_WORD_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class Suggestion:
    id: str
    kind: str
    rule_id: str
    category: str
    original_text: str
    primary_replacement: str
    alternatives: Tuple[str, ...]
    offset: int
    length: int
    explanation: str
    rule_description: str = ""
    confidence: float = 0.5
    type: str = "correctness"

    def to_correction(self, replacement: Optional[str] = None) -> Correction:
        return Correction(self.offset, self.length,
                          self.primary_replacement if replacement is None else replacement)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "kind": self.kind,
            "rule_id": self.rule_id,
            "category": self.category,
            "original_text": self.original_text,
            "suggested_text": self.primary_replacement,
            "alternatives": list(self.alternatives),
            "offset": self.offset,
            "length": self.length,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "rule_description": self.rule_description,
        }


def suggestion_id(kind: str, offset: int, length: int) -> str:
    return f"{kind}_{offset}_{length}"


def case_variants(word: str) -> List[str]:
    """lower / Proper / UPPER forms of ``word`` other than its current form."""
    out: List[str] = []
    for form in (word.lower(), word[:1].upper() + word[1:].lower(), word.upper()):
        if form != word and form not in out:
            out.append(form)
    return out


class SuggestionBuilder:
    def __init__(self, spell_checker: SpellChecker, limit: int = DEFAULT_SUGGESTION_LIMIT):
        self.spell_checker = spell_checker
        self.limit = limit
        self._alternatives: Dict[str, Callable[[str], List[str]]] = {
            "SPELL_UNKNOWN": lambda s: self.spell_checker.suggest(s, limit=self.limit),
            "SENTENCE_START": lambda s: [s.upper()],
            "PUNCT_TERMINAL": lambda s: list(TERMINATORS),
            "CAP_MIXED": case_variants,
            "CAP_LOWER": case_variants,
            "SPACE_MULTI": lambda s: [" "],
            "REPEATED_WORD": _first_word,
        }

    def build(self, issues: Iterable[Issue], text: str) -> List[Suggestion]:
        ensure_text(text)
        return [self.build_one(issue, text) for issue in issues]

    def build_one(self, issue: Issue, text: str) -> Suggestion:
        if issue.offset < 0 or issue.length < 0 or issue.end > len(text):
            raise IndexOutOfRangeError(issue.offset, issue.length, len(text))
        original = text[issue.offset:issue.end]
        make = self._alternatives.get(issue.rule_id)
        alternatives = tuple(make(original)) if make else ()
        primary = alternatives[0] if alternatives else original
        return Suggestion(
            id=suggestion_id(issue.kind, issue.offset, issue.length),
            kind=issue.kind,
            rule_id=issue.rule_id,
            category=CATEGORY_BY_RULE.get(issue.rule_id, issue.kind),
            original_text=original,
            primary_replacement=primary,
            alternatives=alternatives,
            offset=issue.offset,
            length=issue.length,
            explanation=explain(issue, original, primary, bool(alternatives)),
            rule_description=RULE_DESCRIPTIONS.get(issue.rule_id, issue.kind),
            confidence=CONFIDENCE.get(issue.rule_id, 0.5),
        )


def _first_word(span: str) -> List[str]:
    m = _FIRST_WORD_RE.match(span)
    return [m.group(0)] if m else []


def explain(issue: Issue, original: str, primary: str, has_alternatives: bool) -> str:
    rid = issue.rule_id
    if rid == "SPELL_UNKNOWN":
        if has_alternatives:
            return f'"{original}" may be misspelled; did you mean "{primary}"?'
        return f'"{original}" may be misspelled and no close match was found'
    if rid == "SENTENCE_START":
        return f'Sentences should start with a capital letter: "{original}" -> "{primary}"'
    if rid == "PUNCT_TERMINAL":
        return "Consider ending the sentence with punctuation"
    if rid == "CAP_MIXED":
        return f'"{original}" mixes upper and lower case'
    if rid == "CAP_LOWER":
        return f'"{original}" is capitalized in the middle of a sentence'
    if rid == "SPACE_MULTI":
        extra = len(original) - 1
        return f"Remove {extra} extra space" + ("" if extra == 1 else "s")
    if rid == "REPEATED_WORD":
        return f'"{primary.lower()}" is repeated'
    return issue.message


def build_suggestions(
    issues: Iterable[Issue],
    text: str,
    spell_checker: SpellChecker | None = None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[Suggestion]:
    checker = default_checker() if spell_checker is None else spell_checker
    return SuggestionBuilder(checker, limit=limit).build(issues, text)


__all__ = [
    "Suggestion",
    "SuggestionBuilder",
    "build_suggestions",
    "case_variants",
    "suggestion_id",
    "CATEGORIES",
]

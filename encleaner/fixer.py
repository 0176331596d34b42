"""Apply accepted corrections back onto the text they were computed against.

Every correction's offset points into the *original* text. Corrections are
spliced from the highest offset down, so a replacement that changes the text
length never moves a span that has not been applied yet. Input order does not
matter; the request is sorted here.

Overlapping spans are rejected unless the caller asks for best-effort mode
(``strict=False``), where the lower-offset splice simply wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, TYPE_CHECKING

from .errors import IndexOutOfRangeError, OverlappingCorrectionsError, ensure_text

if TYPE_CHECKING:
    from .suggestions import Suggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Correction:
    offset: int
    length: int
    replacement: str

    @property
    def end(self) -> int:
        return self.offset + self.length


def _check_bounds(corrections: Sequence[Correction], text_length: int) -> None:
    for c in corrections:
        if c.offset < 0 or c.length < 0 or c.end > text_length:
            raise IndexOutOfRangeError(c.offset, c.length, text_length)
        ensure_text(c.replacement, "replacement")


def _check_disjoint(ordered: Sequence[Correction]) -> None:
    # ordered ascending by (offset, end)
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.end > cur.offset:
            raise OverlappingCorrectionsError(prev, cur)
        if prev.offset == cur.offset and prev.length == 0 and cur.length == 0:
            # two insertions at one point have no defined order
            raise OverlappingCorrectionsError(prev, cur)


def apply_corrections(text: str, corrections: Iterable[Correction], strict: bool = True) -> str:
    ensure_text(text)
    items = list(corrections)
    _check_bounds(items, len(text))
    if strict:
        _check_disjoint(sorted(items, key=lambda c: (c.offset, c.end)))
    out = text
    # high offsets first; at equal offsets the wider span goes first so an
    # insertion at its start still lands in front of it
    for c in sorted(items, key=lambda c: (c.offset, c.end), reverse=True):
        out = out[:c.offset] + c.replacement + out[c.offset + c.length:]
    logger.debug("applied %d correction(s): %d -> %d chars", len(items), len(text), len(out))
    return out


def select_non_overlapping(suggestions: Iterable["Suggestion"]) -> List["Suggestion"]:
    """Keep the first suggestion of every overlapping cluster, in offset order.

    Suggestions whose primary replacement would not change the text are dropped.
    """
    picked: List["Suggestion"] = []
    cur = 0
    for s in sorted(suggestions, key=lambda s: s.offset):
        if s.primary_replacement == s.original_text:
            continue
        if picked:
            last = picked[-1]
            same_point = s.length == 0 and last.length == 0 and s.offset == last.offset
            if s.offset < cur or same_point:
                continue  # overlap skip
        picked.append(s)
        cur = s.offset + s.length
    return picked


def apply_suggestions(text: str, suggestions: Iterable["Suggestion"], strict: bool = True) -> str:
    return apply_corrections(text, [s.to_correction() for s in suggestions], strict=strict)


__all__ = ["Correction", "apply_corrections", "apply_suggestions", "select_non_overlapping"]

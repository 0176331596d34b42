"""Word-level diff between an original text and its corrected version.

Both texts are split on whitespace with the whitespace kept as tokens, then
walked with two cursors. On a mismatch the walk looks a few tokens ahead in
the corrected text (an insertion), then in the original (a deletion), and
falls back to a one-token substitution. It is a greedy local heuristic, not
an LCS, and is deterministic for a given window.

Round trip: joining ``same`` + ``removed`` values gives the original back,
``same`` + ``added`` gives the corrected text.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .errors import ensure_text

logger = logging.getLogger(__name__)

SAME = "same"
ADDED = "added"
REMOVED = "removed"

DEFAULT_WINDOW = 4

_SPLIT_RE = re.compile(r"(\s+)")


@dataclass(frozen=True)
class DiffSegment:
    kind: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.kind, "value": self.value}


def split_words(text: str) -> List[str]:
    return [t for t in _SPLIT_RE.split(text) if t]


def _find(tokens: Sequence[str], target: str, start: int, window: int) -> int:
    for k in range(start, min(start + window, len(tokens))):
        if tokens[k] == target:
            return k
    return -1


def diff_words(original: str, corrected: str, window: int = DEFAULT_WINDOW) -> List[DiffSegment]:
    ensure_text(original, "original")
    ensure_text(corrected, "corrected")
    if window < 1:
        raise ValueError("window must be >= 1")
    a = split_words(original)
    b = split_words(corrected)
    out: List[DiffSegment] = []
    i = j = 0
    while i < len(a) or j < len(b):
        if i >= len(a):
            out.append(DiffSegment(ADDED, "".join(b[j:])))
            break
        if j >= len(b):
            out.append(DiffSegment(REMOVED, "".join(a[i:])))
            break
        if a[i] == b[j]:
            out.append(DiffSegment(SAME, a[i]))
            i += 1
            j += 1
            continue
        k = _find(b, a[i], j + 1, window)
        if k != -1:
            out.append(DiffSegment(ADDED, "".join(b[j:k])))
            j = k
            continue
        k = _find(a, b[j], i + 1, window)
        if k != -1:
            out.append(DiffSegment(REMOVED, "".join(a[i:k])))
            i = k
            continue
        out.append(DiffSegment(REMOVED, a[i]))
        out.append(DiffSegment(ADDED, b[j]))
        i += 1
        j += 1
    logger.debug("diff: %d/%d tokens -> %d segments", len(a), len(b), len(out))
    return out


def reconstruct(segments: Sequence[DiffSegment]) -> Tuple[str, str]:
    """(original, corrected) rebuilt from a segment list."""
    original = "".join(s.value for s in segments if s.kind != ADDED)
    corrected = "".join(s.value for s in segments if s.kind != REMOVED)
    return original, corrected


def side_by_side(segments: Sequence[DiffSegment]) -> Tuple[List[DiffSegment], List[DiffSegment]]:
    left = [s for s in segments if s.kind != ADDED]
    right = [s for s in segments if s.kind != REMOVED]
    return left, right


def diff_stats(segments: Sequence[DiffSegment]) -> Dict[str, int]:
    stats = {SAME: 0, ADDED: 0, REMOVED: 0}
    for s in segments:
        stats[s.kind] += sum(1 for t in split_words(s.value) if not t.isspace())
    return stats


def format_inline(segments: Sequence[DiffSegment]) -> str:
    """Plain-text rendering in ``git diff --word-diff`` style."""
    parts = []
    for s in segments:
        if s.kind == REMOVED:
            parts.append(f"[-{s.value}-]")
        elif s.kind == ADDED:
            parts.append(f"{{+{s.value}+}}")
        else:
            parts.append(s.value)
    return "".join(parts)


__all__ = [
    "DiffSegment",
    "diff_words",
    "split_words",
    "reconstruct",
    "side_by_side",
    "diff_stats",
    "format_inline",
    "SAME",
    "ADDED",
    "REMOVED",
    "DEFAULT_WINDOW",
]

"""Linear undo/redo log of full-text snapshots.

The cursor points at the current snapshot (-1 when empty). Pushing while the
cursor is behind the tail drops the redo branch. The log is capped; once over
the cap the oldest snapshot goes and the cursor shifts down with it.

Not thread-safe: give each editor its own instance and call it from one place.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryEntry:
    text: str
    timestamp: datetime = field(default_factory=_now)


class TextHistory:
    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.max_size = max_size
        self._entries: List[HistoryEntry] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> Optional[str]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor].text

    def push(self, text: str) -> None:
        del self._entries[self._cursor + 1:]
        self._entries.append(HistoryEntry(text))
        self._cursor += 1
        if len(self._entries) > self.max_size:
            self._entries.pop(0)
            self._cursor -= 1
            logger.debug("history full (%d), dropped oldest snapshot", self.max_size)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def undo(self) -> Optional[str]:
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self._entries[self._cursor].text

    def redo(self) -> Optional[str]:
        if not self.can_redo():
            return None
        self._cursor += 1
        return self._entries[self._cursor].text

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = -1


__all__ = ["TextHistory", "HistoryEntry", "DEFAULT_MAX_SIZE"]

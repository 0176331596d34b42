"""Exceptions shared by the correction engine.

All of them are local validation failures raised before any work is done,
so callers never observe a half-applied correction set.
"""
from __future__ import annotations


class EngineError(Exception):
    """Base class for every error raised by the correction engine."""


class MalformedInputError(EngineError, TypeError):
    """Input that is not a string was handed to scan/diff/apply."""


class OverlappingCorrectionsError(EngineError, ValueError):
    """Two corrections in one request touch the same characters."""

    def __init__(self, first, second):
        self.first = first
        self.second = second
        super().__init__(
            f"corrections overlap: ({first.offset}, {first.length}) and ({second.offset}, {second.length})"
        )


class IndexOutOfRangeError(EngineError, IndexError):
    """An offset/length pair does not fit inside the text it targets."""

    def __init__(self, offset: int, length: int, text_length: int):
        self.offset = offset
        self.length = length
        self.text_length = text_length
        super().__init__(
            f"span ({offset}, {length}) is outside text of length {text_length}"
        )


def ensure_text(value, name: str = "text") -> str:
    if not isinstance(value, str):
        raise MalformedInputError(f"{name} must be str, not {type(value).__name__}")
    return value


__all__ = [
    "EngineError",
    "MalformedInputError",
    "OverlappingCorrectionsError",
    "IndexOutOfRangeError",
    "ensure_text",
]

"""File discovery and decoding for the command-line tool.

- Directories are walked recursively; dot-directories (.git, .venv ...) are skipped.
- An optional suffix filter restricts which files are picked up.
- Files that look binary, or that no candidate encoding decodes, read as None.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

DEFAULT_SUFFIXES = (".txt", ".md", ".rst", ".eml")
ENCODINGS = ("utf-8-sig", "cp1252")
UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")
BINARY_BYTES = set(range(0, 9)) | {11, 12} | set(range(14, 32))


def is_probably_text(data: bytes, threshold: float = 0.30) -> bool:
    if not data:
        return True
    if data.startswith(UTF16_BOMS):
        return True  # UTF-16 BOM, NUL bytes expected
    non_text = sum(b in BINARY_BYTES for b in data[:8192])
    return non_text / min(len(data), 8192) < threshold


def read_text(path: Path, encodings: Iterable[str] = ENCODINGS) -> Optional[str]:
    try:
        raw = path.read_bytes()
    except OSError:
        return None
    if not is_probably_text(raw):
        return None
    if raw.startswith(UTF16_BOMS):
        encodings = ("utf-16",)
    for enc in encodings:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return None


def _wanted(path: Path, suffixes: Optional[set]) -> bool:
    return suffixes is None or path.suffix.lower() in suffixes


def iter_files(
    paths: Iterable[str | os.PathLike[str]],
    suffixes: Iterable[str] | None = None,
) -> Iterator[Path]:
    """Yield files under ``paths``; explicitly named files bypass the suffix filter."""
    wanted = {s.lower() for s in suffixes} if suffixes is not None else None
    for p in paths:
        path = Path(p)
        if path.is_file():
            yield path
        elif path.is_dir():
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(d for d in dirs if not d.startswith("."))
                for f in sorted(files):
                    candidate = Path(root) / f
                    if _wanted(candidate, wanted):
                        yield candidate


__all__ = ["iter_files", "read_text", "is_probably_text", "DEFAULT_SUFFIXES"]

"""High-level API: issue detection over text, files and path sets.

- ``Scanner`` binds the rule set to one spell checker instance
- ``check_text`` / ``check_file`` / ``check_paths`` use the process-wide
  default checker unless one is passed in
- paths can be scanned in parallel; the checker is read-only so threads share it
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import ensure_text
from .file_scanner import iter_files, read_text
from .rules import run_rules
from .spellcheck import SpellChecker, default_checker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Issue:
    kind: str
    offset: int
    length: int
    message: str
    rule_id: str
    severity: str = "WARN"
    snippet: str = ""
    file: Optional[str] = None

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "offset": self.offset,
            "length": self.length,
            "message": self.message,
            "rule_id": self.rule_id,
            "severity": self.severity,
            "snippet": self.snippet,
            "file": self.file,
        }


class Scanner:
    """Runs every rule over a text and returns issues sorted by offset.

    Issues from different rules may overlap (a misspelled word can also be
    badly capitalized); picking between them is left to the caller.
    """

    def __init__(self, spell_checker: SpellChecker):
        self.spell_checker = spell_checker

    def scan(self, text: str) -> List[Issue]:
        ensure_text(text)
        if not text:
            return []
        issues = [
            Issue(
                kind=hit["kind"],
                offset=hit["offset"],
                length=hit["length"],
                message=hit["message"],
                rule_id=hit["rule_id"],
                severity=hit["severity"],
                snippet=text[hit["offset"]:hit["offset"] + hit["length"]],
            )
            for hit in run_rules(text, self.spell_checker)
        ]
        # stable: equal offsets keep rule order
        issues.sort(key=lambda i: i.offset)
        logger.debug("scanned %d chars: %d issue(s)", len(text), len(issues))
        return issues


def check_text(
    text: str,
    spell_checker: SpellChecker | None = None,
    file: str | None = None,
) -> List[Issue]:
    scanner = Scanner(default_checker() if spell_checker is None else spell_checker)
    issues = scanner.scan(text)
    if file is not None:
        issues = [replace(i, file=file) for i in issues]
    return issues


def check_file(path: str, spell_checker: SpellChecker | None = None) -> List[Issue]:
    content = read_text(Path(path))
    if content is None:
        logger.warning("skipping unreadable file %s", path)
        return []
    return check_text(content, spell_checker=spell_checker, file=str(path))


def check_paths(
    paths: Iterable[str],
    spell_checker: SpellChecker | None = None,
    jobs: int = 1,
    suffixes: Iterable[str] | None = None,
) -> List[Issue]:
    files = [str(f) for f in iter_files(paths, suffixes=suffixes)]
    checker = default_checker() if spell_checker is None else spell_checker
    results: Dict[str, List[Issue]] = {}
    if jobs and jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futs = {ex.submit(check_file, f, checker): f for f in files}
            for fut in as_completed(futs):
                results[futs[fut]] = fut.result()
    else:
        for f in files:
            results[f] = check_file(f, checker)
    # file order stays the order the paths were walked in
    return [issue for f in files for issue in results[f]]


__all__ = ["Issue", "Scanner", "check_text", "check_file", "check_paths"]

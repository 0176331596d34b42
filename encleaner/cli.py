from __future__ import annotations

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .checker import Issue, Scanner
from .config import SEVERITIES, load_config
from .differ import diff_words, format_inline
from .file_scanner import DEFAULT_SUFFIXES, iter_files, read_text
from .fixer import apply_suggestions, select_non_overlapping
from .spellcheck import default_checker
from .suggestions import CATEGORIES, Suggestion, SuggestionBuilder

SEV_ORDER = {"INFO": 0, "WARN": 1, "ERROR": 2}

Finding = Tuple[Issue, Suggestion]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="encleaner",
        description="Check English text files for spelling, capitalization, punctuation and spacing issues",
    )
    p.add_argument("paths", nargs="+", help="files or directories to check")
    p.add_argument("--json", action="store_true", help="print findings as JSON")
    p.add_argument("--config", help="TOML file with a [tool.encleaner] table (e.g. pyproject.toml)")
    p.add_argument("--fail-on-issue", action="store_true", help="exit with status 1 when anything is found")
    p.add_argument("--dict", action="append", dest="dict_files", metavar="FILE",
                   help="personal word list: txt (one word per line), json or yaml (repeatable)")
    p.add_argument("--fix", action="store_true", help="apply the primary suggestion of every non-overlapping finding and rewrite the file")
    p.add_argument("--diff", action="store_true", help="print a word diff of the fixes (without --fix nothing is written)")
    p.add_argument("--min-severity", choices=list(SEVERITIES), default=None, help="hide findings below this severity (default: INFO)")
    p.add_argument("--category", action="append", dest="categories", choices=list(CATEGORIES),
                   help="only report these categories (repeatable)")
    p.add_argument("--diff-window", type=int, default=None, help="diff lookahead window in tokens (default: 4)")
    p.add_argument("--jobs", type=int, default=1, help="number of files checked in parallel")
    p.add_argument("--all-files", action="store_true",
                   help=f"check every file in directories, not only {', '.join(DEFAULT_SUFFIXES)}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return p


def offset_to_linecol(text: str, idx: int) -> Tuple[int, int]:
    # 1-based line/col
    if idx <= 0:
        return 1, 1
    line = text.count("\n", 0, idx) + 1
    last_nl = text.rfind("\n", 0, idx)
    return line, idx - last_nl


def _analyze(path: Path, scanner: Scanner, builder: SuggestionBuilder) -> Tuple[Path, Optional[str], List[Finding]]:
    content = read_text(path)
    if content is None:
        return path, None, []
    issues = scanner.scan(content)
    return path, content, list(zip(issues, builder.build(issues, content)))


def _keep(finding: Finding, min_severity: str, categories: Optional[List[str]]) -> bool:
    issue, suggestion = finding
    if SEV_ORDER.get(issue.severity, 1) < SEV_ORDER[min_severity]:
        return False
    return not categories or suggestion.category in categories


def _record(path: Path, content: str, finding: Finding) -> Dict[str, Any]:
    issue, suggestion = finding
    line, col = offset_to_linecol(content, issue.offset)
    data = suggestion.to_dict()
    data.update({"file": str(path), "line": line, "col": col, "severity": issue.severity, "message": issue.message})
    return data


def _print_text(path: Path, content: str, finding: Finding) -> None:
    issue, suggestion = finding
    line, col = offset_to_linecol(content, issue.offset)
    msg = f"{path.resolve()}:{line}:{col}: [{issue.severity}] {issue.message}"
    extra = []
    if issue.snippet.strip():
        extra.append(issue.snippet)
    if suggestion.primary_replacement != suggestion.original_text:
        extra.append(f"suggest: {suggestion.primary_replacement!r}")
    extra.append(f"rule: {issue.rule_id}")
    print(msg + " | " + " | ".join(extra))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.config and not Path(args.config).is_file():
        print(f"[warn] config file {args.config} not found, using defaults", file=sys.stderr)
    try:
        cfg = load_config(args.config)
    except ValueError as e:
        print(f"[error] failed to load config: {e}", file=sys.stderr)
        return 2

    dict_files = args.dict_files or cfg.dict_files
    min_severity = args.min_severity or cfg.min_severity
    categories = args.categories or cfg.categories
    window = cfg.diff_window if args.diff_window is None else args.diff_window
    if window < 1:
        print("[error] --diff-window must be >= 1", file=sys.stderr)
        return 2

    try:
        speller = default_checker(dict_files)
    except (OSError, ValueError) as e:
        print(f"[error] failed to load word list: {e}", file=sys.stderr)
        return 2
    scanner = Scanner(speller)
    builder = SuggestionBuilder(speller, limit=cfg.suggestion_limit)

    files = list(iter_files(args.paths, suffixes=None if args.all_files else DEFAULT_SUFFIXES))
    if args.jobs and args.jobs > 1:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            results = list(ex.map(lambda f: _analyze(f, scanner, builder), files))
    else:
        results = [_analyze(f, scanner, builder) for f in files]

    total = 0
    records: List[Dict[str, Any]] = []
    touched = 0
    for path, content, findings in results:
        if content is None:
            print(f"[warn] skipped unreadable file {path}", file=sys.stderr)
            continue
        findings = [f for f in findings if _keep(f, min_severity, categories)]
        total += len(findings)
        if args.json:
            records.extend(_record(path, content, f) for f in findings)
        else:
            for f in findings:
                _print_text(path, content, f)
        if not (args.fix or args.diff) or not findings:
            continue
        fixed = apply_suggestions(content, select_non_overlapping(s for _i, s in findings))
        if fixed == content:
            continue
        if args.diff:
            # keep stdout valid JSON under --json
            out = sys.stderr if args.json else sys.stdout
            print(f"--- {path}", file=out)
            print(format_inline(diff_words(content, fixed, window=window)), file=out)
        if args.fix:
            path.write_text(fixed, encoding="utf-8")
            touched += 1

    if args.json:
        print(json.dumps(records, ensure_ascii=False, indent=2))
    elif total == 0:
        print("No issues found.")
    else:
        print(f"Total: {total} issue(s)")
    if touched:
        print(f"Fixed {touched} file(s)", file=sys.stderr if args.json else sys.stdout)
    if args.fail_on_issue and total:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

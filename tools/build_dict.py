"""
Bootstrap a personal word list from existing documents.
- Walks the given files/directories, collects word tokens and counts them.
- Writes one word per line (words.txt), ready for ``encleaner --dict``.

Example:
  python tools/build_dict.py docs/ --out words.txt --min-freq 3 --unknown-only

--unknown-only keeps only words the default English dictionary does not
already know (project names, jargon), which is usually what you want.
"""
from __future__ import annotations

import argparse
from collections import Counter
from typing import Iterable

from encleaner.file_scanner import DEFAULT_SUFFIXES, iter_files, read_text
from encleaner.rules import tokenize
from encleaner.spellcheck import default_checker


def gather_tokens(paths: Iterable[str], min_length: int = 3) -> Counter:
    cnt: Counter = Counter()
    for p in iter_files(paths, suffixes=DEFAULT_SUFFIXES):
        s = read_text(p)
        if not s:
            continue
        for tok in tokenize(s):
            if tok.length >= min_length:
                cnt[tok.text.lower()] += 1
    return cnt


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument('paths', nargs='+', help='files/directories to read')
    ap.add_argument('--out', default='words.txt', help='output file (default: words.txt)')
    ap.add_argument('--min-freq', type=int, default=2, help='minimum number of occurrences (default: 2)')
    ap.add_argument('--unknown-only', action='store_true', help='drop words the default dictionary already knows')
    args = ap.parse_args(argv)

    cnt = gather_tokens(args.paths)
    words = [w for w, c in cnt.items() if c >= args.min_freq]
    if args.unknown_only:
        checker = default_checker()
        words = [w for w in words if not checker.correct(w)]
    words.sort()
    with open(args.out, 'w', encoding='utf-8') as f:
        f.write("\n".join(words) + ("\n" if words else ""))
    print(f"Wrote {len(words)} words to {args.out}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())

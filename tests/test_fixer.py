from itertools import permutations

import pytest

from encleaner import (
    Correction,
    IndexOutOfRangeError,
    MalformedInputError,
    OverlappingCorrectionsError,
    apply_corrections,
)
from encleaner.fixer import apply_suggestions, select_non_overlapping
from encleaner.suggestions import Suggestion


def _sug(offset, length, original, primary):
    return Suggestion(
        id=f"t_{offset}_{length}",
        kind="spelling",
        rule_id="SPELL_UNKNOWN",
        category="spelling",
        original_text=original,
        primary_replacement=primary,
        alternatives=(primary,) if primary != original else (),
        offset=offset,
        length=length,
        explanation="",
    )


def test_single_spelling_fix():
    assert apply_corrections("Teh quick fox", [Correction(0, 3, "The")]) == "The quick fox"


def test_result_does_not_depend_on_order():
    text = "Teh quick fox jumpd"
    corrections = [Correction(0, 3, "The"), Correction(14, 5, "jumped"), Correction(19, 0, ".")]
    results = {apply_corrections(text, list(p)) for p in permutations(corrections)}
    assert results == {"The quick fox jumped."}


def test_insertion_at_start_of_replaced_range():
    text = "Hello world  "
    out = apply_corrections(text, [Correction(11, 0, "."), Correction(11, 2, " ")])
    assert out == "Hello world. "


def test_empty_request_returns_text():
    assert apply_corrections("unchanged", []) == "unchanged"


@pytest.mark.parametrize("corrections", [
    [Correction(0, 4, "x"), Correction(2, 3, "y")],
    [Correction(3, 0, "x"), Correction(3, 0, "y")],
    [Correction(0, 5, "x"), Correction(2, 0, "y")],
    [Correction(1, 2, "x"), Correction(1, 2, "x")],
])
def test_overlap_is_rejected(corrections):
    with pytest.raises(OverlappingCorrectionsError):
        apply_corrections("abcdefgh", corrections)


def test_best_effort_mode_lets_lower_offset_win():
    corrections = [Correction(1, 3, "X"), Correction(2, 2, "Y")]
    with pytest.raises(OverlappingCorrectionsError):
        apply_corrections("abcdef", corrections)
    assert apply_corrections("abcdef", corrections, strict=False) == "aXf"


@pytest.mark.parametrize("correction", [
    Correction(10, 5, "x"),
    Correction(-1, 1, "x"),
    Correction(2, -1, "x"),
    Correction(13, 0, "x"),
])
def test_out_of_range(correction):
    with pytest.raises(IndexOutOfRangeError):
        apply_corrections("Hello world.", [Correction(0, 1, "h"), correction])


def test_malformed_input():
    with pytest.raises(MalformedInputError):
        apply_corrections(None, [])
    with pytest.raises(MalformedInputError):
        apply_corrections("abc", [Correction(0, 1, None)])


def test_select_non_overlapping_keeps_first_of_cluster():
    sugs = [
        _sug(8, 10, "JavaScript", "JavaScript"),   # no-op, dropped
        _sug(8, 10, "JavaScript", "javascript"),
        _sug(12, 2, "Sc", "sc"),                   # inside previous
        _sug(18, 0, "", "."),
        _sug(18, 0, "", "!"),                      # second insertion at one point
    ]
    picked = select_non_overlapping(sugs)
    assert [(s.offset, s.primary_replacement) for s in picked] == [(8, "javascript"), (18, ".")]
    assert apply_suggestions("We like JavaScript", picked) == "We like javascript."

import pytest

from encleaner import MalformedInputError, diff_words
from encleaner.differ import (
    ADDED,
    REMOVED,
    SAME,
    DiffSegment,
    diff_stats,
    format_inline,
    reconstruct,
    side_by_side,
)


def _pairs(segments):
    return [(s.kind, s.value) for s in segments]


def test_insertion():
    assert _pairs(diff_words("I like cats", "I really like cats")) == [
        (SAME, "I"), (SAME, " "), (ADDED, "really "), (SAME, "like"), (SAME, " "), (SAME, "cats"),
    ]


def test_deletion():
    assert _pairs(diff_words("I really like cats", "I like cats")) == [
        (SAME, "I"), (SAME, " "), (REMOVED, "really "), (SAME, "like"), (SAME, " "), (SAME, "cats"),
    ]


def test_substitution():
    assert _pairs(diff_words("the cat sat", "the dog sat")) == [
        (SAME, "the"), (SAME, " "), (REMOVED, "cat"), (ADDED, "dog"), (SAME, " "), (SAME, "sat"),
    ]


def test_exhausted_streams():
    assert _pairs(diff_words("", "abc def")) == [(ADDED, "abc def")]
    assert _pairs(diff_words("abc def", "")) == [(REMOVED, "abc def")]
    assert diff_words("", "") == []
    assert _pairs(diff_words("a", "a b c")) == [(SAME, "a"), (ADDED, " b c")]


def test_lookahead_window_is_configurable():
    original, corrected = "a b", "x y z w a b"
    wide = diff_words(original, corrected, window=20)
    assert _pairs(wide) == [(ADDED, "x y z w "), (SAME, "a"), (SAME, " "), (SAME, "b")]
    narrow = diff_words(original, corrected)
    assert narrow != wide
    assert reconstruct(narrow) == (original, corrected)


@pytest.mark.parametrize("original,corrected", [
    ("I like cats", "I really like cats"),
    ("Teh quick  fox", "The quick fox."),
    ("  leading and trailing  ", "leading\nand\ttrailing"),
    ("one two three four five six", "six five four three two one"),
    ("same text", "same text"),
    ("", "new"),
    ("a b c d e f g h", "a x b y c z d"),
    ("i went too the store.  it was closed", "I went to the store. It was closed."),
])
def test_round_trip(original, corrected):
    segments = diff_words(original, corrected)
    assert reconstruct(segments) == (original, corrected)
    assert "".join(s.value for s in segments if s.kind in (SAME, REMOVED)) == original
    assert "".join(s.value for s in segments if s.kind in (SAME, ADDED)) == corrected


def test_bad_input():
    with pytest.raises(MalformedInputError):
        diff_words(None, "x")
    with pytest.raises(MalformedInputError):
        diff_words("x", 3)
    with pytest.raises(ValueError):
        diff_words("a", "b", window=0)


def test_views_and_stats():
    segments = diff_words("I like cats", "I really like cats")
    assert format_inline(segments) == "I {+really +}like cats"
    assert diff_stats(segments) == {SAME: 3, ADDED: 1, REMOVED: 0}
    left, right = side_by_side(segments)
    assert "".join(s.value for s in left) == "I like cats"
    assert "".join(s.value for s in right) == "I really like cats"
    assert format_inline([DiffSegment(REMOVED, "Teh"), DiffSegment(ADDED, "The")]) == "[-Teh-]{+The+}"
    assert segments[2].to_dict() == {"type": ADDED, "value": "really "}

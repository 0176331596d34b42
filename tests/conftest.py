import pytest

from encleaner.spellcheck import SpellChecker

WORDS = [
    "a", "and", "brown", "cat", "cats", "closed", "fox", "hello", "here", "i",
    "is", "it", "jumped", "like", "meeting", "need", "quick", "really", "store",
    "tea", "ten", "test", "the", "then", "this", "to", "too", "was", "we",
    "went", "world",
]


@pytest.fixture
def speller():
    return SpellChecker(WORDS)


@pytest.fixture
def words():
    return list(WORDS)

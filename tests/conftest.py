import pytest

from lexicon import load_lexicon


SMALL_WORDS = [
    "elder", "crepe", "enter", "erode", "lever", "ember", "wider", "udder",
    "crane", "crate", "trace", "react", "eerie", "geese", "sheep", "spare",
    "spear", "pears", "reaps", "alert", "alter", "later", "skill", "kills",
]


@pytest.fixture
def small_words():
    return list(SMALL_WORDS)


@pytest.fixture(scope="session")
def bundled_words():
    return load_lexicon().words

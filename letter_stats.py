"""Letter occurrence statistics over a set of candidate words."""

from __future__ import annotations

import string
from typing import Sequence

import numpy as np

ALPHABET = string.ascii_lowercase
_A = ord("a")


def letter_index(letter: str) -> int:
    """Return the 0-25 index of a lowercase letter."""
    idx = ord(letter) - _A
    if not 0 <= idx < 26:
        raise ValueError(f"not a lowercase letter: {letter!r}")
    return idx


def _encode(words: Sequence[str], word_length: int) -> np.ndarray:
    """Encode *words* as an (n, word_length) array of letter indices."""
    bad = [w for w in words if len(w) != word_length]
    if bad:
        raise ValueError(
            f"Words with wrong length (expected {word_length}): {bad[:5]}"
        )
    raw = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
    codes = raw.astype(np.int64).reshape(-1, word_length) - _A
    if codes.size and (codes.min() < 0 or codes.max() > 25):
        raise ValueError("words must contain only the letters a-z")
    return codes


class LetterStatistics:
    """Positional and whole-word letter counts computed from one word set.

    Parameters
    ----------
    positional : np.ndarray
        ``(word_length, 26)`` matrix; entry ``[i, j]`` is the number of
        words with letter ``j`` at position ``i``.
    num_words : int
        Size of the word set the counts were taken from.

    Use :meth:`compute` rather than building instances by hand.
    """

    def __init__(self, positional: np.ndarray, num_words: int) -> None:
        self._positional = positional
        self._positional.setflags(write=False)
        self._totals = positional.sum(axis=0)
        self._totals.setflags(write=False)
        self._num_words = num_words

    @classmethod
    def compute(cls, words: Sequence[str], word_length: int = 5) -> LetterStatistics:
        """Count letters in *words*. An empty sequence gives all-zero counts."""
        words = list(words)
        positional = np.zeros((word_length, 26), dtype=np.int64)
        if words:
            codes = _encode(words, word_length)
            for i in range(word_length):
                positional[i] = np.bincount(codes[:, i], minlength=26)
        return cls(positional, len(words))

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    @property
    def positional(self) -> np.ndarray:
        return self._positional

    @property
    def totals(self) -> np.ndarray:
        """Occurrences of each letter over all words and positions."""
        return self._totals

    @property
    def word_length(self) -> int:
        return self._positional.shape[0]

    def __len__(self) -> int:
        return self._num_words

    def positional_count(self, position: int, letter: str) -> int:
        return int(self._positional[position, letter_index(letter)])

    def total_count(self, letter: str) -> int:
        return int(self._totals[letter_index(letter)])

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def max_positional(self, position: int) -> int:
        """Largest count at *position* (0 for an empty word set)."""
        return int(self._positional[position].max())

    @property
    def max_total(self) -> int:
        """Largest whole-word letter count (0 for an empty word set)."""
        return int(self._totals.max())

    def most_common(self, position: int) -> str | None:
        """Most frequent letter at *position*, first in alphabet order on ties.

        Returns None when nothing was counted.
        """
        row = self._positional[position]
        if not row.any():
            return None
        return ALPHABET[int(row.argmax())]

    def __repr__(self) -> str:
        return (
            f"LetterStatistics(num_words={self._num_words}, "
            f"word_length={self.word_length})"
        )

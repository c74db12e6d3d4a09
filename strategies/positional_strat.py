"""Positional strategy: sum of per-position letter counts."""

from __future__ import annotations

from knowledge import KnowledgeState
from letter_stats import LetterStatistics
from strategy import Strategy


class PositionalStrategy(Strategy):
    """Score a word by how many candidates share each of its letters in place."""

    @property
    def name(self) -> str:
        return "Positional"

    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        return float(sum(stats.positional_count(i, ch) for i, ch in enumerate(word)))


class ProductStrategy(Strategy):
    """Multiply the per-position counts instead of adding them.

    A letter no candidate has at that position zeroes the whole score, so
    this strongly prefers words whose every letter is common in place.
    """

    @property
    def name(self) -> str:
        return "Product"

    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        score = 1
        for i, ch in enumerate(word):
            score *= stats.positional_count(i, ch)
        return float(score)

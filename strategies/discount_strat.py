"""Discounted strategy: positional counts plus whole-word letter counts.

Letters already known to be in the target contribute only half of their
whole-word count, so the ranking prefers words that can reveal new letters
over words that merely re-confirm known ones.
"""

from __future__ import annotations

from knowledge import KnowledgeState
from letter_stats import LetterStatistics
from strategy import Strategy

KNOWN_LETTER_DISCOUNT = 0.5


def discount(letter: str, known: frozenset[str]) -> float:
    """Weight of a letter's whole-word count given the letters *known* present."""
    return KNOWN_LETTER_DISCOUNT if letter in known else 1.0


class DiscountedStrategy(Strategy):
    """Sum of positional counts plus discounted total counts of distinct letters."""

    @property
    def name(self) -> str:
        return "Discounted"

    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        known = state.known_present()
        positional = sum(stats.positional_count(i, ch) for i, ch in enumerate(word))
        total = 0.0
        for ch in set(word):
            total += stats.total_count(ch) * discount(ch, known)
        return positional + total


class NormalizedStrategy(Strategy):
    """Like Discounted, but each term is scaled into [0, 1] before adding.

    The positional term divides by the largest count at that position and the
    total term by the largest whole-word count, so neither dominates on big
    dictionaries. A zero maximum (no candidates) contributes nothing.
    """

    @property
    def name(self) -> str:
        return "Normalized"

    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        known = state.known_present()
        positional = 0.0
        for i, ch in enumerate(word):
            peak = stats.max_positional(i)
            if peak:
                positional += stats.positional_count(i, ch) / peak
        total = 0.0
        peak_total = stats.max_total
        if peak_total:
            for ch in set(word):
                total += discount(ch, known) * stats.total_count(ch) / peak_total
        return positional + total

"""Frequency strategy: Discounted scoring boosted by word frequency."""

from __future__ import annotations

from knowledge import KnowledgeState
from letter_stats import LetterStatistics
from strategy import SolverConfig
from strategies.discount_strat import DiscountedStrategy


class FrequencyStrategy(DiscountedStrategy):
    """Scale the Discounted score by ``1 + alpha * weight / max_weight``.

    Common words are likelier targets, so they get up to ``alpha`` extra
    relative score. Without weights this is exactly the Discounted strategy.
    """

    def __init__(self, alpha: float = 0.5) -> None:
        self.alpha = alpha
        self._weights: dict[str, float] = {}
        self._max_weight = 0.0

    @property
    def name(self) -> str:
        return "Frequency"

    def begin_session(self, config: SolverConfig) -> None:
        self._weights = dict(config.weights or {})
        self._max_weight = max(self._weights.values(), default=0.0)

    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        base = super().score(word, stats, state)
        if self._max_weight <= 0:
            return base
        boost = self._weights.get(word, 0.0) / self._max_weight
        return base * (1.0 + self.alpha * boost)

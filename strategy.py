"""Abstract base class for guess-scoring strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from knowledge import KnowledgeState
from letter_stats import LetterStatistics


@dataclass(frozen=True)
class SolverConfig:
    """Settings shared by every session a solver runs.

    Attributes
    ----------
    word_length : int
        Number of letters in each word.
    recompute_stats : bool
        If True, letter statistics are recomputed over the remaining
        candidates every round. If False they are computed once over the
        full dictionary and reused.
    max_rounds : int or None
        Hard cap on guesses per session. None means the dictionary size,
        which a correct solver can never exceed.
    weights : dict[str, float] or None
        Optional relative frequency per word, used by frequency-aware
        strategies. Words missing from the mapping weigh 0.
    """

    word_length: int = 5
    recompute_stats: bool = True
    max_rounds: int | None = None
    weights: dict[str, float] | None = None


class Strategy(ABC):
    """Interface every scoring strategy implements.

    A strategy is callable with ``(word, stats, state)`` and can therefore be
    passed anywhere a plain score function is accepted.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable strategy name (used in reports)."""
        ...

    def begin_session(self, config: SolverConfig) -> None:
        """Called once before a solver starts using this strategy.

        The default implementation does nothing.
        """

    @abstractmethod
    def score(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        """Return the score of *word*; higher is a better guess."""
        ...

    def __call__(self, word: str, stats: LetterStatistics, state: KnowledgeState) -> float:
        return self.score(word, stats, state)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

"""Pick the best guess among the remaining candidates."""

from __future__ import annotations

from typing import Callable, Sequence

from knowledge import KnowledgeState
from letter_stats import LetterStatistics

ScoreFn = Callable[[str, LetterStatistics, KnowledgeState], float]


def rank_and_pick(
    candidates: Sequence[str],
    stats: LetterStatistics,
    state: KnowledgeState,
    score_fn: ScoreFn,
) -> str:
    """Return the highest-scoring candidate; the earliest one wins ties."""
    if not candidates:
        raise ValueError("cannot pick a guess from an empty candidate set")
    best = candidates[0]
    best_score = score_fn(best, stats, state)
    for word in candidates[1:]:
        s = score_fn(word, stats, state)
        if s > best_score:
            best, best_score = word, s
    return best


def rank(
    candidates: Sequence[str],
    stats: LetterStatistics,
    state: KnowledgeState,
    score_fn: ScoreFn,
    top: int | None = None,
) -> list[tuple[str, float]]:
    """Score every candidate and sort best first (stable for equal scores)."""
    scored = [(w, score_fn(w, stats, state)) for w in candidates]
    scored.sort(key=lambda ws: -ws[1])
    return scored if top is None else scored[:top]

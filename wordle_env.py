"""Candidate filtering against accumulated knowledge, plus colour feedback."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from knowledge import KnowledgeState
from letter_stats import ALPHABET


# Colour encoding (display only, elimination works on KnowledgeState):
# 2 = green (correct letter, correct position)
# 1 = yellow (correct letter, wrong position)
# 0 = gray  (letter not present, or already consumed by greens/yellows)


def feedback(secret: str, guess: str) -> tuple[int, ...]:
    """Return the colour tuple for *guess* against *secret*."""
    n = len(secret)
    if len(guess) != n:
        raise ValueError(
            f"guess length ({len(guess)}) != secret length ({n})"
        )

    pat = [0] * n
    remaining = Counter(secret)

    # Pass 1 – greens
    for i, (s, g) in enumerate(zip(secret, guess)):
        if g == s:
            pat[i] = 2
            remaining[g] -= 1

    # Pass 2 – yellows
    for i, g in enumerate(guess):
        if pat[i] == 2:
            continue
        if remaining[g] > 0:
            pat[i] = 1
            remaining[g] -= 1

    return tuple(pat)


def render_pattern(pat: tuple[int, ...]) -> str:
    return "".join({2: "\U0001f7e9", 1: "\U0001f7e8", 0: "⬛"}[c] for c in pat)


def is_consistent(word: str, state: KnowledgeState) -> bool:
    """True if *word* satisfies every position and letter-count fact."""
    if len(word) != state.word_length:
        return False
    for ch, pos in zip(word, state.positions):
        if not pos.allows(ch):
            return False
    counts = Counter(word)
    for letter, fact in zip(ALPHABET, state.counts):
        if not fact.allows(counts[letter]):
            return False
    return True


def filter_candidates(
    state: KnowledgeState,
    candidates: Iterable[str],
) -> list[str]:
    """Keep only candidates consistent with *state*, in their original order."""
    return [w for w in candidates if is_consistent(w, state)]

"""Solver loop: guess, derive feedback, filter, repeat until solved.

One :class:`SolverLoop` holds a dictionary and a scoring strategy and can run
any number of independent sessions, one per target word.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Sequence

from knowledge import KnowledgeState, derive_feedback
from letter_stats import LetterStatistics
from ranker import ScoreFn, rank_and_pick
from strategies import get_strategy
from strategy import SolverConfig, Strategy
from wordle_env import filter_candidates


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------

class SolverError(Exception):
    """Base class for errors that end a single session."""


class InvalidTargetLength(SolverError, ValueError):
    def __init__(self, target: str, word_length: int) -> None:
        super().__init__(
            f"target {target!r} has {len(target)} letters, expected {word_length}"
        )
        self.target = target


class TargetNotInDictionary(SolverError, ValueError):
    def __init__(self, target: str) -> None:
        super().__init__(f"target {target!r} is not in the dictionary")
        self.target = target


class CandidateSetExhausted(SolverError, RuntimeError):
    """Filtering removed every candidate before the target was guessed."""

    def __init__(self, target: str, guesses: list[str]) -> None:
        super().__init__(
            f"no candidates left for {target!r} after guesses {guesses}"
        )
        self.target = target
        self.guesses = list(guesses)


class RoundLimitReached(CandidateSetExhausted):
    """The ``max_rounds`` cap was hit while candidates were still left."""

    def __init__(self, target: str, guesses: list[str], max_rounds: int) -> None:
        SolverError.__init__(
            self,
            f"round limit {max_rounds} reached for {target!r} after guesses {guesses}",
        )
        self.target = target
        self.guesses = list(guesses)
        self.max_rounds = max_rounds


def check_dictionary(words: Sequence[str], word_length: int = 5) -> None:
    """Raise ValueError unless every word is *word_length* lowercase letters."""
    pattern = re.compile(rf"^[a-z]{{{word_length}}}$")
    bad = [w for w in words if not pattern.match(w)]
    if bad:
        raise ValueError(
            f"Dictionary words must be {word_length} letters a-z: {bad[:5]}"
        )


# ------------------------------------------------------------------
# Results
# ------------------------------------------------------------------

class Round(NamedTuple):
    guess: str
    state: KnowledgeState
    candidates: list[str]


@dataclass
class SessionResult:
    target: str
    guesses: list[str] = field(default_factory=list)
    remaining: list[int] = field(default_factory=list)

    @property
    def guess_count(self) -> int:
        return len(self.guesses)


# ------------------------------------------------------------------
# Solver
# ------------------------------------------------------------------

class SolverLoop:
    """Plays sessions against a fixed dictionary with one scoring strategy.

    Parameters
    ----------
    dictionary : sequence of str
        Candidate words, in the order ties are broken.
    strategy : Strategy, callable or None
        Score function ``(word, stats, state) -> float``. None selects the
        default built-in strategy.
    config : SolverConfig or None
        Session settings; defaults to ``SolverConfig()``.

    Raises
    ------
    ValueError
        If a dictionary word is not ``word_length`` lowercase letters.
    """

    def __init__(
        self,
        dictionary: Sequence[str],
        strategy: Strategy | ScoreFn | None = None,
        config: SolverConfig | None = None,
    ) -> None:
        self.config = config or SolverConfig()
        self._dictionary = list(dict.fromkeys(dictionary))
        check_dictionary(self._dictionary, self.config.word_length)
        self._members = set(self._dictionary)
        if strategy is None:
            strategy = get_strategy()
        if isinstance(strategy, Strategy):
            # Each loop configures its own copy; the caller's instance is untouched.
            strategy = copy.copy(strategy)
            strategy.begin_session(self.config)
        self.strategy = strategy
        self._full_stats: LetterStatistics | None = None

    @property
    def dictionary(self) -> list[str]:
        return list(self._dictionary)

    def check_target(self, target: str) -> None:
        """Raise the usage error a session for *target* would fail with."""
        if len(target) != self.config.word_length:
            raise InvalidTargetLength(target, self.config.word_length)
        if target not in self._members:
            raise TargetNotInDictionary(target)

    def _stats(self, candidates: list[str]) -> LetterStatistics:
        if self.config.recompute_stats:
            return LetterStatistics.compute(candidates, self.config.word_length)
        if self._full_stats is None:
            self._full_stats = LetterStatistics.compute(
                self._dictionary, self.config.word_length
            )
        return self._full_stats

    def iter_rounds(self, target: str) -> Iterator[Round]:
        """Play one session against *target*, yielding each round as it ends.

        The last round yielded is the one whose guess equals *target*.

        Raises
        ------
        InvalidTargetLength, TargetNotInDictionary
            Before any guess, if *target* cannot be played.
        CandidateSetExhausted
            If the candidates run out before the target is guessed.
        RoundLimitReached
            If ``max_rounds`` guesses are made without finding the target.
        """
        self.check_target(target)

        state = KnowledgeState.initial(self.config.word_length)
        candidates = list(self._dictionary)
        guesses: list[str] = []
        max_rounds = self.config.max_rounds
        if max_rounds is None:
            max_rounds = len(self._dictionary)

        while len(guesses) < max_rounds:
            stats = self._stats(candidates)
            guess = rank_and_pick(candidates, stats, state, self.strategy)
            guesses.append(guess)
            if guess == target:
                yield Round(guess, state, [target])
                return

            state = derive_feedback(guess, target, state)
            candidates = filter_candidates(state, candidates)
            yield Round(guess, state, candidates)
            if not candidates:
                raise CandidateSetExhausted(target, guesses)

        raise RoundLimitReached(target, guesses, max_rounds)

    def solve(self, target: str) -> SessionResult:
        """Play one session against *target* and return its guesses.

        Raises the same errors as :meth:`iter_rounds`.
        """
        result = SessionResult(target=target)
        for rnd in self.iter_rounds(target):
            result.guesses.append(rnd.guess)
            result.remaining.append(len(rnd.candidates))
        return result


def solve(
    target: str,
    dictionary: Sequence[str],
    strategy: Strategy | ScoreFn | None = None,
    config: SolverConfig | None = None,
) -> SessionResult:
    """Solve a single *target* with a fresh :class:`SolverLoop`."""
    return SolverLoop(dictionary, strategy, config).solve(target)

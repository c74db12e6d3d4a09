"""Knowledge accumulated from the guesses of one solving session.

A :class:`KnowledgeState` holds two families of facts:

  - one :class:`PositionFact` per position: unconstrained, a set of letters
    excluded from that position, or the letter fixed there;
  - one :class:`LetterCount` per letter: a lower bound on its occurrences,
    optionally marked as exact.

States are immutable. Every update returns a new, equally or more
constrained state, so earlier states can be kept for inspection.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace

from letter_stats import ALPHABET, letter_index


class InconsistentKnowledgeError(ValueError):
    """A new fact contradicts one already recorded."""


@dataclass(frozen=True)
class PositionFact:
    """What is known about a single position.

    ``fixed`` set means the letter is known; otherwise ``excluded`` lists the
    letters that cannot occupy the position (empty = unconstrained).
    """

    fixed: str | None = None
    excluded: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_unconstrained(self) -> bool:
        return self.fixed is None and not self.excluded

    def allows(self, letter: str) -> bool:
        if self.fixed is not None:
            return letter == self.fixed
        return letter not in self.excluded

    def fix(self, letter: str) -> PositionFact:
        if self.fixed is not None:
            if self.fixed != letter:
                raise InconsistentKnowledgeError(
                    f"position already fixed to {self.fixed!r}, got {letter!r}"
                )
            return self
        if letter in self.excluded:
            raise InconsistentKnowledgeError(
                f"cannot fix {letter!r}: already excluded here"
            )
        return PositionFact(fixed=letter)

    def exclude(self, letter: str) -> PositionFact:
        # Fixed is terminal; excluding another letter adds nothing.
        if self.fixed is not None:
            if self.fixed == letter:
                raise InconsistentKnowledgeError(
                    f"cannot exclude {letter!r}: position is fixed to it"
                )
            return self
        if letter in self.excluded:
            return self
        return PositionFact(excluded=self.excluded | {letter})


@dataclass(frozen=True)
class LetterCount:
    """Occurrences of one letter: at least ``minimum``, exactly if ``exact``."""

    minimum: int = 0
    exact: bool = False

    def allows(self, n: int) -> bool:
        return n == self.minimum if self.exact else n >= self.minimum

    def tighten(self, other: LetterCount) -> LetterCount:
        """Combine with *other*, keeping the stronger of the two facts."""
        if self.exact and other.exact:
            if self.minimum != other.minimum:
                raise InconsistentKnowledgeError(
                    f"exactly {self.minimum} vs exactly {other.minimum}"
                )
            return self
        if self.exact:
            if other.minimum > self.minimum:
                raise InconsistentKnowledgeError(
                    f"exactly {self.minimum} vs at least {other.minimum}"
                )
            return self
        if other.exact:
            if other.minimum < self.minimum:
                raise InconsistentKnowledgeError(
                    f"at least {self.minimum} vs exactly {other.minimum}"
                )
            return other
        if other.minimum > self.minimum:
            return other
        return self


_NO_COUNT = LetterCount()


@dataclass(frozen=True)
class KnowledgeState:
    positions: tuple[PositionFact, ...]
    counts: tuple[LetterCount, ...] = (_NO_COUNT,) * 26

    @classmethod
    def initial(cls, word_length: int = 5) -> KnowledgeState:
        """A state with no facts: every word of *word_length* is consistent."""
        return cls(positions=(PositionFact(),) * word_length)

    @property
    def word_length(self) -> int:
        return len(self.positions)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count_fact(self, letter: str) -> LetterCount:
        return self.counts[letter_index(letter)]

    def known_present(self) -> frozenset[str]:
        """Letters known to occur at least once."""
        present = {ALPHABET[i] for i, c in enumerate(self.counts) if c.minimum > 0}
        present.update(p.fixed for p in self.positions if p.fixed is not None)
        return frozenset(present)

    def excluded_letters(self) -> frozenset[str]:
        """Letters known not to occur at all."""
        return frozenset(
            ALPHABET[i] for i, c in enumerate(self.counts)
            if c.exact and c.minimum == 0
        )

    def fixed_letters(self) -> dict[int, str]:
        return {i: p.fixed for i, p in enumerate(self.positions) if p.fixed is not None}

    def is_unconstrained(self) -> bool:
        return (
            all(p.is_unconstrained for p in self.positions)
            and all(c == _NO_COUNT for c in self.counts)
        )

    # ------------------------------------------------------------------
    # Tightening
    # ------------------------------------------------------------------

    def fix_position(self, position: int, letter: str) -> KnowledgeState:
        positions = list(self.positions)
        positions[position] = positions[position].fix(letter)
        return replace(self, positions=tuple(positions))

    def exclude_at(self, position: int, letter: str) -> KnowledgeState:
        positions = list(self.positions)
        positions[position] = positions[position].exclude(letter)
        return replace(self, positions=tuple(positions))

    def tighten_count(self, letter: str, fact: LetterCount) -> KnowledgeState:
        idx = letter_index(letter)
        counts = list(self.counts)
        counts[idx] = counts[idx].tighten(fact)
        return replace(self, counts=tuple(counts))

    def exclude_letter(self, letter: str) -> KnowledgeState:
        """Record that *letter* does not occur anywhere in the target."""
        return self.tighten_count(letter, LetterCount(0, exact=True))

    def describe(self) -> str:
        """Compact one-line summary, e.g. ``e.d?r +e>=2 -aiou``."""
        cells = []
        for p in self.positions:
            if p.fixed is not None:
                cells.append(p.fixed)
            elif p.excluded:
                cells.append("?")
            else:
                cells.append(".")
        parts = ["".join(cells)]
        for i, c in enumerate(self.counts):
            if c.minimum > 0:
                op = "=" if c.exact else ">="
                parts.append(f"+{ALPHABET[i]}{op}{c.minimum}")
        absent = "".join(sorted(self.excluded_letters()))
        if absent:
            parts.append(f"-{absent}")
        return " ".join(parts)


def derive_feedback(guess: str, target: str, state: KnowledgeState) -> KnowledgeState:
    """Tighten *state* with everything revealed by guessing *guess* against *target*.

    Deriving twice from the same pair leaves the state unchanged the second
    time.

    Raises
    ------
    ValueError
        If the words and the state disagree on length.
    InconsistentKnowledgeError
        If a derived fact contradicts *state* (the state was built against
        a different target).
    """
    n = state.word_length
    if len(guess) != n or len(target) != n:
        raise ValueError(
            f"guess ({len(guess)}) and target ({len(target)}) must both have "
            f"length {n}"
        )

    in_target = Counter(target)

    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            state = state.fix_position(i, g)
        elif in_target[g]:
            state = state.exclude_at(i, g)
        else:
            state = state.exclude_letter(g)

    for letter, g_count in Counter(guess).items():
        t_count = in_target[letter]
        if g_count <= t_count:
            fact = LetterCount(g_count)
        else:
            fact = LetterCount(t_count, exact=True)
        state = state.tighten_count(letter, fact)

    return state

import pytest

from knowledge import (
    InconsistentKnowledgeError,
    KnowledgeState,
    LetterCount,
    PositionFact,
    derive_feedback,
)


def test_initial_state_is_unconstrained():
    state = KnowledgeState.initial()
    assert state.word_length == 5
    assert state.is_unconstrained()
    assert state.known_present() == frozenset()
    assert state.count_fact("q") == LetterCount(0, exact=False)


def test_exact_matches_fix_positions():
    state = derive_feedback("enter", "elder", KnowledgeState.initial())
    assert state.fixed_letters() == {0: "e", 3: "e", 4: "r"}
    assert state.positions[1].is_unconstrained
    assert state.positions[2].is_unconstrained
    assert state.count_fact("n") == LetterCount(0, exact=True)
    assert state.count_fact("t") == LetterCount(0, exact=True)
    assert state.count_fact("e") == LetterCount(2)
    assert state.count_fact("r") == LetterCount(1)
    assert state.known_present() == {"e", "r"}
    assert state.excluded_letters() == {"n", "t"}


def test_misplaced_letters_are_excluded_in_place():
    state = derive_feedback("crepe", "elder", KnowledgeState.initial())
    assert state.positions[1].excluded == {"r"}
    assert state.positions[2].excluded == {"e"}
    assert state.positions[4].excluded == {"e"}
    assert state.positions[0].is_unconstrained
    assert state.excluded_letters() == {"c", "p"}
    assert state.count_fact("e") == LetterCount(2)


def test_overguessed_letter_gets_exact_count():
    state = derive_feedback("eerie", "elder", KnowledgeState.initial())
    assert state.count_fact("e") == LetterCount(2, exact=True)
    assert state.count_fact("r") == LetterCount(1)
    assert state.count_fact("i") == LetterCount(0, exact=True)


def test_derivation_is_idempotent():
    once = derive_feedback("crepe", "elder", KnowledgeState.initial())
    twice = derive_feedback("crepe", "elder", once)
    assert once == twice


def test_facts_only_tighten():
    state = KnowledgeState.initial()
    first = derive_feedback("crepe", "elder", state)
    second = derive_feedback("enter", "elder", first)
    for a, b in zip(first.positions, second.positions):
        if a.fixed is not None:
            assert b.fixed == a.fixed
        else:
            assert b.fixed is not None or a.excluded <= b.excluded
    for a, b in zip(first.counts, second.counts):
        assert b.minimum >= a.minimum
        assert b.exact or not a.exact
    # earlier states are untouched
    assert state.is_unconstrained()


def test_fixed_position_is_terminal():
    state = KnowledgeState.initial().fix_position(0, "e")
    assert state.exclude_at(0, "x").positions[0] == PositionFact(fixed="e")
    assert state.fix_position(0, "e") == state


def test_contradictions_are_reported():
    state = KnowledgeState.initial().fix_position(0, "e")
    with pytest.raises(InconsistentKnowledgeError):
        state.fix_position(0, "c")
    with pytest.raises(InconsistentKnowledgeError):
        state.exclude_at(0, "e")

    exact = KnowledgeState.initial().exclude_letter("z")
    with pytest.raises(InconsistentKnowledgeError):
        exact.tighten_count("z", LetterCount(1))
    with pytest.raises(InconsistentKnowledgeError):
        KnowledgeState.initial().tighten_count("a", LetterCount(2)).tighten_count(
            "a", LetterCount(1, exact=True)
        )


def test_feedback_from_another_target_conflicts():
    state = derive_feedback("enter", "elder", KnowledgeState.initial())
    with pytest.raises(InconsistentKnowledgeError):
        derive_feedback("crane", "crane", state)


def test_letter_count_tighten():
    at_least_one = LetterCount(1)
    assert at_least_one.tighten(LetterCount(2)) == LetterCount(2)
    assert LetterCount(2).tighten(at_least_one) == LetterCount(2)
    assert at_least_one.tighten(LetterCount(1, exact=True)) == LetterCount(1, exact=True)
    assert LetterCount(1, exact=True).tighten(at_least_one) == LetterCount(1, exact=True)
    assert LetterCount(2, exact=True).allows(2)
    assert not LetterCount(2, exact=True).allows(3)
    assert LetterCount(2).allows(3)


def test_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        derive_feedback("elders", "elder", KnowledgeState.initial())


def test_describe():
    state = derive_feedback("enter", "elder", KnowledgeState.initial())
    assert state.describe() == "e..er +e>=2 +r>=1 -nt"
    assert KnowledgeState.initial().describe() == "....."

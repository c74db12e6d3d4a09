from collections import Counter

import pytest

from knowledge import KnowledgeState
from solver import (
    CandidateSetExhausted,
    InvalidTargetLength,
    RoundLimitReached,
    SolverError,
    SolverLoop,
    TargetNotInDictionary,
    solve,
)
from strategies import get_strategy, strategy_names
from strategy import SolverConfig
from wordle_env import is_consistent

FOUR = ["elder", "crepe", "enter", "erode"]


def test_first_guess_can_solve():
    result = solve("elder", FOUR)
    assert result.guesses == ["elder"]
    assert result.guess_count == 1
    assert result.remaining == [1]


def test_solves_after_narrowing():
    result = solve("erode", FOUR)
    assert result.guesses == ["elder", "erode"]
    assert result.remaining == [1, 1]


def test_target_not_in_dictionary_runs_no_round():
    calls = []

    def score(word, stats, state):
        calls.append(word)
        return 0.0

    with pytest.raises(TargetNotInDictionary) as excinfo:
        solve("zebra", FOUR, strategy=score)
    assert calls == []
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, SolverError)


def test_invalid_target_length():
    with pytest.raises(InvalidTargetLength):
        solve("eld", FOUR)
    with pytest.raises(InvalidTargetLength):
        solve("elders", FOUR)


def test_round_cap_stops_the_session():
    loop = SolverLoop(FOUR, config=SolverConfig(max_rounds=1))
    with pytest.raises(RoundLimitReached) as excinfo:
        loop.solve("erode")
    assert excinfo.value.guesses == ["elder"]
    assert isinstance(excinfo.value, CandidateSetExhausted)
    assert "round limit 1" in str(excinfo.value)
    assert "no candidates left" not in str(excinfo.value)


def test_plain_score_function_walks_the_candidates(small_words):
    result = solve(small_words[-1], small_words, strategy=lambda w, s, k: 0.0)
    assert result.guesses[-1] == small_words[-1]
    # every guess is the first remaining candidate, so guesses follow list order
    positions = [small_words.index(g) for g in result.guesses]
    assert positions == sorted(positions)


@pytest.mark.parametrize("name", strategy_names())
@pytest.mark.parametrize("recompute", [True, False])
def test_every_target_is_solved(small_words, name, recompute):
    loop = SolverLoop(small_words, get_strategy(name), SolverConfig(recompute_stats=recompute))
    for target in small_words:
        result = loop.solve(target)
        assert result.guesses[-1] == target
        assert result.guess_count <= len(small_words)
        assert len(set(result.guesses)) == result.guess_count


def test_session_properties_on_bundled_list(bundled_words):
    loop = SolverLoop(bundled_words)
    for target in bundled_words[::10]:
        prev = len(bundled_words)
        state = KnowledgeState.initial()
        for rnd in loop.iter_rounds(target):
            # monotonic shrink and target retention
            assert len(rnd.candidates) <= prev
            assert target in rnd.candidates
            prev = len(rnd.candidates)
            # knowledge only tightens, and the target satisfies it
            for old, new in zip(state.counts, rnd.state.counts):
                assert new.minimum >= old.minimum
            assert is_consistent(target, rnd.state)
            # fixed letters are reflected in the count facts
            for letter, n in Counter(rnd.state.fixed_letters().values()).items():
                assert rnd.state.count_fact(letter).minimum >= n
            state = rnd.state
        assert rnd.guess == target


def test_sessions_do_not_share_state():
    loop = SolverLoop(FOUR)
    first = loop.solve("erode")
    loop.solve("crepe")
    assert loop.solve("erode") == first


def test_duplicate_dictionary_words_are_collapsed():
    loop = SolverLoop(FOUR + ["elder"])
    assert loop.dictionary == FOUR


def test_round_cap_of_zero_plays_no_round():
    loop = SolverLoop(FOUR, config=SolverConfig(max_rounds=0))
    with pytest.raises(RoundLimitReached) as excinfo:
        loop.solve("elder")
    assert excinfo.value.guesses == []


def test_loops_sharing_a_strategy_keep_their_own_config():
    words = ["crane", "crate", "trace"]
    strat = get_strategy("Frequency")
    weighted = SolverLoop(words, strat, SolverConfig(weights={"trace": 1.0}))
    plain = SolverLoop(words, strat, SolverConfig())
    assert weighted.solve("crane").guesses == ["trace", "crane"]
    assert plain.solve("crane").guesses == ["crate", "crane"]
    # the instance handed in is left unconfigured
    assert SolverLoop(words, strat).solve("crane").guesses == ["crate", "crane"]


@pytest.mark.parametrize("bad", ["Enter", "eld", "elders", "en-er"])
def test_malformed_dictionary_is_rejected_up_front(bad):
    with pytest.raises(ValueError, match="letters a-z"):
        SolverLoop(["elder", "crepe", bad])

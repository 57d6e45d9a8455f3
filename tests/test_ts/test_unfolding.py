"""Tests for limited unfoldings."""

from __future__ import annotations

import pytest

from petrisynth.exceptions import NonDeterministicError
from petrisynth.ts.isomorphism import is_isomorphic
from petrisynth.ts.lts import TransitionSystem, lts_from_arcs
from petrisynth.ts.unfolding import calculate_limited_unfolding


class TestLimitedUnfolding:
    """Tests for calculate_limited_unfolding."""

    def test_word_is_unchanged(self, word_ab):
        unfolding = calculate_limited_unfolding(word_ab)
        assert is_isomorphic(unfolding.ts, word_ab)

    def test_loop_on_path_kept(self, cycle):
        unfolding = calculate_limited_unfolding(cycle)
        assert unfolding.ts.num_states == 2
        assert is_isomorphic(unfolding.ts, cycle)

    def test_join_is_split(self, diamond):
        unfolding = calculate_limited_unfolding(diamond)
        assert unfolding.ts.num_states == 5
        copies = [s for s, original in unfolding.original_state.items() if original == "s3"]
        assert len(copies) == 2

    def test_original_state_mapping(self, diamond):
        unfolding = calculate_limited_unfolding(diamond)
        for arc in unfolding.ts.arcs:
            source = unfolding.original_state[arc.source]
            target = unfolding.original_state[arc.target]
            assert diamond.successor(source, arc.label) == target

    def test_self_loop(self, side_condition):
        unfolding = calculate_limited_unfolding(side_condition)
        initial = unfolding.ts.initial_state
        assert unfolding.ts.successor(initial, "a") == initial

    def test_alphabet_preserved(self):
        ts = lts_from_arcs([("s0", "a", "s1")])
        ts.add_event("b")
        assert calculate_limited_unfolding(ts).ts.alphabet == ("a", "b")

    def test_locations_preserved(self):
        ts = TransitionSystem()
        ts.add_states("s0", "s1")
        ts.add_arc("s0", "a", "s1", location="left")
        unfolding = calculate_limited_unfolding(ts)
        assert [arc.location for arc in unfolding.ts.arcs] == ["left"]

    def test_unreachable_states_dropped(self, cycle):
        cycle.add_state("orphan")
        unfolding = calculate_limited_unfolding(cycle)
        assert "orphan" not in unfolding.original_state.values()

    def test_empty_system(self):
        unfolding = calculate_limited_unfolding(TransitionSystem())
        assert unfolding.ts.num_states == 0

    def test_nondeterministic_rejected(self):
        ts = lts_from_arcs([("s0", "a", "s1"), ("s0", "a", "s2")])
        with pytest.raises(NonDeterministicError):
            calculate_limited_unfolding(ts)

"""Tests for RegionUtility."""

from __future__ import annotations

import pytest

from petrisynth.exceptions import MissingLocationError, UnreachableError
from petrisynth.synthesis.utility import RegionUtility
from petrisynth.ts.lts import Arc, TransitionSystem, word_to_lts
from petrisynth.util.spanning_tree import SpanningTree


def _located(*arcs: tuple[str, str, str, str | None]) -> TransitionSystem:
    ts = TransitionSystem()
    for source, label, target, location in arcs:
        for state in (source, target):
            if state not in ts:
                ts.add_state(state)
        ts.add_arc(source, label, target, location=location)
    return ts


class TestEventIndexing:
    """Tests for event order."""

    def test_event_list_sorted(self):
        utility = RegionUtility(word_to_lts("cab"))
        assert utility.event_list == ("a", "b", "c")
        assert utility.number_of_events == 3
        assert utility.get_event_index("c") == 2
        assert utility.get_event_index("z") == -1

    def test_from_spanning_tree(self, diamond):
        tree = SpanningTree(diamond)
        assert RegionUtility(tree).spanning_tree is tree

    def test_reversed_tree_rejected(self, diamond):
        with pytest.raises(ValueError):
            RegionUtility(SpanningTree.get_reversed(diamond, start="s3"))


class TestParikhVectors:
    """Tests for Parikh vector computation."""

    def test_reaching_vectors(self, diamond):
        utility = RegionUtility(diamond)
        assert utility.get_reaching_parikh_vector("s0") == (0, 0)
        assert utility.get_reaching_parikh_vector("s3") == (1, 1)
        assert utility.get_reaching_parikh_vector("s2") == (0, 1)

    def test_unreachable(self, diamond):
        diamond.add_state("orphan")
        utility = RegionUtility(diamond)
        with pytest.raises(UnreachableError) as info:
            utility.get_reaching_parikh_vector("orphan")
        assert info.value.state == "orphan"

    def test_edge_vector_of_tree_edge_is_zero(self, diamond):
        utility = RegionUtility(diamond)
        assert utility.get_parikh_vector_for_edge(Arc("s0", "a", "s1")) == (0, 0)

    def test_edge_vector_of_chord(self, cycle):
        utility = RegionUtility(cycle)
        assert utility.get_parikh_vector_for_edge(Arc("s1", "b", "s0")) == (1, 1)

    def test_edge_vector_with_unreachable_endpoint(self, cycle):
        cycle.add_state("orphan")
        cycle.add_arc("orphan", "a", "s0")
        utility = RegionUtility(cycle)
        assert utility.get_parikh_vector_for_edge(Arc("orphan", "a", "s0")) == ()


class TestRegionBasis:
    """Tests for get_region_basis."""

    def test_acyclic_basis_is_unit_vectors(self, word_ab):
        basis = RegionUtility(word_ab).get_region_basis()
        assert [r.weights for r in basis] == [(1, 0), (0, 1)]

    def test_diamond_chord_adds_no_constraint(self, diamond):
        basis = RegionUtility(diamond).get_region_basis()
        assert len(basis) == 2

    def test_cycle_basis(self, cycle):
        basis = RegionUtility(cycle).get_region_basis()
        assert [r.weights for r in basis] == [(1, -1)]
        assert all(r.initial_marking == 0 and r.is_pure() for r in basis)

    def test_self_loop_has_no_effect(self, side_condition):
        basis = RegionUtility(side_condition).get_region_basis()
        assert [r.weights for r in basis] == [(0, 1)]

    def test_no_events(self, single_state):
        assert RegionUtility(single_state).get_region_basis() == ()

    def test_cached(self, cycle):
        utility = RegionUtility(cycle)
        assert utility.get_region_basis() is utility.get_region_basis()

    def test_chord_without_parikh_vector_raises(self, cycle, monkeypatch):
        utility = RegionUtility(cycle)
        monkeypatch.setattr(utility, "get_parikh_vector_for_edge", lambda arc: ())
        with pytest.raises(UnreachableError) as info:
            utility.get_region_basis()
        assert info.value.state == "s0"


class TestLocationMap:
    """Tests for get_location_map."""

    def test_no_locations(self, word_ab):
        assert RegionUtility(word_ab).get_location_map() == (None, None)

    def test_all_located(self):
        ts = _located(("s0", "a", "s1", "left"), ("s1", "b", "s2", "right"))
        assert RegionUtility(ts).get_location_map() == ("left", "right")

    def test_single_location_means_none(self):
        ts = _located(("s0", "a", "s1", "here"), ("s1", "b", "s2", "here"))
        assert RegionUtility(ts).get_location_map() == (None, None)

    def test_partial_locations(self):
        ts = _located(("s0", "a", "s1", "left"), ("s1", "b", "s2", None))
        with pytest.raises(MissingLocationError):
            RegionUtility(ts).get_location_map()

    def test_conflicting_locations(self):
        ts = _located(("s0", "a", "s1", "left"), ("s1", "a", "s2", "right"))
        with pytest.raises(MissingLocationError):
            RegionUtility(ts).get_location_map()

"""Tests for breadth-first spanning trees."""

from __future__ import annotations

from petrisynth.ts.lts import Arc, TransitionSystem
from petrisynth.util.spanning_tree import SpanningTree


class TestSpanningTree:
    """Tests for SpanningTree."""

    def test_tree_edges_and_chords(self, diamond):
        tree = SpanningTree(diamond)
        assert tree.start_node == "s0"
        assert tree.chords == (Arc("s2", "a", "s3"),)
        assert len(tree.tree_edges) == 3

    def test_predecessors(self, diamond):
        tree = SpanningTree(diamond)
        assert tree.predecessor("s0") is None
        assert tree.predecessor("s3") == "s1"
        assert tree.predecessor_edge("s3") == Arc("s1", "b", "s3")

    def test_path_from_start(self, diamond):
        tree = SpanningTree(diamond)
        assert tree.path_from_start("s3") == ["s0", "s1", "s3"]
        assert tree.path_from_start("s0") == ["s0"]

    def test_cycle_chord(self, cycle):
        tree = SpanningTree(cycle)
        assert tree.chords == (Arc("s1", "b", "s0"),)

    def test_self_loop_is_chord(self, side_condition):
        tree = SpanningTree(side_condition)
        assert tree.chords == (Arc("s0", "a", "s0"),)

    def test_unreachable_nodes(self, cycle):
        cycle.add_state("orphan")
        cycle.add_arc("orphan", "a", "s0")
        tree = SpanningTree(cycle)
        assert tree.unreachable_nodes == ("orphan",)
        assert not tree.is_reachable("orphan")
        # Arcs leaving unreachable states are neither tree edges nor chords
        assert Arc("orphan", "a", "s0") not in tree.chords

    def test_custom_start(self, word_ab):
        tree = SpanningTree(word_ab, start="s1")
        assert tree.is_reachable("s2")
        assert not tree.is_reachable("s0")

    def test_empty_system(self):
        tree = SpanningTree(TransitionSystem())
        assert tree.start_node is None
        assert tree.chords == ()
        assert tree.unreachable_nodes == ()

    def test_reversed(self, word_ab):
        tree = SpanningTree.get_reversed(word_ab, start="s2")
        assert tree.is_reachable("s0")
        assert tree.path_from_start("s0") == ["s2", "s1", "s0"]


class TestSpanningTreeCache:
    """Tests for SpanningTree.get caching."""

    def test_cached(self, diamond):
        assert SpanningTree.get(diamond) is SpanningTree.get(diamond)

    def test_invalidated_by_modification(self, diamond):
        before = SpanningTree.get(diamond)
        diamond.add_state("extra")
        after = SpanningTree.get(diamond)
        assert after is not before
        assert after.unreachable_nodes == ("extra",)

    def test_keyed_by_direction(self, word_ab):
        assert SpanningTree.get(word_ab) is not SpanningTree.get_reversed(word_ab)

"""Tests for EquivalenceRelation."""

from __future__ import annotations

from petrisynth.util.equivalence import EquivalenceRelation


class TestEquivalenceRelation:
    """Tests for joining and querying classes."""

    def test_empty(self):
        relation: EquivalenceRelation[str] = EquivalenceRelation()
        assert relation.classes() == []
        assert len(relation) == 0

    def test_singletons_implicit(self):
        relation: EquivalenceRelation[str] = EquivalenceRelation()
        assert relation.get_class("a") == frozenset({"a"})
        assert relation.is_equivalent("a", "a")
        assert not relation.is_equivalent("a", "b")

    def test_join(self):
        relation: EquivalenceRelation[str] = EquivalenceRelation()
        assert relation.join_classes("a", "b") == frozenset({"a", "b"})
        assert relation.is_equivalent("b", "a")

    def test_transitive(self):
        relation: EquivalenceRelation[str] = EquivalenceRelation()
        relation.join_classes("a", "b")
        relation.join_classes("c", "b")
        assert relation.is_equivalent("a", "c")
        assert relation.classes() == [frozenset({"a", "b", "c"})]

    def test_separate_classes(self):
        relation: EquivalenceRelation[int] = EquivalenceRelation()
        relation.join_classes(1, 2)
        relation.join_classes(3, 4)
        assert relation.classes() == [frozenset({1, 2}), frozenset({3, 4})]
        assert len(relation) == 2
        assert list(relation) == relation.classes()

    def test_merge_classes(self):
        relation: EquivalenceRelation[int] = EquivalenceRelation()
        relation.join_classes(1, 2)
        relation.join_classes(3, 4)
        relation.join_classes(2, 4)
        assert relation.classes() == [frozenset({1, 2, 3, 4})]

    def test_join_with_self_is_singleton(self):
        relation: EquivalenceRelation[str] = EquivalenceRelation()
        relation.join_classes("a", "a")
        assert relation.classes() == []

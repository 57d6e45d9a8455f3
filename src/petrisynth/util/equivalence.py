"""Equivalence relations built by joining classes.

Used to group failed state separation problems: if {a, b} and {a, c}
cannot be separated, neither can {b, c}, so the maximal failure groups
are the classes of the equivalence relation generated by the failed pairs.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

E = TypeVar("E", bound=Hashable)


class EquivalenceRelation(Generic[E]):
    """Union-find over arbitrary hashable elements.

    Elements never joined with another element are implicit singleton
    classes and are not reported by iteration. Classes are kept in the
    order in which their first element was joined.
    """

    def __init__(self) -> None:
        self._parent: dict[E, E] = {}

    def _find(self, element: E) -> E:
        root = element
        while self._parent.get(root, root) != root:
            root = self._parent[root]
        # Path compression
        while element != root:
            following = self._parent[element]
            self._parent[element] = root
            element = following
        return root

    def join_classes(self, first: E, second: E) -> frozenset[E]:
        """Merge the classes of two elements.

        Returns:
            The merged class
        """
        self._parent.setdefault(first, first)
        self._parent.setdefault(second, second)
        root_first = self._find(first)
        root_second = self._find(second)
        if root_first != root_second:
            self._parent[root_second] = root_first
        return self.get_class(first)

    def get_class(self, element: E) -> frozenset[E]:
        """The class containing ``element`` (a singleton if never joined)."""
        if element not in self._parent:
            return frozenset({element})
        root = self._find(element)
        return frozenset(e for e in self._parent if self._find(e) == root)

    def is_equivalent(self, first: E, second: E) -> bool:
        if first == second:
            return True
        if first not in self._parent or second not in self._parent:
            return False
        return self._find(first) == self._find(second)

    def classes(self) -> list[frozenset[E]]:
        """All non-singleton classes."""
        groups: dict[E, list[E]] = {}
        for element in self._parent:
            groups.setdefault(self._find(element), []).append(element)
        return [frozenset(members) for members in groups.values() if len(members) > 1]

    def __iter__(self) -> Iterator[frozenset[E]]:
        return iter(self.classes())

    def __len__(self) -> int:
        return len(self.classes())


__all__ = [
    "EquivalenceRelation",
]

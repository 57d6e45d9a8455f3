"""Spanning trees of transition systems.

A breadth-first traversal from a start state assigns every newly reached
state the arc that discovered it (its predecessor edge). Every other arc
examined during the traversal is a chord; self-loops are always chords.
States never reached are unreachable.

With ``reversed=True`` arcs are followed backwards, so the tree describes
paths from each state to the start state.

Trees are cached per (graph, start, direction) and rebuilt when the graph
has been modified since.
"""

from __future__ import annotations

import weakref
from collections import deque

from petrisynth.ts.lts import Arc, TransitionSystem

_cache: weakref.WeakKeyDictionary[
    TransitionSystem, dict[tuple[str | None, bool], SpanningTree]
] = weakref.WeakKeyDictionary()


class SpanningTree:
    """Spanning tree of a transition system rooted at a start state."""

    def __init__(
        self,
        graph: TransitionSystem,
        start: str | None = None,
        reversed: bool = False,
    ):
        """Build the tree.

        Args:
            graph: The transition system
            start: Root state, defaults to the initial state
            reversed: Follow arcs backwards
        """
        self.graph = graph
        self.reversed = reversed
        self.start_node = start if start is not None else graph.initial_state
        self._version = graph.version
        self._predecessor_edge: dict[str, Arc | None] = {}
        self._chords: list[Arc] = []
        self._unreachable: list[str] = []
        self._build()

    @classmethod
    def get(
        cls,
        graph: TransitionSystem,
        start: str | None = None,
        reversed: bool = False,
    ) -> SpanningTree:
        """Get a possibly cached spanning tree for the graph."""
        key = (start if start is not None else graph.initial_state, reversed)
        trees = _cache.setdefault(graph, {})
        tree = trees.get(key)
        if tree is None or tree._version != graph.version:
            tree = cls(graph, start=key[0], reversed=reversed)
            trees[key] = tree
        return tree

    @classmethod
    def get_reversed(cls, graph: TransitionSystem, start: str | None = None) -> SpanningTree:
        return cls.get(graph, start=start, reversed=True)

    def _build(self) -> None:
        if self.start_node is None:
            return

        self._predecessor_edge[self.start_node] = None
        queue = deque([self.start_node])

        while queue:
            node = queue.popleft()
            for arc in self._edges_from(node):
                neighbour = self._far_end(arc)
                if neighbour in self._predecessor_edge:
                    self._chords.append(arc)
                else:
                    self._predecessor_edge[neighbour] = arc
                    queue.append(neighbour)

        self._unreachable = [s for s in self.graph.states if s not in self._predecessor_edge]

    def _edges_from(self, node: str) -> tuple[Arc, ...]:
        return self.graph.preset(node) if self.reversed else self.graph.postset(node)

    def _far_end(self, arc: Arc) -> str:
        return arc.source if self.reversed else arc.target

    def _near_end(self, arc: Arc) -> str:
        return arc.target if self.reversed else arc.source

    def is_reachable(self, node: str) -> bool:
        """Check whether the tree contains a path from the start to ``node``."""
        return node in self._predecessor_edge

    def predecessor_edge(self, node: str) -> Arc | None:
        """The tree arc leading to ``node``, None for the start and unreachable nodes."""
        return self._predecessor_edge.get(node)

    def predecessor(self, node: str) -> str | None:
        """The tree parent of ``node``."""
        arc = self.predecessor_edge(node)
        return self._near_end(arc) if arc is not None else None

    def path_from_start(self, node: str) -> list[str]:
        """Nodes on the unique tree path from the start to ``node``.

        Returns:
            The path including both ends, empty if ``node`` is unreachable
        """
        if not self.is_reachable(node):
            return []
        path = [node]
        current = self.predecessor(node)
        while current is not None:
            path.append(current)
            current = self.predecessor(current)
        path.reverse()
        return path

    @property
    def chords(self) -> tuple[Arc, ...]:
        """Examined arcs that are not tree edges, in discovery order."""
        return tuple(self._chords)

    @property
    def tree_edges(self) -> tuple[Arc, ...]:
        """Predecessor edges of all reachable non-start nodes."""
        return tuple(arc for arc in self._predecessor_edge.values() if arc is not None)

    @property
    def unreachable_nodes(self) -> tuple[str, ...]:
        """Nodes without a path from the start."""
        return tuple(self._unreachable)

    def __repr__(self) -> str:
        return (
            f"SpanningTree(start={self.start_node!r}, reversed={self.reversed}, "
            f"chords={len(self._chords)}, unreachable={len(self._unreachable)})"
        )


__all__ = [
    "SpanningTree",
]

"""Event indexing and Parikh vectors for region computation.

A :class:`RegionUtility` fixes an order on the events of a transition
system (the sorted alphabet) so that Parikh vectors and region weights can
be written as integer vectors, and computes:

- the Parikh vector reaching each state along a spanning tree,
- the Parikh vector ``Ψ(s) + e_a - Ψ(s')`` of every arc ``s ─a→ s'``,
- a basis of abstract regions from the chord equations (proposition 6.14
  in "Petri Net Synthesis" by Badouel, Bernardinello and Darondeau).
"""

from __future__ import annotations

import logging

from petrisynth.exceptions import MissingLocationError, UnreachableError
from petrisynth.ts.lts import Arc, TransitionSystem
from petrisynth.util.equations import EquationSystem
from petrisynth.util.spanning_tree import SpanningTree

from .region import Region

logger = logging.getLogger(__name__)

ParikhVector = tuple[int, ...]


class RegionUtility:
    """Region helper bound to one transition system and spanning tree."""

    def __init__(self, ts_or_tree: TransitionSystem | SpanningTree):
        """Create the utility.

        Args:
            ts_or_tree: A transition system, or a spanning tree of one
        """
        if isinstance(ts_or_tree, SpanningTree):
            tree = ts_or_tree
        else:
            tree = SpanningTree.get(ts_or_tree)
        if tree.reversed:
            raise ValueError("Region computation needs a forward spanning tree")
        self._tree = tree
        self._ts = tree.graph
        self._events: tuple[str, ...] = self._ts.alphabet
        self._index = {event: index for index, event in enumerate(self._events)}
        self._parikh_vectors: dict[str, ParikhVector] = {}
        self._region_basis: tuple[Region, ...] | None = None

    @property
    def transition_system(self) -> TransitionSystem:
        return self._ts

    @property
    def spanning_tree(self) -> SpanningTree:
        return self._tree

    @property
    def event_list(self) -> tuple[str, ...]:
        """Events in vector order: entry i of a vector belongs to event_list[i]."""
        return self._events

    @property
    def number_of_events(self) -> int:
        return len(self._events)

    def get_event_index(self, event: str) -> int:
        """Index of an event, -1 if it is not in the alphabet."""
        return self._index.get(event, -1)

    def get_reaching_parikh_vector(self, state: str) -> ParikhVector:
        """Parikh vector of the tree path from the initial state to ``state``.

        Raises:
            UnreachableError: If the state is unreachable from the initial state
        """
        result = self._parikh_vectors.get(state)
        if result is not None:
            return result

        # Walk up to the nearest memoised ancestor, then fill in downwards
        path: list[Arc] = []
        current = state
        while current not in self._parikh_vectors:
            if current == self._tree.start_node:
                self._parikh_vectors[current] = (0,) * len(self._events)
                break
            arc = self._tree.predecessor_edge(current)
            if arc is None:
                raise UnreachableError(current)
            path.append(arc)
            current = arc.source

        vector = list(self._parikh_vectors[current])
        for arc in reversed(path):
            vector[self._index[arc.label]] += 1
            self._parikh_vectors[arc.target] = tuple(vector)

        return self._parikh_vectors[state]

    def get_parikh_vector_for_edge(self, arc: Arc) -> ParikhVector:
        """Parikh vector ``Ψ(source) + e_label - Ψ(target)`` of an arc.

        Every region evaluates this vector to zero, and it is the zero vector
        for tree edges.

        Returns:
            The vector, or an empty tuple if an endpoint is unreachable
        """
        if not (self._tree.is_reachable(arc.source) and self._tree.is_reachable(arc.target)):
            return ()
        source = self.get_reaching_parikh_vector(arc.source)
        target = self.get_reaching_parikh_vector(arc.target)
        event = self._index[arc.label]
        return tuple(
            s - t + (1 if i == event else 0) for i, (s, t) in enumerate(zip(source, target))
        )

    def get_region_basis(self) -> tuple[Region, ...]:
        """Basis of abstract regions of the transition system.

        Each chord closes a fundamental cycle whose Parikh vector every
        region must map to zero. The integer kernel of these equations is
        the basis; each vector becomes a pure region with initial marking 0.
        The result is computed once and cached.
        """
        if self._region_basis is None:
            system = EquationSystem(self.number_of_events)
            for chord in self._tree.chords:
                vector = self.get_parikh_vector_for_edge(chord)
                if not vector:
                    raise UnreachableError(
                        chord.target, f"Chord {chord!r} has an unreachable endpoint"
                    )
                system.add_equation(vector)

            self._region_basis = tuple(
                Region.create_pure_region_from_vector(self, vector)
                for vector in system.find_basis()
            )
            logger.debug(f"Region basis: {[str(r) for r in self._region_basis]}")
        return self._region_basis

    def get_location_map(self) -> tuple[str | None, ...]:
        """Location of each event in vector order.

        The map is all None when no arc carries a location, or when every
        event has the same location (then no distribution constraint exists).

        Raises:
            MissingLocationError: If only some events have a location, or an
                event is tagged with two different locations
        """
        locations: list[str | None] = [None] * self.number_of_events
        had_location = False

        for arc in self._ts.arcs:
            if arc.location is None:
                continue
            index = self._index[arc.label]
            old = locations[index]
            if old is not None and old != arc.location:
                raise MissingLocationError(
                    f"Event '{arc.label}' has locations '{old}' and '{arc.location}'"
                )
            locations[index] = arc.location
            had_location = True

        if not had_location:
            return tuple(locations)
        if None in locations:
            missing = [e for e, loc in zip(self._events, locations) if loc is None]
            raise MissingLocationError(
                "Trying to synthesize a Petri net where some events have a location and "
                f"others do not ({missing}). Either all or no event must have a location."
            )
        if len(set(locations)) == 1:
            return (None,) * self.number_of_events
        return tuple(locations)

    def __repr__(self) -> str:
        return f"RegionUtility(ts={self._ts.name!r}, events={list(self._events)})"


__all__ = [
    "ParikhVector",
    "RegionUtility",
]

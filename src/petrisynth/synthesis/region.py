"""Regions of a transition system.

A region is a candidate place of the synthesized net: a backward weight
(tokens consumed) and a forward weight (tokens produced) per event, plus an
initial marking. Its effect on event ``e`` is ``forward[e] - backward[e]``
and the marking it assigns to a Parikh vector ``p`` is

    initial_marking + Σ (forward[e] - backward[e]) · p[e]

A region is only usable as a place if this value is non-negative at every
reachable state and at least ``backward[e]`` at every state where ``e`` is
enabled; :meth:`Region.is_valid` checks exactly this. Regions are immutable,
every combinator returns a new region.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .utility import RegionUtility


@dataclass(frozen=True)
class Region:
    """An integer region over the events of a RegionUtility.

    Attributes:
        utility: The RegionUtility defining event order and Parikh vectors
        backward: Tokens consumed per event
        forward: Tokens produced per event
        initial_marking: Marking of the initial state
    """

    utility: RegionUtility = field(compare=False, repr=False)
    backward: tuple[int, ...]
    forward: tuple[int, ...]
    initial_marking: int = 0

    def __post_init__(self) -> None:
        n = self.utility.number_of_events
        if len(self.backward) != n or len(self.forward) != n:
            raise ValueError(f"Region weights must have length {n}")
        if any(w < 0 for w in self.backward) or any(w < 0 for w in self.forward):
            raise ValueError(f"Region weights must be non-negative: {self}")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create_pure_region_from_vector(
        cls,
        utility: RegionUtility,
        vector: Sequence[int],
        initial_marking: int = 0,
    ) -> Region:
        """Pure region with the given effect: positive entries produce, negative consume."""
        return cls(
            utility=utility,
            backward=tuple(max(0, -w) for w in vector),
            forward=tuple(max(0, w) for w in vector),
            initial_marking=initial_marking,
        )

    @classmethod
    def create_trivial_region(cls, utility: RegionUtility) -> Region:
        """The region with all weights and initial marking zero."""
        zero = (0,) * utility.number_of_events
        return cls(utility=utility, backward=zero, forward=zero)

    def with_initial_marking(self, initial_marking: int) -> Region:
        return Region(self.utility, self.backward, self.forward, initial_marking)

    def add_region(self, other: Region) -> Region:
        """Component-wise sum of weights and initial markings."""
        return self.add_region_with_factor(other, 1)

    def add_region_with_factor(self, other: Region, factor: int) -> Region:
        """Add ``factor`` times ``other``.

        A negative factor adds the backward weights of ``other`` to the
        forward weights and vice versa, so all weights stay non-negative.
        The initial markings combine linearly and may become negative; use
        :meth:`with_normal_region_marking` to repair them.
        """
        if self.utility is not other.utility:
            raise ValueError("Cannot combine regions of different RegionUtility instances")
        if factor >= 0:
            backward = tuple(a + factor * b for a, b in zip(self.backward, other.backward))
            forward = tuple(a + factor * b for a, b in zip(self.forward, other.forward))
        else:
            backward = tuple(a - factor * b for a, b in zip(self.backward, other.forward))
            forward = tuple(a - factor * b for a, b in zip(self.forward, other.backward))
        return Region(
            self.utility,
            backward,
            forward,
            self.initial_marking + factor * other.initial_marking,
        )

    def make_pure(self) -> Region:
        """Remove side conditions while keeping the effect of every event."""
        return Region.create_pure_region_from_vector(
            self.utility, self.weights, self.initial_marking
        )

    # -------------------------------------------------------------------------
    # Weights
    # -------------------------------------------------------------------------

    def _index(self, event: str | int) -> int:
        if isinstance(event, int):
            return event
        index = self.utility.get_event_index(event)
        if index < 0:
            raise KeyError(f"Unknown event '{event}'")
        return index

    def get_backward_weight(self, event: str | int) -> int:
        return self.backward[self._index(event)]

    def get_forward_weight(self, event: str | int) -> int:
        return self.forward[self._index(event)]

    def get_weight(self, event: str | int) -> int:
        """Effect of the event: forward minus backward weight."""
        index = self._index(event)
        return self.forward[index] - self.backward[index]

    @property
    def weights(self) -> tuple[int, ...]:
        """Effect of every event in vector order."""
        return tuple(f - b for f, b in zip(self.forward, self.backward))

    def is_pure(self) -> bool:
        return all(f == 0 or b == 0 for f, b in zip(self.forward, self.backward))

    def is_plain(self) -> bool:
        return all(w <= 1 for w in self.forward + self.backward)

    def is_trivial(self) -> bool:
        return not any(self.forward) and not any(self.backward)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate_parikh_vector(self, vector: Sequence[int]) -> int:
        """Marking reached from the initial marking by the given Parikh vector."""
        return self.initial_marking + sum(w * p for w, p in zip(self.weights, vector))

    def get_marking_for_state(self, state: str) -> int:
        """Marking this region assigns to a state.

        Raises:
            UnreachableError: If the state is unreachable
        """
        return self.evaluate_parikh_vector(self.utility.get_reaching_parikh_vector(state))

    def get_normal_region_marking(self) -> int:
        """Smallest initial marking making this region valid on the whole LTS.

        The marking must keep every reachable state non-negative and enable
        every arc of the transition system, and is never below zero.
        """
        utility = self.utility
        ts = utility.transition_system
        tree = utility.spanning_tree
        weights = self.weights
        marking = 0
        for state in ts.states:
            if not tree.is_reachable(state):
                continue
            effect = sum(w * p for w, p in zip(weights, utility.get_reaching_parikh_vector(state)))
            marking = max(marking, -effect)
            for arc in ts.postset(state):
                marking = max(marking, self.get_backward_weight(arc.label) - effect)
        return marking

    def with_normal_region_marking(self) -> Region:
        return self.with_initial_marking(self.get_normal_region_marking())

    def is_valid(self) -> bool:
        """Check that the region can be realised as a place of the LTS's net.

        Every reachable state must receive a non-negative marking, every arc
        must be enabled by the marking of its source and every arc must
        change the marking by its event's effect.
        """
        if self.initial_marking < 0:
            return False
        utility = self.utility
        ts = utility.transition_system
        tree = utility.spanning_tree
        for state in ts.states:
            if not tree.is_reachable(state):
                continue
            marking = self.get_marking_for_state(state)
            if marking < 0:
                return False
            for arc in ts.postset(state):
                if marking < self.get_backward_weight(arc.label):
                    return False
                if self.get_marking_for_state(arc.target) != marking + self.get_weight(arc.label):
                    return False
        return True

    def __str__(self) -> str:
        parts = [f"init={self.initial_marking}"]
        for event, b, f in zip(self.utility.event_list, self.backward, self.forward):
            if b or f:
                parts.append(f"{b}:{event}:{f}")
        return "{ " + ", ".join(parts) + " }"


__all__ = [
    "Region",
]

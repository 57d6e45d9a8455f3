"""Place/transition Petri nets with weighted arcs.

This module provides:
- Place, Transition and Flow records
- A PetriNet container with preset/postset queries
- Firing semantics over markings

Markings are tuples of token counts in place creation order, so they are
hashable and can serve directly as reachability graph state keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field

Marking = tuple[int, ...]


@dataclass
class Place:
    """A place of a Petri net.

    Attributes:
        id: Unique identifier
        initial_tokens: Tokens in the initial marking
    """

    id: str
    initial_tokens: int = 0


@dataclass
class Transition:
    """A transition of a Petri net.

    Attributes:
        id: Unique identifier
        label: Event label, defaults to the ID
    """

    id: str
    label: str = ""

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.id


@dataclass(frozen=True)
class Flow:
    """A weighted arc between a place and a transition (either direction)."""

    source: str
    target: str
    weight: int = 1


@dataclass(eq=False)
class PetriNet:
    """A place/transition net.

    Attributes:
        name: Descriptive name
    """

    name: str = ""
    _places: dict[str, Place] = field(default_factory=dict, repr=False)
    _transitions: dict[str, Transition] = field(default_factory=dict, repr=False)
    _flows: dict[tuple[str, str], Flow] = field(default_factory=dict, repr=False)

    def add_place(self, place_id: str | None = None, initial_tokens: int = 0) -> Place:
        """Create a place.

        Args:
            place_id: Unique ID, generated as ``p<n>`` if omitted
            initial_tokens: Tokens in the initial marking

        Raises:
            ValueError: If the ID is taken or the token count negative
        """
        if place_id is None:
            index = len(self._places)
            while f"p{index}" in self._places:
                index += 1
            place_id = f"p{index}"
        self._check_new_node(place_id)
        if initial_tokens < 0:
            raise ValueError(f"Negative initial marking {initial_tokens} for {place_id}")
        place = Place(id=place_id, initial_tokens=initial_tokens)
        self._places[place_id] = place
        return place

    def add_transition(self, transition_id: str, label: str | None = None) -> Transition:
        """Create a transition, labelled with its ID unless ``label`` is given."""
        self._check_new_node(transition_id)
        transition = Transition(id=transition_id, label=label or transition_id)
        self._transitions[transition_id] = transition
        return transition

    def add_flow(self, source: str, target: str, weight: int = 1) -> Flow:
        """Create a weighted arc from a place to a transition or vice versa.

        Raises:
            KeyError: If an endpoint does not exist
            ValueError: If the arc is not place/transition, exists or has weight < 1
        """
        for node in (source, target):
            if node not in self._places and node not in self._transitions:
                raise KeyError(f"Node {node} does not exist")
        if (source in self._places) == (target in self._places):
            raise ValueError(f"Flow {source} -> {target} must connect a place and a transition")
        if weight < 1:
            raise ValueError(f"Flow weight must be positive, got {weight}")
        if (source, target) in self._flows:
            raise ValueError(f"Flow {source} -> {target} already exists")
        flow = Flow(source=source, target=target, weight=weight)
        self._flows[(source, target)] = flow
        return flow

    def _check_new_node(self, node_id: str) -> None:
        if node_id in self._places or node_id in self._transitions:
            raise ValueError(f"Node {node_id} already exists")

    @property
    def places(self) -> tuple[Place, ...]:
        """All places in creation order."""
        return tuple(self._places.values())

    @property
    def transitions(self) -> tuple[Transition, ...]:
        """All transitions in creation order."""
        return tuple(self._transitions.values())

    @property
    def flows(self) -> tuple[Flow, ...]:
        """All flows in creation order."""
        return tuple(self._flows.values())

    def get_place(self, place_id: str) -> Place:
        return self._places[place_id]

    def get_transition(self, transition_id: str) -> Transition:
        return self._transitions[transition_id]

    def get_flow_weight(self, source: str, target: str) -> int:
        """Weight of the arc source → target, 0 if there is none."""
        flow = self._flows.get((source, target))
        return flow.weight if flow is not None else 0

    def preset(self, node_id: str) -> set[str]:
        """Nodes with an arc into ``node_id``."""
        return {source for source, target in self._flows if target == node_id}

    def postset(self, node_id: str) -> set[str]:
        """Nodes with an arc from ``node_id``."""
        return {target for source, target in self._flows if source == node_id}

    @property
    def initial_marking(self) -> Marking:
        """The initial marking in place order."""
        return tuple(place.initial_tokens for place in self._places.values())

    def is_enabled(self, marking: Marking, transition_id: str) -> bool:
        """Check that every input place carries enough tokens."""
        for index, place_id in enumerate(self._places):
            if marking[index] < self.get_flow_weight(place_id, transition_id):
                return False
        return True

    def fire(self, marking: Marking, transition_id: str) -> Marking:
        """Fire a transition.

        Raises:
            ValueError: If the transition is not enabled in the marking
        """
        if not self.is_enabled(marking, transition_id):
            raise ValueError(f"Transition {transition_id} is not enabled in {marking}")
        return tuple(
            marking[index]
            - self.get_flow_weight(place_id, transition_id)
            + self.get_flow_weight(transition_id, place_id)
            for index, place_id in enumerate(self._places)
        )

    def enabled_transitions(self, marking: Marking) -> list[str]:
        """IDs of all transitions enabled in a marking, in creation order."""
        return [t for t in self._transitions if self.is_enabled(marking, t)]


__all__ = [
    "Marking",
    "Place",
    "Transition",
    "Flow",
    "PetriNet",
]

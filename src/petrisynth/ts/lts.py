"""Labeled Transition System (LTS) data structure.

This module provides:
- LTS representation with string state IDs and labelled arcs
- Determinism and reachability queries
- Construction of the linear LTS generated by a word

An LTS is a tuple (S, E, →, s₀) where:
- S: set of states
- E: alphabet of events
- →: transition relation S × E × S
- s₀: initial state
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from petrisynth.exceptions import NonDeterministicError

# =============================================================================
# Core LTS Types
# =============================================================================


@dataclass(frozen=True)
class Arc:
    """An arc in an LTS: source ─label→ target.

    The optional ``location`` tags the arc's event with the location of a
    distributed implementation.
    """

    source: str
    label: str
    target: str
    location: str | None = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"{self.source} --{self.label}--> {self.target}"


@dataclass(eq=False)
class TransitionSystem:
    """Labeled Transition System.

    States are kept in creation order and arcs in insertion order, so every
    traversal over the system is deterministic.

    Attributes:
        name: Descriptive name
        initial_state: The starting state ID (first created state by default)
    """

    name: str = ""
    initial_state: str | None = None
    _states: dict[str, None] = field(default_factory=dict, repr=False)
    _arcs: list[Arc] = field(default_factory=list, repr=False)
    _postset: dict[str, list[Arc]] = field(default_factory=dict, repr=False)
    _preset: dict[str, list[Arc]] = field(default_factory=dict, repr=False)
    _events: set[str] = field(default_factory=set, repr=False)
    _version: int = field(default=0, repr=False)

    def add_state(self, state_id: str | None = None) -> str:
        """Add a state to the LTS.

        Args:
            state_id: Unique state ID, generated as ``s<n>`` if omitted

        Returns:
            The ID of the new state

        Raises:
            ValueError: If the state already exists
        """
        if state_id is None:
            index = len(self._states)
            while f"s{index}" in self._states:
                index += 1
            state_id = f"s{index}"
        if state_id in self._states:
            raise ValueError(f"State {state_id} already exists")
        self._states[state_id] = None
        self._postset[state_id] = []
        self._preset[state_id] = []
        if self.initial_state is None:
            self.initial_state = state_id
        self._version += 1
        return state_id

    def add_states(self, *state_ids: str) -> None:
        """Add several states at once."""
        for state_id in state_ids:
            self.add_state(state_id)

    def add_arc(
        self,
        source: str,
        label: str,
        target: str,
        location: str | None = None,
    ) -> Arc:
        """Add an arc to the LTS.

        Raises:
            KeyError: If source or target is not a state
            ValueError: If an identical arc already exists
        """
        for state_id in (source, target):
            if state_id not in self._states:
                raise KeyError(f"State {state_id} does not exist")
        arc = Arc(source=source, label=label, target=target, location=location)
        if arc in self._postset[source]:
            raise ValueError(f"Arc {arc!r} already exists")
        self._arcs.append(arc)
        self._postset[source].append(arc)
        self._preset[target].append(arc)
        self._events.add(label)
        self._version += 1
        return arc

    def add_event(self, label: str) -> None:
        """Add an event to the alphabet without creating an arc."""
        self._events.add(label)
        self._version += 1

    def set_initial_state(self, state_id: str) -> None:
        """Choose the initial state."""
        if state_id not in self._states:
            raise KeyError(f"State {state_id} does not exist")
        self.initial_state = state_id
        self._version += 1

    @property
    def states(self) -> tuple[str, ...]:
        """All states in creation order."""
        return tuple(self._states)

    @property
    def arcs(self) -> tuple[Arc, ...]:
        """All arcs in insertion order."""
        return tuple(self._arcs)

    @property
    def alphabet(self) -> tuple[str, ...]:
        """All events, sorted."""
        return tuple(sorted(self._events))

    @property
    def version(self) -> int:
        """Modification counter, incremented on every structural change."""
        return self._version

    @property
    def num_states(self) -> int:
        """Number of states in the LTS."""
        return len(self._states)

    @property
    def num_arcs(self) -> int:
        """Number of arcs in the LTS."""
        return len(self._arcs)

    def __contains__(self, state_id: object) -> bool:
        return state_id in self._states

    def postset(self, state_id: str) -> tuple[Arc, ...]:
        """Get all arcs leaving a state."""
        return tuple(self._postset[state_id])

    def preset(self, state_id: str) -> tuple[Arc, ...]:
        """Get all arcs entering a state."""
        return tuple(self._preset[state_id])

    def successors(self, state_id: str) -> Iterator[tuple[str, str]]:
        """Yield (label, target_state) pairs for arcs from state."""
        for arc in self._postset[state_id]:
            yield arc.label, arc.target

    def successor(self, state_id: str, label: str) -> str | None:
        """Get the state reached by firing ``label`` in a state, if any."""
        for arc in self._postset[state_id]:
            if arc.label == label:
                return arc.target
        return None

    def enabled_events(self, state_id: str) -> set[str]:
        """Events labelling an arc leaving the state."""
        return {arc.label for arc in self._postset[state_id]}

    def reachable_states(self) -> list[str]:
        """States reachable from the initial state, in breadth-first order."""
        if self.initial_state is None:
            return []
        order = [self.initial_state]
        seen = {self.initial_state}
        queue = deque([self.initial_state])

        while queue:
            state_id = queue.popleft()
            for _, target in self.successors(state_id):
                if target not in seen:
                    seen.add(target)
                    order.append(target)
                    queue.append(target)

        return order

    def is_totally_reachable(self) -> bool:
        """Check whether every state is reachable from the initial state."""
        return len(self.reachable_states()) == self.num_states

    def nondeterministic_states(self) -> list[str]:
        """Return IDs of states with two outgoing arcs sharing a label."""
        result = []
        for state_id, arcs in self._postset.items():
            labels = [arc.label for arc in arcs]
            if len(labels) != len(set(labels)):
                result.append(state_id)
        return result

    def is_deterministic(self) -> bool:
        """Check that every state has at most one outgoing arc per label."""
        return not self.nondeterministic_states()

    def deadlock_states(self) -> list[str]:
        """Return IDs of states without outgoing arcs."""
        return [state_id for state_id in self._states if not self._postset[state_id]]


# =============================================================================
# Builders and Checks
# =============================================================================


def check_deterministic(ts: TransitionSystem) -> None:
    """Raise if the LTS is non-deterministic.

    Raises:
        NonDeterministicError: If some state has two arcs with one label
    """
    offending = ts.nondeterministic_states()
    if offending:
        raise NonDeterministicError(
            f"Transition system '{ts.name}' is non-deterministic",
            states=tuple(offending),
        )


def check_initial_state(ts: TransitionSystem) -> None:
    """Raise if the LTS has no initial state.

    Raises:
        ValueError: If the transition system has no states
    """
    if ts.initial_state is None:
        raise ValueError(f"Transition system '{ts.name}' has no initial state")


def word_to_lts(word: Iterable[str], name: str | None = None) -> TransitionSystem:
    """Build the linear LTS s0 ─w₁→ s1 ─w₂→ ... generated by a word.

    Args:
        word: Sequence of event labels
        name: Optional name, defaults to the concatenated word

    Returns:
        The word's transition system
    """
    letters = list(word)
    ts = TransitionSystem(name=name if name is not None else "".join(letters))
    previous = ts.add_state("s0")
    for index, letter in enumerate(letters, start=1):
        current = ts.add_state(f"s{index}")
        ts.add_arc(previous, letter, current)
        previous = current
    return ts


def lts_from_arcs(
    arcs: Iterable[tuple[str, str, str]],
    initial_state: str | None = None,
    name: str = "",
) -> TransitionSystem:
    """Build an LTS from (source, label, target) triples.

    States are created in order of first appearance. The initial state
    defaults to the source of the first arc.
    """
    ts = TransitionSystem(name=name)
    if initial_state is not None:
        ts.add_state(initial_state)
    for source, label, target in arcs:
        for state_id in (source, target):
            if state_id not in ts:
                ts.add_state(state_id)
        ts.add_arc(source, label, target)
    return ts


__all__ = [
    "Arc",
    "TransitionSystem",
    "check_deterministic",
    "check_initial_state",
    "word_to_lts",
    "lts_from_arcs",
]

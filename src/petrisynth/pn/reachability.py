"""Reachability graph construction for Petri nets.

Breadth-first exploration of markings: every reachable marking becomes a
state and every firing an arc labelled with the transition's label.
Unboundedness is detected with the Karp-Miller covering criterion: if a
marking strictly covers a marking on its own path from the initial marking,
the net is unbounded.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from petrisynth.exceptions import UnboundedError
from petrisynth.ts.lts import TransitionSystem

from .net import Marking, PetriNet

logger = logging.getLogger(__name__)


@dataclass
class ReachabilityGraph:
    """Reachability graph of a bounded net.

    Attributes:
        lts: The graph as a transition system
        markings: State ID → marking
    """

    lts: TransitionSystem
    markings: dict[str, Marking] = field(default_factory=dict)

    def max_tokens(self) -> int:
        """Largest token count on any place in any reachable marking."""
        return max((max(m, default=0) for m in self.markings.values()), default=0)


class ReachabilityGraphBuilder:
    """Builds the reachability graph of a Petri net."""

    def __init__(self, max_states: int = 10000):
        """Initialize the builder.

        Args:
            max_states: Maximum number of markings to explore
        """
        self.max_states = max_states

    def build(self, pn: PetriNet) -> ReachabilityGraph:
        """Explore all reachable markings.

        Args:
            pn: The net to analyze

        Returns:
            The reachability graph

        Raises:
            UnboundedError: If the net is unbounded
            ValueError: If more than ``max_states`` markings are reachable
        """
        graph = ReachabilityGraph(lts=TransitionSystem(name=f"Reachability graph of {pn.name}"))
        seen: dict[Marking, str] = {}
        parent: dict[str, str | None] = {}
        queue: deque[str] = deque()

        initial = pn.initial_marking
        initial_id = graph.lts.add_state()
        seen[initial] = initial_id
        parent[initial_id] = None
        graph.markings[initial_id] = initial
        queue.append(initial_id)

        while queue:
            current_id = queue.popleft()
            marking = graph.markings[current_id]

            for transition_id in pn.enabled_transitions(marking):
                next_marking = pn.fire(marking, transition_id)
                target_id = seen.get(next_marking)
                if target_id is None:
                    self._check_covering(graph, parent, current_id, next_marking)
                    if graph.lts.num_states >= self.max_states:
                        raise ValueError(f"More than {self.max_states} reachable markings")
                    target_id = graph.lts.add_state()
                    seen[next_marking] = target_id
                    parent[target_id] = current_id
                    graph.markings[target_id] = next_marking
                    queue.append(target_id)
                label = pn.get_transition(transition_id).label
                graph.lts.add_arc(current_id, label, target_id)

        logger.debug(f"Reachability graph has {graph.lts.num_states} markings")
        return graph

    @staticmethod
    def _check_covering(
        graph: ReachabilityGraph,
        parent: dict[str, str | None],
        current_id: str,
        marking: Marking,
    ) -> None:
        ancestor: str | None = current_id
        while ancestor is not None:
            old = graph.markings[ancestor]
            if old != marking and all(a >= b for a, b in zip(marking, old)):
                raise UnboundedError(f"Marking {marking} strictly covers reachable marking {old}")
            ancestor = parent[ancestor]


def reachability_graph(pn: PetriNet, max_states: int = 10000) -> ReachabilityGraph:
    """Build the reachability graph of a bounded net.

    Args:
        pn: The Petri net
        max_states: Maximum markings to explore

    Returns:
        The reachability graph
    """
    return ReachabilityGraphBuilder(max_states=max_states).build(pn)


__all__ = [
    "ReachabilityGraph",
    "ReachabilityGraphBuilder",
    "reachability_graph",
]

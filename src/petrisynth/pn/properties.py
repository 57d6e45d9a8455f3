"""Structural and behavioural properties of Petri nets.

Checks used as post-hoc assertions on synthesized nets:
- Pure: no transition both consumes from and produces on one place
- Plain: every arc has weight 1
- Plain T-net: plain, every place has at most one input and one output
- Output-nonbranching: every place has at most one output transition
- Conflict-free: every place with several outputs also feeds back to them
- Boundedness: the largest token count over all reachable markings
"""

from __future__ import annotations

from .net import PetriNet
from .reachability import reachability_graph


def is_pure(pn: PetriNet) -> bool:
    """Check that no place is both in the preset and postset of a transition."""
    for transition in pn.transitions:
        if pn.preset(transition.id) & pn.postset(transition.id):
            return False
    return True


def is_plain(pn: PetriNet) -> bool:
    """Check that every arc has weight one."""
    return all(flow.weight == 1 for flow in pn.flows)


def is_plain_t_net(pn: PetriNet) -> bool:
    """Check that the net is plain and every place has |•p| ≤ 1 and |p•| ≤ 1."""
    if not is_plain(pn):
        return False
    return all(len(pn.preset(p.id)) <= 1 and len(pn.postset(p.id)) <= 1 for p in pn.places)


def is_output_nonbranching(pn: PetriNet) -> bool:
    """Check that every place has at most one output transition."""
    return all(len(pn.postset(p.id)) <= 1 for p in pn.places)


def is_conflict_free(pn: PetriNet) -> bool:
    """Check that every place has |p•| ≤ 1 or p• ⊆ •p."""
    for place in pn.places:
        outputs = pn.postset(place.id)
        if len(outputs) > 1 and not outputs <= pn.preset(place.id):
            return False
    return True


def bound(pn: PetriNet, max_states: int = 10000) -> int:
    """Smallest k such that the net is k-bounded.

    Raises:
        UnboundedError: If the net is unbounded
    """
    return reachability_graph(pn, max_states=max_states).max_tokens()


def is_k_bounded(pn: PetriNet, k: int, max_states: int = 10000) -> bool:
    """Check that no reachable marking puts more than ``k`` tokens on a place."""
    return bound(pn, max_states=max_states) <= k


__all__ = [
    "is_pure",
    "is_plain",
    "is_plain_t_net",
    "is_output_nonbranching",
    "is_conflict_free",
    "bound",
    "is_k_bounded",
]

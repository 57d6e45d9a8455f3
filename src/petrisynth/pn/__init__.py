"""Place/transition Petri nets.

This module provides:
- The PetriNet data structure with firing semantics
- Reachability graph construction with unboundedness detection
- Structural property checks (pure, plain, T-net, ON, CF, bounded)
"""

from __future__ import annotations

from petrisynth.pn.net import Flow, Marking, PetriNet, Place, Transition
from petrisynth.pn.properties import (
    bound,
    is_conflict_free,
    is_k_bounded,
    is_output_nonbranching,
    is_plain,
    is_plain_t_net,
    is_pure,
)
from petrisynth.pn.reachability import (
    ReachabilityGraph,
    ReachabilityGraphBuilder,
    reachability_graph,
)

__all__ = [
    "Flow",
    "Marking",
    "PetriNet",
    "Place",
    "Transition",
    "ReachabilityGraph",
    "ReachabilityGraphBuilder",
    "reachability_graph",
    "bound",
    "is_conflict_free",
    "is_k_bounded",
    "is_output_nonbranching",
    "is_plain",
    "is_plain_t_net",
    "is_pure",
]

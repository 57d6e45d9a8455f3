"""
petrisynth -- Region-based synthesis of Petri nets from labelled
transition systems.

Regions | Separation Strategies | Integer Programming | Property Checks

Dependencies: NumPy and SciPy.
"""

from petrisynth._version import __version__
from petrisynth.exceptions import (
    ConsistencyError,
    MissingLocationError,
    NonDeterministicError,
    PetriSynthError,
    SynthesisBudgetExceeded,
    UnboundedError,
    UnreachableError,
)
from petrisynth.pn import PetriNet, reachability_graph
from petrisynth.synthesis import (
    PNProperties,
    Region,
    RegionUtility,
    SynthesisOptions,
    SynthesizePN,
    find_words,
)
from petrisynth.ts import (
    TransitionSystem,
    calculate_limited_unfolding,
    is_isomorphic,
    lts_from_arcs,
    word_to_lts,
)

# NOTE: Full subpackage APIs are accessible via direct imports:
#   from petrisynth.synthesis.separation import InequalitySystemSeparation, ...
#   from petrisynth.pn import is_pure, is_plain_t_net, bound, ...
#   from petrisynth.util import SpanningTree, EquationSystem, ...
#   from petrisynth.verification import ConsistencyChecker, PhaseMonitor, ...

__all__ = [
    "__version__",
    # Transition systems
    "TransitionSystem",
    "word_to_lts",
    "lts_from_arcs",
    "calculate_limited_unfolding",
    "is_isomorphic",
    # Petri nets
    "PetriNet",
    "reachability_graph",
    # Synthesis
    "PNProperties",
    "SynthesisOptions",
    "Region",
    "RegionUtility",
    "SynthesizePN",
    "find_words",
    # Errors
    "PetriSynthError",
    "UnreachableError",
    "MissingLocationError",
    "NonDeterministicError",
    "UnboundedError",
    "SynthesisBudgetExceeded",
    "ConsistencyError",
]

"""Region-based Petri net synthesis.

This module provides:
- Regions, the region basis and Parikh vectors of a transition system
- Target net properties and synthesis options
- Separation strategies for state and event/state separation problems
- The SynthesizePN driver with structured progress events
- Search for (un)solvable words of a class of nets
"""

from __future__ import annotations

from petrisynth.synthesis.events import (
    EventSink,
    SynthesisEvent,
    SynthesisEventKind,
    SynthesisObserver,
)
from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.separation import (
    BasicImpureSeparation,
    BasicPureSeparation,
    InequalitySystemSeparation,
    PlainPureSeparation,
    Separation,
    SeparationChain,
    Unsupported,
    create_separation_instance,
)
from petrisynth.synthesis.synthesize import SynthesizePN
from petrisynth.synthesis.utility import ParikhVector, RegionUtility
from petrisynth.synthesis.words import (
    Operation,
    WordSearchResult,
    find_words,
    generate_list,
    normalize_word,
)

__all__ = [
    # Configuration
    "PNProperties",
    "SynthesisOptions",
    # Progress events
    "EventSink",
    "SynthesisEvent",
    "SynthesisEventKind",
    "SynthesisObserver",
    # Regions
    "ParikhVector",
    "Region",
    "RegionUtility",
    # Separation
    "Separation",
    "Unsupported",
    "BasicPureSeparation",
    "BasicImpureSeparation",
    "PlainPureSeparation",
    "InequalitySystemSeparation",
    "SeparationChain",
    "create_separation_instance",
    # Synthesis
    "SynthesizePN",
    # Word search
    "Operation",
    "WordSearchResult",
    "find_words",
    "generate_list",
    "normalize_word",
]

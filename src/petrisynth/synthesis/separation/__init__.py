"""Strategies solving state and event/state separation problems.

This module provides:
- Tagged-variant strategy construction (a strategy or an ``Unsupported`` value)
- Pure and impure separation from the region basis
- Exhaustive plain pure region search for small alphabets
- An integer linear program supporting every net property
- A chain trying the applicable strategies in order
"""

from __future__ import annotations

from petrisynth.synthesis.separation.base import (
    LocationMap,
    Separation,
    Unsupported,
)
from petrisynth.synthesis.separation.basic_impure import BasicImpureSeparation
from petrisynth.synthesis.separation.basic_pure import BasicPureSeparation
from petrisynth.synthesis.separation.inequality import InequalitySystemSeparation
from petrisynth.synthesis.separation.plain_pure import PlainPureSeparation
from petrisynth.synthesis.separation.utility import (
    SeparationChain,
    create_separation_instance,
    get_following_state,
    get_location_map,
    is_event_enabled,
    is_event_separating_region,
    is_separating_region,
    region_satisfies,
)

__all__ = [
    # Strategy interface
    "LocationMap",
    "Separation",
    "Unsupported",
    # Strategies
    "BasicPureSeparation",
    "BasicImpureSeparation",
    "PlainPureSeparation",
    "InequalitySystemSeparation",
    "SeparationChain",
    # Helpers
    "create_separation_instance",
    "get_following_state",
    "get_location_map",
    "is_event_enabled",
    "is_event_separating_region",
    "is_separating_region",
    "region_satisfies",
]

"""Labeled transition systems.

This module provides:
- The TransitionSystem data structure and word/arc builders
- Isomorphism checking for deterministic systems
- Limited unfolding
"""

from __future__ import annotations

from petrisynth.ts.isomorphism import IsomorphismResult, check_isomorphism, is_isomorphic
from petrisynth.ts.lts import (
    Arc,
    TransitionSystem,
    check_deterministic,
    check_initial_state,
    lts_from_arcs,
    word_to_lts,
)
from petrisynth.ts.unfolding import Unfolding, calculate_limited_unfolding

__all__ = [
    "Arc",
    "TransitionSystem",
    "check_deterministic",
    "check_initial_state",
    "lts_from_arcs",
    "word_to_lts",
    "IsomorphismResult",
    "check_isomorphism",
    "is_isomorphic",
    "Unfolding",
    "calculate_limited_unfolding",
]

"""Generic algorithms used by the synthesis engine.

This module provides:
- Spanning trees with chords and predecessor links
- Exact integer kernels of homogeneous equation systems
- Equivalence relations for grouping failures
"""

from __future__ import annotations

from petrisynth.util.equations import EquationSystem
from petrisynth.util.equivalence import EquivalenceRelation
from petrisynth.util.spanning_tree import SpanningTree

__all__ = [
    "EquationSystem",
    "EquivalenceRelation",
    "SpanningTree",
]

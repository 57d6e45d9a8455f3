"""Verification of synthesis runs and their results.

This module provides:
- Consistency checks of synthesized nets against their guarantees
- Phase monitoring of the synthesis state machine
"""

from __future__ import annotations

from petrisynth.verification.consistency import (
    Check,
    ConsistencyChecker,
    ConsistencyReport,
    Violation,
    ViolationSeverity,
    is_distributed_net,
    synthesis_checker,
)
from petrisynth.verification.monitor import (
    SYNTHESIS_TRANSITIONS,
    PhaseMonitor,
    SynthesisPhase,
)

__all__ = [
    # Consistency checks
    "Check",
    "ConsistencyChecker",
    "ConsistencyReport",
    "Violation",
    "ViolationSeverity",
    "is_distributed_net",
    "synthesis_checker",
    # Phase monitoring
    "SYNTHESIS_TRANSITIONS",
    "PhaseMonitor",
    "SynthesisPhase",
]

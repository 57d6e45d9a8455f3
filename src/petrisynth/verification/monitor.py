"""Phase monitoring for synthesis runs.

A synthesis run moves through a fixed sequence of phases::

    INITIALIZED -> ESSP -> SSP -> MINIMIZING -> DONE
         |          |       |         |
         +----------+-------+---------+-----> FAILED

When synthesizing up to language equivalence, ESSP is followed directly by
MINIMIZING.

:class:`PhaseMonitor` records every transition with a timestamp and flags
transitions outside this graph.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

logger = logging.getLogger(__name__)


class SynthesisPhase(str, Enum):
    """Phases of a synthesis run."""

    INITIALIZED = "initialized"
    ESSP = "essp"  # Solving event/state separation problems
    SSP = "ssp"  # Solving state separation problems
    MINIMIZING = "minimizing"
    DONE = "done"
    FAILED = "failed"


SYNTHESIS_TRANSITIONS: dict[SynthesisPhase, set[SynthesisPhase]] = {
    SynthesisPhase.INITIALIZED: {SynthesisPhase.ESSP, SynthesisPhase.FAILED},
    SynthesisPhase.ESSP: {SynthesisPhase.SSP, SynthesisPhase.MINIMIZING, SynthesisPhase.FAILED},
    SynthesisPhase.SSP: {SynthesisPhase.MINIMIZING, SynthesisPhase.FAILED},
    SynthesisPhase.MINIMIZING: {SynthesisPhase.DONE, SynthesisPhase.FAILED},
    SynthesisPhase.DONE: set(),
    SynthesisPhase.FAILED: set(),
}


class PhaseMonitor:
    """Monitors phase transitions of a state machine.

    Invalid transitions are logged and recorded but still performed, so a
    caller can inspect them afterwards.
    """

    def __init__(
        self,
        name: str = "synthesis",
        valid_transitions: dict[SynthesisPhase, set[SynthesisPhase]] | None = None,
        initial: SynthesisPhase = SynthesisPhase.INITIALIZED,
    ):
        """Initialize monitor.

        Args:
            name: Monitor name for logging
            valid_transitions: Map of phase to valid next phases
            initial: Starting phase
        """
        self.name = name
        self.valid_transitions = (
            valid_transitions if valid_transitions is not None else SYNTHESIS_TRANSITIONS
        )
        self._current = initial
        self._history: list[tuple[SynthesisPhase, SynthesisPhase, float]] = []
        self._invalid: list[tuple[SynthesisPhase, SynthesisPhase]] = []

    def transition(self, new_phase: SynthesisPhase) -> bool:
        """Record a phase transition.

        Args:
            new_phase: The new phase

        Returns:
            True if the transition is valid
        """
        is_valid = new_phase in self.valid_transitions.get(self._current, set())
        if not is_valid:
            self._invalid.append((self._current, new_phase))
            logger.warning(
                f"{self.name}: invalid phase transition {self._current.value} -> {new_phase.value}"
            )
        else:
            logger.debug(f"{self.name}: {self._current.value} -> {new_phase.value}")

        self._history.append((self._current, new_phase, time.time()))
        self._current = new_phase
        return is_valid

    @property
    def current_phase(self) -> SynthesisPhase:
        return self._current

    @property
    def is_finished(self) -> bool:
        """Whether the monitored run reached a phase without successors."""
        return not self.valid_transitions.get(self._current)

    def get_history(self) -> list[tuple[SynthesisPhase, SynthesisPhase, float]]:
        """Get transition history.

        Returns:
            List of (from_phase, to_phase, timestamp) tuples
        """
        return list(self._history)

    def get_invalid_transitions(self) -> list[tuple[SynthesisPhase, SynthesisPhase]]:
        return list(self._invalid)


__all__ = [
    "SynthesisPhase",
    "SYNTHESIS_TRANSITIONS",
    "PhaseMonitor",
]

"""Errors raised by petrisynth.

Failing to synthesize a net is not an error: unsolvable separation problems
are reported through the result of
:class:`~petrisynth.synthesis.synthesize.SynthesizePN`. The exceptions below
signal invalid input or a broken internal invariant.
"""

from __future__ import annotations

from collections.abc import Hashable


class PetriSynthError(RuntimeError):
    """Base class for all petrisynth errors."""


class UnreachableError(PetriSynthError):
    """A state has no path from the initial state of its transition system.

    Attributes:
        state: The unreachable state
    """

    def __init__(self, state: Hashable, message: str | None = None):
        self.state = state
        super().__init__(message or f"State {state} is unreachable from the initial state")


class MissingLocationError(PetriSynthError):
    """Location tagging of events is incomplete or inconsistent."""


class NonDeterministicError(PetriSynthError):
    """A transition system has two arcs with the same label leaving one state.

    Attributes:
        states: The offending states
    """

    def __init__(self, message: str, states: tuple[str, ...] = ()):
        self.states = states
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.args[0]]
        if self.states:
            parts.append(f"states={list(self.states)}")
        return " ".join(parts)


class UnboundedError(PetriSynthError):
    """A Petri net has infinitely many reachable markings."""


class SynthesisBudgetExceeded(PetriSynthError):
    """The configured number of separation problems was exhausted."""


class ConsistencyError(PetriSynthError):
    """A synthesized net violates a property it is guaranteed to have.

    Attributes:
        violations: Names of the violated checks
    """

    def __init__(self, message: str, violations: tuple[str, ...] = ()):
        self.violations = violations
        super().__init__(message)


__all__ = [
    "PetriSynthError",
    "UnreachableError",
    "MissingLocationError",
    "NonDeterministicError",
    "UnboundedError",
    "SynthesisBudgetExceeded",
    "ConsistencyError",
]

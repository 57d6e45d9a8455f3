"""Tuning knobs for synthesis runs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SynthesisOptions:
    """Options controlling a synthesis run.

    Attributes:
        quick_fail: Stop at the first unsolvable separation problem
        max_weight: Upper bound on every arc weight searched by the
            inequality system
        max_plain_events: Largest alphabet for which plain regions are
            enumerated exhaustively
        max_separation_problems: Budget of separation problems to examine,
            None for no limit
        verify: Check the synthesized net against the input afterwards
        max_states: Markings explored when verifying the synthesized net
    """

    quick_fail: bool = False
    max_weight: int = 32
    max_plain_events: int = 8
    max_separation_problems: int | None = None
    verify: bool = True
    max_states: int = 10000

    def __post_init__(self) -> None:
        if self.max_weight < 1:
            raise ValueError(f"max_weight must be positive, got {self.max_weight}")
        if self.max_plain_events < 0:
            raise ValueError(f"max_plain_events must be non-negative, got {self.max_plain_events}")
        if self.max_separation_problems is not None and self.max_separation_problems < 0:
            raise ValueError(
                f"max_separation_problems must be non-negative, got {self.max_separation_problems}"
            )


__all__ = [
    "SynthesisOptions",
]

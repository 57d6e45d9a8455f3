"""Isomorphism of deterministic transition systems.

Two deterministic LTSs are isomorphic iff the pairing of states obtained by
following equal labels from the initial states is a bijection between their
reachable parts that preserves enabled events. Determinism makes this a
single breadth-first walk, no backtracking is needed.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .lts import TransitionSystem, check_deterministic


@dataclass
class IsomorphismResult:
    """Result of an isomorphism check.

    Attributes:
        isomorphic: Whether the reachable parts are isomorphic
        mapping: State mapping from the first to the second LTS if isomorphic
        witness: Label sequence leading to the first mismatch otherwise
    """

    isomorphic: bool
    mapping: dict[str, str] = field(default_factory=dict)
    witness: tuple[str, ...] | None = None

    def __bool__(self) -> bool:
        return self.isomorphic


def check_isomorphism(left: TransitionSystem, right: TransitionSystem) -> IsomorphismResult:
    """Check whether the reachable parts of two deterministic LTSs are isomorphic.

    Args:
        left: First LTS
        right: Second LTS

    Returns:
        IsomorphismResult, with a witness trace if not isomorphic

    Raises:
        NonDeterministicError: If one of the systems is non-deterministic
    """
    check_deterministic(left)
    check_deterministic(right)

    if left.initial_state is None or right.initial_state is None:
        both_empty = left.initial_state is None and right.initial_state is None
        return IsomorphismResult(isomorphic=both_empty, witness=None if both_empty else ())

    forward: dict[str, str] = {left.initial_state: right.initial_state}
    backward: dict[str, str] = {right.initial_state: left.initial_state}
    queue: deque[tuple[str, str, tuple[str, ...]]] = deque(
        [(left.initial_state, right.initial_state, ())]
    )

    while queue:
        state, image, trace = queue.popleft()
        if left.enabled_events(state) != right.enabled_events(image):
            return IsomorphismResult(isomorphic=False, witness=trace)

        for label, target in left.successors(state):
            target_image = right.successor(image, label)
            assert target_image is not None
            known = forward.get(target)
            if known is None:
                if target_image in backward:
                    return IsomorphismResult(isomorphic=False, witness=trace + (label,))
                forward[target] = target_image
                backward[target_image] = target
                queue.append((target, target_image, trace + (label,)))
            elif known != target_image:
                return IsomorphismResult(isomorphic=False, witness=trace + (label,))

    return IsomorphismResult(isomorphic=True, mapping=forward)


def is_isomorphic(left: TransitionSystem, right: TransitionSystem) -> bool:
    """Convenience wrapper around :func:`check_isomorphism`."""
    return check_isomorphism(left, right).isomorphic


__all__ = [
    "IsomorphismResult",
    "check_isomorphism",
    "is_isomorphic",
]

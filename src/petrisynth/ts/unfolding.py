"""Limited unfolding of a transition system.

The limited unfolding (Badouel, Bernardinello and Darondeau, "Petri Net
Synthesis", definition 2.42) is a tree-like LTS in which a loop is only
kept when it closes on the current path from the initial state. Every
other revisit of a state creates a fresh copy of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .lts import Arc, TransitionSystem, check_deterministic


@dataclass
class Unfolding:
    """A limited unfolding together with its link to the original system.

    Attributes:
        ts: The unfolded transition system
        original_state: Maps every unfolded state to the state it copies
    """

    ts: TransitionSystem
    original_state: dict[str, str] = field(default_factory=dict)


def calculate_limited_unfolding(ts: TransitionSystem) -> Unfolding:
    """Calculate the limited unfolding of a deterministic LTS.

    Depth-first iteration through the system. A state already on the
    current path yields a loop in the unfolding, otherwise a new state is
    created and its postset examined.

    Args:
        ts: The transition system to unfold

    Returns:
        The unfolding and its state mapping

    Raises:
        NonDeterministicError: If ``ts`` is non-deterministic
    """
    check_deterministic(ts)

    unfolding = Unfolding(ts=TransitionSystem(name=f"Limited unfolding of {ts.name}"))
    for event in ts.alphabet:
        unfolding.ts.add_event(event)
    if ts.initial_state is None:
        return unfolding

    # Copies of the states on the current path only
    on_path: dict[str, str] = {}
    stack: list[tuple[str, list[Arc]]] = []

    def enter(state: str) -> str:
        copy = unfolding.ts.add_state()
        unfolding.original_state[copy] = state
        on_path[state] = copy
        stack.append((state, list(reversed(ts.postset(state)))))
        return copy

    unfolding.ts.set_initial_state(enter(ts.initial_state))

    while stack:
        state, pending = stack[-1]
        if not pending:
            del on_path[state]
            stack.pop()
            continue

        arc = pending.pop()
        source_copy = on_path[state]
        target_copy = on_path.get(arc.target)
        if target_copy is None:
            target_copy = enter(arc.target)
        unfolding.ts.add_arc(source_copy, arc.label, target_copy, location=arc.location)

    return unfolding


__all__ = [
    "Unfolding",
    "calculate_limited_unfolding",
]

"""Shared transition system fixtures."""

from __future__ import annotations

import pytest

from petrisynth.ts.lts import TransitionSystem, lts_from_arcs, word_to_lts


@pytest.fixture
def single_state() -> TransitionSystem:
    """One state, no arcs."""
    ts = TransitionSystem(name="single")
    ts.add_state("s0")
    return ts


@pytest.fixture
def word_a() -> TransitionSystem:
    """s0 --a--> s1."""
    return word_to_lts("a")


@pytest.fixture
def word_ab() -> TransitionSystem:
    """s0 --a--> s1 --b--> s2."""
    return word_to_lts("ab")


@pytest.fixture
def word_aa() -> TransitionSystem:
    """s0 --a--> s1 --a--> s2."""
    return word_to_lts("aa")


@pytest.fixture
def cycle() -> TransitionSystem:
    """s0 --a--> s1 --b--> s0."""
    return lts_from_arcs([("s0", "a", "s1"), ("s1", "b", "s0")], name="cycle")


@pytest.fixture
def diamond() -> TransitionSystem:
    """Concurrent a and b: both interleavings meet in s3."""
    return lts_from_arcs(
        [
            ("s0", "a", "s1"),
            ("s0", "b", "s2"),
            ("s1", "b", "s3"),
            ("s2", "a", "s3"),
        ],
        name="diamond",
    )


@pytest.fixture
def parikh_conflict() -> TransitionSystem:
    """ab and ba lead to different states with equal Parikh vectors."""
    return lts_from_arcs(
        [
            ("s0", "a", "s1"),
            ("s1", "b", "s2"),
            ("s0", "b", "s3"),
            ("s3", "a", "s4"),
        ],
        name="parikh-conflict",
    )


@pytest.fixture
def side_condition() -> TransitionSystem:
    """a loops at s0 and b leaves it; disabling a at s1 needs a side condition."""
    return lts_from_arcs([("s0", "a", "s0"), ("s0", "b", "s1")], name="side-condition")

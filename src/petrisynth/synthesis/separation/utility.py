"""Helper functions for solving separation problems."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility
from petrisynth.ts.lts import TransitionSystem

from .base import LocationMap, Separation, Unsupported

logger = logging.getLogger(__name__)


def get_following_state(ts: TransitionSystem, state: str, event: str) -> str | None:
    """State reached by firing ``event`` in ``state``, None if it is disabled."""
    return ts.successor(state, event)


def is_event_enabled(ts: TransitionSystem, state: str, event: str) -> bool:
    """Check for an arc labelled ``event`` leaving ``state``."""
    return get_following_state(ts, state, event) is not None


def is_separating_region(
    utility: RegionUtility,
    region: Region,
    state: str,
    other_state: str,
) -> bool:
    """Check whether the region assigns different markings to two states.

    Unreachable states cannot be separated.
    """
    tree = utility.spanning_tree
    if not tree.is_reachable(state) or not tree.is_reachable(other_state):
        return False
    return region.evaluate_parikh_vector(
        utility.get_reaching_parikh_vector(state)
    ) != region.evaluate_parikh_vector(utility.get_reaching_parikh_vector(other_state))


def is_event_separating_region(
    utility: RegionUtility,
    region: Region,
    state: str,
    event: str,
) -> bool:
    """Check whether the region disables ``event`` in ``state``.

    The marking at the state has to be smaller than the event's backward
    weight. Unreachable states cannot be separated.
    """
    if not utility.spanning_tree.is_reachable(state):
        return False
    return region.get_marking_for_state(state) < region.get_backward_weight(event)


def get_location_map(utility: RegionUtility) -> LocationMap:
    """Location of every event, see :meth:`RegionUtility.get_location_map`."""
    return utility.get_location_map()


def region_bound(region: Region) -> int:
    """Largest marking the region assigns to a reachable state."""
    utility = region.utility
    tree = utility.spanning_tree
    return max(
        (
            region.get_marking_for_state(state)
            for state in utility.transition_system.states
            if tree.is_reachable(state)
        ),
        default=region.initial_marking,
    )


def negate_region(region: Region) -> Region:
    """Pure region with the opposite effect of every event."""
    return Region.create_pure_region_from_vector(region.utility, [-w for w in region.weights])


def region_satisfies(
    region: Region,
    properties: PNProperties,
    location_map: LocationMap | None = None,
) -> bool:
    """Check whether a place built from the region has the given properties.

    Args:
        region: The region to inspect
        properties: Requested net properties
        location_map: Location of every event; a place may only be consumed
            from by events of a single location

    Returns:
        True if every requested property holds for the region's place
    """
    consumers = [i for i, w in enumerate(region.backward) if w > 0]
    producers = [i for i, w in enumerate(region.forward) if w > 0]

    if properties.pure and not region.is_pure():
        return False
    if (properties.plain or properties.t_net) and not region.is_plain():
        return False
    if properties.is_k_bounded and region_bound(region) > properties.k_bounded:
        return False
    if properties.t_net and (len(consumers) > 1 or len(producers) > 1):
        return False
    if properties.output_nonbranching and len(consumers) > 1:
        return False
    if properties.conflict_free and len(consumers) > 1:
        if not set(consumers) <= set(producers):
            return False
    if location_map is not None:
        if len({location_map[i] for i in consumers}) > 1:
            return False
    return True


class SeparationChain(Separation):
    """Tries several strategies in order on every separation instance.

    A strategy failing on an instance does not mean that the instance is
    unsolvable, only that the strategy's search space holds no solution,
    so the next strategy gets its turn.
    """

    def __init__(self, utility: RegionUtility, strategies: Sequence[Separation]):
        super().__init__(utility, strategies[0].basis if strategies else ())
        self.strategies = tuple(strategies)

    def calculate_separating_region(self, state: str, other_state: str) -> Region | None:
        for strategy in self.strategies:
            region = strategy.calculate_separating_region(state, other_state)
            if region is not None:
                return region
        return None

    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        for strategy in self.strategies:
            region = strategy.calculate_event_separating_region(state, event)
            if region is not None:
                return region
        return None

    def __repr__(self) -> str:
        return f"SeparationChain({[type(s).__name__ for s in self.strategies]})"


def create_separation_instance(
    utility: RegionUtility,
    basis: Sequence[Region],
    properties: PNProperties | None = None,
    options: SynthesisOptions | None = None,
) -> SeparationChain:
    """Build the chain of strategies able to guarantee the properties.

    The cheap strategies are tried in order pure-basic, impure-basic and
    plain-pure; those rejecting the properties are skipped. The inequality
    system, which supports every property, always comes last.

    Raises:
        MissingLocationError: If event locations are inconsistent
    """
    from .basic_impure import BasicImpureSeparation
    from .basic_pure import BasicPureSeparation
    from .inequality import InequalitySystemSeparation
    from .plain_pure import PlainPureSeparation

    location_map = get_location_map(utility)
    strategies: list[Separation] = []
    for cls in (
        BasicPureSeparation,
        BasicImpureSeparation,
        PlainPureSeparation,
        InequalitySystemSeparation,
    ):
        result = cls.create(utility, basis, properties, location_map, options)
        if isinstance(result, Unsupported):
            logger.debug(f"Skipping {result.strategy}: {result.reason}")
            continue
        strategies.append(result)

    chain = SeparationChain(utility, strategies)
    logger.debug(f"Created separation instance {chain!r}")
    return chain


__all__ = [
    "get_following_state",
    "is_event_enabled",
    "is_separating_region",
    "is_event_separating_region",
    "get_location_map",
    "region_bound",
    "negate_region",
    "region_satisfies",
    "SeparationChain",
    "create_separation_instance",
]

"""Separation using basis regions with side conditions.

An event that must be disabled in a state but is enabled in other states
with a higher marking can be disabled by a side condition: the event
consumes ``b`` tokens and produces them again plus its effect. Choosing
``b`` as the smallest marking of a state enabling the event keeps the region
valid.
"""

from __future__ import annotations

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility

from .base import LocationMap, has_locations, restricting_properties
from .basic_pure import BasicPureSeparation


class BasicImpureSeparation(BasicPureSeparation):
    """Extend pure basis separation by side conditions for ESSP instances."""

    @classmethod
    def unsupported_reason(
        cls,
        utility: RegionUtility,
        properties: PNProperties,
        location_map: LocationMap,
        options: SynthesisOptions,
    ) -> str | None:
        restricting = restricting_properties(properties)
        if restricting:
            return f"cannot guarantee {', '.join(restricting)}"
        if properties.pure:
            return "side conditions are not pure"
        if has_locations(location_map):
            return "cannot respect event locations"
        return None

    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        region = super().calculate_event_separating_region(state, event)
        if region is not None:
            return region

        utility = self.utility
        tree = utility.spanning_tree
        index = utility.get_event_index(event)
        if index < 0 or not tree.is_reachable(state):
            return None

        enabling = [
            arc.source
            for arc in utility.transition_system.arcs
            if arc.label == event and tree.is_reachable(arc.source)
        ]
        candidates = [*self.candidate_regions(), Region.create_trivial_region(utility)]

        for candidate in candidates:
            marking = candidate.get_marking_for_state(state)
            effect = candidate.get_weight(index)
            if enabling:
                side_condition = min(candidate.get_marking_for_state(s) for s in enabling)
            else:
                side_condition = marking + 1
            side_condition = max(side_condition, -effect)
            if marking >= side_condition:
                continue

            backward = list(candidate.backward)
            forward = list(candidate.forward)
            backward[index] = side_condition
            forward[index] = side_condition + effect
            return Region(utility, tuple(backward), tuple(forward), candidate.initial_marking)
        return None


__all__ = [
    "BasicImpureSeparation",
]

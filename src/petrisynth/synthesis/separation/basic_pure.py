"""Separation using only the region basis.

Every basis region and its negation, given the smallest valid initial
marking, is a pure region. When none of them disables an event, sums and
differences of two basis regions are tried as well. Combinations of three
or more basis regions are left to the inequality system. This is cheap and
often sufficient, but it cannot guarantee any property beyond purity.
"""

from __future__ import annotations

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility

from .base import LocationMap, Separation, has_locations, restricting_properties
from .utility import is_event_separating_region, is_separating_region, negate_region


class BasicPureSeparation(Separation):
    """Try basis regions (and their negations) for every separation problem."""

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
        if has_locations(location_map):
            return "cannot respect event locations"
        return None

    def candidate_regions(self) -> list[Region]:
        """Basis regions, their negations, then pairwise combinations.

        All candidates are pure and carry their normal markings.
        """
        if self._candidates is None:
            regions = [region.with_normal_region_marking() for region in self.basis]
            regions += [
                negate_region(region).with_normal_region_marking() for region in self.basis
            ]
            regions += [
                region.with_normal_region_marking() for region in self._pair_combinations()
            ]
            self._candidates = regions
        return self._candidates

    def _pair_combinations(self) -> list[Region]:
        """Sums and differences of two basis regions, and their negations."""
        combinations: list[Region] = []
        for i, region in enumerate(self.basis):
            for other in self.basis[i + 1 :]:
                for factor in (1, -1):
                    combined = region.add_region_with_factor(other, factor).make_pure()
                    if combined.is_trivial():
                        continue
                    combinations += [combined, negate_region(combined)]
        return combinations

    def calculate_separating_region(self, state: str, other_state: str) -> Region | None:
        # Markings are linear in the weights, so if no basis region tells the
        # states apart, no combination does; negation changes nothing either
        for region in self.basis:
            if is_separating_region(self.utility, region, state, other_state):
                return region.with_normal_region_marking()
        return None

    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        for region in self.candidate_regions():
            if is_event_separating_region(self.utility, region, state, event):
                return region
        return None


__all__ = [
    "BasicPureSeparation",
]

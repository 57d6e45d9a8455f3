"""Separation by enumerating plain pure regions.

A plain pure region has an effect of -1, 0 or 1 on every event, so for small
alphabets all of them can be listed. Effect vectors are checked against the
chord equations, given their smallest valid initial marking and filtered by
the requested bound. Candidates are ordered by the number of events they
touch, which keeps the synthesized places small.
"""

from __future__ import annotations

import itertools
import logging

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility

from .base import LocationMap, Separation, has_locations
from .utility import is_event_separating_region, is_separating_region, region_bound

logger = logging.getLogger(__name__)


class PlainPureSeparation(Separation):
    """Search all plain pure regions of a transition system."""

    @classmethod
    def unsupported_reason(
        cls,
        utility: RegionUtility,
        properties: PNProperties,
        location_map: LocationMap,
        options: SynthesisOptions,
    ) -> str | None:
        if not properties.plain:
            return "only useful for plain nets"
        if properties.t_net or properties.output_nonbranching or properties.conflict_free:
            return "cannot guarantee structural restrictions"
        if has_locations(location_map):
            return "cannot respect event locations"
        if utility.number_of_events > options.max_plain_events:
            return (
                f"{utility.number_of_events} events exceed the enumeration limit "
                f"of {options.max_plain_events}"
            )
        return None

    def candidate_regions(self) -> list[Region]:
        """All valid plain pure regions within the requested bound."""
        if self._candidates is not None:
            return self._candidates

        utility = self.utility
        chords = [utility.get_parikh_vector_for_edge(arc) for arc in utility.spanning_tree.chords]
        n = utility.number_of_events

        vectors = [
            vector
            for vector in itertools.product((-1, 0, 1), repeat=n)
            if any(vector)
            and all(sum(w * c for w, c in zip(vector, chord)) == 0 for chord in chords)
        ]
        vectors.sort(key=lambda vector: sum(1 for w in vector if w))

        regions = []
        for vector in vectors:
            region = Region.create_pure_region_from_vector(
                utility, vector
            ).with_normal_region_marking()
            if self.properties.is_k_bounded and region_bound(region) > self.properties.k_bounded:
                continue
            regions.append(region)

        logger.debug(f"Enumerated {len(regions)} plain pure regions")
        self._candidates = regions
        return regions

    def calculate_separating_region(self, state: str, other_state: str) -> Region | None:
        for region in self.candidate_regions():
            if is_separating_region(self.utility, region, state, other_state):
                return region
        return None

    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        for region in self.candidate_regions():
            if is_event_separating_region(self.utility, region, state, event):
                return region
        return None


__all__ = [
    "PlainPureSeparation",
]

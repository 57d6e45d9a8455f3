"""Common interface of separation strategies.

A separation strategy computes regions solving single instances of the
state separation problem (SSP) and the event/state separation problem
(ESSP). Strategies differ in their search space and in the net properties
they can guarantee. Instead of raising when asked for properties it cannot
guarantee, :meth:`Separation.create` returns an :class:`Unsupported` value
so that callers can try the next strategy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility

LocationMap = tuple[str | None, ...]


@dataclass(frozen=True)
class Unsupported:
    """A strategy cannot guarantee the requested properties.

    Attributes:
        strategy: Name of the rejecting strategy
        reason: Why the properties are rejected
    """

    strategy: str
    reason: str


class Separation(ABC):
    """Computes regions solving separation problems."""

    def __init__(
        self,
        utility: RegionUtility,
        basis: Sequence[Region],
        properties: PNProperties | None = None,
        location_map: LocationMap | None = None,
        options: SynthesisOptions | None = None,
    ):
        self.utility = utility
        self.basis = tuple(basis)
        self.properties = properties or PNProperties()
        self.location_map = location_map or (None,) * utility.number_of_events
        self.options = options or SynthesisOptions()
        self._candidates: list[Region] | None = None

    @classmethod
    def create(
        cls,
        utility: RegionUtility,
        basis: Sequence[Region],
        properties: PNProperties | None = None,
        location_map: LocationMap | None = None,
        options: SynthesisOptions | None = None,
    ) -> Separation | Unsupported:
        """Create the strategy, or explain why it cannot be used."""
        properties = properties or PNProperties()
        location_map = location_map or (None,) * utility.number_of_events
        options = options or SynthesisOptions()
        reason = cls.unsupported_reason(utility, properties, location_map, options)
        if reason is not None:
            return Unsupported(strategy=cls.__name__, reason=reason)
        return cls(utility, basis, properties, location_map, options)

    @classmethod
    def unsupported_reason(
        cls,
        utility: RegionUtility,
        properties: PNProperties,
        location_map: LocationMap,
        options: SynthesisOptions,
    ) -> str | None:
        """Reason why the strategy cannot be used, None if it can."""
        return None

    @abstractmethod
    def calculate_separating_region(self, state: str, other_state: str) -> Region | None:
        """Region assigning different markings to two states, None if not found."""
        ...

    @abstractmethod
    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        """Region whose marking at ``state`` is below the event's backward weight."""
        ...


def has_locations(location_map: LocationMap) -> bool:
    return any(location is not None for location in location_map)


def restricting_properties(properties: PNProperties) -> list[str]:
    """Requested properties other than purity."""
    names = []
    if properties.plain:
        names.append("plain")
    if properties.is_k_bounded:
        names.append(f"{properties.k_bounded}-bounded")
    if properties.t_net:
        names.append("tnet")
    if properties.output_nonbranching:
        names.append("output-nonbranching")
    if properties.conflict_free:
        names.append("conflict-free")
    return names


__all__ = [
    "LocationMap",
    "Unsupported",
    "Separation",
    "has_locations",
    "restricting_properties",
]

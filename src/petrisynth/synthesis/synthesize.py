"""Region-based synthesis of Petri nets from transition systems.

:class:`SynthesizePN` solves every event/state separation problem (ESSP)
and every state separation problem (SSP) of a deterministic transition
system, minimises the set of regions found and turns each remaining region
into a place. If some problem is unsolvable, no net is produced; instead the
unseparable state groups and the events that cannot be disabled are
reported.

All iteration is deterministic: states in the transition system's order,
events in sorted order and regions in the order they were found.

Example:
    ts = word_to_lts("ab")
    synthesis = SynthesizePN(ts, PNProperties(k_bounded=1))
    if synthesis.was_successfully_separated():
        pn = synthesis.synthesize_petri_net()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from petrisynth.exceptions import SynthesisBudgetExceeded
from petrisynth.pn.net import PetriNet
from petrisynth.ts.lts import TransitionSystem, check_deterministic, check_initial_state
from petrisynth.ts.unfolding import calculate_limited_unfolding
from petrisynth.util.equivalence import EquivalenceRelation
from petrisynth.verification.consistency import is_distributed_net, synthesis_checker
from petrisynth.verification.monitor import PhaseMonitor, SynthesisPhase

from .events import EventSink, SynthesisEventKind, SynthesisObserver
from .options import SynthesisOptions
from .properties import PNProperties
from .region import Region
from .separation.utility import (
    create_separation_instance,
    is_event_enabled,
    is_event_separating_region,
    is_separating_region,
)
from .utility import RegionUtility

logger = logging.getLogger(__name__)


class SynthesizePN:
    """Synthesize a Petri net from a transition system.

    All separation work happens in the constructor; afterwards the results
    can be queried and :meth:`synthesize_petri_net` assembles the net.

    Attributes:
        utility: Region helper for the input transition system
        properties: Requested net properties
        options: Tuning options of this run
        monitor: Phase monitor of this run
        place_regions: Region behind every place of the last synthesized net
    """

    def __init__(
        self,
        ts: TransitionSystem | RegionUtility,
        properties: PNProperties | None = None,
        options: SynthesisOptions | None = None,
        observer: SynthesisObserver | None = None,
        language_equivalence: bool = False,
    ):
        """Run synthesis.

        Args:
            ts: The transition system, or a RegionUtility of it
            properties: Net properties to guarantee
            options: Tuning options
            observer: Receives structured progress events
            language_equivalence: Only solve event/state separation problems;
                the net then has the language of ``ts`` but its reachability
                graph need not be isomorphic to ``ts``

        Raises:
            ValueError: If the transition system has no initial state
            NonDeterministicError: If the transition system is non-deterministic
            MissingLocationError: If event locations are inconsistent
            SynthesisBudgetExceeded: If ``options.max_separation_problems``
                separation problems did not suffice
        """
        self.utility = ts if isinstance(ts, RegionUtility) else RegionUtility(ts)
        self.properties = properties or PNProperties()
        self.options = options or SynthesisOptions()
        self.language_equivalence = language_equivalence
        self.monitor = PhaseMonitor(name=f"synthesis of {self.transition_system.name!r}")
        self.place_regions: dict[str, Region] = {}

        self._sink = EventSink(observer)
        self._regions: list[Region] = []
        self._failed_ssp: EquivalenceRelation[str] = EquivalenceRelation()
        self._failed_essp: dict[str, set[str]] = {}
        self._problems_examined = 0

        check_initial_state(self.transition_system)
        check_deterministic(self.transition_system)
        location_map = self.utility.get_location_map()
        self._locations = dict(zip(self.utility.event_list, location_map))

        basis = self.utility.get_region_basis()
        self._sink.emit(
            SynthesisEventKind.BASIS,
            f"Region basis has {len(basis)} regions",
            basis=basis,
        )
        self.separation = create_separation_instance(
            self.utility, basis, self.properties, self.options
        )

        self._enter(SynthesisPhase.ESSP)
        if not self._solve_event_state_separation():
            self._enter(SynthesisPhase.FAILED)
            return

        if not language_equivalence:
            self._enter(SynthesisPhase.SSP)
            if not self._solve_state_separation():
                self._enter(SynthesisPhase.FAILED)
                return

        self._enter(SynthesisPhase.MINIMIZING)
        before = len(self._regions)
        self._regions = self.minimize_regions(
            self.utility, self._regions, state_separation=not language_equivalence
        )
        self._sink.emit(
            SynthesisEventKind.MINIMIZED,
            f"Minimized {before} regions to {len(self._regions)}",
            regions=tuple(self._regions),
        )
        self._enter(
            SynthesisPhase.DONE if self.was_successfully_separated() else SynthesisPhase.FAILED
        )

    @classmethod
    def for_language_equivalence(
        cls,
        ts: TransitionSystem,
        properties: PNProperties | None = None,
        options: SynthesisOptions | None = None,
        observer: SynthesisObserver | None = None,
    ) -> SynthesizePN:
        """Synthesize a net with the same language as ``ts``.

        The limited unfolding of ``ts`` is synthesized solving only
        event/state separation problems.

        Raises:
            NonDeterministicError: If the transition system is non-deterministic
        """
        unfolding = calculate_limited_unfolding(ts)
        return cls(
            unfolding.ts,
            properties=properties,
            options=options,
            observer=observer,
            language_equivalence=True,
        )

    # -------------------------------------------------------------------------
    # Separation
    # -------------------------------------------------------------------------

    @property
    def transition_system(self) -> TransitionSystem:
        return self.utility.transition_system

    def _enter(self, phase: SynthesisPhase) -> None:
        self.monitor.transition(phase)
        self._sink.emit(SynthesisEventKind.PHASE, f"Entering phase {phase.value}", phase=phase)

    def _count_problem(self) -> None:
        self._problems_examined += 1
        limit = self.options.max_separation_problems
        if limit is not None and self._problems_examined > limit:
            self._enter(SynthesisPhase.FAILED)
            raise SynthesisBudgetExceeded(
                f"Examined more than {limit} separation problems without finishing"
            )

    def _accept(self, region: Region, **data: object) -> None:
        self._regions.append(region)
        self._sink.emit(
            SynthesisEventKind.REGION_CALCULATED,
            f"Calculated region {region}",
            region=region,
            **data,
        )

    def _solve_event_state_separation(self) -> bool:
        """Solve every ESSP instance.

        Returns:
            False if synthesis should stop early
        """
        ts = self.transition_system
        tree = self.utility.spanning_tree
        for state in ts.states:
            if not tree.is_reachable(state):
                continue
            for event in self.utility.event_list:
                if is_event_enabled(ts, state, event):
                    continue
                self._count_problem()

                existing = self._find_event_separating_region(state, event)
                if existing is not None:
                    self._sink.emit(
                        SynthesisEventKind.REGION_FOUND,
                        f"Event {event} already disabled at {state} by {existing}",
                        state=state,
                        event=event,
                        region=existing,
                    )
                    continue

                region = self.separation.calculate_event_separating_region(state, event)
                if region is not None:
                    self._accept(region, state=state, event=event)
                    continue

                self._failed_essp.setdefault(event, set()).add(state)
                self._sink.emit(
                    SynthesisEventKind.FAILURE,
                    f"Cannot disable event {event} at state {state}",
                    state=state,
                    event=event,
                )
                if self.options.quick_fail:
                    return False
        return True

    def _solve_state_separation(self) -> bool:
        """Solve every SSP instance between states not yet separated.

        Returns:
            False if synthesis should stop early
        """
        for state, other_state in self._state_separation_problems():
            self._count_problem()

            existing = self._find_separating_region(state, other_state)
            if existing is not None:
                self._sink.emit(
                    SynthesisEventKind.REGION_FOUND,
                    f"States {state} and {other_state} already separated by {existing}",
                    states=(state, other_state),
                    region=existing,
                )
                continue

            region = self.separation.calculate_separating_region(state, other_state)
            if region is not None:
                self._accept(region, states=(state, other_state))
                continue

            self._failed_ssp.join_classes(state, other_state)
            self._sink.emit(
                SynthesisEventKind.FAILURE,
                f"Cannot separate states {state} and {other_state}",
                states=(state, other_state),
            )
            if self.options.quick_fail:
                return False
        return True

    def _state_separation_problems(self) -> Iterator[tuple[str, str]]:
        """Pairs of states not separated by the regions found so far.

        Unreachable states are paired with every other state.
        """
        ts = self.transition_system
        tree = self.utility.spanning_tree
        order = {state: index for index, state in enumerate(ts.states)}
        unseparated = self.calculate_unseparated_states(self.utility, self._regions)

        for state in ts.states:
            if tree.is_reachable(state):
                continue
            for other_state in ts.states:
                if other_state == state:
                    continue
                # Pairs of two unreachable states only once
                if not tree.is_reachable(other_state) and order[other_state] < order[state]:
                    continue
                yield state, other_state

        for block in unseparated:
            members = sorted(block, key=order.__getitem__)
            if not tree.is_reachable(members[0]):
                continue
            for i, state in enumerate(members):
                for other_state in members[i + 1 :]:
                    yield state, other_state

    def _find_event_separating_region(self, state: str, event: str) -> Region | None:
        for region in self._regions:
            if is_event_separating_region(self.utility, region, state, event):
                return region
        return None

    def _find_separating_region(self, state: str, other_state: str) -> Region | None:
        for region in self._regions:
            if is_separating_region(self.utility, region, state, other_state):
                return region
        return None

    # -------------------------------------------------------------------------
    # Static helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_unseparated_states(
        utility: RegionUtility, regions: Sequence[Region]
    ) -> list[frozenset[str]]:
        """Groups of states that no region tells apart.

        Starting from a single block of all reachable states, every region
        splits each block by the marking it assigns. Unreachable states
        cannot be separated at all and form one extra block.

        Args:
            utility: Region helper of the transition system
            regions: The regions to separate with

        Returns:
            Blocks of at least two reachable states in order of their first
            state, then the block of unreachable states if there is one
        """
        ts = utility.transition_system
        tree = utility.spanning_tree
        reachable = [state for state in ts.states if tree.is_reachable(state)]
        unreachable = [state for state in ts.states if not tree.is_reachable(state)]

        blocks: list[list[str]] = [reachable] if len(reachable) > 1 else []
        for region in regions:
            refined: list[list[str]] = []
            for block in blocks:
                by_marking: dict[int, list[str]] = {}
                for state in block:
                    by_marking.setdefault(region.get_marking_for_state(state), []).append(state)
                refined.extend(group for group in by_marking.values() if len(group) > 1)
            blocks = refined

        result = [frozenset(block) for block in blocks]
        if unreachable:
            result.append(frozenset(unreachable))
        return result

    @staticmethod
    def minimize_regions(
        utility: RegionUtility,
        regions: Sequence[Region],
        state_separation: bool = True,
    ) -> list[Region]:
        """Choose a small subset of regions solving the same separation problems.

        Regions that are the only solution of some problem are required.
        Every problem not solved by a required region then gets its
        lowest-index solving region added. Problems no region solves are
        ignored.

        Args:
            utility: Region helper of the transition system
            regions: Regions in discovery order
            state_separation: Whether state separation problems must stay
                solved, or only event/state separation problems

        Returns:
            The kept regions in their original order
        """
        ts = utility.transition_system
        tree = utility.spanning_tree
        reachable = [state for state in ts.states if tree.is_reachable(state)]

        solutions: list[list[int]] = []
        if state_separation:
            for i, state in enumerate(reachable):
                for other_state in reachable[i + 1 :]:
                    solutions.append(
                        [
                            index
                            for index, region in enumerate(regions)
                            if is_separating_region(utility, region, state, other_state)
                        ]
                    )
        for state in reachable:
            for event in utility.event_list:
                if is_event_enabled(ts, state, event):
                    continue
                solutions.append(
                    [
                        index
                        for index, region in enumerate(regions)
                        if is_event_separating_region(utility, region, state, event)
                    ]
                )

        required = {indices[0] for indices in solutions if len(indices) == 1}
        for indices in solutions:
            if indices and not required.intersection(indices):
                required.add(indices[0])

        kept = [region for index, region in enumerate(regions) if index in required]
        logger.debug(f"Kept {len(kept)} of {len(regions)} regions")
        return kept

    @staticmethod
    def _assemble(
        utility: RegionUtility, regions: Sequence[Region]
    ) -> tuple[PetriNet, dict[str, Region]]:
        pn = PetriNet(name=utility.transition_system.name)
        for event in utility.event_list:
            pn.add_transition(event)

        place_regions: dict[str, Region] = {}
        for region in regions:
            place = pn.add_place(initial_tokens=region.initial_marking)
            place_regions[place.id] = region
            for index, event in enumerate(utility.event_list):
                if region.backward[index]:
                    pn.add_flow(place.id, event, region.backward[index])
                if region.forward[index]:
                    pn.add_flow(event, place.id, region.forward[index])
        return pn, place_regions

    @staticmethod
    def build_petri_net(utility: RegionUtility, regions: Sequence[Region]) -> PetriNet:
        """One transition per event and one place per region.

        Args:
            utility: Region helper fixing the event order
            regions: Regions to turn into places

        Returns:
            The net
        """
        pn, _ = SynthesizePN._assemble(utility, regions)
        return pn

    @staticmethod
    def is_distributed_implementation(utility: RegionUtility, pn: PetriNet) -> bool:
        """Check that no place of ``pn`` is consumed from by two locations."""
        locations = dict(zip(utility.event_list, utility.get_location_map()))
        return is_distributed_net(pn, locations)

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def was_successfully_separated(self) -> bool:
        return not self._failed_essp and not len(self._failed_ssp)

    @property
    def separating_regions(self) -> tuple[Region, ...]:
        """Regions found, minimised if separation completed."""
        return tuple(self._regions)

    @property
    def failed_state_separation_problems(self) -> list[frozenset[str]]:
        """Maximal groups of states that no region can tell apart."""
        return self._failed_ssp.classes()

    @property
    def failed_event_state_separation_problems(self) -> dict[str, frozenset[str]]:
        """States at which each event cannot be disabled."""
        return {event: frozenset(states) for event, states in sorted(self._failed_essp.items())}

    def synthesize_petri_net(self) -> PetriNet | None:
        """Assemble the synthesized net.

        Returns:
            The net, or None if some separation problem is unsolvable

        Raises:
            ConsistencyError: If verification is enabled and the net breaks
                one of its guarantees
        """
        if not self.was_successfully_separated():
            return None

        pn, self.place_regions = self._assemble(self.utility, self._regions)
        logger.debug(
            f"Synthesized net with {len(pn.places)} places and {len(pn.transitions)} transitions"
        )

        if self.options.verify:
            checker = synthesis_checker(
                self.transition_system,
                self.properties,
                locations=self._locations,
                max_states=self.options.max_states,
                isomorphism=not self.language_equivalence,
            )
            checker.check_all(pn).raise_for_violations()
        return pn

    def __repr__(self) -> str:
        return (
            f"SynthesizePN(ts={self.transition_system.name!r}, properties={self.properties}, "
            f"phase={self.monitor.current_phase.value})"
        )


__all__ = [
    "SynthesizePN",
]

"""Separation by solving a system of linear inequalities.

Every separation problem becomes an integer linear program over the initial
marking and the backward and forward weight of every event. Its constraints
force the solution to be a valid region of the transition system that solves
the problem and has all requested net properties; the objective keeps the
region small. The program is solved with HiGHS through
:func:`scipy.optimize.milp` and the rounded solution is checked again in
exact integer arithmetic before it is returned.

Variable layout::

    0              initial marking
    1 .. n         backward weights
    n+1 .. 2n      forward weights
    2n+1 ..        binary helper variables (purity, presets, postsets)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from petrisynth.synthesis.options import SynthesisOptions
from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.region import Region
from petrisynth.synthesis.utility import RegionUtility

from .base import LocationMap, Separation, has_locations
from .utility import is_event_separating_region, is_separating_region, region_satisfies

logger = logging.getLogger(__name__)

_INF = float("inf")


class _Program:
    """Rows, bounds and integrality of one integer linear program."""

    def __init__(self, num_events: int, max_weight: int, max_marking: float):
        self.num_events = num_events
        self.rows: list[list[tuple[int, float]]] = []
        self.lower: list[float] = []
        self.upper: list[float] = []
        self.var_lower: list[float] = [0.0] + [0.0] * (2 * num_events)
        self.var_upper: list[float] = [max_marking] + [float(max_weight)] * (2 * num_events)

    @property
    def num_variables(self) -> int:
        return len(self.var_lower)

    def backward(self, index: int) -> int:
        return 1 + index

    def forward(self, index: int) -> int:
        return 1 + self.num_events + index

    def add_binary(self) -> int:
        self.var_lower.append(0.0)
        self.var_upper.append(1.0)
        return self.num_variables - 1

    def add_row(self, coefficients: dict[int, float], lower: float, upper: float) -> None:
        self.rows.append([(variable, value) for variable, value in coefficients.items()])
        self.lower.append(lower)
        self.upper.append(upper)

    def marking_row(self, parikh_vector: Sequence[int]) -> dict[int, float]:
        """Coefficients of the marking reached by a Parikh vector."""
        row: dict[int, float] = {0: 1.0}
        for index, count in enumerate(parikh_vector):
            if count:
                row[self.backward(index)] = -float(count)
                row[self.forward(index)] = float(count)
        return row

    def effect_row(self, vector: Sequence[int]) -> dict[int, float]:
        """Coefficients of the effect of a Parikh vector, without the initial marking."""
        row = self.marking_row(vector)
        del row[0]
        return row

    def solve(self) -> list[int] | None:
        """Minimise the sum of initial marking and weights.

        Returns:
            The rounded solution, or None if the program is infeasible
        """
        import numpy as np
        from scipy.optimize import Bounds, LinearConstraint, milp

        n = self.num_variables
        cost = np.zeros(n)
        cost[: 1 + 2 * self.num_events] = 1.0

        matrix = np.zeros((len(self.rows), n))
        for i, row in enumerate(self.rows):
            for variable, value in row:
                matrix[i, variable] += value

        constraints = []
        if self.rows:
            constraints.append(
                LinearConstraint(matrix, np.array(self.lower), np.array(self.upper))
            )
        result = milp(
            cost,
            integrality=np.ones(n),
            bounds=Bounds(np.array(self.var_lower), np.array(self.var_upper)),
            constraints=constraints,
        )
        if not result.success or result.x is None:
            return None
        return [int(round(value)) for value in result.x]


class InequalitySystemSeparation(Separation):
    """Solve separation problems as integer linear programs.

    Supports every combination of net properties and event locations, so it
    is always the last strategy of a separation chain.

    Arc weights are bounded by ``SynthesisOptions.max_weight`` (1 for plain
    nets and T-nets). A problem reported as unsolvable may still have a
    solution with heavier arcs; raise ``max_weight`` to search for it.
    """

    def _base_program(self, consumers: set[int] | None = None) -> _Program:
        """Program whose solutions are valid regions with the requested properties.

        Args:
            consumers: Indices of the events that may consume tokens, None
                for all events
        """
        utility = self.utility
        ts = utility.transition_system
        tree = utility.spanning_tree
        properties = self.properties
        n = utility.number_of_events
        big = self.options.max_weight

        max_marking = float(properties.k_bounded) if properties.is_k_bounded else _INF
        weight_bound = 1 if (properties.plain or properties.t_net) else big
        program = _Program(n, weight_bound, max_marking)
        if consumers is not None:
            for index in range(n):
                if index not in consumers:
                    program.var_upper[program.backward(index)] = 0.0

        for chord in tree.chords:
            program.add_row(program.effect_row(utility.get_parikh_vector_for_edge(chord)), 0, 0)

        for state in ts.states:
            if not tree.is_reachable(state):
                continue
            marking = program.marking_row(utility.get_reaching_parikh_vector(state))
            program.add_row(marking, 0, max_marking)
            for arc in ts.postset(state):
                row = dict(marking)
                variable = program.backward(utility.get_event_index(arc.label))
                row[variable] = row.get(variable, 0.0) - 1.0
                program.add_row(row, 0, _INF)

        if properties.pure:
            for index in range(n):
                z = program.add_binary()
                # z = 1: the event may only consume, z = 0: it may only produce
                program.add_row({program.backward(index): 1.0, z: -weight_bound}, -_INF, 0)
                program.add_row(
                    {program.forward(index): 1.0, z: weight_bound}, -_INF, weight_bound
                )

        needs_indicators = (
            properties.t_net or properties.output_nonbranching or properties.conflict_free
        )
        if needs_indicators:
            consumes = []
            produces = []
            for index in range(n):
                yb = program.add_binary()
                yf = program.add_binary()
                pairs = ((program.backward(index), yb), (program.forward(index), yf))
                for variable, indicator in pairs:
                    # indicator is 1 exactly if the weight is positive
                    program.add_row({variable: 1.0, indicator: -weight_bound}, -_INF, 0)
                    program.add_row({variable: 1.0, indicator: -1.0}, 0, _INF)
                consumes.append(yb)
                produces.append(yf)

            if properties.t_net or properties.output_nonbranching:
                program.add_row({yb: 1.0 for yb in consumes}, -_INF, 1)
            if properties.t_net:
                program.add_row({yf: 1.0 for yf in produces}, -_INF, 1)
            if properties.conflict_free and n:
                # u = 0: at most one consumer, u = 1: every consumer also produces
                u = program.add_binary()
                row = {yb: 1.0 for yb in consumes}
                row[u] = -float(n)
                program.add_row(row, -_INF, 1)
                for yb, yf in zip(consumes, produces):
                    program.add_row({yb: 1.0, yf: -1.0, u: 1.0}, -_INF, 1)

        return program

    def _region_from_solution(self, solution: list[int]) -> Region:
        n = self.utility.number_of_events
        return Region(
            self.utility,
            backward=tuple(solution[1 : 1 + n]),
            forward=tuple(solution[1 + n : 1 + 2 * n]),
            initial_marking=solution[0],
        )

    def _checked(self, region: Region) -> bool:
        if region.is_valid() and region_satisfies(region, self.properties, self.location_map):
            return True
        logger.warning(f"Discarding inexact solution {region}")
        return False

    def _consumer_sets(self) -> list[set[int] | None]:
        """Sets of events allowed to consume, one per location."""
        if not has_locations(self.location_map):
            return [None]
        locations = list(dict.fromkeys(self.location_map))
        return [
            {i for i, loc in enumerate(self.location_map) if loc == location}
            for location in locations
        ]

    def calculate_separating_region(self, state: str, other_state: str) -> Region | None:
        utility = self.utility
        tree = utility.spanning_tree
        if not tree.is_reachable(state) or not tree.is_reachable(other_state):
            return None

        difference = [
            a - b
            for a, b in zip(
                utility.get_reaching_parikh_vector(state),
                utility.get_reaching_parikh_vector(other_state),
            )
        ]
        if not any(difference):
            return None

        for consumers in self._consumer_sets():
            for lower, upper in ((1, _INF), (-_INF, -1)):
                program = self._base_program(consumers)
                program.add_row(program.effect_row(difference), lower, upper)
                solution = program.solve()
                if solution is None:
                    continue
                region = self._region_from_solution(solution)
                if self._checked(region) and is_separating_region(
                    utility, region, state, other_state
                ):
                    return region
        return None

    def calculate_event_separating_region(self, state: str, event: str) -> Region | None:
        utility = self.utility
        index = utility.get_event_index(event)
        if index < 0 or not utility.spanning_tree.is_reachable(state):
            return None

        consumers = None
        location = self.location_map[index]
        if location is not None:
            consumers = {i for i, loc in enumerate(self.location_map) if loc == location}

        program = self._base_program(consumers)
        row = program.marking_row(utility.get_reaching_parikh_vector(state))
        variable = program.backward(index)
        row[variable] = row.get(variable, 0.0) - 1.0
        program.add_row(row, -_INF, -1)

        solution = program.solve()
        if solution is None:
            return None
        region = self._region_from_solution(solution)
        if self._checked(region) and is_event_separating_region(utility, region, state, event):
            return region
        return None


__all__ = [
    "InequalitySystemSeparation",
]

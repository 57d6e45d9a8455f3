"""Consistency checks for synthesized Petri nets.

Synthesis guarantees that its output has the requested properties and that
its reachability graph is isomorphic to the input. This module re-checks
these guarantees on the finished net, so that a bug in a separation strategy
surfaces as a :class:`~petrisynth.exceptions.ConsistencyError` instead of a
silently wrong net.

Features:
- Named checks with severities, registered in a checker
- Violation recording and handler notification
- A report of all violations for one net
- A ready-made checker for the guarantees of a synthesis run
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from petrisynth.exceptions import ConsistencyError, UnboundedError
from petrisynth.pn import properties as pn_properties
from petrisynth.pn.net import PetriNet
from petrisynth.pn.reachability import reachability_graph
from petrisynth.ts.isomorphism import check_isomorphism
from petrisynth.ts.lts import TransitionSystem

if TYPE_CHECKING:
    from petrisynth.synthesis.properties import PNProperties

logger = logging.getLogger(__name__)


class ViolationSeverity(str, Enum):
    """Severity levels for consistency violations."""

    WARNING = "warning"  # Suspicious, but the net is usable
    ERROR = "error"  # The net breaks a guarantee


@dataclass
class Check:
    """A named consistency check.

    Attributes:
        name: Descriptive name
        condition: Function that returns True if the net passes
        severity: Severity level if violated
        message: Message to log on violation
        enabled: Whether the check is run
    """

    name: str
    condition: Callable[[PetriNet], bool]
    severity: ViolationSeverity = ViolationSeverity.ERROR
    message: str = ""
    enabled: bool = True

    def run(self, pn: PetriNet) -> bool:
        if not self.enabled:
            return True
        return self.condition(pn)


@dataclass
class Violation:
    """Record of a failed check.

    Attributes:
        check_name: Name of the failed check
        severity: Severity of the violation
        message: Violation message
        context: Context at time of violation
        timestamp: When the violation occurred
    """

    check_name: str
    severity: ViolationSeverity
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


@dataclass
class ConsistencyReport:
    """All violations found for one net.

    Attributes:
        net_name: Name of the checked net
        checked: Names of the checks that were run
        violations: Failed checks
    """

    net_name: str
    checked: list[str] = field(default_factory=list)
    violations: list[Violation] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        """True if no check with severity ERROR failed."""
        return not any(v.severity == ViolationSeverity.ERROR for v in self.violations)

    @property
    def violated(self) -> list[str]:
        return [v.check_name for v in self.violations]

    def raise_for_violations(self) -> None:
        """Raise if an ERROR check failed.

        Raises:
            ConsistencyError: Listing the failed checks
        """
        if self.is_consistent:
            return
        errors = tuple(
            v.check_name for v in self.violations if v.severity == ViolationSeverity.ERROR
        )
        raise ConsistencyError(
            f"Net '{self.net_name}' violates {', '.join(errors)}", violations=errors
        )


class ConsistencyChecker:
    """Registry of consistency checks.

    Checks are run in registration order. Handlers registered with
    :meth:`on_violation` are called for every violation; their errors are
    logged and never stop the remaining checks.
    """

    def __init__(self, name: str = "default"):
        """Initialize checker.

        Args:
            name: Checker name for logging
        """
        self.name = name
        self._checks: dict[str, Check] = {}
        self._on_violation: list[Callable[[Violation], None]] = []
        self._check_count = 0
        self._violation_count = 0

    def register(
        self,
        name: str,
        condition: Callable[[PetriNet], bool],
        severity: ViolationSeverity = ViolationSeverity.ERROR,
        message: str = "",
    ) -> Check:
        """Register a new check.

        Args:
            name: Unique name for the check
            condition: Function returning True if a net passes
            severity: Severity level if violated
            message: Message to log on violation

        Returns:
            The registered Check
        """
        check = Check(
            name=name,
            condition=condition,
            severity=severity,
            message=message or f"Check '{name}' failed",
        )
        self._checks[name] = check
        return check

    def unregister(self, name: str) -> bool:
        """Unregister a check.

        Returns:
            True if the check was removed
        """
        return self._checks.pop(name, None) is not None

    @property
    def names(self) -> list[str]:
        return list(self._checks)

    def on_violation(self, handler: Callable[[Violation], None]) -> None:
        self._on_violation.append(handler)

    def check(self, name: str, pn: PetriNet, report: ConsistencyReport | None = None) -> bool:
        """Run a single check.

        Args:
            name: Check to run
            pn: Net to check
            report: Report to record a violation in

        Returns:
            True if the net passes

        Raises:
            KeyError: If the check is not registered
        """
        check = self._checks.get(name)
        if check is None:
            raise KeyError(f"Check '{name}' not registered")
        self._check_count += 1
        if report is not None:
            report.checked.append(name)

        if check.run(pn):
            return True

        violation = Violation(
            check_name=name,
            severity=check.severity,
            message=check.message,
            context={"net": pn.name},
        )
        self._violation_count += 1
        if report is not None:
            report.violations.append(violation)

        log_level = logging.ERROR if check.severity == ViolationSeverity.ERROR else logging.WARNING
        logger.log(log_level, f"Consistency violation: {name} - {check.message}")

        for handler in self._on_violation:
            try:
                handler(violation)
            except (TypeError, ValueError) as e:
                logger.error(f"Error in violation handler: {e}")
            except Exception:
                logger.exception("Unexpected error in violation handler")

        return False

    def check_all(self, pn: PetriNet) -> ConsistencyReport:
        """Run every registered check on a net."""
        report = ConsistencyReport(net_name=pn.name)
        for name in list(self._checks):
            self.check(name, pn, report)
        return report

    def stats(self) -> dict[str, Any]:
        """Get checking statistics."""
        return {
            "name": self.name,
            "check_count": self._check_count,
            "violation_count": self._violation_count,
            "registered": len(self._checks),
        }


# =============================================================================
# Checks for synthesized nets
# =============================================================================


def is_distributed_net(pn: PetriNet, locations: Mapping[str, str | None]) -> bool:
    """Check that every place is only consumed from by one location.

    Args:
        pn: The net to check
        locations: Location of every transition label; labels mapped to None
            (or missing) carry no location

    Returns:
        True if no place has output transitions at two different locations
    """
    for place in pn.places:
        outputs = {
            locations.get(pn.get_transition(t).label) for t in pn.postset(place.id)
        }
        outputs.discard(None)
        if len(outputs) > 1:
            return False
    return True


def _reachability_isomorphic(ts: TransitionSystem, max_states: int) -> Callable[[PetriNet], bool]:
    def condition(pn: PetriNet) -> bool:
        try:
            graph = reachability_graph(pn, max_states=max_states)
        except (UnboundedError, ValueError) as e:
            logger.warning(f"Cannot build reachability graph of '{pn.name}': {e}")
            return False
        return check_isomorphism(graph.lts, ts).isomorphic

    return condition


def _k_bounded(k: int, max_states: int) -> Callable[[PetriNet], bool]:
    def condition(pn: PetriNet) -> bool:
        try:
            return pn_properties.is_k_bounded(pn, k, max_states=max_states)
        except (UnboundedError, ValueError):
            return False

    return condition


def synthesis_checker(
    ts: TransitionSystem,
    properties: PNProperties | None = None,
    locations: Mapping[str, str | None] | None = None,
    max_states: int = 10000,
    isomorphism: bool = True,
) -> ConsistencyChecker:
    """Checker for the guarantees of a successful synthesis run.

    Args:
        ts: The transition system the net was synthesized from
        properties: The requested ``PNProperties``; only requested
            properties are checked
        locations: Location of every event, if events carry locations
        max_states: Markings explored for behavioural checks
        isomorphism: Check that the reachability graph is isomorphic to
            ``ts``; disabled for synthesis up to language equivalence

    Returns:
        A checker with one check per guarantee
    """
    checker = ConsistencyChecker(f"synthesis of {ts.name or 'transition system'}")

    if properties is not None:
        if properties.pure:
            checker.register("pure", pn_properties.is_pure, message="Net is not pure")
        if properties.plain:
            checker.register("plain", pn_properties.is_plain, message="Net is not plain")
        if properties.t_net:
            checker.register(
                "tnet", pn_properties.is_plain_t_net, message="Net is not a plain T-net"
            )
        if properties.output_nonbranching:
            checker.register(
                "output-nonbranching",
                pn_properties.is_output_nonbranching,
                message="Net is not output-nonbranching",
            )
        if properties.conflict_free:
            checker.register(
                "conflict-free",
                pn_properties.is_conflict_free,
                message="Net is not conflict-free",
            )
        if properties.is_k_bounded:
            checker.register(
                f"{properties.k_bounded}-bounded",
                _k_bounded(properties.k_bounded, max_states),
                message=f"Net is not {properties.k_bounded}-bounded",
            )

    if isomorphism:
        checker.register(
            "isomorphic",
            _reachability_isomorphic(ts, max_states),
            message="Reachability graph is not isomorphic to the transition system",
        )

    if locations and any(location is not None for location in locations.values()):
        checker.register(
            "distributed",
            lambda pn: is_distributed_net(pn, locations),
            message="Net is not a distributed implementation",
        )

    return checker


__all__ = [
    "ViolationSeverity",
    "Check",
    "Violation",
    "ConsistencyReport",
    "ConsistencyChecker",
    "is_distributed_net",
    "synthesis_checker",
]

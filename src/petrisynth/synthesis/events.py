"""Structured progress events emitted during synthesis.

An observer is any callable accepting a :class:`SynthesisEvent`. It is
passed explicitly to :class:`~petrisynth.synthesis.synthesize.SynthesizePN`;
without one, synthesis only writes debug log records.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class SynthesisEventKind(str, Enum):
    """Kinds of synthesis progress events."""

    PHASE = "phase"  # Entered a new synthesis phase
    BASIS = "basis"  # Region basis computed
    REGION_FOUND = "region_found"  # An accepted region already solves an instance
    REGION_CALCULATED = "region_calculated"  # A separation strategy produced a region
    FAILURE = "failure"  # No strategy could solve an instance
    MINIMIZED = "minimized"  # Region set minimized


@dataclass
class SynthesisEvent:
    """One progress event.

    Attributes:
        kind: Event kind
        message: Human-readable description
        data: Event specific payload (states, event, region, ...)
    """

    kind: SynthesisEventKind
    message: str
    data: dict[str, Any] = field(default_factory=dict)


SynthesisObserver = Callable[[SynthesisEvent], None]


class EventSink:
    """Forwards events to the debug log and an optional observer.

    Observer failures are logged and never abort synthesis.
    """

    def __init__(self, observer: SynthesisObserver | None = None):
        self.observer = observer

    def emit(self, kind: SynthesisEventKind, message: str, **data: Any) -> None:
        logger.debug(message)
        if self.observer is None:
            return
        try:
            self.observer(SynthesisEvent(kind=kind, message=message, data=data))
        except (TypeError, ValueError) as e:
            logger.error(f"Error in synthesis observer: {e}")
        except Exception:
            logger.exception("Unexpected error in synthesis observer")


__all__ = [
    "SynthesisEventKind",
    "SynthesisEvent",
    "SynthesisObserver",
    "EventSink",
]

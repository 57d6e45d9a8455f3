"""Target properties of a synthesized Petri net."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

_K_BOUNDED = re.compile(r"^(\d+)-bounded$")


@dataclass(frozen=True)
class PNProperties:
    """Properties the synthesized net must satisfy.

    Attributes:
        pure: No side conditions (self-loops) on any place
        plain: Every arc weight is one
        k_bounded: Maximal number of tokens per place, None for unbounded
        t_net: Plain T-net, every place has at most one input and one output
        output_nonbranching: Every place has at most one output transition
        conflict_free: Places with several outputs feed back to all of them
    """

    pure: bool = False
    plain: bool = False
    k_bounded: int | None = None
    t_net: bool = False
    output_nonbranching: bool = False
    conflict_free: bool = False

    def __post_init__(self) -> None:
        if self.k_bounded is not None and self.k_bounded < 1:
            raise ValueError(f"k must be positive for k-boundedness, got {self.k_bounded}")

    @property
    def is_k_bounded(self) -> bool:
        return self.k_bounded is not None

    @property
    def is_safe(self) -> bool:
        return self.k_bounded == 1

    @property
    def is_empty(self) -> bool:
        """No property requested at all."""
        return self == PNProperties()

    def with_k_bounded(self, k: int) -> PNProperties:
        return replace(self, k_bounded=k)

    def with_pure(self, pure: bool = True) -> PNProperties:
        return replace(self, pure=pure)

    def with_plain(self, plain: bool = True) -> PNProperties:
        return replace(self, plain=plain)

    @classmethod
    def parse(cls, options: str) -> PNProperties:
        """Parse a comma or whitespace separated list of property names.

        Accepted names: ``none``, ``safe``, ``<k>-bounded``, ``pure``,
        ``plain``, ``tnet``/``t-net``, ``output-nonbranching``/``on``,
        ``conflict-free``/``cf``.

        Raises:
            ValueError: On an unknown property name
        """
        properties = cls()
        for token in re.split(r"[,\s]+", options.strip().lower()):
            if token in ("", "none"):
                continue
            match = _K_BOUNDED.match(token)
            if token == "safe":
                properties = properties.with_k_bounded(1)
            elif match:
                properties = properties.with_k_bounded(int(match.group(1)))
            elif token == "pure":
                properties = replace(properties, pure=True)
            elif token == "plain":
                properties = replace(properties, plain=True)
            elif token in ("tnet", "t-net"):
                properties = replace(properties, t_net=True)
            elif token in ("output-nonbranching", "on"):
                properties = replace(properties, output_nonbranching=True)
            elif token in ("conflict-free", "cf"):
                properties = replace(properties, conflict_free=True)
            else:
                raise ValueError(f"Unknown Petri net property '{token}'")
        return properties

    def __str__(self) -> str:
        names = []
        if self.k_bounded == 1:
            names.append("safe")
        elif self.k_bounded is not None:
            names.append(f"{self.k_bounded}-bounded")
        if self.pure:
            names.append("pure")
        if self.plain:
            names.append("plain")
        if self.t_net:
            names.append("tnet")
        if self.output_nonbranching:
            names.append("output-nonbranching")
        if self.conflict_free:
            names.append("conflict-free")
        return "[" + ", ".join(names) + "]"


__all__ = [
    "PNProperties",
]

"""Homogeneous integer linear equation systems.

An :class:`EquationSystem` collects equations ``c · x = 0`` over ``n``
integer variables and computes a basis of the integer solution lattice.

The kernel is computed with unimodular column operations: columns of the
coefficient matrix are combined by the extended Euclidean algorithm until
it is in column echelon form, while the same operations are applied to an
identity matrix ``U``. Since ``U`` stays unimodular, the columns of ``U``
matching the zero columns of the reduced matrix form a lattice basis of
``{x ∈ ℤⁿ : A x = 0}``. The number of basis vectors is ``n - rank(A)``.

All arithmetic uses Python integers held in NumPy ``object`` arrays, so
entries never overflow or lose precision.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from math import gcd

logger = logging.getLogger(__name__)


class EquationSystem:
    """A system of homogeneous integer equations.

    Example::

        system = EquationSystem(3)
        system.add_equation([1, -1, 0])
        system.find_basis()  # two vectors spanning x0 == x1
    """

    def __init__(self, num_variables: int):
        """Initialize an empty system.

        Args:
            num_variables: Number of variables in each equation
        """
        if num_variables < 0:
            raise ValueError(f"Number of variables must be non-negative, got {num_variables}")
        self.num_variables = num_variables
        self._equations: list[tuple[int, ...]] = []

    def add_equation(self, coefficients: Sequence[int]) -> None:
        """Add the equation ``coefficients · x = 0``.

        Raises:
            ValueError: If the number of coefficients is wrong
        """
        if len(coefficients) != self.num_variables:
            raise ValueError(
                f"Equation has {len(coefficients)} coefficients, expected {self.num_variables}"
            )
        self._equations.append(tuple(int(c) for c in coefficients))

    @property
    def equations(self) -> tuple[tuple[int, ...], ...]:
        return tuple(self._equations)

    def is_solution(self, vector: Sequence[int]) -> bool:
        """Check whether ``vector`` satisfies every equation."""
        return all(
            sum(c * x for c, x in zip(equation, vector)) == 0 for equation in self._equations
        )

    def find_basis(self) -> list[tuple[int, ...]]:
        """Compute an integer basis of the solution space.

        Returns:
            ``n - rank`` integer vectors; every integer solution is an
            integer linear combination of them
        """
        import numpy as np

        n = self.num_variables
        if n == 0:
            return []

        matrix = np.array(
            [list(eq) for eq in self._equations] or [[0] * n],
            dtype=object,
        ).reshape(-1, n)
        transform = np.array(
            [[1 if i == j else 0 for j in range(n)] for i in range(n)],
            dtype=object,
        )

        pivot = 0
        for row in range(matrix.shape[0]):
            if pivot >= n:
                break
            while True:
                nonzero = [j for j in range(pivot, n) if matrix[row, j] != 0]
                if not nonzero:
                    break
                smallest = min(nonzero, key=lambda j: abs(matrix[row, j]))
                self._swap_columns(matrix, transform, pivot, smallest)
                if len(nonzero) == 1:
                    break
                for j in range(pivot + 1, n):
                    if matrix[row, j] != 0:
                        quotient = matrix[row, j] // matrix[row, pivot]
                        matrix[:, j] = matrix[:, j] - quotient * matrix[:, pivot]
                        transform[:, j] = transform[:, j] - quotient * transform[:, pivot]
            if matrix[row, pivot] != 0:
                pivot += 1

        basis = [self._normalize(transform[:, j]) for j in range(pivot, n)]
        logger.debug(f"Equation system with {len(self._equations)} equations has basis {basis}")
        return basis

    @staticmethod
    def _swap_columns(matrix, transform, a: int, b: int) -> None:
        if a != b:
            matrix[:, [a, b]] = matrix[:, [b, a]]
            transform[:, [a, b]] = transform[:, [b, a]]

    @staticmethod
    def _normalize(column) -> tuple[int, ...]:
        vector = [int(x) for x in column]
        divisor = 0
        for x in vector:
            divisor = gcd(divisor, x)
        if divisor > 1:
            vector = [x // divisor for x in vector]
        # Sign convention: first non-zero entry positive
        for x in vector:
            if x != 0:
                if x < 0:
                    vector = [-y for y in vector]
                break
        return tuple(vector)

    def __repr__(self) -> str:
        return f"EquationSystem(num_variables={self.num_variables}, equations={self._equations})"


__all__ = [
    "EquationSystem",
]

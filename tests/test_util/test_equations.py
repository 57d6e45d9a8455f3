"""Tests for integer kernels of equation systems."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from petrisynth.util.equations import EquationSystem


class TestEquationSystem:
    """Tests for EquationSystem."""

    def test_no_equations(self):
        system = EquationSystem(3)
        assert system.find_basis() == [(1, 0, 0), (0, 1, 0), (0, 0, 1)]

    def test_no_variables(self):
        assert EquationSystem(0).find_basis() == []

    def test_negative_variable_count(self):
        with pytest.raises(ValueError):
            EquationSystem(-1)

    def test_wrong_length(self):
        system = EquationSystem(2)
        with pytest.raises(ValueError):
            system.add_equation([1, 2, 3])

    def test_single_equation(self):
        system = EquationSystem(3)
        system.add_equation([1, 1, 0])
        basis = system.find_basis()
        assert len(basis) == 2
        assert all(system.is_solution(v) for v in basis)

    def test_lattice_basis_not_rational(self):
        # x1 = 2 x0: the only primitive solution is (1, 2)
        system = EquationSystem(2)
        system.add_equation([2, -1])
        assert system.find_basis() == [(1, 2)]

    def test_common_divisor_removed(self):
        system = EquationSystem(2)
        system.add_equation([2, 4])
        assert system.find_basis() == [(2, -1)]

    def test_full_rank(self):
        system = EquationSystem(2)
        system.add_equation([1, 0])
        system.add_equation([0, 1])
        assert system.find_basis() == []

    def test_zero_equation(self):
        system = EquationSystem(2)
        system.add_equation([0, 0])
        assert system.find_basis() == [(1, 0), (0, 1)]

    def test_first_entry_positive(self):
        system = EquationSystem(2)
        system.add_equation([1, 1])
        (vector,) = system.find_basis()
        assert vector == (1, -1)

    def test_large_coefficients(self):
        big = 10**30
        system = EquationSystem(2)
        system.add_equation([big, -big])
        assert system.find_basis() == [(1, 1)]


# ---------------------------------------------------------------------------
# Property-based tests
# ---------------------------------------------------------------------------


@st.composite
def equation_systems(draw: st.DrawFn) -> EquationSystem:
    """Small systems with small integer coefficients."""
    n = draw(st.integers(min_value=1, max_value=4))
    rows = draw(
        st.lists(
            st.lists(st.integers(min_value=-3, max_value=3), min_size=n, max_size=n),
            min_size=0,
            max_size=3,
        )
    )
    system = EquationSystem(n)
    for row in rows:
        system.add_equation(row)
    return system


@given(equation_systems())
@settings(max_examples=100)
def test_basis_vectors_are_solutions(system: EquationSystem):
    for vector in system.find_basis():
        assert system.is_solution(vector)
        assert any(vector)


@given(equation_systems())
@settings(max_examples=100)
def test_basis_size_is_nullity(system: EquationSystem):
    rank = 0
    if system.equations:
        rank = np.linalg.matrix_rank(np.array(system.equations, dtype=float))
    assert len(system.find_basis()) == system.num_variables - rank


@given(equation_systems())
@settings(max_examples=100)
def test_basis_is_linearly_independent(system: EquationSystem):
    basis = system.find_basis()
    if basis:
        assert np.linalg.matrix_rank(np.array(basis, dtype=float)) == len(basis)

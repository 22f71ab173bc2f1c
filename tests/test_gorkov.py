import cmath

import numpy as np
import pytest

from levitron.acoustics import DEFAULT_P0, propagate_field, side_by_side_positions
from levitron.gorkov import (
    field_derivative,
    gorkov_derivative,
    gorkov_potential,
    gorkov_second_derivative,
    precompute_k1,
    precompute_k2,
)

SINGLE = [(0.0, 0.0, 0.0)]
ON_AXIS = (0.0, 0.0, 0.05)
OFF_AXIS = (0.004, -0.003, 0.06)
X = (1.0, 0.0, 0.0)
Z = (0.0, 0.0, 1.0)


@pytest.fixture
def small_array():
    positions = side_by_side_positions((4, 4), 0.0105)
    rng = np.random.default_rng(7)
    phases = rng.uniform(0, 2 * np.pi, len(positions))
    return positions, np.exp(1j * phases)


def test_constants_are_positive():
    assert precompute_k1() > 0
    assert precompute_k2() > 0


def test_zero_field_gives_zero_everything():
    field = [0j]
    assert field_derivative(OFF_AXIS, Z, field, SINGLE) == 0
    assert gorkov_potential(OFF_AXIS, field, SINGLE) == 0
    assert gorkov_derivative(OFF_AXIS, Z, field, SINGLE) == 0
    assert gorkov_second_derivative(OFF_AXIS, Z, field, SINGLE) == 0


def test_field_derivative_is_linear_in_field(small_array):
    positions, field = small_array
    base = field_derivative(OFF_AXIS, Z, field, positions)
    doubled = field_derivative(OFF_AXIS, Z, 2 * field, positions)
    assert doubled == pytest.approx(2 * base)


def test_field_derivative_flips_with_direction(small_array):
    positions, field = small_array
    forward = field_derivative(OFF_AXIS, X, field, positions)
    backward = field_derivative(OFF_AXIS, (-1.0, 0.0, 0.0), field, positions)
    assert backward == pytest.approx(-forward)


def test_field_derivative_matches_fine_difference():
    h = 1e-7
    p = np.array(OFF_AXIS)
    d = np.array(Z)
    fine = (propagate_field(p + h * d, [1j], SINGLE) - propagate_field(p - h * d, [1j], SINGLE)) / (2 * h)
    stencil = field_derivative(p, d, [1j], SINGLE)
    assert abs(stencil - fine) <= 1e-3 * abs(fine)


def test_potential_is_quadratic_in_field(small_array):
    positions, field = small_array
    base = gorkov_potential(OFF_AXIS, field, positions)
    assert gorkov_potential(OFF_AXIS, 3 * field, positions) == pytest.approx(9 * base)


def test_potential_is_quadratic_in_reference_pressure(small_array):
    positions, field = small_array
    base = gorkov_potential(OFF_AXIS, field, positions)
    scaled = gorkov_potential(OFF_AXIS, field, positions, p0=2 * DEFAULT_P0)
    assert scaled == pytest.approx(4 * base)


def test_potential_ignores_global_phase(small_array):
    positions, field = small_array
    base = gorkov_potential(OFF_AXIS, field, positions)
    rotated = gorkov_potential(OFF_AXIS, field * cmath.exp(0.9j), positions)
    assert rotated == pytest.approx(base)


def test_gorkov_derivative_antisymmetric(small_array):
    positions, field = small_array
    forward = gorkov_derivative(OFF_AXIS, Z, field, positions)
    backward = gorkov_derivative(OFF_AXIS, (0.0, 0.0, -1.0), field, positions)
    assert backward == pytest.approx(-forward)
    assert forward != 0


def test_gorkov_derivative_vanishes_across_axis_by_symmetry():
    along_z = gorkov_derivative(ON_AXIS, Z, [1 + 0j], SINGLE)
    across = gorkov_derivative(ON_AXIS, X, [1 + 0j], SINGLE)
    assert abs(across) <= 1e-6 * abs(along_z)


def test_second_derivative_symmetric_in_direction(small_array):
    positions, field = small_array
    forward = gorkov_second_derivative(OFF_AXIS, Z, field, positions)
    backward = gorkov_second_derivative(OFF_AXIS, (0.0, 0.0, -1.0), field, positions)
    assert backward == pytest.approx(forward)


def test_second_derivative_consistent_with_first(small_array):
    positions, field = small_array
    h = 1e-5
    p = np.array(OFF_AXIS)
    d = np.array(Z)
    slope = (
        gorkov_derivative(p + h * d, d, field, positions)
        - gorkov_derivative(p - h * d, d, field, positions)
    ) / (2 * h)
    second = gorkov_second_derivative(p, d, field, positions)
    assert second == pytest.approx(slope, rel=0.05)


def test_explicit_delta_changes_little(small_array):
    positions, field = small_array
    default = gorkov_derivative(OFF_AXIS, Z, field, positions)
    finer = gorkov_derivative(OFF_AXIS, Z, field, positions, delta=0.346 / 40000 / 128)
    assert finer == pytest.approx(default, rel=0.01)


def test_short_field_raises():
    positions = side_by_side_positions((2, 2), 0.0105)
    with pytest.raises(ValueError):
        gorkov_potential(OFF_AXIS, [1j, 1j], positions)
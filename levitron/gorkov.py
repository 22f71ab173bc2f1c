"""Gor'kov potential of a small particle in the field of a transducer array.

Spatial derivatives use five-point finite-difference stencils at offsets
(-2, -1, 0, 1, 2) * delta along a unit direction.
"""

import math

import numpy as np

from levitron.acoustics import (
    C_A,
    C_P,
    DEFAULT_P0,
    PARTICLE_RADIUS,
    RHO_A,
    RHO_P,
    angular_frequency,
    propagate_field,
    wavelength,
)

_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def _default_delta() -> float:
    return wavelength() / 64


def _stencil(point, direction, delta: float):
    """Points at -2, -1, +1 and +2 steps of ``delta`` along ``direction``."""
    p = np.asarray(point, dtype=float)
    d = np.asarray(direction, dtype=float)
    return p - 2 * delta * d, p - delta * d, p + delta * d, p + 2 * delta * d


def _first_derivative(f_neg2, f_neg1, f_pos1, f_pos2, delta: float):
    return (f_neg2 - 8 * f_neg1 + 8 * f_pos1 - f_pos2) / (12 * delta)


def _particle_volume() -> float:
    return (4.0 / 3.0) * math.pi * PARTICLE_RADIUS**3


def precompute_k1() -> float:
    """Constant multiplying the squared pressure in the Gor'kov potential."""
    kapa = 1.0 / (RHO_A * C_A * C_A)
    kapa_p = 1.0 / (RHO_P * C_P * C_P)
    f_1 = 1.0 - kapa_p / kapa
    vk_pre = f_1 * 0.5 * kapa * 0.5
    return _particle_volume() * vk_pre


def precompute_k2() -> float:
    """Constant multiplying the squared pressure gradient in the Gor'kov potential."""
    rho_tilda = RHO_P / RHO_A
    f_2 = (2.0 * (rho_tilda - 1.0)) / ((2.0 * rho_tilda) + 1.0)
    vk_pre_to_vel = 1.0 / (RHO_A * angular_frequency())
    vk_vel = f_2 * (3.0 / 4.0) * RHO_A * 0.5
    return _particle_volume() * vk_vel * vk_pre_to_vel * vk_pre_to_vel


def field_derivative(point, direction, field, transducer_positions,
                     delta=None, p0=DEFAULT_P0) -> complex:
    """Derivative of the complex field at ``point`` along the unit vector ``direction``."""
    if delta is None:
        delta = _default_delta()
    values = [
        propagate_field(p, field, transducer_positions, p0)
        for p in _stencil(point, direction, delta)
    ]
    return complex(_first_derivative(*values, delta))


def gorkov_potential(point, field, transducer_positions,
                     delta=None, p0=DEFAULT_P0) -> float:
    """Gor'kov potential at ``point``."""
    if delta is None:
        delta = _default_delta()
    pressure = propagate_field(point, field, transducer_positions, p0)
    gradient_sq = sum(
        abs(field_derivative(point, axis, field, transducer_positions, delta, p0)) ** 2
        for axis in _AXES
    )
    return precompute_k1() * abs(pressure) ** 2 - precompute_k2() * gradient_sq


def gorkov_derivative(point, direction, field, transducer_positions,
                      delta=None, p0=DEFAULT_P0) -> float:
    """Derivative of the Gor'kov potential along the unit vector ``direction``.

    The potentials in the stencil are evaluated at the default reference
    pressure; ``p0`` does not alter the result.
    """
    if delta is None:
        delta = _default_delta()
    values = [
        gorkov_potential(p, field, transducer_positions, delta, DEFAULT_P0)
        for p in _stencil(point, direction, delta)
    ]
    return float(_first_derivative(*values, delta))


def gorkov_second_derivative(point, direction, field, transducer_positions,
                             delta=None, p0=DEFAULT_P0) -> float:
    """Second derivative of the Gor'kov potential along the unit vector ``direction``."""
    if delta is None:
        delta = _default_delta()
    neg2, neg1, pos1, pos2 = (
        gorkov_potential(p, field, transducer_positions, delta, p0)
        for p in _stencil(point, direction, delta)
    )
    centre = gorkov_potential(point, field, transducer_positions, delta, p0)
    return float((-neg2 + 16 * neg1 - 30 * centre + 16 * pos1 - pos2) / (12 * delta * delta))
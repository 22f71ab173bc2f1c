"""Acoustic radiation forces and their spatial derivatives, from the Gor'kov potential.

Derivatives use five-point finite-difference stencils at offsets
(-2, -1, 0, 1, 2) * delta along a unit direction.
"""

import numpy as np

from levitron.acoustics import DEFAULT_P0, wavelength
from levitron.gorkov import gorkov_derivative, gorkov_second_derivative

_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def _resolve_delta(delta):
    return wavelength() / 64 if delta is None else delta


def _stencil(point, direction, delta: float):
    """Points at -2, -1, +1 and +2 steps of ``delta`` along ``direction``."""
    p = np.asarray(point, dtype=float)
    d = np.asarray(direction, dtype=float)
    return p - 2 * delta * d, p - delta * d, p + delta * d, p + 2 * delta * d


def acoustic_force(point, field, transducer_positions,
                   delta=None, p0=DEFAULT_P0) -> np.ndarray:
    """Force on the particle at ``point``: minus the gradient of the Gor'kov potential.

    The potentials are evaluated at the default reference pressure; ``p0``
    does not alter the result.
    """
    delta = _resolve_delta(delta)
    return np.array([
        -gorkov_derivative(point, axis, field, transducer_positions, delta)
        for axis in _AXES
    ])


def acoustic_force_derivative(point, direction, field, transducer_positions,
                              delta=None, p0=DEFAULT_P0) -> np.ndarray:
    """Derivative of the force vector along the unit vector ``direction``."""
    delta = _resolve_delta(delta)
    neg2, neg1, pos1, pos2 = (
        acoustic_force(p, field, transducer_positions, delta, p0)
        for p in _stencil(point, direction, delta)
    )
    return (neg2 - 8 * neg1 + 8 * pos1 - pos2) / (12 * delta)


def stiffness(point, field, transducer_positions,
              delta=None, p0=DEFAULT_P0) -> np.ndarray:
    """Minus the second derivative of the Gor'kov potential along X, Y and Z."""
    delta = _resolve_delta(delta)
    return np.array([
        -gorkov_second_derivative(point, axis, field, transducer_positions, delta, p0)
        for axis in _AXES
    ])


def force_gradients(point, field, transducer_positions,
                    delta=None, p0=DEFAULT_P0) -> np.ndarray:
    """Sum of the force derivatives along X, Y and Z, per force component."""
    delta = _resolve_delta(delta)
    return sum(
        acoustic_force_derivative(point, axis, field, transducer_positions, delta, p0)
        for axis in _AXES
    )
"""Acoustic constants and the piston model used to propagate transducer fields."""

import math
from collections.abc import Sequence

import numpy as np
from scipy.special import j1

RHO_P = 25.0
"""Density of the levitated particles (kg/m^3)."""
RHO_A = 1.184
"""Density of air (kg/m^3)."""
C_P = 2600.0
"""Speed of sound in the particle (m/s)."""
C_A = 346.0
"""Speed of sound in air (m/s)."""
FREQUENCY = 40000.0
"""Emission frequency of the transducers (Hz)."""
PARTICLE_RADIUS = 0.001
"""Radius of the levitated particle (m)."""
R0 = 0.005
"""Radius of a transducer (m)."""
DEFAULT_P0 = 8.02
"""Reference pressure of a transducer at 1 m (Pa)."""
TOP_BOARD_HEIGHT = 0.2388
"""Height of the top board above the bottom board (m)."""

_SIN_ALPHA_EPSILON = 1e-9


def wavelength() -> float:
    """Wavelength of the emitted sound in air."""
    return C_A / FREQUENCY


def wave_number() -> float:
    """Wave number K = 2*pi / wavelength."""
    return 2 * math.pi / wavelength()


def angular_frequency() -> float:
    """Angular frequency omega = 2*pi*f."""
    return 2 * math.pi * FREQUENCY


def transducer_pos_top_bottom(index: Sequence[int], pitch: float) -> tuple[float, float, float]:
    """Position of a transducer when boards are stacked top-bottom (16x32 grid).

    Rows 0..15 belong to the bottom board, rows 16..31 to the top board.
    """
    i, j = index
    if j < 16:
        return ((i - 7.5) * pitch, (7.5 - j) * pitch, 0.0)
    return ((i - 7.5) * pitch, (7.5 - (j - 16)) * pitch, TOP_BOARD_HEIGHT)


def transducer_pos_side_by_side(index: Sequence[int], pitch: float) -> tuple[float, float, float]:
    """Position of a transducer when boards are laid side by side (32x16 grid).

    Columns 0..15 belong to the bottom board, columns 16..31 to the top board.
    """
    i, j = index
    if i < 16:
        return ((i - 7.5) * pitch, (7.5 - j) * pitch, 0.0)
    return ((i - 16 - 7.5) * pitch, (7.5 - j) * pitch, TOP_BOARD_HEIGHT)


def side_by_side_positions(board_size: Sequence[int], pitch: float) -> np.ndarray:
    """Positions of a whole side-by-side board, row by row, as an (w*h, 3) array."""
    width, height = board_size
    positions = [
        transducer_pos_side_by_side((i, j), pitch)
        for j in range(height)
        for i in range(width)
    ]
    return np.array(positions, dtype=float).reshape(-1, 3)


def _amplitudes_and_distances(positions, point, p0: float) -> tuple[np.ndarray, np.ndarray]:
    offsets = np.asarray(point, dtype=float) - np.asarray(positions, dtype=float).reshape(-1, 3)
    with np.errstate(divide="ignore", invalid="ignore"):
        distances = np.linalg.norm(offsets, axis=1)
        sin_alpha = np.hypot(offsets[:, 0], offsets[:, 1]) / distances
        sin_alpha = np.where(sin_alpha == 0, _SIN_ALPHA_EPSILON, sin_alpha)
        x = wave_number() * R0 * sin_alpha
        amplitudes = np.abs(2 * j1(x) * p0 / (x * distances))
    return amplitudes, distances


def amplitude_and_distance(t_pos, point, p0: float = DEFAULT_P0) -> tuple[float, float]:
    """Piston-model amplitude at ``point`` from a transducer at ``t_pos``, and their distance."""
    amplitudes, distances = _amplitudes_and_distances([t_pos], point, p0)
    return float(amplitudes[0]), float(distances[0])


def propagate_field(point, field, transducer_positions, p0: float = DEFAULT_P0) -> complex:
    """Complex field at ``point`` produced by transducers in the given complex states."""
    positions = np.asarray(transducer_positions, dtype=float).reshape(-1, 3)
    states = np.asarray(field, dtype=complex).reshape(-1)
    count = len(positions)
    if len(states) < count:
        raise ValueError(f"field has {len(states)} entries but {count} transducers were given")
    amplitudes, distances = _amplitudes_and_distances(positions, point, p0)
    propagation = amplitudes * np.exp(1j * wave_number() * distances)
    return complex(np.sum(states[:count] * propagation))


def propagate_field_on_board(point, field, board_size: Sequence[int], pitch: float) -> complex:
    """Complex field at ``point`` from a side-by-side board of complex transducer states."""
    return propagate_field(point, field, side_by_side_positions(board_size, pitch))


def propagate_field_from_phases(point, phases, board_size: Sequence[int], pitch: float) -> complex:
    """Complex field at ``point`` from a side-by-side board driven at unit amplitude with ``phases``."""
    states = np.exp(1j * np.asarray(phases, dtype=float))
    return propagate_field_on_board(point, states, board_size, pitch)
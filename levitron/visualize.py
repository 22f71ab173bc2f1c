"""Rendering the amplitude of a propagated field across a rectangular plane.

The plane is spanned by corners ``a``, ``b`` and ``c``: pixel columns step
from ``a`` towards ``b`` and pixel rows step from ``a`` towards ``c``.
Amplitudes are mapped to a black-red-yellow-white ramp.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from PIL import Image

from levitron.acoustics import DEFAULT_P0, propagate_field, side_by_side_positions

DEFAULT_PITCH = 0.0105
"""Separation between neighbouring transducers of a board (m)."""

_COLOUR_LEVELS = 3 * 256
_MIN_SENTINEL = 1_000_000.0


@dataclass(frozen=True)
class PlaneStats:
    """Average, minimum and maximum amplitude over a rendered plane."""

    average: float
    minimum: float
    maximum: float

    @classmethod
    def from_amplitudes(cls, amplitudes) -> "PlaneStats":
        amps = np.asarray(amplitudes, dtype=float)
        return cls(
            average=float(amps.sum() / amps.size),
            minimum=float(min(_MIN_SENTINEL, amps.min())),
            maximum=float(max(0.0, amps.max())),
        )

    def __str__(self) -> str:
        return (f"AVG Amp= {self.average:f};\n MIN Amp={self.minimum:f};\n"
                f" MAX amp={self.maximum:f};")


@dataclass(eq=False)
class PlaneImage:
    """A rendered plane: the RGB image, the amplitude of every pixel and their statistics."""

    image: Image.Image
    amplitudes: np.ndarray
    stats: PlaneStats


def _image_shape(image_size: Sequence[int]) -> tuple[int, int]:
    width, height = (int(v) for v in image_size)
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    return width, height


def plane_points(a, b, c, image_size: Sequence[int]) -> np.ndarray:
    """3D position of every pixel, as an array of shape (height, width, 3)."""
    width, height = _image_shape(image_size)
    origin = np.asarray(a, dtype=float)
    step_ab = (np.asarray(b, dtype=float) - origin) / width
    step_ac = (np.asarray(c, dtype=float) - origin) / height
    px = np.arange(width)[np.newaxis, :, np.newaxis]
    py = np.arange(height)[:, np.newaxis, np.newaxis]
    return origin + px * step_ab + py * step_ac


def _amplitudes(points: np.ndarray, states, positions) -> np.ndarray:
    states = np.asarray(states, dtype=complex).reshape(-1)
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    return np.array(
        [[abs(propagate_field(p, states, positions, DEFAULT_P0)) for p in row] for row in points],
        dtype=float,
    )


def field_amplitudes(a, b, c, image_size, field, transducer_positions) -> np.ndarray:
    """Amplitude at every pixel for transducers in the given complex states."""
    return _amplitudes(plane_points(a, b, c, image_size), field, transducer_positions)


def board_amplitudes(a, b, c, image_size, field, board_size, pitch=DEFAULT_PITCH) -> np.ndarray:
    """Amplitude at every pixel for a side-by-side board; ``field`` is stored row by row."""
    positions = side_by_side_positions(board_size, pitch)
    return field_amplitudes(a, b, c, image_size, field, positions)


def phase_amplitudes(a, b, c, image_size, phases, transducer_positions) -> np.ndarray:
    """Amplitude at every pixel for transducers driven at unit amplitude with ``phases``."""
    states = np.exp(1j * np.asarray(phases, dtype=float))
    return field_amplitudes(a, b, c, image_size, states, transducer_positions)


def colour_map(amplitudes) -> np.ndarray:
    """Map amplitudes to RGB bytes, scaling the largest amplitude to the top of the ramp."""
    amps = np.asarray(amplitudes, dtype=float)
    maximum = max(0.0, float(amps.max()))
    if maximum == 0.0:
        return np.zeros(amps.shape + (3,), dtype=np.uint8)
    levels = (amps * (_COLOUR_LEVELS / maximum)).astype(np.int64)
    red = np.where(levels < 256, levels, 255)
    green = np.where(levels < 256, 0, np.where(levels < 512, levels - 256, 255))
    blue = np.where(levels < 512, 0, levels - 512)
    return (np.stack([red, green, blue], axis=-1) & 0xFF).astype(np.uint8)


def render(amplitudes) -> PlaneImage:
    """Turn an array of amplitudes (height, width) into an image with its statistics."""
    amps = np.asarray(amplitudes, dtype=float)
    if amps.ndim != 2 or amps.size == 0:
        raise ValueError("amplitudes must be a non-empty 2D array")
    image = Image.fromarray(colour_map(amps))
    return PlaneImage(image=image, amplitudes=amps, stats=PlaneStats.from_amplitudes(amps))


def visualize(a, b, c, image_size, field, transducer_positions) -> PlaneImage:
    """Render the field of transducers in complex states across the plane."""
    return render(field_amplitudes(a, b, c, image_size, field, transducer_positions))


def visualize_on_board(a, b, c, image_size, field, board_size, pitch=DEFAULT_PITCH) -> PlaneImage:
    """Render the field of a side-by-side board across the plane."""
    return render(board_amplitudes(a, b, c, image_size, field, board_size, pitch))


def visualize_from_phases(a, b, c, image_size, phases, transducer_positions) -> PlaneImage:
    """Render the field of unit-amplitude transducers with the given phases across the plane."""
    return render(phase_amplitudes(a, b, c, image_size, phases, transducer_positions))
"""Encoding of phases, amplitudes and commands into board messages."""

import math
from collections.abc import Sequence

UPDATE_FLAG = 128
"""Added to the first byte of a board message to mark a new update."""
MAX_DIVIDER = 256
_DIVIDER_OFFSET = 26
_DIVIDER_BITS = 8
_DIVIDER_END = 34
_TWO_PI = 2 * math.pi


def discretize_phase(phase: float, discrete_phase_max: int) -> int:
    """Map a phase in radians to one of ``discrete_phase_max`` levels."""
    mod_phase = math.fmod(phase, _TWO_PI)
    if mod_phase < 0:
        mod_phase += _TWO_PI
    return int(mod_phase / _TWO_PI * discrete_phase_max) & 0xFF


def discretize_amplitude(amplitude: float, discrete_amplitude_max: int) -> int:
    """Map an amplitude in [0, 1] to a duty level up to ``discrete_amplitude_max``."""
    step = (discrete_amplitude_max * 2.0 / math.pi) * math.asin(amplitude)
    return int(step) & 0xFF


def discretize(phases: Sequence[float], amplitudes: Sequence[float],
               phase_adjust: Sequence[int], transducer_ids: Sequence[int],
               discrete_phase_max: int = 128) -> bytes:
    """Build one board message: phases then amplitudes, placed by PIN index.

    Phases are corrected by ``phase_adjust`` (degrees) and shifted to keep the
    pulse centred as the amplitude drops.
    """
    count = len(phases)
    if not len(amplitudes) == len(phase_adjust) == len(transducer_ids) == count:
        raise ValueError("phases, amplitudes, phase_adjust and transducer_ids must have equal length")
    discrete_amplitude_max = discrete_phase_max // 2
    message = bytearray(2 * count)
    for phase, amplitude, adjust, pin in zip(phases, amplitudes, phase_adjust, transducer_ids):
        if not 0 <= pin < count:
            raise ValueError(f"PIN index {pin} out of range for {count} transducers")
        corrected = phase - adjust * math.pi / 180.0
        discrete_phase = discretize_phase(corrected, discrete_phase_max)
        discrete_amplitude = discretize_amplitude(amplitude, discrete_amplitude_max)
        shift = ((discrete_amplitude_max - discrete_amplitude) // 2) & 0xFF
        if discrete_phase + shift < discrete_phase_max:
            discrete_phase += shift
        else:
            discrete_phase += shift - discrete_phase_max
        message[pin] = discrete_phase & 0xFF
        message[pin + count] = discrete_amplitude
    if message:
        message[0] = (message[0] + UPDATE_FLAG) & 0xFF
    return bytes(message)


def _flagged(num_boards: int, message_size: int, fill: int) -> bytes:
    message = bytearray([fill]) * (message_size * num_boards)
    for board in range(num_boards):
        message[board * message_size] = (fill + UPDATE_FLAG) & 0xFF
    return bytes(message)


def transducers_off_message(num_boards: int, message_size: int) -> bytes:
    """Message setting every phase and amplitude of every board to zero."""
    return _flagged(num_boards, message_size, 0)


def transducers_on_message(num_boards: int, message_size: int) -> bytes:
    """Message setting every phase and amplitude of every board to 64."""
    return _flagged(num_boards, message_size, 64)


def divider_message(divider: int, num_boards: int, message_size: int) -> bytes:
    """Message setting the FPGA update rate to 40000/divider Hz on every board."""
    if not 0 <= divider <= MAX_DIVIDER:
        raise ValueError(f"The maximum number of divider is {MAX_DIVIDER}")
    if message_size <= _DIVIDER_END:
        raise ValueError(f"message size must exceed {_DIVIDER_END} bytes")
    message = bytearray(message_size * num_boards)
    for board in range(num_boards):
        base = board * message_size
        message[base] = UPDATE_FLAG
        for bit in range(_DIVIDER_BITS):
            message[base + _DIVIDER_OFFSET + bit] = UPDATE_FLAG * ((divider >> bit) & 1)
        message[base + _DIVIDER_END] = UPDATE_FLAG
    return bytes(message)
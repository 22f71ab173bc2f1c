"""Reading and writing per-board calibration files (``board_<id>.pat``)."""

import re
from dataclasses import dataclass
from pathlib import Path

MAX_TRANSDUCERS = 256
MAX_HARDWARE_ID_LENGTH = 19

_POSITION = re.compile(r"\(([^(),]*),([^(),]*),([^(),]*)\)\s*,")
_POSITION_LINE = re.compile(r"(?:\s*\([^()]*\)\s*,)*\s*")


class BoardConfigError(ValueError):
    """Raised when a board configuration is malformed."""


@dataclass
class BoardConfig:
    """Calibration data of one board."""

    hardware_id: str
    num_transducers: int
    num_discrete_levels: int
    positions: list
    pin_mapping: list
    phase_adjust: list
    amplitude_adjust: list

    def __post_init__(self) -> None:
        if not 0 <= self.num_transducers <= MAX_TRANSDUCERS:
            raise BoardConfigError(
                f"number of transducers must be between 0 and {MAX_TRANSDUCERS}, got {self.num_transducers}"
            )
        if not self.hardware_id or any(c.isspace() for c in self.hardware_id):
            raise BoardConfigError(f"invalid hardware ID {self.hardware_id!r}")
        if len(self.hardware_id) > MAX_HARDWARE_ID_LENGTH:
            raise BoardConfigError(f"hardware ID {self.hardware_id!r} is too long")
        self.positions = [tuple(float(c) for c in p) for p in self.positions]
        self.pin_mapping = [int(v) for v in self.pin_mapping]
        self.phase_adjust = [int(v) for v in self.phase_adjust]
        self.amplitude_adjust = [float(v) for v in self.amplitude_adjust]
        for name in ("positions", "pin_mapping", "phase_adjust", "amplitude_adjust"):
            if len(getattr(self, name)) != self.num_transducers:
                raise BoardConfigError(
                    f"{name} has {len(getattr(self, name))} entries, expected {self.num_transducers}"
                )
        if any(len(p) != 3 for p in self.positions):
            raise BoardConfigError("every position needs three coordinates")


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise BoardConfigError(f"error parsing {what}: {text!r}") from None


def _parse_list(line: str, count: int, convert, what: str) -> list:
    items = [item.strip() for item in line.split(",")]
    if items[-1] != "":
        raise BoardConfigError(f"error parsing {what}: missing trailing comma")
    items = items[:-1]
    if len(items) != count:
        raise BoardConfigError(f"error parsing {what}: expected {count} values, found {len(items)}")
    try:
        return [convert(item) for item in items]
    except ValueError:
        raise BoardConfigError(f"error parsing {what}") from None


def _parse_positions(line: str, count: int) -> list:
    if not _POSITION_LINE.fullmatch(line):
        raise BoardConfigError("error parsing transducer positions")
    try:
        positions = [tuple(float(c) for c in m) for m in _POSITION.findall(line)]
    except ValueError:
        raise BoardConfigError("error parsing transducer positions") from None
    if len(positions) != count:
        raise BoardConfigError(
            f"error parsing transducer positions: expected {count}, found {len(positions)}"
        )
    return positions


def parse_board_config(text: str) -> BoardConfig:
    """Parse the contents of a board configuration file."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) < 3:
        raise BoardConfigError("configuration is incomplete")
    hardware_id = lines[0]
    num_transducers = _parse_int(lines[1], "number of transducers")
    num_discrete_levels = _parse_int(lines[2], "number of discrete levels")
    if num_transducers == 0:
        # Empty sections leave no lines behind.
        expected = 3
        sections = [""] * 4
    else:
        expected = 7
        sections = lines[3:7]
    if len(lines) != expected:
        raise BoardConfigError(f"expected {expected} non-empty lines, found {len(lines)}")
    if not 0 <= num_transducers <= MAX_TRANSDUCERS:
        raise BoardConfigError(f"unsupported number of transducers: {num_transducers}")
    if num_transducers == 0:
        positions, pins, phases, amplitudes = [], [], [], []
    else:
        positions = _parse_positions(sections[0], num_transducers)
        pins = _parse_list(sections[1], num_transducers, int, "PIN mapping")
        phases = _parse_list(sections[2], num_transducers, int, "phase corrections")
        amplitudes = _parse_list(sections[3], num_transducers, float, "amplitude corrections")
    return BoardConfig(
        hardware_id=hardware_id,
        num_transducers=num_transducers,
        num_discrete_levels=num_discrete_levels,
        positions=positions,
        pin_mapping=pins,
        phase_adjust=phases,
        amplitude_adjust=amplitudes,
    )


def read_board_config(path) -> BoardConfig:
    """Read a board configuration from a file."""
    return parse_board_config(Path(path).read_text())


def read_board_config_by_id(board_id: int, directory=".") -> BoardConfig:
    """Read ``board_<id>.pat`` from ``directory``."""
    return read_board_config(Path(directory) / f"board_{board_id}.pat")


def format_board_config(config: BoardConfig) -> str:
    """Render a configuration in the file format."""
    positions = "".join(f"({x:f}, {y:f}, {z:f})," for x, y, z in config.positions)
    pins = "".join(f"{v:d}," for v in config.pin_mapping)
    phases = "".join(f"{v:d}," for v in config.phase_adjust)
    amplitudes = "".join(f"{v:f}," for v in config.amplitude_adjust)
    return "\n".join(
        [
            config.hardware_id,
            str(config.num_transducers),
            str(config.num_discrete_levels),
            positions,
            pins,
            phases,
            amplitudes,
        ]
    ) + "\n"


def save_board_config(board_id: int, config: BoardConfig, path="./") -> Path:
    """Write ``config`` to ``board_<id>.pat`` inside ``path``; return the file written."""
    target = Path(path) / f"board_{board_id}.pat"
    target.write_text(format_board_config(config))
    return target
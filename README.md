# levitron

Tools for computing and encoding the fields of ultrasonic phased arrays used
in acoustic levitation.

## What it does

- **`levitron.acoustics`** – physical constants (`RHO_P`, `RHO_A`, `C_P`,
  `C_A`, `FREQUENCY`, `PARTICLE_RADIUS`, `R0`, `DEFAULT_P0`) and derived values
  (`wavelength()`, `wave_number()`, `angular_frequency()`); transducer layouts
  (`transducer_pos_top_bottom`, `transducer_pos_side_by_side`,
  `side_by_side_positions`); the piston model of a transducer
  (`amplitude_and_distance`); and propagation of complex transducer states to a
  point (`propagate_field`, `propagate_field_on_board`,
  `propagate_field_from_phases`).
- **`levitron.gorkov`** – the Gor'kov constants (`precompute_k1`,
  `precompute_k2`), the field derivative along a direction
  (`field_derivative`), the Gor'kov potential (`gorkov_potential`) and its
  first and second derivatives (`gorkov_derivative`,
  `gorkov_second_derivative`), using five-point finite differences with a
  default step of a 64th of a wavelength.
- **`levitron.forces`** – acoustic radiation force (`acoustic_force`), its
  derivative along a direction (`acoustic_force_derivative`), `stiffness` and
  `force_gradients`, each returned as a NumPy array of three components.
- **`levitron.board_config`** – the `BoardConfig` dataclass and functions to
  parse, read, format and save `board_<id>.pat` calibration files
  (`parse_board_config`, `read_board_config`, `read_board_config_by_id`,
  `format_board_config`, `save_board_config`). Malformed files raise
  `BoardConfigError`.
- **`levitron.messages`** – encode phases and amplitudes into a board message
  (`discretize`, with `discretize_phase` and `discretize_amplitude`), and build
  the transducers-on, transducers-off and frame-rate divider messages
  (`transducers_on_message`, `transducers_off_message`, `divider_message`).
- **`levitron.visualize`** – compute the field amplitude across a plane
  (`plane_points`, `field_amplitudes`, `board_amplitudes`,
  `phase_amplitudes`), map it to colours (`colour_map`) and render it as a
  Pillow image with statistics (`render`, `visualize`, `visualize_on_board`,
  `visualize_from_phases`, returning a `PlaneImage` with a `PlaneStats`).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np
from levitron.acoustics import side_by_side_positions, propagate_field
from levitron.gorkov import gorkov_potential
from levitron.forces import acoustic_force

positions = side_by_side_positions((32, 16), 0.0105)
field = np.ones(len(positions), dtype=complex)
point = (0.0, 0.0, 0.12)

pressure = propagate_field(point, field, positions)
potential = gorkov_potential(point, field, positions)
force = acoustic_force(point, field, positions)
```

Building a message for a board from its calibration file:

```python
from levitron.board_config import read_board_config
from levitron.messages import discretize

config = read_board_config("board_1.pat")
phases = [0.0] * config.num_transducers
amplitudes = [1.0] * config.num_transducers
message = discretize(phases, amplitudes, config.phase_adjust, config.pin_mapping, 128)
```

Rendering the field across a plane and saving it:

```python
from levitron.visualize import visualize_on_board

a, b, c = (-0.1, 0.0, 0.2388), (0.1, 0.0, 0.2388), (-0.1, 0.0, 0.0)
result = visualize_on_board(a, b, c, (64, 64), field, (32, 16))
result.image.save("plane.png")
print(result.stats)
```

## What it does not do

The package computes fields and builds the bytes of board messages, but it
does not talk to the boards: it opens no network sockets or serial ports,
runs no sender threads and has no timing helpers for pacing updates. Messages
returned by `levitron.messages` must be delivered by your own transport. There
is no command-line tool; everything is used as a library.
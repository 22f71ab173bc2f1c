import numpy as np
import pytest

from levitron.acoustics import propagate_field, side_by_side_positions
from levitron.visualize import (
    PlaneStats,
    board_amplitudes,
    colour_map,
    field_amplitudes,
    phase_amplitudes,
    plane_points,
    render,
    visualize,
    visualize_from_phases,
    visualize_on_board,
)

A = (-0.02, 0.0, 0.05)
B = (0.02, 0.0, 0.05)
C = (-0.02, 0.0, 0.15)
POSITIONS = np.array([[0.0, 0.0, 0.0], [0.01, 0.0, 0.0], [0.0, 0.01, 0.0]])


def test_plane_points_shape_and_origin():
    points = plane_points(A, B, C, (4, 3))
    assert points.shape == (3, 4, 3)
    assert np.allclose(points[0, 0], A)


def test_plane_points_steps():
    points = plane_points(A, B, C, (4, 2))
    step_ab = (np.array(B) - np.array(A)) / 4
    step_ac = (np.array(C) - np.array(A)) / 2
    assert np.allclose(points[0, 1], np.array(A) + step_ab)
    assert np.allclose(points[1, 0], np.array(A) + step_ac)
    assert np.allclose(points[1, 3], np.array(A) + 3 * step_ab + step_ac)


def test_plane_points_rejects_empty_image():
    with pytest.raises(ValueError):
        plane_points(A, B, C, (0, 3))


def test_field_amplitudes_match_propagation():
    field = np.array([1 + 0j, 0.5j, -0.3 + 0.2j])
    amps = field_amplitudes(A, B, C, (3, 2), field, POSITIONS)
    points = plane_points(A, B, C, (3, 2))
    assert amps.shape == (2, 3)
    assert amps[1, 2] == pytest.approx(abs(propagate_field(points[1, 2], field, POSITIONS)))
    assert np.all(amps >= 0)


def test_phase_amplitudes_equal_unit_states():
    phases = np.array([0.0, 1.0, 2.5])
    by_phase = phase_amplitudes(A, B, C, (3, 3), phases, POSITIONS)
    by_field = field_amplitudes(A, B, C, (3, 3), np.exp(1j * phases), POSITIONS)
    assert np.allclose(by_phase, by_field)


def test_board_amplitudes_use_side_by_side_layout():
    rng = np.random.default_rng(1)
    field = rng.normal(size=8) + 1j * rng.normal(size=8)
    amps = board_amplitudes(A, B, C, (2, 2), field, (4, 2), 0.0105)
    expected = field_amplitudes(A, B, C, (2, 2), field, side_by_side_positions((4, 2), 0.0105))
    assert np.allclose(amps, expected)


def test_colour_map_ramp():
    pixels = colour_map(np.array([[0.0, 0.5, 1.0, 3.0]]))
    assert pixels.dtype == np.uint8
    assert pixels[0, 0].tolist() == [0, 0, 0]
    assert pixels[0, 1].tolist() == [128, 0, 0]
    assert pixels[0, 2].tolist() == [255, 0, 0]
    assert pixels[0, 3].tolist() == [255, 255, 0]


def test_colour_map_all_zero_is_black():
    pixels = colour_map(np.zeros((2, 3)))
    assert pixels.shape == (2, 3, 3)
    assert not pixels.any()


def test_stats():
    stats = PlaneStats.from_amplitudes(np.array([[1.0, 2.0], [3.0, 6.0]]))
    assert stats.average == pytest.approx(3.0)
    assert stats.minimum == pytest.approx(1.0)
    assert stats.maximum == pytest.approx(6.0)


def test_render_image_matches_colour_map():
    amps = np.array([[0.0, 1.0, 3.0], [2.0, 0.5, 1.5]])
    result = render(amps)
    assert result.image.size == (3, 2)
    assert list(result.image.getpixel((1, 0))) == colour_map(amps)[0, 1].tolist()
    assert result.stats.maximum == pytest.approx(3.0)


def test_render_rejects_empty():
    with pytest.raises(ValueError):
        render(np.zeros((0, 0)))


def test_visualize_returns_consistent_plane():
    field = np.array([1 + 0j, 1 + 0j, 1 + 0j])
    result = visualize(A, B, C, (3, 2), field, POSITIONS)
    assert result.image.size == (3, 2)
    assert np.allclose(result.amplitudes, field_amplitudes(A, B, C, (3, 2), field, POSITIONS))
    assert result.stats.maximum == pytest.approx(result.amplitudes.max())


def test_visualize_from_phases_and_board():
    phases = np.zeros(3)
    from_phases = visualize_from_phases(A, B, C, (2, 2), phases, POSITIONS)
    from_field = visualize(A, B, C, (2, 2), np.ones(3, dtype=complex), POSITIONS)
    assert np.allclose(from_phases.amplitudes, from_field.amplitudes)
    on_board = visualize_on_board(A, B, C, (2, 2), np.ones(4, dtype=complex), (2, 2), 0.0105)
    assert on_board.image.size == (2, 2)
    assert on_board.stats.minimum <= on_board.stats.average <= on_board.stats.maximum
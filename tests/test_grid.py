"""Test grid labels, distances and terrain-aware stepping."""
import pytest
from engine.grid import (
    GRID_SIZE, Terrain, dist, grid_label, in_bounds, parse_grid, step_toward, terrain_at, terrain_delay,
)


def test_grid_label_corners():
    """Columns map to letters, rows are 1-based."""
    assert grid_label(0, 0) == "A1"
    assert grid_label(4, 4) == "E5"
    assert grid_label(7, 7) == "H8"


def test_parse_grid_round_trip():
    """Every cell on the board survives label -> parse."""
    for col in range(GRID_SIZE):
        for row in range(GRID_SIZE):
            assert parse_grid(grid_label(col, row)) == (col, row)


def test_parse_grid_is_case_insensitive():
    assert parse_grid("e5") == (4, 4)
    assert parse_grid(" h8 ") == (7, 7)


@pytest.mark.parametrize("label", ["", None, "Z9", "A0", "A9", "I1", "A10", "5A", "A", "AA", "A²", "E¹", "B٣"])
def test_parse_grid_rejects_off_board(label):
    assert parse_grid(label) is None


def test_dist_is_manhattan():
    assert dist((0, 0), (3, 4)) == 7
    assert dist((2, 2), (2, 2)) == 0
    assert dist((1, 1), (4, 4)) == 6


def test_in_bounds():
    assert in_bounds(0, 0)
    assert in_bounds(7, 7)
    assert not in_bounds(8, 0)
    assert not in_bounds(0, -1)


def test_step_toward_closes_column_first():
    """Either axis shortens the route by one, so the column goes first."""
    assert step_toward((1, 1), (7, 0)) == (2, 1)
    assert step_toward((1, 1), (2, 5)) == (2, 1)
    assert step_toward((2, 1), (2, 5)) == (2, 2)


def test_step_toward_column_on_tie():
    assert step_toward((3, 3), (2, 2)) == (2, 3)
    assert step_toward((3, 3), (4, 4)) == (4, 3)


def test_step_toward_at_target_stays():
    assert step_toward((4, 4), (4, 4)) == (4, 4)


def test_terrain_delays():
    """Start cell for ALPHA is jungle; the village slows movement too."""
    assert terrain_at(1, 1) == Terrain.JUNGLE
    assert terrain_delay(1, 1) == 2
    assert terrain_at(3, 1) == Terrain.VILLAGE
    assert terrain_delay(3, 1) == 1
    assert terrain_delay(4, 1) == 0

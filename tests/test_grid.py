# tests/test_grid.py
import pytest

from pathgrid.core.grid import Grid
from pathgrid.core.types import CellState, InvalidInput


def test_neighbors_come_back_up_down_left_right():
    grid = Grid(3, 3)
    assert grid.neighbors((1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]


def test_neighbors_stay_in_bounds():
    grid = Grid(3, 4)
    assert grid.neighbors((0, 0)) == [(1, 0), (0, 1)]
    assert grid.neighbors((2, 3)) == [(1, 3), (2, 2)]
    for c in grid.cells():
        assert len(grid.neighbors(c)) <= 4


def test_neighbors_reject_unknown_cell():
    with pytest.raises(InvalidInput):
        Grid(3, 3).neighbors((3, 0))


def test_grid_must_have_cells():
    with pytest.raises(InvalidInput):
        Grid(0, 5)


@pytest.mark.parametrize("weight", [0, 10, -1, 2.5, True])
def test_weight_out_of_range_is_rejected(weight):
    grid = Grid(3, 3)
    with pytest.raises(InvalidInput):
        grid.set_weight((1, 1), weight)


def test_weight_and_wall_are_exclusive():
    grid = Grid(3, 3)
    grid.set_blocked((1, 1))
    grid.set_weight((1, 1), 5)
    assert not grid.is_block((1, 1))
    assert grid.cost_of((1, 1)) == 5

    grid.set_blocked((1, 1))
    assert grid.is_block((1, 1))
    assert (1, 1) not in grid.weights


def test_default_weight_is_stored_as_absence():
    grid = Grid(3, 3)
    grid.set_weight((0, 1), 4)
    grid.set_weight((0, 1), 1)
    assert grid.weights == {}
    assert grid.cost_of((0, 1)) == 1

    grid.set_weight((0, 2), 7)
    grid.clear_weight((0, 2))
    assert grid.cost_of((0, 2)) == 1


def test_cost_of_wall_is_an_error():
    grid = Grid(2, 2)
    grid.set_blocked((0, 1))
    with pytest.raises(ValueError):
        grid.cost_of((0, 1))


def test_toggle_wall_leaves_endpoints_alone():
    grid = Grid(3, 3)
    grid.set_start((0, 0))
    grid.set_end((2, 2))
    assert grid.toggle_wall((0, 0)) is False
    assert not grid.is_block((0, 0))
    assert grid.toggle_wall((1, 1)) is True
    assert grid.toggle_wall((1, 1)) is False


def test_endpoints_must_differ_and_be_open():
    grid = Grid(3, 3)
    grid.set_blocked((1, 1))
    with pytest.raises(InvalidInput):
        grid.set_start((1, 1))
    grid.set_start((0, 0))
    with pytest.raises(InvalidInput):
        grid.set_end((0, 0))
    with pytest.raises(InvalidInput):
        grid.set_blocked((0, 0))


def test_move_endpoint_skips_walls_and_other_endpoint():
    grid = Grid(3, 3)
    grid.set_start((0, 0))
    grid.set_end((2, 2))
    grid.set_blocked((0, 1))
    assert grid.move_endpoint("start", (0, 1)) is False
    assert grid.move_endpoint("start", (2, 2)) is False
    assert grid.move_endpoint("start", (1, 0)) is True
    assert grid.start == (1, 0)
    with pytest.raises(InvalidInput):
        grid.move_endpoint("middle", (1, 1))


def test_state_of_tags_every_kind():
    grid = Grid(2, 3)
    grid.set_start((0, 0))
    grid.set_end((1, 2))
    grid.set_blocked((0, 1))
    grid.set_weight((1, 1), 3)
    assert grid.state_of((0, 0)) == CellState.START
    assert grid.state_of((1, 2)) == CellState.END
    assert grid.state_of((0, 1)) == CellState.BLOCKED
    assert grid.state_of((1, 1)) == CellState.WEIGHTED
    assert grid.state_of((0, 2)) == CellState.NORMAL


def test_reset_keeps_dimensions():
    grid = Grid(4, 6)
    grid.set_start((0, 0))
    grid.set_end((3, 5))
    grid.set_blocked((1, 1))
    grid.set_weight((2, 2), 9)
    grid.reset()
    assert (grid.rows, grid.cols) == (4, 6)
    assert grid.walls == set() and grid.weights == {}
    assert grid.start is None and grid.end is None


def test_resize_drops_everything():
    grid = Grid(4, 6)
    grid.set_blocked((1, 1))
    grid.resize(8, 2)
    assert (grid.rows, grid.cols) == (8, 2)
    assert grid.walls == set()


def test_validate_endpoints():
    grid = Grid(3, 3)
    with pytest.raises(InvalidInput):
        grid.validate_endpoints()
    grid.set_start((0, 0))
    grid.set_end((2, 2))
    grid.validate_endpoints()
    grid.walls.add((2, 2))
    with pytest.raises(InvalidInput):
        grid.validate_endpoints()

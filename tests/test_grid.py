import pytest

from onet.components.grid import Grid


def test_grid_starts_empty():
    grid = Grid(width=4, height=3)
    assert len(grid.cells) == 12
    assert grid.live_count() == 0
    assert grid.occupied_positions() == []


def test_to_index_is_row_major():
    grid = Grid(width=4, height=3)
    assert grid.to_index((0, 0)) == 0
    assert grid.to_index((3, 0)) == 3
    assert grid.to_index((1, 2)) == 9
    assert grid.to_position(9) == (1, 2)


def test_get_outside_board_returns_none():
    grid = Grid(width=2, height=2)
    grid.set((1, 1), 42)
    assert grid.get((1, 1)) == 42
    assert grid.get((-1, 0)) is None
    assert grid.get((2, 1)) is None
    assert grid.get((0, 5)) is None


def test_set_outside_board_raises():
    grid = Grid(width=2, height=2)
    with pytest.raises(IndexError):
        grid.set((2, 0), 1)
    with pytest.raises(IndexError):
        grid.set((0, -1), None)


def test_in_ring_covers_one_cell_border():
    grid = Grid(width=3, height=2)
    assert grid.in_ring((-1, -1))
    assert grid.in_ring((3, 2))
    assert not grid.in_ring((4, 0))
    assert not grid.in_ring((0, -2))


def test_move_reassigns_cell():
    grid = Grid(width=3, height=1)
    grid.set((0, 0), 7)
    grid.move((0, 0), (2, 0))
    assert grid.get((0, 0)) is None
    assert grid.get((2, 0)) == 7
    assert grid.occupied_positions() == [(2, 0)]


def test_positions_scan_top_row_first():
    grid = Grid(width=2, height=2)
    assert list(grid.positions()) == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        Grid(width=0, height=3)


def test_is_empty_treats_off_board_cells_as_empty():
    grid = Grid(width=2, height=1)
    grid.set((1, 0), 5)
    assert grid.is_empty((0, 0))
    assert not grid.is_empty((1, 0))
    assert grid.is_empty((-1, 0))
    assert grid.is_empty((2, 0))

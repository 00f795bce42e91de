from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import EMPTY, SHADOW, GameGrid, Piece, PieceKind, cell_kind


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(10, 20)


def test_bounds(grid):
    assert grid.is_inside(0, 0)
    assert grid.is_inside(9, 19)
    assert not grid.is_inside(10, 0)
    assert not grid.is_inside(0, 20)
    assert not grid.is_inside(-1, 5)


def test_out_of_bounds_access_is_an_error(grid):
    with pytest.raises(IndexError):
        grid.is_free(10, 0)
    with pytest.raises(IndexError):
        grid.get(0, -1)


def test_place_then_remove_restores_grid(grid):
    grid.set(0, 19, PieceKind.Z)
    before = grid.clone_state()
    piece = Piece(PieceKind.T, rotation=2, x=4, y=10)
    grid.place(piece)
    assert all(grid.get(x, y) == PieceKind.T for x, y in piece.cells())
    grid.remove(piece)
    np.testing.assert_array_equal(grid.grid, before)


def test_place_as_shadow_and_shadow_is_free(grid):
    piece = Piece(PieceKind.O, x=0, y=0)
    grid.place(piece, as_shadow=True)
    assert grid.get(0, 0) == SHADOW
    assert grid.is_free(0, 0)
    assert grid.can_place(piece.cells())
    assert cell_kind(grid.get(0, 0)) is None
    grid.clear_shadows()
    assert not np.any(grid.grid == SHADOW)


def test_place_skips_cells_outside_the_board(grid):
    piece = Piece(PieceKind.I, rotation=1, x=0, y=-2)
    grid.place(piece)
    assert grid.get(2, 0) == PieceKind.I
    assert grid.get(2, 1) == PieceKind.I
    assert int(np.count_nonzero(grid.grid)) == 2
    assert not grid.can_place(piece.cells())


def test_occupied_cell_blocks_placement(grid):
    grid.set(5, 5, PieceKind.L)
    assert not grid.is_free(5, 5)
    assert cell_kind(grid.get(5, 5)) is PieceKind.L
    assert not grid.can_place([(5, 5)])
    assert grid.can_place([(4, 5)])


def test_row_full_and_clear(grid):
    grid.grid[19, :] = PieceKind.T
    assert grid.is_row_full(19)
    assert not grid.is_row_full(18)
    grid.clear_row(19)
    assert not grid.is_row_full(19)
    assert np.all(grid.grid[19] == EMPTY)


def test_shadow_counts_as_filled_for_row_full(grid):
    grid.grid[19, :] = SHADOW
    assert grid.is_row_full(19)


def test_copy_row_down(grid):
    grid.grid[3, :5] = PieceKind.I
    grid.copy_row_down(3)
    np.testing.assert_array_equal(grid.grid[4], grid.grid[3])
    assert grid.get(0, 4) == PieceKind.I


def test_height_and_holes(grid):
    assert grid.get_max_height() == 0
    grid.set(2, 17, PieceKind.S)
    grid.set(2, 19, PieceKind.S)
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 1


def test_can_place_rejects_off_board_cells_without_raising(grid):
    assert not grid.can_place([(-1, 0)])
    assert not grid.can_place([(0, 20)])
    assert not grid.can_place([(0, 0), (10, 0)])
    assert grid.can_place([])


def test_copy_is_independent(grid):
    grid.set(1, 1, PieceKind.J)
    twin = grid.copy()
    twin.set(1, 1, EMPTY)
    assert grid.get(1, 1) == PieceKind.J
    assert (twin.width, twin.height) == (grid.width, grid.height)

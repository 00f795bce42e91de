from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .pieces import Piece, PieceKind


Coordinate = Tuple[int, int]

EMPTY = 0
SHADOW = -1


def cell_kind(value: int) -> Optional[PieceKind]:
    """Return the piece kind stored in a cell value, or None for Empty/Shadow."""
    if value > 0:
        return PieceKind(int(value))
    return None


class GameGrid:
    """Fixed-size board of cells indexed ``[row][col]``, row 0 at the top.

    Cells hold 0 for Empty, -1 for a Shadow marker and the piece kind value
    (1..7) for occupied cells. Shadow cells never obstruct a piece.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside a {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.grid[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self.grid[y, x] = value

    def is_free(self, x: int, y: int) -> bool:
        self._check(x, y)
        return self.grid[y, x] <= EMPTY

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return all(self.is_inside(x, y) and self.is_free(x, y) for x, y in cells)

    def spawn_is_free(self, piece: Piece) -> bool:
        # Cells above the top edge are not on the board yet.
        for x, y in piece.cells():
            if y < 0:
                continue
            if not self.is_inside(x, y) or not self.is_free(x, y):
                return False
        return True

    def place(self, piece: Piece, as_shadow: bool = False) -> None:
        value = SHADOW if as_shadow else int(piece.kind)
        for x, y in piece.cells():
            if self.is_inside(x, y):
                self.grid[y, x] = value

    def remove(self, piece: Piece) -> None:
        for x, y in piece.cells():
            if self.is_inside(x, y):
                self.grid[y, x] = EMPTY

    def clear_shadows(self) -> None:
        self.grid[self.grid == SHADOW] = EMPTY

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != EMPTY))

    def copy_row_down(self, row: int) -> None:
        """Copy row `row` over row `row + 1`."""
        self.grid[row + 1] = self.grid[row]

    def clear_row(self, row: int) -> None:
        self.grid[row].fill(EMPTY)

    def get_max_height(self) -> int:
        # y=0 is top; find first row holding an occupied cell
        non_empty_rows = np.where(np.any(self.grid > EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell > EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple


class PieceKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Offset = Tuple[int, int]
Coordinate = Tuple[int, int]


# Super Rotation System orientations, (dx, dy) from the top-left of the
# bounding box. Every orientation is listed explicitly; nothing is rotated
# at runtime.
SHAPE_TABLE: Dict[PieceKind, Tuple[Tuple[Offset, ...], ...]] = {
    PieceKind.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
        ((0, 2), (1, 2), (2, 2), (3, 2)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    PieceKind.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    PieceKind.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
    PieceKind.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    PieceKind.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((1, 1), (2, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
}

BOX_SIZES: Dict[PieceKind, int] = {
    PieceKind.I: 4,
    PieceKind.J: 3,
    PieceKind.L: 3,
    PieceKind.O: 2,
    PieceKind.S: 3,
    PieceKind.T: 3,
    PieceKind.Z: 3,
}


def shape_offsets(kind: PieceKind, rotation: int) -> Tuple[Offset, ...]:
    """Return the 4 occupied (dx, dy) offsets of `kind` at `rotation`.

    Rotation is reduced modulo 4; O has a single orientation.
    """
    orientations = SHAPE_TABLE[PieceKind(kind)]
    return orientations[(rotation % 4) % len(orientations)]


def box_size(kind: PieceKind) -> int:
    return BOX_SIZES[PieceKind(kind)]


@dataclass(frozen=True)
class Piece:
    """A tetromino of a given kind, orientation and grid anchor.

    The anchor (x, y) is the top-left corner of the bounding box in grid
    coordinates. Instances are immutable; moving or rotating returns a new
    piece.
    """

    kind: PieceKind
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    @property
    def anchor(self) -> Coordinate:
        return self.x, self.y

    def offsets(self) -> Tuple[Offset, ...]:
        return shape_offsets(self.kind, self.rotation)

    def rotated(self, delta: int) -> "Piece":
        return replace(self, rotation=(self.rotation + delta) % 4)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def at(self, x: int, y: int) -> "Piece":
        return replace(self, x=x, y=y)

    def cells(self) -> List[Coordinate]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.offsets()]

    def top_offset(self) -> int:
        return min(dy for _, dy in self.offsets())

    def bottom_offset(self) -> int:
        return max(dy for _, dy in self.offsets())

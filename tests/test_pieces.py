from __future__ import annotations

import dataclasses

import pytest

from falling_blocks.game import Piece, PieceKind, box_size, shape_offsets


@pytest.mark.parametrize("kind", list(PieceKind))
@pytest.mark.parametrize("rotation", range(4))
def test_every_orientation_has_four_distinct_cells_inside_its_box(kind, rotation):
    offsets = shape_offsets(kind, rotation)
    assert len(offsets) == 4
    assert len(set(offsets)) == 4
    size = box_size(kind)
    assert all(0 <= dx < size and 0 <= dy < size for dx, dy in offsets)


def test_o_piece_ignores_rotation():
    shapes = {frozenset(shape_offsets(PieceKind.O, r)) for r in range(4)}
    assert len(shapes) == 1


@pytest.mark.parametrize("kind", [k for k in PieceKind if k != PieceKind.O])
def test_other_pieces_have_four_orientations(kind):
    shapes = {frozenset(shape_offsets(kind, r)) for r in range(4)}
    assert len(shapes) == 4


def test_rotation_is_reduced_modulo_four():
    assert shape_offsets(PieceKind.T, 5) == shape_offsets(PieceKind.T, 1)
    assert shape_offsets(PieceKind.L, -1) == shape_offsets(PieceKind.L, 3)


def test_spawn_orientations_match_guideline_shapes():
    assert set(shape_offsets(PieceKind.I, 0)) == {(0, 1), (1, 1), (2, 1), (3, 1)}
    assert set(shape_offsets(PieceKind.T, 0)) == {(1, 0), (0, 1), (1, 1), (2, 1)}
    assert set(shape_offsets(PieceKind.J, 0)) == {(0, 0), (0, 1), (1, 1), (2, 1)}
    assert set(shape_offsets(PieceKind.L, 0)) == {(2, 0), (0, 1), (1, 1), (2, 1)}


def test_piece_cells_are_offset_by_anchor():
    piece = Piece(PieceKind.O, x=3, y=7)
    assert sorted(piece.cells()) == [(3, 7), (3, 8), (4, 7), (4, 8)]
    assert piece.anchor == (3, 7)


def test_piece_is_a_value_type():
    piece = Piece(PieceKind.T)
    turned = piece.rotated(1)
    moved = piece.moved(2, 3)
    assert piece.rotation == 0 and piece.anchor == (0, 0)
    assert turned.rotation == 1
    assert moved.anchor == (2, 3)
    assert piece.rotated(4) == piece
    with pytest.raises(dataclasses.FrozenInstanceError):
        piece.x = 5  # type: ignore[misc]


def test_top_and_bottom_offsets():
    piece = Piece(PieceKind.I)
    assert piece.top_offset() == 1
    assert piece.bottom_offset() == 1
    assert piece.rotated(1).top_offset() == 0
    assert piece.rotated(1).bottom_offset() == 3

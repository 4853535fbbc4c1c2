import numpy as np
import pytest

from blockfall.game.pieces import (
    I_PIECE,
    O_PIECE,
    PIECE_COLORS,
    PIECE_IDS,
    PIECE_TYPES,
    T_PIECE,
    ActivePiece,
    get_piece,
    rotation_count,
)


def test_catalog_has_seven_kinds_with_unique_ids():
    assert len(PIECE_TYPES) == 7
    assert PIECE_IDS == frozenset(range(1, 8))
    assert set(PIECE_COLORS) == PIECE_IDS


@pytest.mark.parametrize("piece", PIECE_TYPES, ids=lambda p: p["name"])
def test_every_rotation_has_four_cells(piece):
    assert rotation_count(piece) == 4
    for shape in piece["rotations"]:
        assert shape.shape[0] == shape.shape[1]
        assert int(shape.sum()) == 4


def test_rotation_states_are_read_only():
    with pytest.raises(ValueError):
        T_PIECE["rotations"][0][0, 0] = 1


def test_o_piece_is_the_same_in_every_rotation():
    first = O_PIECE["rotations"][0]
    for shape in O_PIECE["rotations"][1:]:
        np.testing.assert_array_equal(shape, first)


def test_rotations_turn_clockwise():
    # Spawn I is horizontal in row 1, one clockwise turn puts it in column 2.
    np.testing.assert_array_equal(I_PIECE["rotations"][0][1], [1, 1, 1, 1])
    np.testing.assert_array_equal(I_PIECE["rotations"][1][:, 2], [1, 1, 1, 1])
    np.testing.assert_array_equal(
        T_PIECE["rotations"][1],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 1, 0]],
    )


def test_get_piece_by_id_name_and_dict():
    assert get_piece(3) is T_PIECE
    assert get_piece("t") is T_PIECE
    assert get_piece(T_PIECE) is T_PIECE
    with pytest.raises(KeyError):
        get_piece("X")
    with pytest.raises(KeyError):
        get_piece(0)


def test_active_piece_moves_and_rotates_without_mutation():
    piece = ActivePiece(T_PIECE, 0, 4, 0)
    moved = piece.moved(dx=-1, dy=2)
    assert (moved.x, moved.y) == (3, 2)
    assert (piece.x, piece.y) == (4, 0)

    rotation = piece
    for expected in (1, 2, 3, 0):
        rotation = rotation.rotated()
        assert rotation.rotation == expected
    assert piece.piece_id == 3
    assert piece.name == "T"
    assert piece.shape is T_PIECE["rotations"][0]

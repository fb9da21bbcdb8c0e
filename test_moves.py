import pytest

from soulchess.board import Board
from soulchess.moves import MoveGenerator, MoveValidator, geometry, legal_moves
from soulchess.types import Move, PieceKind, Side

# Helpers

def targets(moves):
    return {m.target for m in moves}


def captures(moves):
    return {m.target for m in moves if m.is_capture}


def test_rook_on_empty_board_slides_to_edges():
    board = Board.from_strings(["R...", "....", "....", "...."])
    moves = legal_moves(board, 0, 0)
    assert targets(moves) == {(0, 1), (0, 2), (0, 3), (1, 0), (2, 0), (3, 0)}
    assert not captures(moves)


def test_wall_stops_ray_without_move():
    board = Board.from_strings(["R#..", "....", "....", "...."])
    assert targets(legal_moves(board, 0, 0)) == {(1, 0), (2, 0), (3, 0)}


def test_capture_ends_ray():
    board = Board.from_strings(["R.p.", "....", "....", "...."])
    moves = legal_moves(board, 0, 0)
    assert (0, 3) not in targets(moves)
    assert captures(moves) == {(0, 2)}
    assert Move(0, 1, False) in moves


def test_same_side_piece_blocks():
    # Opposing rook next to an opposing pawn: the pawn blocks, nothing to capture
    board = Board.from_strings(["rp..", "....", "....", "R..."])
    moves = legal_moves(board, 0, 0)
    assert targets(moves) == {(1, 0), (2, 0), (3, 0)}
    assert captures(moves) == {(3, 0)}


def test_bishop_moves_diagonally():
    board = Board.from_strings(["....", ".B..", "....", "...."])
    assert targets(legal_moves(board, 1, 1)) == {(0, 0), (0, 2), (2, 0), (2, 2), (3, 3)}


def test_queen_is_rook_plus_bishop():
    board = Board.from_strings(["....", ".Q..", "....", "...."])
    moves = legal_moves(board, 1, 1)
    assert len(moves) == 11
    rook = legal_moves(Board.from_strings(["....", ".R..", "....", "...."]), 1, 1)
    bishop = legal_moves(Board.from_strings(["....", ".B..", "....", "...."]), 1, 1)
    assert targets(moves) == targets(rook) | targets(bishop)


def test_knight_jumps_over_walls():
    board = Board.from_strings(["N#..", "##..", "....", "...."])
    assert targets(legal_moves(board, 0, 0)) == {(2, 1), (1, 2)}


def test_knight_cannot_land_on_wall():
    board = Board.from_strings(["N...", "..#.", ".n..", "...."])
    moves = legal_moves(board, 0, 0)
    assert targets(moves) == {(2, 1)}
    assert captures(moves) == {(2, 1)}


def test_king_steps_once():
    board = Board.from_strings(["K...", "....", "....", "...."])
    assert targets(legal_moves(board, 0, 0)) == {(0, 1), (1, 0), (1, 1)}


def test_pawn_advances_up_onto_empty():
    board = Board.from_strings(["....", "....", "..P.", "...."])
    assert legal_moves(board, 2, 2) == [Move(1, 2, False)]


def test_pawn_blocked_by_wall_but_captures_diagonally():
    board = Board.from_strings(["....", ".p#.", "..P.", "...."])
    assert legal_moves(board, 2, 2) == [Move(1, 1, True)]


def test_pawn_cannot_capture_straight_ahead():
    board = Board.from_strings(["....", "..n.", "..P.", "...."])
    assert legal_moves(board, 2, 2) == []


def test_pawn_does_not_capture_walls_diagonally():
    board = Board.from_strings(["....", ".#.#", "..P.", "...."])
    assert legal_moves(board, 2, 2) == [Move(1, 2, False)]


def test_pawn_on_top_row_has_no_moves():
    board = Board.from_strings(["P...", "....", "....", "...n"])
    assert legal_moves(board, 0, 0) == []


@pytest.mark.parametrize("r,c", [(0, 1), (1, 1), (-1, 0), (0, 9), (4, 4)])
def test_empty_wall_or_off_board_origin_gives_no_moves(r, c):
    board = Board.from_strings(["R...", ".#..", "....", "...."])
    assert legal_moves(board, r, c) == []


def test_move_validator_with_generated_move():
    board = Board.from_strings(["R..p", "....", "....", "...."])
    assert MoveValidator.validate(board, (0, 0), (0, 3))
    assert MoveValidator.find(board, (0, 0), (0, 3)) == Move(0, 3, True)
    assert not MoveValidator.validate(board, (0, 0), (1, 1))


def test_generator_instance_matches_function():
    board = Board.from_strings(["....", ".Q.p", "..#.", "n..."])
    assert MoveGenerator().legal_moves(board, 1, 1) == legal_moves(board, 1, 1)


def test_geometry_is_shared_per_shape():
    assert geometry(5, 5) is geometry(5, 5)
    geom = geometry(4, 4)
    assert geom.rc[5] == (1, 1)
    # Knight in the corner has exactly two targets
    assert sorted(geom.stepping[int(PieceKind.KNIGHT)][0]) == [6, 9]


def test_targets_follow_masks():
    geom = geometry(4, 4)
    # Rook on square 0; wall on 2, foe on 8
    out = MoveGenerator().targets(geom, 0, int(PieceKind.ROOK), int(Side.CONTROLLED),
                                  1 << 2, 1 << 8)
    assert out == [(1, False), (4, False), (8, True)]


def test_targets_reject_unknown_kind():
    with pytest.raises(ValueError):
        MoveGenerator().targets(geometry(4, 4), 0, 9, int(Side.CONTROLLED), 0, 0)


def test_opposing_piece_captures_controlled():
    board = Board.from_strings(["r..Q", "....", "....", "...."])
    assert captures(legal_moves(board, 0, 0)) == {(0, 3)}

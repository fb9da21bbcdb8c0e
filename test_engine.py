import random

import pytest

from soulchess.board import Board
from soulchess.difficulty import difficulty_for_level
from soulchess.engine import apply_move, classify, is_terminal
from soulchess.generator import PuzzleGenerator
from soulchess.moves import legal_moves
from soulchess.types import GameState, PieceKind, Side


def test_quiet_move_keeps_kind_and_leaves_input_untouched():
    board = Board.from_strings(["R..p", "....", "....", "...."])
    before = board.to_strings()
    nb = apply_move(board, (0, 0), (2, 0))
    assert nb.to_strings() == ["...p", "....", "R...", "...."]
    assert board.to_strings() == before
    assert nb is not board


def test_capture_switches_soul_but_not_side():
    board = Board.from_strings(["R..n", "....", "....", "...."])
    nb = apply_move(board, (0, 0), (0, 3))
    piece = nb.piece_at(0, 3)
    assert piece.kind == PieceKind.KNIGHT
    assert piece.side == Side.CONTROLLED
    assert nb.piece_at(0, 0) is None
    assert nb.count_pieces() == (1, 0, 0)


def test_apply_move_from_empty_square_raises():
    board = Board.from_strings(["R...", "....", "....", "...."])
    with pytest.raises(ValueError):
        apply_move(board, (1, 1), (2, 2))


def test_board_grid_is_read_only():
    board = Board.from_strings(["R...", "....", "....", "...."])
    with pytest.raises(ValueError):
        board.grid[0, 0] = 0


def test_classify_lost_without_controlled_piece():
    assert classify(Board.from_strings(["...p", "....", "....", "...."])) == GameState.LOST


def test_classify_won_when_no_opposing_pieces_even_if_stuck():
    board = Board.from_strings(["P...", "....", "....", "...."])
    assert legal_moves(board, 0, 0) == []
    assert classify(board) == GameState.WON


def test_classify_lost_when_stuck():
    board = Board.from_strings(["P...", "....", "....", "...n"])
    assert classify(board) == GameState.LOST
    assert is_terminal(board)


def test_classify_playing():
    board = Board.from_strings(["R...", "....", "....", "...n"])
    assert classify(board) == GameState.PLAYING
    assert not is_terminal(board)


def test_classify_total_and_lost_means_stuck_on_random_boards():
    gen = PuzzleGenerator(rng=random.Random(7))
    profile = difficulty_for_level(3)
    seen = set()
    for _ in range(40):
        board = gen.build_board(profile)
        if board is None:
            continue
        state = classify(board)
        seen.add(state)
        assert state in (GameState.PLAYING, GameState.WON, GameState.LOST)
        if state == GameState.LOST:
            pos = board.controlled_position()
            assert pos is None or legal_moves(board, *pos) == []
        # Kind changes only on capture
        pos = board.controlled_position()
        for move in legal_moves(board, *pos):
            nb = apply_move(board, pos, move.target)
            moved = nb.piece_at(*move.target)
            assert moved.side == Side.CONTROLLED
            if move.is_capture:
                assert moved.kind == board.piece_at(*move.target).kind
            else:
                assert moved.kind == board.piece_at(*pos).kind
    assert GameState.PLAYING in seen


def test_board_rejects_bad_grids():
    with pytest.raises(ValueError):
        Board([[0, 0], [0]])
    with pytest.raises(ValueError):
        Board([[0, 42]])
    with pytest.raises(ValueError):
        Board.from_strings(["R.x."])


def test_board_masks_track_moves():
    board = Board.from_strings(["R..p", ".#..", "....", "n..."])
    assert board.walls == 1 << 5
    assert board.controlled == 1 << 0
    assert board.opposing == (1 << 3) | (1 << 12)
    after = apply_move(board, (0, 0), (0, 3))
    assert after.controlled == 1 << 3
    assert after.opposing == 1 << 12
    assert after.count_pieces() == (1, 1, 1)
    assert after == Board.from_strings(["...P", ".#..", "....", "n..."])
    assert after.opposing_positions() == [(3, 0)]


def test_board_from_cells_checks_length():
    assert Board.from_cells(2, 2, [0, 7, 0, 0]).is_wall(0, 1)
    with pytest.raises(ValueError):
        Board.from_cells(2, 2, [0, 0, 0])

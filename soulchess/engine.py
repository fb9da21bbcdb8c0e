"""
State transition and win/loss evaluation.

``apply_move`` produces a new board snapshot (soul switching on capture) and
``classify`` reports whether a board is still playing, won or lost.
"""
from __future__ import annotations

from typing import Sequence

from soulchess.board import Board
from soulchess.moves import legal_moves
from soulchess.types import EMPTY, GameState, decode_cell, encode_piece


# ============================
# Applying moves
# ============================
def apply_move(board: Board, origin: Sequence[int], target: Sequence[int]) -> Board:
    """Move the piece at ``origin`` to ``target`` and return the new board.

    Capturing an opposing piece makes the mover take on the captured piece's
    kind; its side never changes. Destination legality is not re-checked:
    callers pass targets drawn from ``legal_moves``.
    """
    fr, fc = int(origin[0]), int(origin[1])
    tr, tc = int(target[0]), int(target[1])
    mover = board.piece_at(fr, fc)
    if mover is None:
        raise ValueError(f"No piece to move at {(fr, fc)}")

    kind = mover.kind
    captured = decode_cell(board.code_at(tr, tc))
    if captured is not None and captured.side != mover.side:
        # Soul switching
        kind = captured.kind

    return board.with_cells({
        (fr, fc): EMPTY,
        (tr, tc): encode_piece(kind, mover.side),
    })


# ============================
# Game state
# ============================
def classify(board: Board) -> GameState:
    """Classify a board as playing, won or lost.

    Having no opposing pieces left is checked before the stuck test, so a
    cleared board counts as won even if the controlled piece cannot move.
    """
    pos = board.controlled_position()
    if pos is None:
        return GameState.LOST
    if not board.opposing:
        return GameState.WON
    if not legal_moves(board, *pos):
        return GameState.LOST
    return GameState.PLAYING


def is_terminal(board: Board) -> bool:
    """Check if the puzzle is over (won or lost)."""
    return classify(board) != GameState.PLAYING

"""
Plain-text board rendering and move notation.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from soulchess.board import Board, code_to_char, square_name
from soulchess.types import EMPTY, WALL, Move, PieceKind, Position, Side, decode_cell

_GLYPHS: Dict[Side, Dict[PieceKind, str]] = {
    Side.CONTROLLED: {
        PieceKind.KING: "♔", PieceKind.QUEEN: "♕", PieceKind.ROOK: "♖",
        PieceKind.BISHOP: "♗", PieceKind.KNIGHT: "♘", PieceKind.PAWN: "♙",
    },
    Side.OPPOSING: {
        PieceKind.KING: "♚", PieceKind.QUEEN: "♛", PieceKind.ROOK: "♜",
        PieceKind.BISHOP: "♝", PieceKind.KNIGHT: "♞", PieceKind.PAWN: "♟",
    },
}
_UNICODE_WALL = "█"
_UNICODE_EMPTY = "·"

# ANSI colors
_CONTROLLED_COLOR = "\033[1;33m"
_HINT_COLOR = "\033[1;35m"
_RESET = "\033[0m"


def cell_symbol(code: int, use_unicode: bool = True) -> str:
    if not use_unicode:
        return code_to_char(code)
    if code == EMPTY:
        return _UNICODE_EMPTY
    if code == WALL:
        return _UNICODE_WALL
    piece = decode_cell(code)
    return _GLYPHS[piece.side][piece.kind]  # type: ignore[union-attr]


def render_board(board: Board, use_unicode: bool = True, show_coordinates: bool = True,
                 highlights: Optional[Iterable[Move]] = None, hint: Optional[Position] = None,
                 use_color: bool = False) -> str:
    """Render a board as text.

    Legal move targets in ``highlights`` are wrapped in brackets (captures in
    ``<>``), and the ``hint`` square in parentheses.
    """
    marks: Dict[Position, str] = {}
    for m in highlights or []:
        marks[m.target] = "<>" if m.is_capture else "[]"
    if hint is not None:
        marks[tuple(hint)] = "()"  # type: ignore[index]

    lines: List[str] = []
    for r in range(board.rows):
        cells: List[str] = []
        for c in range(board.cols):
            code = board.code_at(r, c)
            sym = cell_symbol(code, use_unicode)
            left, right = marks.get((r, c), "  ")
            if use_color and (r, c) == hint:
                sym = f"{_HINT_COLOR}{sym}{_RESET}"
            elif use_color and code != WALL and code > 0:
                sym = f"{_CONTROLLED_COLOR}{sym}{_RESET}"
            cells.append(f"{left}{sym}{right}")
        row = "".join(cells)
        lines.append(f"{board.rows - r} {row}" if show_coordinates else row)
    if show_coordinates:
        files = "".join(f" {chr(ord('a') + c)} " for c in range(board.cols))
        lines.append(f"  {files}")
    return "\n".join(lines)


def path_to_str(rows: int, start: Position, path: Sequence[Move]) -> str:
    """Render a solution path from ``start``, e.g. ``a4xd4-d1``."""
    if not path:
        return ""
    parts = [square_name(rows, *start)]
    for move in path:
        parts.append(("x" if move.is_capture else "-") + square_name(rows, move.row, move.col))
    return "".join(parts)

"""Soul Chess puzzle engine.

Usage examples:
    from soulchess import Board, legal_moves, apply_move, classify
    from soulchess import solve, generate
    from soulchess import PuzzleSession
"""
from __future__ import annotations

from .types import (
    PieceKind,
    Side,
    GameState,
    Piece,
    Move,
    SolveResult,
    PuzzleResult,
)
from .board import Board, square_name, parse_square
from .moves import MoveGenerator, legal_moves
from .engine import apply_move, classify, is_terminal
from .search import PuzzleSolver, solve, state_signature
from .difficulty import DifficultyProfile, difficulty_for_level
from .generator import PuzzleGenerator, generate
from .session import PuzzleSession
from .render import render_board, path_to_str

__all__ = [
    "PieceKind",
    "Side",
    "GameState",
    "Piece",
    "Move",
    "SolveResult",
    "PuzzleResult",
    "Board",
    "square_name",
    "parse_square",
    "MoveGenerator",
    "legal_moves",
    "apply_move",
    "classify",
    "is_terminal",
    "PuzzleSolver",
    "solve",
    "state_signature",
    "DifficultyProfile",
    "difficulty_for_level",
    "PuzzleGenerator",
    "generate",
    "PuzzleSession",
    "render_board",
    "path_to_str",
]

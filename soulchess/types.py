"""
Type definitions for the Soul Chess puzzle engine.

This module provides:
- Enums for piece kinds, sides and game states
- Cell code helpers for the integer board encoding
- Dataclasses for moves, solver results and generated puzzles
- Protocol definitions for the solver and random source seams
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from soulchess.board import Board

# Basic type aliases
Position = Tuple[int, int]  # (row, col) coordinates
CellCode = int  # signed cell value stored in the board grid


class PieceKind(IntEnum):
    """Piece kinds. Values double as the magnitude of the cell code."""
    KING = 1
    QUEEN = 2
    ROOK = 3
    BISHOP = 4
    KNIGHT = 5
    PAWN = 6


class Side(IntEnum):
    """Owner of a piece. Walls carry no side."""
    CONTROLLED = 1
    OPPOSING = -1


class GameState(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# Cell encoding: 0 empty, +kind controlled, -kind opposing, WALL for walls
EMPTY: CellCode = 0
WALL: CellCode = 7

ALL_KINDS: Tuple[PieceKind, ...] = tuple(PieceKind)


@dataclass(frozen=True)
class Piece:
    """A decoded non-wall cell."""
    kind: PieceKind
    side: Side


def encode_piece(kind: PieceKind, side: Side) -> CellCode:
    return int(kind) * int(side)


def decode_cell(code: CellCode) -> Optional[Piece]:
    """Decode a cell code into a Piece, or None for empty cells and walls."""
    if code == EMPTY or code == WALL:
        return None
    side = Side.CONTROLLED if code > 0 else Side.OPPOSING
    return Piece(PieceKind(abs(code)), side)


def is_valid_code(code: int) -> bool:
    return code == EMPTY or code == WALL or 1 <= abs(code) <= len(ALL_KINDS)


@dataclass(frozen=True)
class Move:
    """A destination square relative to some origin, plus whether it captures."""
    row: int
    col: int
    is_capture: bool = False

    @property
    def target(self) -> Position:
        return (self.row, self.col)


MovePath = List[Move]


@dataclass
class SolveResult:
    """Outcome of an exhaustive search.

    ``min_moves`` is 0 together with an empty ``solutions`` list when the board
    has no controlled piece or cannot be won.
    """
    min_moves: int = 0
    solutions: List[MovePath] = field(default_factory=list)

    @property
    def solvable(self) -> bool:
        return bool(self.solutions)

    @property
    def is_unique(self) -> bool:
        return len(self.solutions) == 1


@dataclass
class PuzzleResult:
    """An accepted (or best-effort) generated puzzle."""
    board: "Board"
    min_moves: int
    solution_path: MovePath = field(default_factory=list)


@dataclass
class SearchStats:
    """Counters collected during a single solve."""
    nodes_expanded: int = 0
    states_seen: int = 0
    solutions_found: int = 0


class SolverProtocol(Protocol):
    """Protocol for solver implementations used by the generator."""

    def solve(self, board: "Board") -> SolveResult:
        ...


class RandomSource(Protocol):
    """Subset of ``random.Random`` the generator draws from."""

    def random(self) -> float:
        ...

    def randrange(self, start: int, stop: Optional[int] = ..., step: int = ...) -> int:
        ...

    def randint(self, a: int, b: int) -> int:
        ...

    def choice(self, seq: Sequence) -> object:
        ...


# Constants
MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 7

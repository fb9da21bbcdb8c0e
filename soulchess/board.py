"""
Board model and square notation.

A board stores its cells as a flat row-major tuple of cell codes (see
``soulchess.types``), plus integer bitmasks of the wall, controlled and
opposing squares. Square ``i`` is bit ``1 << i``. Transitions never edit a
board in place; ``with_cells`` returns a new one.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from soulchess.types import (
    EMPTY,
    WALL,
    CellCode,
    Piece,
    PieceKind,
    Position,
    Side,
    decode_cell,
    encode_piece,
    is_valid_code,
)

_LETTER_OF: Dict[PieceKind, str] = {
    PieceKind.KING: "K",
    PieceKind.QUEEN: "Q",
    PieceKind.ROOK: "R",
    PieceKind.BISHOP: "B",
    PieceKind.KNIGHT: "N",
    PieceKind.PAWN: "P",
}
_KIND_OF: Dict[str, PieceKind] = {v: k for k, v in _LETTER_OF.items()}

WALL_CHAR = "#"
EMPTY_CHAR = "."


def _mask_bit(code: CellCode) -> int:
    """Which mask a cell code belongs to: 0 walls, 1 controlled, 2 opposing, -1 none."""
    if code == EMPTY:
        return -1
    if code == WALL:
        return 0
    return 1 if code > 0 else 2


def _bit_indices(mask: int) -> List[int]:
    out: List[int] = []
    while mask:
        low = mask & -mask
        out.append(low.bit_length() - 1)
        mask ^= low
    return out


class Board:
    """Immutable rectangular grid of cells."""

    __slots__ = ("_rows", "_cols", "_cells", "_walls", "_controlled", "_opposing")

    def __init__(self, grid: Iterable) -> None:
        try:
            arr = np.array(grid, dtype=np.int64)
        except ValueError as e:
            raise ValueError(f"Board grid must be rectangular: {e}") from e
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Board grid must be a non-empty 2-D array")
        bad = [int(v) for v in np.unique(arr) if not is_valid_code(int(v))]
        if bad:
            raise ValueError(f"Unknown cell codes in board grid: {bad}")
        self._set(int(arr.shape[0]), int(arr.shape[1]), tuple(arr.ravel().tolist()))

    def _set(self, rows: int, cols: int, cells: Tuple[CellCode, ...]) -> None:
        masks = [0, 0, 0]
        for i, code in enumerate(cells):
            which = _mask_bit(code)
            if which >= 0:
                masks[which] |= 1 << i
        self._rows = rows
        self._cols = cols
        self._cells = cells
        self._walls, self._controlled, self._opposing = masks

    # -----------------------------
    # Construction helpers
    # -----------------------------
    @classmethod
    def from_cells(cls, rows: int, cols: int, cells: Sequence[CellCode]) -> "Board":
        """Wrap a flat row-major list of known-valid cell codes."""
        if len(cells) != rows * cols:
            raise ValueError(f"Expected {rows * cols} cells, got {len(cells)}")
        board = cls.__new__(cls)
        board._set(rows, cols, tuple(cells))
        return board

    @classmethod
    def empty(cls, rows: int, cols: Optional[int] = None) -> "Board":
        cols = rows if cols is None else cols
        return cls.from_cells(rows, cols, [EMPTY] * (rows * cols))

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Board":
        """Build a board from text rows.

        Upper case letters (K, Q, R, B, N, P) are controlled pieces, lower case
        letters are opposing pieces, ``#`` is a wall and ``.`` is empty.
        """
        grid: List[List[int]] = []
        for line in lines:
            grid.append([char_to_code(ch) for ch in line.strip()])
        if len({len(r) for r in grid}) > 1:
            raise ValueError("All board rows must have the same length")
        return cls(grid)

    def to_strings(self) -> List[str]:
        return [
            "".join(code_to_char(v) for v in self._cells[r * self._cols:(r + 1) * self._cols])
            for r in range(self._rows)
        ]

    # -----------------------------
    # Accessors
    # -----------------------------
    @property
    def grid(self) -> np.ndarray:
        """Read-only 2-D array of the cell codes."""
        arr = np.array(self._cells, dtype=np.int8).reshape(self._rows, self._cols)
        arr.setflags(write=False)
        return arr

    @property
    def cells(self) -> Tuple[CellCode, ...]:
        return self._cells

    @property
    def walls(self) -> int:
        return self._walls

    @property
    def controlled(self) -> int:
        return self._controlled

    @property
    def opposing(self) -> int:
        return self._opposing

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def index(self, r: int, c: int) -> int:
        return r * self._cols + c

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self._rows and 0 <= c < self._cols

    def code_at(self, r: int, c: int) -> CellCode:
        return self._cells[r * self._cols + c]

    def piece_at(self, r: int, c: int) -> Optional[Piece]:
        if not self.in_bounds(r, c):
            return None
        return decode_cell(self.code_at(r, c))

    def is_wall(self, r: int, c: int) -> bool:
        return self.in_bounds(r, c) and self.code_at(r, c) == WALL

    def is_empty(self, r: int, c: int) -> bool:
        return self.in_bounds(r, c) and self.code_at(r, c) == EMPTY

    def controlled_position(self) -> Optional[Position]:
        """Position of the controlled piece (first in row-major order), or None."""
        if not self._controlled:
            return None
        i = (self._controlled & -self._controlled).bit_length() - 1
        return divmod(i, self._cols)

    def opposing_positions(self) -> List[Position]:
        """Opposing piece positions in row-major order."""
        return [divmod(i, self._cols) for i in _bit_indices(self._opposing)]

    def count_pieces(self) -> Tuple[int, int, int]:
        """Count cells by type.

        Returns:
            Tuple of (controlled, opposing, walls)
        """
        return (bin(self._controlled).count("1"), bin(self._opposing).count("1"),
                bin(self._walls).count("1"))

    def with_cells(self, updates: Dict[Position, CellCode]) -> "Board":
        """Return a new board with the given cells replaced."""
        cells = list(self._cells)
        masks = [self._walls, self._controlled, self._opposing]
        for (r, c), code in updates.items():
            i = r * self._cols + c
            bit = 1 << i
            old = _mask_bit(cells[i])
            if old >= 0:
                masks[old] &= ~bit
            new = _mask_bit(code)
            if new >= 0:
                masks[new] |= bit
            cells[i] = code
        board = Board.__new__(Board)
        board._rows = self._rows
        board._cols = self._cols
        board._cells = tuple(cells)
        board._walls, board._controlled, board._opposing = masks
        return board

    # -----------------------------
    # Value semantics
    # -----------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and self._cells == other._cells

    def __hash__(self) -> int:
        return hash((self._rows, self._cols, self._cells))

    def __repr__(self) -> str:
        return f"Board({self.to_strings()!r})"


def char_to_code(ch: str) -> CellCode:
    if ch == EMPTY_CHAR:
        return EMPTY
    if ch == WALL_CHAR:
        return WALL
    kind = _KIND_OF.get(ch.upper())
    if kind is None:
        raise ValueError(f"Unknown board character: {ch!r}")
    side = Side.CONTROLLED if ch.isupper() else Side.OPPOSING
    return encode_piece(kind, side)


def code_to_char(code: CellCode) -> str:
    if code == EMPTY:
        return EMPTY_CHAR
    if code == WALL:
        return WALL_CHAR
    piece = decode_cell(code)
    letter = _LETTER_OF[piece.kind]  # type: ignore[union-attr]
    return letter if piece.side == Side.CONTROLLED else letter.lower()  # type: ignore[union-attr]


# ============================
# Square notation
# ============================
def square_name(rows: int, r: int, c: int) -> str:
    """Algebraic name of a square; ``a1`` is the bottom-left corner."""
    return f"{chr(ord('a') + c)}{rows - r}"


def parse_square(rows: int, cols: int, s: str) -> Optional[Position]:
    """Parse an algebraic square name into (row, col), or None if invalid."""
    s = s.strip().lower()
    if len(s) < 2 or not s[0].isalpha():
        return None
    try:
        rank = int(s[1:])
    except ValueError:
        return None
    c = ord(s[0]) - ord("a")
    r = rows - rank
    if 0 <= r < rows and 0 <= c < cols:
        return r, c
    return None

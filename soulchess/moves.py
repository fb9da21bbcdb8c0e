from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from soulchess.board import Board
from soulchess.types import Move, PieceKind, Position, Side

Direction = Tuple[int, int]
SquareIndex = int
Target = Tuple[SquareIndex, bool]  # (square index, is capture)

# -----------------------------
# Direction tables
# -----------------------------
_ORTHOGONAL: List[Direction] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
_DIAGONAL: List[Direction] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
_KNIGHT: List[Direction] = [(2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2)]
_ADJACENT: List[Direction] = _ORTHOGONAL + _DIAGONAL

SLIDING_DIRS: Dict[PieceKind, List[Direction]] = {
    PieceKind.ROOK: _ORTHOGONAL,
    PieceKind.BISHOP: _DIAGONAL,
    PieceKind.QUEEN: _ORTHOGONAL + _DIAGONAL,
}
STEPPING_DIRS: Dict[PieceKind, List[Direction]] = {
    PieceKind.KNIGHT: _KNIGHT,
    PieceKind.KING: _ADJACENT,
}


def pawn_forward(side: Side) -> int:
    """Row delta of a pawn's forward step. Controlled pawns move up the board."""
    return -1 if side == Side.CONTROLLED else 1


class BoardGeometry:
    """Precomputed square tables for one board shape.

    For every square index this holds the rays of each sliding kind, the
    targets of each stepping kind and, per side, the pawn's forward square and
    forward diagonals. Direction order follows the tables above.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.rc: List[Position] = [divmod(i, cols) for i in range(rows * cols)]
        self.sliding: Dict[int, List[Tuple[Tuple[SquareIndex, ...], ...]]] = {}
        self.stepping: Dict[int, List[Tuple[SquareIndex, ...]]] = {}
        self.pawn: Dict[int, List[Tuple[Optional[SquareIndex], Tuple[SquareIndex, ...]]]] = {}
        self._build_mappings()

    def _neighbor(self, idx: SquareIndex, dr: int, dc: int) -> Optional[SquareIndex]:
        r, c = self.rc[idx]
        nr, nc = r + dr, c + dc
        if 0 <= nr < self.rows and 0 <= nc < self.cols:
            return nr * self.cols + nc
        return None

    def _ray(self, idx: SquareIndex, dr: int, dc: int) -> Tuple[SquareIndex, ...]:
        out: List[SquareIndex] = []
        nb = self._neighbor(idx, dr, dc)
        while nb is not None:
            out.append(nb)
            nb = self._neighbor(nb, dr, dc)
        return tuple(out)

    def _build_mappings(self) -> None:
        squares = range(self.rows * self.cols)
        for kind, dirs in SLIDING_DIRS.items():
            self.sliding[int(kind)] = [
                tuple(ray for ray in (self._ray(i, dr, dc) for dr, dc in dirs) if ray)
                for i in squares
            ]
        for kind, dirs in STEPPING_DIRS.items():
            self.stepping[int(kind)] = [
                tuple(nb for nb in (self._neighbor(i, dr, dc) for dr, dc in dirs) if nb is not None)
                for i in squares
            ]
        for side in Side:
            fwd = pawn_forward(side)
            self.pawn[int(side)] = [
                (self._neighbor(i, fwd, 0),
                 tuple(nb for nb in (self._neighbor(i, fwd, dc) for dc in (1, -1)) if nb is not None))
                for i in squares
            ]


@lru_cache(maxsize=None)
def geometry(rows: int, cols: int) -> BoardGeometry:
    """Shared geometry tables for a board shape."""
    return BoardGeometry(rows, cols)


class MoveGenerator:
    """Generates legal destination moves for the piece on one square.

    Sliding pieces extend rays until blocked, stepping pieces try each offset
    once, and pawns advance onto empty squares and capture diagonally forward.
    A wall or a same-side piece blocks without producing a move; an opposing
    piece produces a capture and ends the ray.
    """

    def targets(self, geom: BoardGeometry, idx: SquareIndex, kind: int, side: int,
                blockers: int, foes: int) -> List[Target]:
        """Destinations of a piece as (square index, is capture) pairs.

        ``blockers`` masks the squares that stop a move without capture (walls
        and same-side pieces); ``foes`` masks capturable pieces.
        """
        out: List[Target] = []
        rays = geom.sliding.get(kind)
        if rays is not None:
            for ray in rays[idx]:
                for t in ray:
                    bit = 1 << t
                    if foes & bit:
                        out.append((t, True))
                        break
                    if blockers & bit:
                        break
                    out.append((t, False))
            return out
        steps = geom.stepping.get(kind)
        if steps is not None:
            for t in steps[idx]:
                bit = 1 << t
                if foes & bit:
                    out.append((t, True))
                elif not blockers & bit:
                    out.append((t, False))
            return out
        if kind == PieceKind.PAWN:
            ahead, diagonals = geom.pawn[side][idx]
            if ahead is not None and not (blockers | foes) & (1 << ahead):
                out.append((ahead, False))
            for t in diagonals:
                if foes & (1 << t):
                    out.append((t, True))
            return out
        raise ValueError(f"No move rule for piece kind {kind!r}")

    def legal_moves(self, board: Board, r: int, c: int) -> List[Move]:
        piece = board.piece_at(r, c)
        if piece is None:
            return []
        if piece.side == Side.CONTROLLED:
            friends, foes = board.controlled, board.opposing
        else:
            friends, foes = board.opposing, board.controlled
        geom = geometry(board.rows, board.cols)
        return [
            Move(*geom.rc[t], is_capture)
            for t, is_capture in self.targets(geom, board.index(r, c), int(piece.kind),
                                              int(piece.side), board.walls | friends, foes)
        ]


class MoveValidator:
    """Checks a requested destination against the generated legal moves."""

    @staticmethod
    def find(board: Board, origin: Tuple[int, int], target: Tuple[int, int]) -> Optional[Move]:
        for move in _DEFAULT_GENERATOR.legal_moves(board, *origin):
            if move.target == tuple(target):
                return move
        return None

    @staticmethod
    def validate(board: Board, origin: Tuple[int, int], target: Tuple[int, int]) -> bool:
        return MoveValidator.find(board, origin, target) is not None


_DEFAULT_GENERATOR = MoveGenerator()


# Convenience functional API

def legal_moves(board: Board, r: int, c: int) -> List[Move]:
    return _DEFAULT_GENERATOR.legal_moves(board, r, c)

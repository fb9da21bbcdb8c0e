"""
Breadth-first puzzle solver.

Explores every reachable state of the controlled piece, finds the minimum
number of moves that clears all opposing pieces, and collects every winning
move sequence of that length so callers can check uniqueness.

Opposing pieces never move and the controlled piece is the only mover, so a
search state is just the mover's square, its kind and the bitmask of opposing
pieces still on the board. Nodes carry that state instead of a full board.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set, Tuple

from soulchess.board import Board
from soulchess.moves import MoveGenerator, geometry
from soulchess.types import Move, MovePath, PieceKind, SearchStats, Side, SolveResult

logger = logging.getLogger(__name__)

StateSignature = Tuple[int, int, int, int]


def state_signature(r: int, c: int, kind: PieceKind, board: Board) -> StateSignature:
    """Key identifying a search state.

    Opposing pieces never move, so the mask of their squares describes them.
    Walls are fixed for the whole search and are left out.
    """
    return (r, c, int(kind), board.opposing)


@dataclass
class SearchNode:
    square: int
    kind: int
    opposing: int
    path: MovePath


class PuzzleSolver:
    """Exhaustive BFS solver with visited-state de-duplication."""

    def __init__(self, move_generator: Optional[MoveGenerator] = None) -> None:
        self.move_generator = move_generator or MoveGenerator()
        self.stats = SearchStats()

    def solve(self, board: Board) -> SolveResult:
        self.stats = SearchStats()
        pos = board.controlled_position()
        if pos is None:
            return SolveResult(0, [])

        geom = geometry(board.rows, board.cols)
        start_square = board.index(*pos)
        cells = board.cells
        # Any other controlled piece stays put and blocks like a wall
        blockers = board.walls | (board.controlled & ~(1 << start_square))
        side = int(Side.CONTROLLED)

        start = SearchNode(start_square, cells[start_square], board.opposing, [])
        queue: Deque[SearchNode] = deque([start])
        visited: Set[StateSignature] = {(pos[0], pos[1], start.kind, start.opposing)}
        solutions: List[MovePath] = []
        min_moves: Optional[int] = None

        while queue:
            node = queue.popleft()
            depth = len(node.path)

            # Nodes come off the queue in non-decreasing depth
            if min_moves is not None and depth > min_moves:
                continue

            if not node.opposing:
                if min_moves is None or depth < min_moves:
                    min_moves = depth
                    solutions = [node.path]
                elif depth == min_moves:
                    solutions.append(node.path)
                continue

            targets = self.move_generator.targets(geom, node.square, node.kind, side,
                                                  blockers, node.opposing)
            if not targets:
                # Stuck: lost
                continue

            self.stats.nodes_expanded += 1
            for t, is_capture in targets:
                if is_capture:
                    kind = -cells[t]
                    opposing = node.opposing & ~(1 << t)
                else:
                    kind = node.kind
                    opposing = node.opposing
                tr, tc = geom.rc[t]
                sig = (tr, tc, kind, opposing)
                if sig in visited:
                    continue
                visited.add(sig)
                queue.append(SearchNode(t, kind, opposing, node.path + [Move(tr, tc, is_capture)]))

        self.stats.states_seen = len(visited)
        self.stats.solutions_found = len(solutions)
        logger.debug(
            "Solved %dx%d board: min_moves=%s solutions=%d expanded=%d states=%d",
            board.rows, board.cols, min_moves, len(solutions),
            self.stats.nodes_expanded, self.stats.states_seen,
        )
        return SolveResult(min_moves or 0, solutions)


def get_solver() -> PuzzleSolver:
    """Get a new solver instance."""
    return PuzzleSolver()


def solve(board: Board) -> SolveResult:
    return get_solver().solve(board)

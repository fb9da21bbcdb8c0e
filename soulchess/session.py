"""
Puzzle session state: the board in play, selection, history and hints.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from soulchess.board import Board
from soulchess.engine import apply_move, classify
from soulchess.generator import PuzzleGenerator
from soulchess.moves import MoveValidator, legal_moves
from soulchess.types import GameState, Move, Position, PuzzleResult, Side


class PuzzleSession:
    """Tracks one puzzle being played, plus the level progression."""

    def __init__(self, level: int = 1, generator: Optional[PuzzleGenerator] = None,
                 size: Optional[int] = None):
        self.level = level
        self.size = size
        self.generator = generator or PuzzleGenerator()
        self.puzzle: Optional[PuzzleResult] = None
        self.board: Optional[Board] = None
        self.state = GameState.PLAYING
        self.selected: Optional[Position] = None
        self.valid_moves: List[Move] = []
        self.moves_made = 0
        self.souls = 0
        self.feedback = ""
        self.history: List[Tuple[Board, int, int]] = []

    # -----------------------------
    # Puzzle lifecycle
    # -----------------------------
    def new_puzzle(self, level: Optional[int] = None) -> PuzzleResult:
        """Generate a fresh puzzle for the current (or given) level."""
        if level is not None:
            self.level = level
        self.puzzle = self.generator.generate(self.level, self.size)
        self._reset_play("Find the optimal path...")
        return self.puzzle

    def load_puzzle(self, puzzle: PuzzleResult) -> None:
        self.puzzle = puzzle
        self._reset_play("Find the optimal path...")

    def next_level(self) -> PuzzleResult:
        self.new_puzzle(self.level + 1)
        self.feedback = f"Level {self.level} Start!"
        return self.puzzle  # type: ignore[return-value]

    def restart(self) -> bool:
        """Restore the puzzle's initial board."""
        if self.puzzle is None:
            return False
        self._reset_play("Level Restarted.")
        return True

    def _reset_play(self, feedback: str) -> None:
        self.board = self.puzzle.board  # type: ignore[union-attr]
        self.state = classify(self.board)
        self.selected = None
        self.valid_moves = []
        self.moves_made = 0
        self.souls = 0
        self.history.clear()
        self.feedback = feedback

    @property
    def min_moves(self) -> int:
        return self.puzzle.min_moves if self.puzzle else 0

    # -----------------------------
    # Interaction
    # -----------------------------
    def select(self, r: int, c: int) -> List[Move]:
        """Select the controlled piece at (r, c) and return its legal moves."""
        self.clear_selection()
        if self.board is None or self.state != GameState.PLAYING:
            return []
        piece = self.board.piece_at(r, c)
        if piece is None or piece.side != Side.CONTROLLED:
            return []
        self.selected = (r, c)
        self.valid_moves = legal_moves(self.board, r, c)
        return self.valid_moves

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_moves = []

    def move_to(self, r: int, c: int) -> bool:
        """Move the selected piece to (r, c) if that is one of its legal moves."""
        if self.board is None or self.state != GameState.PLAYING or self.selected is None:
            self.clear_selection()
            return False
        move = MoveValidator.find(self.board, self.selected, (r, c))
        if move is None:
            self.clear_selection()
            return False

        before = self.board.piece_at(*self.selected)
        target = self.board.piece_at(r, c)
        self.history.append((self.board, self.moves_made, self.souls))
        self.board = apply_move(self.board, self.selected, move.target)
        self.moves_made += 1

        if move.is_capture and target is not None:
            self.souls += 1
            self.feedback = f"Soul Switched: {before.kind.name} -> {target.kind.name}"  # type: ignore[union-attr]
        else:
            self.feedback = "Moving..."

        self.state = classify(self.board)
        self.clear_selection()
        return True

    def play(self, origin: Position, target: Position) -> bool:
        """Select and move in one call."""
        self.select(*origin)
        return self.move_to(*target)

    def undo(self) -> bool:
        """Undo the last move and return success."""
        if not self.history:
            return False
        self.board, self.moves_made, self.souls = self.history.pop()
        self.state = classify(self.board)
        self.clear_selection()
        self.feedback = "Move undone."
        return True

    def hint(self) -> Optional[Position]:
        """Next target square along the stored solution, assuming it has been followed."""
        path = self.puzzle.solution_path if self.puzzle else []
        if self.moves_made < len(path):
            self.feedback = "Hint: Move here."
            return path[self.moves_made].target
        self.feedback = "No more hints available."
        return None

    def verdict(self) -> Optional[str]:
        """'optimal' or 'suboptimal' once won, 'stuck' once lost, None while playing."""
        if self.state == GameState.WON:
            return "optimal" if self.moves_made <= self.min_moves else "suboptimal"
        if self.state == GameState.LOST:
            return "stuck"
        return None

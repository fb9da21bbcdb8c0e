"""
Randomized puzzle generator.

Each attempt scatters walls, one controlled piece and a handful of opposing
pieces, then asks the solver for the shortest solutions. A board is accepted
only when its minimum meets the level's threshold and exactly one minimal
solution exists. Generation never fails hard: after the attempt cap it falls
back to the first reasonably long puzzle seen, or to an empty board.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional

from config import DifficultySettings, GeneratorSettings, get_generator_settings
from soulchess.board import Board
from soulchess.difficulty import DifficultyProfile, difficulty_for_level
from soulchess.search import PuzzleSolver
from soulchess.types import (
    ALL_KINDS,
    EMPTY,
    WALL,
    Position,
    PuzzleResult,
    RandomSource,
    Side,
    SolverProtocol,
    encode_piece,
)

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """Generates puzzles for a level using an injected random source."""

    def __init__(self, rng: Optional[RandomSource] = None,
                 solver: Optional[SolverProtocol] = None,
                 settings: Optional[GeneratorSettings] = None,
                 difficulty_settings: Optional[DifficultySettings] = None) -> None:
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.solver: SolverProtocol = solver or PuzzleSolver()
        self.settings = settings or get_generator_settings()
        self.difficulty_settings = difficulty_settings
        self.last_attempts: int = 0

    def profile_for(self, level: int, size: Optional[int] = None) -> DifficultyProfile:
        profile = difficulty_for_level(level, self.difficulty_settings)
        if size is not None and size != profile.board_size:
            profile = profile.with_board_size(size)
        return profile

    def _random_empty_cell(self, cells: List[int], size: int) -> Optional[Position]:
        """Draw cells until an empty one turns up, or give up after the try cap."""
        for _ in range(self.settings.placement_tries):
            r = self.rng.randrange(size)
            c = self.rng.randrange(size)
            if cells[r * size + c] == EMPTY:
                return r, c
        return None

    def build_board(self, profile: DifficultyProfile) -> Optional[Board]:
        """Build one random board, or None if the controlled piece could not be placed."""
        size = profile.board_size
        cells: List[int] = [EMPTY] * (size * size)

        # 1. Walls
        density = profile.wall_density_min + self.rng.random() * (
            profile.wall_density_max - profile.wall_density_min)
        for _ in range(int(size * size * density)):
            r = self.rng.randrange(size)
            c = self.rng.randrange(size)
            cells[r * size + c] = WALL

        # 2. Controlled piece
        cell = self._random_empty_cell(cells, size)
        if cell is None:
            return None
        cells[cell[0] * size + cell[1]] = encode_piece(self.rng.choice(ALL_KINDS), Side.CONTROLLED)

        # 3. Opposing pieces; one that finds no free cell is skipped
        count = self.rng.randint(profile.enemy_min, profile.enemy_max)
        for _ in range(count):
            cell = self._random_empty_cell(cells, size)
            if cell is None:
                continue
            cells[cell[0] * size + cell[1]] = encode_piece(self.rng.choice(ALL_KINDS), Side.OPPOSING)

        return Board.from_cells(size, size, cells)

    def generate(self, level: int, size: Optional[int] = None) -> PuzzleResult:
        profile = self.profile_for(level, size)
        fallback: Optional[PuzzleResult] = None

        for attempt in range(1, self.settings.max_attempts + 1):
            self.last_attempts = attempt
            board = self.build_board(profile)
            if board is None:
                continue

            result = self.solver.solve(board)
            if result.min_moves >= profile.min_moves_threshold and len(result.solutions) == 1:
                logger.info("Puzzle generated in %d attempts (level %d, %d moves)",
                            attempt, level, result.min_moves)
                return PuzzleResult(board, result.min_moves, list(result.solutions[0]))

            if fallback is None and result.min_moves >= self.settings.fallback_min_moves:
                path = list(result.solutions[0]) if result.solutions else []
                fallback = PuzzleResult(board, result.min_moves, path)

        logger.warning("Failed to generate a unique puzzle after %d attempts (level %d)",
                       self.settings.max_attempts, level)
        if fallback is not None:
            logger.info("Returning fallback puzzle with %d moves", fallback.min_moves)
            return fallback

        return PuzzleResult(Board.empty(profile.board_size), 0, [])


def get_generator(rng: Optional[RandomSource] = None) -> PuzzleGenerator:
    """Get a new generator instance."""
    return PuzzleGenerator(rng=rng)


def generate(level: int = 1, rng: Optional[RandomSource] = None,
             size: Optional[int] = None) -> PuzzleResult:
    return get_generator(rng).generate(level, size)

"""
Level -> difficulty profile.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from config import DifficultySettings, get_difficulty_settings
from soulchess.types import MAX_BOARD_SIZE, MIN_BOARD_SIZE


@dataclass(frozen=True)
class DifficultyProfile:
    """Generation parameters for one level."""
    level: int
    board_size: int
    wall_density_min: float
    wall_density_max: float
    min_moves_threshold: int
    enemy_min: int
    enemy_max: int
    enemy_multiplier: float

    def with_board_size(self, size: int) -> "DifficultyProfile":
        """Same profile on a different board size; enemy bounds scale with it."""
        check_board_size(size)
        return replace(self, board_size=size, enemy_min=size, enemy_max=int(size * self.enemy_multiplier))


def check_board_size(size: int) -> None:
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise ValueError(f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {size}")


def difficulty_for_level(level: int, settings: Optional[DifficultySettings] = None) -> DifficultyProfile:
    """Derive the difficulty profile for ``level`` (1-based).

    Board size grows every few levels up to 7x7, the wall density range and
    required solution length widen with level, and the enemy count scales with
    the board size.
    """
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}")
    s = settings or get_difficulty_settings()
    step = level - 1

    board_size = min(s.base_board_size + step // s.levels_per_size, s.max_board_size)
    wall_max = min(s.wall_density_base_max + step * s.wall_density_step, s.wall_density_cap)
    min_moves = min(s.min_moves_base + step // s.levels_per_min_move, s.min_moves_cap)
    multiplier = min(s.enemy_multiplier_base + step * s.enemy_multiplier_step, s.enemy_multiplier_cap)

    return DifficultyProfile(
        level=level,
        board_size=board_size,
        wall_density_min=s.wall_density_min,
        wall_density_max=max(wall_max, s.wall_density_min),
        min_moves_threshold=min_moves,
        enemy_min=board_size,
        enemy_max=int(board_size * multiplier),
        enemy_multiplier=multiplier,
    )

"""
Central configuration for puzzle generation, difficulty and display.
Pydantic models give type-safe configuration with validation.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class GeneratorSettings(BaseModel):
    """Retry and placement limits for the puzzle generator."""

    max_attempts: int = Field(default=200, ge=1, le=10000, description="Boards tried before falling back")
    placement_tries: int = Field(default=100, ge=1, description="Random draws allowed when placing one piece")
    fallback_min_moves: int = Field(default=2, ge=1, description="Shortest solution accepted as a fallback puzzle")

    @field_validator('max_attempts', 'placement_tries', 'fallback_min_moves', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class DifficultySettings(BaseModel):
    """Constants of the level -> difficulty profile formulas."""

    base_board_size: int = Field(default=4, ge=4, le=7, description="Board size at level 1")
    max_board_size: int = Field(default=7, ge=4, le=7, description="Largest board size")
    levels_per_size: int = Field(default=5, ge=1, description="Levels between board size increases")
    wall_density_min: float = Field(default=0.15, ge=0, lt=1, description="Lower bound of wall density")
    wall_density_base_max: float = Field(default=0.25, ge=0, lt=1, description="Upper bound of wall density at level 1")
    wall_density_step: float = Field(default=0.02, ge=0, description="Upper bound increase per level")
    wall_density_cap: float = Field(default=0.45, ge=0, lt=1, description="Largest upper bound of wall density")
    min_moves_base: int = Field(default=2, ge=1, description="Required solution length at level 1")
    levels_per_min_move: int = Field(default=3, ge=1, description="Levels between required length increases")
    min_moves_cap: int = Field(default=6, ge=1, description="Largest required solution length")
    enemy_multiplier_base: float = Field(default=1.5, ge=1, description="Enemy multiplier at level 1")
    enemy_multiplier_step: float = Field(default=0.1, ge=0, description="Enemy multiplier increase per level")
    enemy_multiplier_cap: float = Field(default=2.5, ge=1, description="Largest enemy multiplier")

    @field_validator('wall_density_min', 'wall_density_base_max', 'wall_density_step', 'wall_density_cap',
                     'enemy_multiplier_base', 'enemy_multiplier_step', 'enemy_multiplier_cap', mode='before')
    @classmethod
    def validate_float_fields(cls, v):
        return float(v)

    @model_validator(mode='after')
    def check_ranges(self) -> 'DifficultySettings':
        if self.base_board_size > self.max_board_size:
            raise ValueError("base_board_size must not exceed max_board_size")
        if self.wall_density_min > self.wall_density_base_max:
            raise ValueError("wall_density_min must not exceed wall_density_base_max")
        return self


class UISettings(BaseModel):
    """Text display settings."""

    use_unicode: bool = Field(default=True, description="Use Unicode chess glyphs for pieces")
    use_color: bool = Field(default=True, description="Enable colored terminal output")
    show_coordinates: bool = Field(default=True, description="Show file and rank labels")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class SoulChessConfig(BaseModel):
    """Main configuration model for the puzzle engine."""

    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Metadata
    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'SoulChessConfig':
        """Create configuration from environment variables."""
        return cls(
            generator=GeneratorSettings(
                max_attempts=int(os.getenv('SOULCHESS_MAX_ATTEMPTS', '200')),
                placement_tries=int(os.getenv('SOULCHESS_PLACEMENT_TRIES', '100')),
            ),
            ui=UISettings(
                use_unicode=os.getenv('SOULCHESS_UNICODE', 'true').lower() == 'true',
                use_color=os.getenv('SOULCHESS_COLOR', 'true').lower() == 'true',
                show_coordinates=os.getenv('SOULCHESS_COORDS', 'true').lower() == 'true',
            ),
            logging=LoggingSettings(
                log_level=os.getenv('SOULCHESS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'generator': self.generator.model_dump(),
            'difficulty': self.difficulty.model_dump(),
            'ui': self.ui.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'SoulChessConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            generator=GeneratorSettings(**data.get('generator', {})),
            difficulty=DifficultySettings(**data.get('difficulty', {})),
            ui=UISettings(**data.get('ui', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                known = {k: v for k, v in settings.items() if k in type(section_model).model_fields}
                setattr(self, section, type(section_model).model_validate({**section_model.model_dump(), **known}))


# Global configuration instance
_config: Optional[SoulChessConfig] = None


def get_config() -> SoulChessConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = SoulChessConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> SoulChessConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = SoulChessConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


# Convenience functions for common configuration access
def get_generator_settings() -> GeneratorSettings:
    """Get generator configuration settings."""
    return get_config().generator


def get_difficulty_settings() -> DifficultySettings:
    """Get difficulty formula settings."""
    return get_config().difficulty


def get_ui_settings() -> UISettings:
    """Get UI configuration settings."""
    return get_config().ui


def get_logging_settings() -> LoggingSettings:
    """Get logging configuration settings."""
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by env var SOULCHESS_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    level: int = getattr(logging, get_logging_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]

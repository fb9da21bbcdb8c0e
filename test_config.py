import pytest
from pydantic import ValidationError

import config
from config import DifficultySettings, LoggingSettings, SoulChessConfig


@pytest.fixture(autouse=True)
def fresh_config():
    config.reset_config()
    yield
    config.reset_config()


def test_defaults():
    cfg = SoulChessConfig()
    assert cfg.generator.max_attempts == 200
    assert cfg.generator.placement_tries == 100
    assert cfg.generator.fallback_min_moves == 2
    assert cfg.difficulty.max_board_size == 7
    assert cfg.logging.log_level == "INFO"


def test_log_level_validation():
    assert LoggingSettings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        LoggingSettings(log_level="LOUD")


def test_difficulty_ranges_validated():
    with pytest.raises(ValidationError):
        DifficultySettings(base_board_size=7, max_board_size=5)
    with pytest.raises(ValidationError):
        DifficultySettings(max_board_size=9)


def test_from_env(monkeypatch):
    monkeypatch.setenv("SOULCHESS_MAX_ATTEMPTS", "50")
    monkeypatch.setenv("SOULCHESS_UNICODE", "false")
    monkeypatch.setenv("SOULCHESS_LOG_LEVEL", "warning")
    cfg = config.get_config()
    assert cfg.generator.max_attempts == 50
    assert cfg.ui.use_unicode is False
    assert cfg.logging.log_level == "WARNING"
    assert config.get_generator_settings() is cfg.generator


def test_save_and_load(tmp_path):
    cfg = SoulChessConfig()
    cfg.update_from_dict({"generator": {"max_attempts": 25}, "ui": {"show_coordinates": False}})
    path = str(tmp_path / "soulchess.json")
    cfg.save_to_file(path)

    loaded = config.load_config_from_file(path)
    assert loaded.generator.max_attempts == 25
    assert loaded.ui.show_coordinates is False
    assert loaded.config_file == path
    assert config.get_config() is loaded


def test_bool_strings_are_parsed():
    assert config.UISettings(use_unicode="false").use_unicode is False
    assert config.UISettings(use_color="yes").use_color is True
    with pytest.raises(ValidationError):
        config.UISettings(show_coordinates="sometimes")


def test_update_from_dict_validates():
    cfg = SoulChessConfig()
    cfg.update_from_dict({"ui": {"use_color": "false"}, "generator": {"unknown": 1}})
    assert cfg.ui.use_color is False
    with pytest.raises(ValidationError):
        cfg.update_from_dict({"generator": {"max_attempts": 0}})

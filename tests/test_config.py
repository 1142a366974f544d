"""Game settings loading."""

import pytest
from pydantic import ValidationError

from seabattle import config as config_module
from seabattle.config import GameSettings
from seabattle.engine.placement import PlacementLimits


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SEABATTLE_BOARD_SIZE",
        "SEABATTLE_ATTEMPTS_PER_SHIP",
        "SEABATTLE_MAX_PLACEMENT_RESETS",
        "SEABATTLE_SEED",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = GameSettings.from_env()
    assert settings.board_size == 10
    assert settings.seed is None
    assert settings.placement_limits() == PlacementLimits()


def test_from_env_reads_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "12")
    monkeypatch.setenv("SEABATTLE_ATTEMPTS_PER_SHIP", "50")
    monkeypatch.setenv("SEABATTLE_MAX_PLACEMENT_RESETS", "4")
    monkeypatch.setenv("SEABATTLE_SEED", "99")

    settings = GameSettings.from_env()
    assert settings.board_size == 12
    assert settings.seed == 99
    assert settings.placement_limits() == PlacementLimits(attempts_per_ship=50, max_resets=4)

    overridden = GameSettings.from_env(board_size=8, seed=None)
    assert overridden.board_size == 8
    assert overridden.seed == 99


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "0")
    with pytest.raises(ValidationError):
        GameSettings.from_env()


def test_load_settings_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    config_module.load_settings.cache_clear()
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "8")
    first = config_module.load_settings()
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "12")
    assert config_module.load_settings() is first
    assert first.board_size == 8
    config_module.load_settings.cache_clear()

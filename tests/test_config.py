"""Settings → LootConfig 테스트"""

import random

import pytest
from pydantic import ValidationError

from src.config import Settings
from src.core.loot.generation import DEFAULT_CONFIG, LootConfig, generate_loot
from src.core.session import GameSession, Hero


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def test_defaults_match_core_policy():
    assert Settings().loot_config() == DEFAULT_CONFIG


def test_env_override(monkeypatch):
    monkeypatch.setenv("LOOT_LEVEL_SLACK", "3")
    monkeypatch.setenv("LOOT_CHANCE_CAP", "0.5")
    monkeypatch.setenv("LOOT_SEED", "42")

    settings = Settings()
    config = settings.loot_config()

    assert config.level_slack == 3
    assert config.chance_cap == 0.5
    assert config.item_attempts == DEFAULT_CONFIG.item_attempts
    assert settings.LOOT_SEED == 42


class TestSettingsValidation:
    @pytest.mark.parametrize("cap", ["1.0", "1.5", "0", "-0.2"])
    def test_chance_cap_must_stay_below_certainty(self, monkeypatch, cap):
        monkeypatch.setenv("LOOT_CHANCE_CAP", cap)
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize(
        "name,value",
        [
            ("LOOT_ITEM_ATTEMPTS", "0"),
            ("LOOT_ITEM_ATTEMPTS", "-2"),
            ("LOOT_GOLD_PER_LEVEL", "0"),
            ("LOOT_GOLD_PER_LEVEL", "-50"),
            ("LOOT_LEVEL_SLACK", "-1"),
        ],
    )
    def test_integer_knobs_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings()


class TestLootConfigValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"chance_cap": 1.0},
            {"chance_cap": 0.0},
            {"item_attempts": 0},
            {"gold_per_level": 0},
            {"level_slack": -1},
            {"ring_chance": 1.5},
        ],
    )
    def test_rejects_invalid_policy(self, kwargs):
        with pytest.raises(ValueError):
            LootConfig(**kwargs)

    def test_deep_rolls_never_certain(self):
        """상한 0.9: 아주 먼 거리에서도 0.9 이상의 난수는 실패"""
        game = GameSession(session_id="s", hero=Hero(level=1), distance=10_000_000)
        assert generate_loot(game, FixedRandom(0.95), LootConfig(chance_cap=0.9)) is None

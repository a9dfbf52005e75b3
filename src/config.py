"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.loot.generation import LootConfig


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Loot tuning
    LOOT_LEVEL_SLACK: int = Field(10, ge=0)
    LOOT_ITEM_ATTEMPTS: int = Field(3, ge=1)
    LOOT_GOLD_PER_LEVEL: int = Field(50, ge=1)
    LOOT_CHANCE_CAP: float = Field(0.9, gt=0, lt=1)
    LOOT_SEED: Optional[int] = None

    def loot_config(self) -> LootConfig:
        """Build the core generation policy from the LOOT_* settings."""
        return LootConfig(
            level_slack=self.LOOT_LEVEL_SLACK,
            item_attempts=self.LOOT_ITEM_ATTEMPTS,
            gold_per_level=self.LOOT_GOLD_PER_LEVEL,
            chance_cap=self.LOOT_CHANCE_CAP,
        )


settings = Settings()

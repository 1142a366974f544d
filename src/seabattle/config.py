"""Game settings loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field

from seabattle.engine.placement import PlacementLimits

BOARD_SIZES = (8, 10, 12)


class GameSettings(BaseModel):
    """Tunable parameters for a session."""

    board_size: int = Field(default=10, ge=1)
    attempts_per_ship: int = Field(default=1000, ge=1)
    max_placement_resets: int = Field(default=100, ge=1)
    seed: int | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "GameSettings":
        """Construct settings from `SEABATTLE_*` env vars; explicit overrides win."""

        data: Dict[str, Any] = {}
        env_names = {
            "board_size": "SEABATTLE_BOARD_SIZE",
            "attempts_per_ship": "SEABATTLE_ATTEMPTS_PER_SHIP",
            "max_placement_resets": "SEABATTLE_MAX_PLACEMENT_RESETS",
            "seed": "SEABATTLE_SEED",
        }
        for field, env_name in env_names.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field] = value.strip()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)

    def placement_limits(self) -> PlacementLimits:
        return PlacementLimits(
            attempts_per_ship=self.attempts_per_ship, max_resets=self.max_placement_resets
        )


@lru_cache(maxsize=1)
def load_settings() -> GameSettings:
    """Load and cache game settings from the environment."""

    return GameSettings.from_env()

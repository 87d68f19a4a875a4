# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Runtime configuration for the emotion-aware engine.

Values come from environment variables (and an optional ``.env`` file).
Scoring and policy thresholds are constants in
``emotion_aware.core.emotional.constants``; only sampling, timing and
presentation are configurable.

Example:
    >>> from emotion_aware.core.config.settings import get_settings
    >>> get_settings().emotion.celebration_probability
    0.3
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmotionSettings(BaseSettings):
    """Session behaviour, read from ``EMOTION_*`` variables.

    Attributes:
        celebration_probability: Chance that a correct answer triggers a
            celebration message.
        tick_interval_seconds: Minimum time between two periodic
            re-evaluations triggered by tick().
        messages_path: YAML file replacing the packaged message catalog.
        default_display_name: Name used when the caller gives none.
    """

    model_config = SettingsConfigDict(env_prefix="EMOTION_", extra="ignore")

    celebration_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    tick_interval_seconds: int = Field(default=60, ge=1)
    messages_path: Path | None = None
    default_display_name: str = "Learner"

    @model_validator(mode="after")
    def validate_display_name(self) -> Self:
        """Reject a blank default display name.

        Raises:
            ValueError: If the name is empty or whitespace.
        """
        if not self.default_display_name.strip():
            raise ValueError("default_display_name must not be blank")
        return self


class Settings(BaseSettings):
    """Top-level settings: runtime environment, logging and the session.

    Attributes:
        environment: Deployment environment; selects the log renderer.
        debug: Force console log rendering outside development.
        log_level: Level for the ``emotion_aware`` loggers.
        emotion: Session behaviour (``EMOTION_*``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Reads its own EMOTION_ prefix
    emotion: EmotionSettings = Field(default_factory=EmotionSettings)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings built once from the environment and then reused."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next get_settings() re-reads them."""
    get_settings.cache_clear()

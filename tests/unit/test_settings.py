# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from emotion_aware.core.config.settings import (
    EmotionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestEmotionSettings:
    """Tests for EmotionSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = EmotionSettings()

        assert settings.celebration_probability == 0.3
        assert settings.tick_interval_seconds == 60
        assert settings.messages_path is None
        assert settings.default_display_name == "Learner"

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "EMOTION_CELEBRATION_PROBABILITY": "0.5",
            "EMOTION_TICK_INTERVAL_SECONDS": "15",
            "EMOTION_MESSAGES_PATH": "/etc/emotion/messages.yaml",
            "EMOTION_DEFAULT_DISPLAY_NAME": "Student",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = EmotionSettings()

        assert settings.celebration_probability == 0.5
        assert settings.tick_interval_seconds == 15
        assert settings.messages_path == Path("/etc/emotion/messages.yaml")
        assert settings.default_display_name == "Student"

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_probability_out_of_range_raises_error(self, probability: float) -> None:
        """Test that the celebration probability must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            EmotionSettings(celebration_probability=probability)

    def test_tick_interval_must_be_positive(self) -> None:
        """Test that a zero tick interval is rejected."""
        with pytest.raises(ValidationError):
            EmotionSettings(tick_interval_seconds=0)

    def test_blank_display_name_raises_error(self) -> None:
        """Test that a blank default display name is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            EmotionSettings(default_display_name="  ")

        assert "default_display_name must not be blank" in str(exc_info.value)


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.emotion, EmotionSettings)

    def test_subsettings_read_their_own_prefix(self) -> None:
        """Test that emotion settings pick up EMOTION_ variables."""
        with patch.dict(os.environ, {"EMOTION_CELEBRATION_PROBABILITY": "1"}, clear=False):
            settings = Settings()

        assert settings.emotion.celebration_probability == 1.0

    def test_invalid_environment_raises_error(self) -> None:
        """Test that unknown environments are rejected."""
        with pytest.raises(ValidationError):
            Settings(environment="qa")  # type: ignore[arg-type]

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_environment_has_single_helper(self) -> None:
        """Test that only is_development is derived from the environment."""
        settings = Settings(environment="production")

        assert not hasattr(settings, "is_production")


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        clear_settings_cache()

        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        clear_settings_cache()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache allows reloading settings."""
        clear_settings_cache()

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

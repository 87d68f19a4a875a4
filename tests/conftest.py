# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- A controllable clock for elapsed-time and idle rules
- A scripted random source for celebrations and template choice
- Isolated settings
"""

from collections.abc import Callable, Generator, Sequence
from datetime import datetime, timedelta, timezone
from typing import TypeVar

import pytest

from emotion_aware.core.config.settings import EmotionSettings, clear_settings_cache
from emotion_aware.core.emotional.constants import ActivityType, DifficultyLevel
from emotion_aware.core.emotional.context import LearningActivity
from emotion_aware.core.emotional.service import EmotionAwareSession

T = TypeVar("T")

SESSION_START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# Test Doubles
# =============================================================================


class FakeClock:
    """Clock returning a settable time."""

    def __init__(self, start: datetime = SESSION_START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        """Move time forward by a timedelta built from ``kwargs``."""
        self.now = self.now + timedelta(**kwargs)
        return self.now


class ScriptedRandom:
    """Random source with predictable output.

    random() returns the scripted draws in order, then ``default_draw``.
    choice() always returns the element at ``choice_index``.
    """

    def __init__(
        self,
        draws: Sequence[float] = (),
        default_draw: float = 0.99,
        choice_index: int = 0,
    ) -> None:
        self._draws = list(draws)
        self.default_draw = default_draw
        self.choice_index = choice_index

    def random(self) -> float:
        if self._draws:
            return self._draws.pop(0)
        return self.default_draw

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.choice_index % len(seq)]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep environment overrides and cached settings out of every test."""
    for key in (
        "EMOTION_CELEBRATION_PROBABILITY",
        "EMOTION_TICK_INTERVAL_SECONDS",
        "EMOTION_MESSAGES_PATH",
        "EMOTION_DEFAULT_DISPLAY_NAME",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at the session start."""
    return FakeClock()


@pytest.fixture
def rng() -> ScriptedRandom:
    """Random source that never celebrates and picks the first template."""
    return ScriptedRandom()


@pytest.fixture
def make_rng() -> type[ScriptedRandom]:
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def emotion_settings() -> EmotionSettings:
    """Default emotion settings."""
    return EmotionSettings()


@pytest.fixture
def session(
    clock: FakeClock,
    rng: ScriptedRandom,
    emotion_settings: EmotionSettings,
) -> EmotionAwareSession:
    """Fresh session for learner "Ada"."""
    return EmotionAwareSession(
        "Ada",
        clock=clock,
        rng=rng,
        settings=emotion_settings,
    )


@pytest.fixture
def make_session(
    clock: FakeClock,
    emotion_settings: EmotionSettings,
) -> Callable[..., EmotionAwareSession]:
    """Factory for sessions with a custom random script or settings."""

    def _make(
        display_name: str | None = "Ada",
        *,
        draws: Sequence[float] = (),
        default_draw: float = 0.99,
        choice_index: int = 0,
        settings: EmotionSettings | None = None,
    ) -> EmotionAwareSession:
        return EmotionAwareSession(
            display_name,
            clock=clock,
            rng=ScriptedRandom(draws, default_draw, choice_index),
            settings=settings or emotion_settings,
        )

    return _make


@pytest.fixture
def make_activity(clock: FakeClock) -> Callable[..., LearningActivity]:
    """Factory for activities stamped with the fake clock's time."""

    def _make(
        activity_type: ActivityType | str = ActivityType.QUESTION_ANSWERED,
        *,
        is_correct: bool | None = None,
        time_spent: float | None = None,
        difficulty_level: DifficultyLevel | str | None = None,
        timestamp: datetime | None = None,
    ) -> LearningActivity:
        if activity_type == ActivityType.QUESTION_ANSWERED and is_correct is None:
            is_correct = True
        return LearningActivity(
            activity_type=activity_type,  # type: ignore[arg-type]
            timestamp=timestamp or clock(),
            is_correct=is_correct,
            time_spent=time_spent,
            difficulty_level=difficulty_level,  # type: ignore[arg-type]
        )

    return _make


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotional context data structures.

This module defines the value objects exchanged between the session,
the scoring engine, the policy engine and the UI collaborator:

- LearningActivity: one recorded learner action (input)
- EmotionalState: the four-level snapshot (output)
- EncouragementMessage: the single active message (output)
- BreakStatus: combined break recommendation (output)
- SessionStatistics: counters shown next to the snapshot (output)

All of them are frozen. A new EmotionalState is built on every
recomputation instead of patching the previous one.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from emotion_aware.core.emotional.constants import (
    MESSAGE_TITLES,
    ActivityType,
    BreakUrgency,
    DifficultyLevel,
    DisplayBands,
    LevelBand,
    MessageCategory,
    MoodIndicator,
    ScoringThresholds,
    SeedDefaults,
)
from emotion_aware.core.emotional.exceptions import InvalidActivityError
from emotion_aware.utils.datetime import Clock, ensure_utc, utc_now


def clamp_level(value: float) -> int:
    """Floor a level and clamp it into [0, 100].

    Flooring is the single rounding rule used for every level.
    """
    return max(
        ScoringThresholds.MIN_LEVEL,
        min(ScoringThresholds.MAX_LEVEL, math.floor(value)),
    )


def level_band(value: int) -> LevelBand:
    """Map a 0-100 level to its display band."""
    if value > DisplayBands.LEVEL_HIGH:
        return LevelBand.HIGH
    if value > DisplayBands.LEVEL_MODERATE:
        return LevelBand.MODERATE
    return LevelBand.LOW


@dataclass(frozen=True)
class LearningActivity:
    """A single observed learner action.

    Attributes:
        activity_type: Kind of action (question_answered, retry, ...).
        timestamp: When the action occurred (UTC). Informational only;
            the log keeps insertion order.
        is_correct: Outcome, required for question_answered and
            forbidden for every other type.
        time_spent: Seconds spent on the associated item.
        difficulty_level: Difficulty of the associated item.

    Raises:
        InvalidActivityError: If the fields do not fit the activity type.
    """

    activity_type: ActivityType
    timestamp: datetime
    is_correct: bool | None = None
    time_spent: float | None = None
    difficulty_level: DifficultyLevel | None = None

    def __post_init__(self) -> None:
        try:
            activity_type = ActivityType(self.activity_type)
        except ValueError as e:
            raise InvalidActivityError(
                f"Unknown activity type: {self.activity_type!r}",
                details={"allowed": [t.value for t in ActivityType]},
            ) from e
        object.__setattr__(self, "activity_type", activity_type)

        if not isinstance(self.timestamp, datetime):
            raise InvalidActivityError(
                "Activity timestamp must be a datetime",
                details={"timestamp": repr(self.timestamp)},
            )
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))

        if activity_type == ActivityType.QUESTION_ANSWERED:
            if not isinstance(self.is_correct, bool):
                raise InvalidActivityError(
                    "question_answered activity requires is_correct",
                    details={"is_correct": self.is_correct},
                )
        elif self.is_correct is not None:
            raise InvalidActivityError(
                f"is_correct is only allowed on question_answered, got {activity_type.value}",
            )

        if self.time_spent is not None:
            if isinstance(self.time_spent, bool) or not isinstance(self.time_spent, (int, float)):
                raise InvalidActivityError(
                    "time_spent must be a number of seconds",
                    details={"time_spent": repr(self.time_spent)},
                )
            if self.time_spent < 0 or math.isnan(self.time_spent):
                raise InvalidActivityError(
                    "time_spent must be non-negative",
                    details={"time_spent": self.time_spent},
                )

        if self.difficulty_level is not None:
            try:
                difficulty = DifficultyLevel(self.difficulty_level)
            except ValueError as e:
                raise InvalidActivityError(
                    f"Unknown difficulty level: {self.difficulty_level!r}",
                    details={"allowed": [d.value for d in DifficultyLevel]},
                ) from e
            object.__setattr__(self, "difficulty_level", difficulty)

    @property
    def is_wrong_answer(self) -> bool:
        """Check if this is an incorrectly answered question."""
        return self.activity_type == ActivityType.QUESTION_ANSWERED and self.is_correct is False

    @property
    def is_correct_answer(self) -> bool:
        """Check if this is a correctly answered question."""
        return self.activity_type == ActivityType.QUESTION_ANSWERED and self.is_correct is True

    @classmethod
    def create(
        cls,
        activity_type: ActivityType | str,
        *,
        clock: Clock = utc_now,
        is_correct: bool | None = None,
        time_spent: float | None = None,
        difficulty_level: DifficultyLevel | str | None = None,
    ) -> "LearningActivity":
        """Build an activity stamped with the current time of ``clock``."""
        return cls(
            activity_type=activity_type,  # type: ignore[arg-type]
            timestamp=clock(),
            is_correct=is_correct,
            time_spent=time_spent,
            difficulty_level=difficulty_level,  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class EmotionalState:
    """Snapshot of a learner's derived emotional levels.

    Every level is an integer in [0, 100]; out-of-range or fractional
    input is floored and clamped on construction.

    Attributes:
        frustration_level: Struggle signal from errors, retries, slow answers.
        stress_level: Pressure signal from session length, hard items, rushing.
        engagement_level: Attention signal, lowered by idling and hints.
        confidence_level: Derived from frustration and stress.
    """

    frustration_level: int = SeedDefaults.FRUSTRATION
    stress_level: int = SeedDefaults.STRESS
    engagement_level: int = SeedDefaults.ENGAGEMENT
    confidence_level: int = SeedDefaults.CONFIDENCE

    def __post_init__(self) -> None:
        for name in (
            "frustration_level",
            "stress_level",
            "engagement_level",
            "confidence_level",
        ):
            object.__setattr__(self, name, clamp_level(getattr(self, name)))

    @property
    def mood(self) -> MoodIndicator:
        """Overall mood from the mean of engagement and confidence."""
        average = (self.engagement_level + self.confidence_level) / 2
        if average > DisplayBands.MOOD_POSITIVE:
            return MoodIndicator.POSITIVE
        if average > DisplayBands.MOOD_NEUTRAL:
            return MoodIndicator.NEUTRAL
        return MoodIndicator.NEGATIVE

    def bands(self) -> dict[str, LevelBand]:
        """Display band for each level."""
        return {
            "frustration": level_band(self.frustration_level),
            "stress": level_band(self.stress_level),
            "engagement": level_band(self.engagement_level),
            "confidence": level_band(self.confidence_level),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "frustration_level": self.frustration_level,
            "stress_level": self.stress_level,
            "engagement_level": self.engagement_level,
            "confidence_level": self.confidence_level,
            "mood": self.mood.value,
            "bands": {k: v.value for k, v in self.bands().items()},
        }

    @classmethod
    def default(cls) -> "EmotionalState":
        """Baseline state for a session without a prior assessment."""
        return cls()


@dataclass(frozen=True)
class EncouragementMessage:
    """The message currently shown to the learner.

    Attributes:
        category: Category that triggered the message.
        text: Rendered text, personalized with the learner's name.
        urgency: Break urgency the text was chosen for (break only).
    """

    category: MessageCategory
    text: str
    urgency: BreakUrgency = BreakUrgency.NONE

    @property
    def title(self) -> str:
        """Display heading for the message category."""
        return MESSAGE_TITLES[self.category]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category.value,
            "title": self.title,
            "text": self.text,
            "urgency": self.urgency.value,
        }


@dataclass(frozen=True)
class BreakStatus:
    """Combined break recommendation.

    Attributes:
        suggested: Whether the break affordance should be shown.
        urgency: Combined urgency of both triggers.
        state_triggered: Frustration or stress crossed the break threshold.
        time_triggered: The session has run past the long-session threshold.
    """

    suggested: bool = False
    urgency: BreakUrgency = BreakUrgency.NONE
    state_triggered: bool = False
    time_triggered: bool = False

    @classmethod
    def none(cls) -> "BreakStatus":
        """No break recommended."""
        return cls()


@dataclass(frozen=True)
class SessionStatistics:
    """Counters describing the current session."""

    total_activities: int = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    elapsed_minutes: int = 0
    consecutive_wrong: int = 0

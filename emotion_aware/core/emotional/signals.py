# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Scoring engine for the emotion-aware learning system.

This module provides pure functions that turn an activity log into
emotional levels:
- Frustration from wrong answers, retries and slow answers
- Stress from session length, hard items and rushing
- Engagement from idle time and hint usage
- Confidence from frustration and stress

Each score looks only at a rolling window of the most recent
activities, so old struggles stop weighing on the current state.
"""

from collections.abc import Sequence
from datetime import datetime

from emotion_aware.core.emotional.constants import (
    HARD_DIFFICULTIES,
    ActivityType,
    ScoringThresholds,
)
from emotion_aware.core.emotional.context import (
    EmotionalState,
    LearningActivity,
    clamp_level,
)
from emotion_aware.utils.datetime import seconds_between


def recent_window(
    activities: Sequence[LearningActivity],
    size: int = ScoringThresholds.RECENT_WINDOW,
) -> list[LearningActivity]:
    """Return the last ``size`` activities in insertion order."""
    if size <= 0:
        return []
    return list(activities[-size:])


def calculate_frustration(
    activities: Sequence[LearningActivity],
    window_size: int = ScoringThresholds.RECENT_WINDOW,
) -> int:
    """Calculate frustration from the recent window.

    Adds 15 per wrong answer, 10 per retry, and 20 when the average
    recorded time per item exceeds two minutes. Items without a
    recorded time are left out of the average.

    Args:
        activities: Activity log, oldest first.
        window_size: Number of recent activities to consider.

    Returns:
        Frustration level in [0, 100].
    """
    window = recent_window(activities, window_size)
    if not window:
        return 0

    score = 0
    wrong_answers = sum(1 for a in window if a.is_wrong_answer)
    score += wrong_answers * ScoringThresholds.WRONG_ANSWER_WEIGHT

    timed = [a.time_spent for a in window if a.time_spent is not None]
    if timed and sum(timed) / len(timed) > ScoringThresholds.SLOW_ANSWER_SECONDS:
        score += ScoringThresholds.SLOW_ANSWER_BONUS

    retries = sum(1 for a in window if a.activity_type == ActivityType.RETRY)
    score += retries * ScoringThresholds.RETRY_WEIGHT

    return clamp_level(score)


def calculate_stress(
    activities: Sequence[LearningActivity],
    session_minutes: float,
    window_size: int = ScoringThresholds.STRESS_WINDOW,
) -> int:
    """Calculate stress from session length and recent pace.

    The 45 and 90 minute bonuses are cumulative. Rushing (average
    recent time under 30 seconds) only counts with at least four
    samples, since fewer are too noisy. Missing times count as zero.

    Args:
        activities: Activity log, oldest first.
        session_minutes: Minutes elapsed since the session started.
        window_size: Number of recent activities for difficulty and pace.

    Returns:
        Stress level in [0, 100].
    """
    score = 0

    if session_minutes > ScoringThresholds.LONG_SESSION_MINUTES:
        score += ScoringThresholds.LONG_SESSION_BONUS
    if session_minutes > ScoringThresholds.VERY_LONG_SESSION_MINUTES:
        score += ScoringThresholds.VERY_LONG_SESSION_BONUS

    window = recent_window(activities, window_size)

    hard_items = sum(1 for a in window if a.difficulty_level in HARD_DIFFICULTIES)
    score += hard_items * ScoringThresholds.HARD_ITEM_WEIGHT

    if window:
        average_time = sum(a.time_spent or 0 for a in window) / len(window)
        if (
            average_time < ScoringThresholds.RUSHING_SECONDS
            and len(window) >= ScoringThresholds.RUSHING_MIN_SAMPLES
        ):
            score += ScoringThresholds.RUSHING_BONUS

    return clamp_level(score)


def calculate_engagement(
    activities: Sequence[LearningActivity],
    now: datetime,
    window_size: int = ScoringThresholds.RECENT_WINDOW,
) -> int:
    """Calculate engagement, counting down from full engagement.

    An empty log means full engagement: there is no last activity to
    measure idle time against.

    Args:
        activities: Activity log, oldest first.
        now: Current time.
        window_size: Number of recent activities to consider.

    Returns:
        Engagement level in [0, 100].
    """
    window = recent_window(activities, window_size)
    score = ScoringThresholds.MAX_LEVEL

    if window:
        idle_seconds = seconds_between(window[-1].timestamp, now)
        if idle_seconds > ScoringThresholds.IDLE_SECONDS:
            score -= ScoringThresholds.IDLE_PENALTY

    hints = sum(1 for a in window if a.activity_type == ActivityType.HINT_REQUESTED)
    score -= hints * ScoringThresholds.HINT_PENALTY

    return clamp_level(score)


def calculate_confidence(frustration: int, stress: int) -> int:
    """Derive confidence as ``max(0, 100 - (frustration + stress) / 2)``.

    Half points are floored; the integer form keeps the equality exact.
    """
    return clamp_level((2 * ScoringThresholds.MAX_LEVEL - frustration - stress) // 2)


def aggregate_state(
    activities: Sequence[LearningActivity],
    session_minutes: float,
    now: datetime,
) -> EmotionalState:
    """Compute a complete EmotionalState from the activity log.

    Args:
        activities: Activity log, oldest first.
        session_minutes: Minutes elapsed since the session started.
        now: Current time, used for idle detection.

    Returns:
        A freshly built EmotionalState.
    """
    frustration = calculate_frustration(activities)
    stress = calculate_stress(activities, session_minutes)
    engagement = calculate_engagement(activities, now)

    return EmotionalState(
        frustration_level=frustration,
        stress_level=stress,
        engagement_level=engagement,
        confidence_level=calculate_confidence(frustration, stress),
    )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Constants for the emotion-aware learning engine.

This module defines the closed sets (activity types, difficulty tiers,
message categories) and every numeric threshold used by the scoring
and policy layers.
"""

from enum import Enum


class ActivityType(str, Enum):
    """Kinds of learner actions recorded in the activity log."""

    QUESTION_ANSWERED = "question_answered"
    TIME_SPENT = "time_spent"
    HINT_REQUESTED = "hint_requested"
    RETRY = "retry"


class DifficultyLevel(str, Enum):
    """Difficulty tiers of learning items.

    EXPERT only ever appears on recorded activities; the policy engine
    suggests EASY, MEDIUM or HARD.
    """

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


class MessageCategory(str, Enum):
    """Categories of encouragement messages."""

    MOTIVATION = "motivation"
    BREAK = "break"
    CELEBRATION = "celebration"
    GUIDANCE = "guidance"


class BreakUrgency(str, Enum):
    """How strongly a break is being recommended."""

    NONE = "none"
    SUGGESTED = "suggested"
    URGENT = "urgent"


class LevelBand(str, Enum):
    """Coarse band for a 0-100 level, used for display descriptors."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class MoodIndicator(str, Enum):
    """Overall mood derived from engagement and confidence."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class PerformanceBand(str, Enum):
    """Band of a prior assessment score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    CHALLENGING = "challenging"


class SkillBand(str, Enum):
    """Band of a per-skill percentage in a prior assessment."""

    STRONG = "strong"
    DEVELOPING = "developing"
    NEEDS_WORK = "needs_work"


HARD_DIFFICULTIES = frozenset({DifficultyLevel.HARD, DifficultyLevel.EXPERT})

MESSAGE_TITLES = {
    MessageCategory.MOTIVATION: "Keep Going!",
    MessageCategory.BREAK: "Break Time",
    MessageCategory.CELEBRATION: "Excellent Work!",
    MessageCategory.GUIDANCE: "Learning Tip",
}


# =============================================================================
# Thresholds
# =============================================================================

class ScoringThresholds:
    """Weights and limits used by the scoring engine."""

    MIN_LEVEL = 0
    MAX_LEVEL = 100

    # Rolling windows (number of most recent activities)
    RECENT_WINDOW = 10
    STRESS_WINDOW = 5

    # Frustration
    WRONG_ANSWER_WEIGHT = 15
    RETRY_WEIGHT = 10
    SLOW_ANSWER_SECONDS = 120
    SLOW_ANSWER_BONUS = 20

    # Stress
    LONG_SESSION_MINUTES = 45
    LONG_SESSION_BONUS = 30
    VERY_LONG_SESSION_MINUTES = 90
    VERY_LONG_SESSION_BONUS = 40
    HARD_ITEM_WEIGHT = 10
    RUSHING_SECONDS = 30
    RUSHING_MIN_SAMPLES = 4
    RUSHING_BONUS = 20

    # Engagement
    IDLE_SECONDS = 180
    IDLE_PENALTY = 40
    HINT_PENALTY = 8


class PolicyThresholds:
    """Thresholds for break, message and difficulty decisions."""

    BREAK_FRUSTRATION = 60
    BREAK_STRESS = 70
    MOTIVATION_FRUSTRATION = 40
    GUIDANCE_ENGAGEMENT = 50

    EASY_FRUSTRATION = 70
    EASY_STRESS = 80
    MEDIUM_FRUSTRATION = 50
    MEDIUM_STRESS = 60
    HARD_CONFIDENCE = 80
    HARD_MAX_FRUSTRATION = 30

    BREAK_SUGGESTED_MINUTES = 45
    BREAK_URGENT_MINUTES = 90

    # A wrong answer after this many consecutive misses forces motivation
    CONSECUTIVE_WRONG_TRIGGER = 2


class SeedDefaults:
    """Baseline state and seeding limits for a new session."""

    FRUSTRATION = 0
    STRESS = 0
    ENGAGEMENT = 100
    CONFIDENCE = 70

    FRUSTRATION_WEIGHT_PERCENT = 80
    FRUSTRATION_CAP = 80
    RELAXED_MINUTES = 45
    RELAXED_STRESS = 30
    STRESS_BASE = 50
    STRESS_CAP = 70
    ENGAGEMENT_BONUS = 20
    ENGAGEMENT_FLOOR = 40
    CONFIDENCE_FLOOR = 20
    CONFIDENCE_CAP = 95


class DisplayBands:
    """Cut-offs for display descriptors and assessment analysis."""

    LEVEL_HIGH = 70
    LEVEL_MODERATE = 40

    MOOD_POSITIVE = 70
    MOOD_NEUTRAL = 40

    SCORE_EXCELLENT = 80
    SCORE_GOOD = 60
    EXTENDED_DURATION_MINUTES = 60

    SKILL_STRONG = 70
    SKILL_DEVELOPING = 40

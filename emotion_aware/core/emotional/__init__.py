# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotion-aware learning engine.

This package turns a stream of learner activities into an emotional
state snapshot and adaptive recommendations:

- Scoring engine: frustration, stress, engagement and confidence
- Policy engine: suggested difficulty, break and message category
- Message selector: personalized encouragement templates
- EmotionAwareSession: the object the UI layer talks to

Example usage:

    from emotion_aware.core.emotional import EmotionAwareSession, LearningActivity

    session = EmotionAwareSession("Ada")
    session.subscribe(render)
    state = session.append_activity(
        LearningActivity.create("question_answered", is_correct=False, time_spent=95)
    )
    if session.get_break_status().suggested:
        ...
"""

from emotion_aware.core.emotional.activity_log import ActivityLog
from emotion_aware.core.emotional.assessment import (
    AssessmentAnalysis,
    PriorAssessmentSummary,
    SkillResult,
    analyze_assessment,
    seed_state,
)
from emotion_aware.core.emotional.constants import (
    ActivityType,
    BreakUrgency,
    DifficultyLevel,
    LevelBand,
    MessageCategory,
    MoodIndicator,
    PerformanceBand,
    PolicyThresholds,
    ScoringThresholds,
    SkillBand,
)
from emotion_aware.core.emotional.context import (
    BreakStatus,
    EmotionalState,
    EncouragementMessage,
    LearningActivity,
    SessionStatistics,
)
from emotion_aware.core.emotional.exceptions import (
    EmotionError,
    InvalidActivityError,
    MessageCatalogError,
    OutOfRangeSeedError,
    SeedingError,
)
from emotion_aware.core.emotional.messages import MessageCatalog, MessageSelector
from emotion_aware.core.emotional.policy import (
    PolicyDecision,
    evaluate_policy,
    suggest_difficulty,
    time_break_urgency,
)
from emotion_aware.core.emotional.service import EmotionAwareSession
from emotion_aware.core.emotional.signals import (
    aggregate_state,
    calculate_confidence,
    calculate_engagement,
    calculate_frustration,
    calculate_stress,
)

__all__ = [
    # Main session
    "EmotionAwareSession",
    # Data structures
    "LearningActivity",
    "EmotionalState",
    "EncouragementMessage",
    "BreakStatus",
    "SessionStatistics",
    "ActivityLog",
    "PriorAssessmentSummary",
    "AssessmentAnalysis",
    "SkillResult",
    # Scoring
    "calculate_frustration",
    "calculate_stress",
    "calculate_engagement",
    "calculate_confidence",
    "aggregate_state",
    "seed_state",
    "analyze_assessment",
    # Policy
    "PolicyDecision",
    "evaluate_policy",
    "suggest_difficulty",
    "time_break_urgency",
    # Messages
    "MessageCatalog",
    "MessageSelector",
    # Constants and enums
    "ActivityType",
    "DifficultyLevel",
    "MessageCategory",
    "BreakUrgency",
    "LevelBand",
    "MoodIndicator",
    "PerformanceBand",
    "SkillBand",
    "ScoringThresholds",
    "PolicyThresholds",
    # Errors
    "EmotionError",
    "InvalidActivityError",
    "OutOfRangeSeedError",
    "SeedingError",
    "MessageCatalogError",
]

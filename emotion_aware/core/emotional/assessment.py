# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prior-assessment seeding and analysis.

A session may start from the learner's previous assessment instead of
the neutral baseline. This module provides:
- PriorAssessmentSummary: the summary handed over by the quiz layer
- seed_state: the initial EmotionalState derived from it
- analyze_assessment: performance band, duration note and ranked skills
- initial_message_category: which message greets the learner
"""

import math
from dataclasses import dataclass, field

from emotion_aware.core.emotional.constants import (
    DisplayBands,
    MessageCategory,
    PerformanceBand,
    SeedDefaults,
    SkillBand,
)
from emotion_aware.core.emotional.context import EmotionalState, clamp_level
from emotion_aware.core.emotional.exceptions import OutOfRangeSeedError


@dataclass(frozen=True)
class PriorAssessmentSummary:
    """Summary of the learner's previous assessment.

    Attributes:
        percentage_score: Overall score in percent.
        wrong_count: Number of incorrectly answered questions.
        total_questions: Number of questions in the assessment.
        time_taken_minutes: Time the learner needed, in minutes.
        skill_breakdown: Percentage score per skill.

    Raises:
        OutOfRangeSeedError: If counts or durations are impossible.
    """

    percentage_score: float
    wrong_count: int
    total_questions: int
    time_taken_minutes: float
    skill_breakdown: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.total_questions < 0 or self.wrong_count < 0:
            raise OutOfRangeSeedError(
                "Question counts must be non-negative",
                details={
                    "wrong_count": self.wrong_count,
                    "total_questions": self.total_questions,
                },
            )
        if self.wrong_count > self.total_questions:
            raise OutOfRangeSeedError(
                "wrong_count cannot exceed total_questions",
                details={
                    "wrong_count": self.wrong_count,
                    "total_questions": self.total_questions,
                },
            )
        if self.time_taken_minutes < 0:
            raise OutOfRangeSeedError(
                "time_taken_minutes must be non-negative",
                details={"time_taken_minutes": self.time_taken_minutes},
            )
        if math.isnan(self.percentage_score):
            raise OutOfRangeSeedError("percentage_score must be a number")

    @property
    def correct_count(self) -> int:
        return self.total_questions - self.wrong_count

    @property
    def wrong_percentage(self) -> float:
        """Percentage of wrong answers; 0 for an empty assessment."""
        if self.total_questions == 0:
            return 0.0
        return 100 * self.wrong_count / self.total_questions


@dataclass(frozen=True)
class SkillResult:
    """One skill of a prior assessment with its display band."""

    skill: str
    percentage: float
    band: SkillBand


@dataclass(frozen=True)
class AssessmentAnalysis:
    """Interpretation of a prior assessment for the learner.

    Attributes:
        performance: Overall performance band.
        extended_duration: The assessment took longer than an hour,
            which points at increased cognitive load.
        correct_count: Number of correct answers.
        wrong_count: Number of wrong answers.
        skills: Skills ranked from strongest to weakest.
    """

    performance: PerformanceBand
    extended_duration: bool
    correct_count: int
    wrong_count: int
    skills: list[SkillResult] = field(default_factory=list)


def seed_state(summary: PriorAssessmentSummary | None) -> EmotionalState:
    """Build the initial EmotionalState for a session.

    Without a summary the neutral baseline is returned. Fractional
    values are floored, like every other level.

    Args:
        summary: Previous assessment, if any.

    Returns:
        Seeded EmotionalState.
    """
    if summary is None:
        return EmotionalState.default()

    if summary.total_questions == 0:
        frustration = 0
    else:
        frustration = min(
            SeedDefaults.FRUSTRATION_CAP,
            (SeedDefaults.FRUSTRATION_WEIGHT_PERCENT * summary.wrong_count)
            // summary.total_questions,
        )

    time_taken = summary.time_taken_minutes
    if time_taken <= SeedDefaults.RELAXED_MINUTES:
        stress = SeedDefaults.RELAXED_STRESS
    else:
        stress = min(
            SeedDefaults.STRESS_CAP,
            math.floor(SeedDefaults.STRESS_BASE + (time_taken - SeedDefaults.RELAXED_MINUTES)),
        )

    score = math.floor(summary.percentage_score)
    engagement = max(
        SeedDefaults.ENGAGEMENT_FLOOR,
        min(100, score + SeedDefaults.ENGAGEMENT_BONUS),
    )
    confidence = max(
        SeedDefaults.CONFIDENCE_FLOOR,
        min(SeedDefaults.CONFIDENCE_CAP, score),
    )

    return EmotionalState(
        frustration_level=clamp_level(frustration),
        stress_level=clamp_level(stress),
        engagement_level=clamp_level(engagement),
        confidence_level=clamp_level(confidence),
    )


def performance_band(percentage_score: float) -> PerformanceBand:
    """Band an overall assessment score."""
    if percentage_score >= DisplayBands.SCORE_EXCELLENT:
        return PerformanceBand.EXCELLENT
    if percentage_score >= DisplayBands.SCORE_GOOD:
        return PerformanceBand.GOOD
    return PerformanceBand.CHALLENGING


def skill_band(percentage: float) -> SkillBand:
    """Band a per-skill percentage."""
    if percentage >= DisplayBands.SKILL_STRONG:
        return SkillBand.STRONG
    if percentage >= DisplayBands.SKILL_DEVELOPING:
        return SkillBand.DEVELOPING
    return SkillBand.NEEDS_WORK


def analyze_assessment(summary: PriorAssessmentSummary) -> AssessmentAnalysis:
    """Interpret a prior assessment.

    Skills are sorted by percentage, highest first; ties keep the
    order of the breakdown.
    """
    ranked = sorted(
        summary.skill_breakdown.items(),
        key=lambda item: item[1],
        reverse=True,
    )
    return AssessmentAnalysis(
        performance=performance_band(summary.percentage_score),
        extended_duration=summary.time_taken_minutes > DisplayBands.EXTENDED_DURATION_MINUTES,
        correct_count=summary.correct_count,
        wrong_count=summary.wrong_count,
        skills=[
            SkillResult(skill=name, percentage=pct, band=skill_band(pct))
            for name, pct in ranked
        ],
    )


def initial_message_category(summary: PriorAssessmentSummary) -> MessageCategory:
    """Category of the greeting shown after seeding."""
    band = performance_band(summary.percentage_score)
    if band == PerformanceBand.EXCELLENT:
        return MessageCategory.CELEBRATION
    if band == PerformanceBand.GOOD:
        return MessageCategory.MOTIVATION
    return MessageCategory.GUIDANCE


def needs_initial_break(summary: PriorAssessmentSummary) -> bool:
    """A difficult, drawn-out assessment starts the session with a break offer."""
    return (
        performance_band(summary.percentage_score) == PerformanceBand.CHALLENGING
        and summary.time_taken_minutes > DisplayBands.EXTENDED_DURATION_MINUTES
    )

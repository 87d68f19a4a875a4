# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Policy engine mapping an emotional state to adaptive actions.

Rules are evaluated in a fixed priority order because only one message
can be shown at a time:

1. Break when frustration > 60 or stress > 70 (message: break)
2. Motivation when frustration > 40
3. Guidance when engagement < 50
4. Otherwise no state-driven message

Difficulty is decided independently, first match wins:
Easy > Medium (pressure) > Hard > Medium (default).

Break management adds a time-driven trigger (45 and 90 minutes) that is
combined with the state-driven one into a single urgency.
"""

from dataclasses import dataclass

from emotion_aware.core.emotional.constants import (
    BreakUrgency,
    DifficultyLevel,
    MessageCategory,
    PolicyThresholds,
)
from emotion_aware.core.emotional.context import BreakStatus, EmotionalState


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of evaluating the policy against one EmotionalState.

    Attributes:
        break_suggested: The state alone warrants a break.
        message_category: Category to show, or None when no rule fires.
        difficulty: Suggested difficulty tier.
    """

    break_suggested: bool
    message_category: MessageCategory | None
    difficulty: DifficultyLevel


def needs_break(state: EmotionalState) -> bool:
    """Check the state-driven break trigger."""
    return (
        state.frustration_level > PolicyThresholds.BREAK_FRUSTRATION
        or state.stress_level > PolicyThresholds.BREAK_STRESS
    )


def select_message_category(state: EmotionalState) -> MessageCategory | None:
    """Pick the state-driven message category by priority.

    Break outranks motivation even though a break-level frustration
    also satisfies the motivation rule.
    """
    if needs_break(state):
        return MessageCategory.BREAK
    if state.frustration_level > PolicyThresholds.MOTIVATION_FRUSTRATION:
        return MessageCategory.MOTIVATION
    if state.engagement_level < PolicyThresholds.GUIDANCE_ENGAGEMENT:
        return MessageCategory.GUIDANCE
    return None


def suggest_difficulty(state: EmotionalState) -> DifficultyLevel:
    """Suggest the next difficulty tier.

    The rules overlap, so their order is the tie-break: pressure rules
    outrank the confidence rule.
    """
    frustration = state.frustration_level
    stress = state.stress_level

    if frustration > PolicyThresholds.EASY_FRUSTRATION or stress > PolicyThresholds.EASY_STRESS:
        return DifficultyLevel.EASY
    if frustration > PolicyThresholds.MEDIUM_FRUSTRATION or stress > PolicyThresholds.MEDIUM_STRESS:
        return DifficultyLevel.MEDIUM
    if (
        state.confidence_level > PolicyThresholds.HARD_CONFIDENCE
        and frustration < PolicyThresholds.HARD_MAX_FRUSTRATION
    ):
        return DifficultyLevel.HARD
    return DifficultyLevel.MEDIUM


def evaluate_policy(state: EmotionalState) -> PolicyDecision:
    """Evaluate every state-driven rule against ``state``."""
    return PolicyDecision(
        break_suggested=needs_break(state),
        message_category=select_message_category(state),
        difficulty=suggest_difficulty(state),
    )


def time_break_urgency(session_minutes: float) -> BreakUrgency:
    """Urgency of the time-driven break trigger."""
    if session_minutes > PolicyThresholds.BREAK_URGENT_MINUTES:
        return BreakUrgency.URGENT
    if session_minutes > PolicyThresholds.BREAK_SUGGESTED_MINUTES:
        return BreakUrgency.SUGGESTED
    return BreakUrgency.NONE


def combine_break(decision: PolicyDecision, session_minutes: float) -> BreakStatus:
    """Merge the state-driven and time-driven break triggers.

    The time trigger sets the urgency; a state trigger on its own
    raises it to at least "suggested".
    """
    urgency = time_break_urgency(session_minutes)
    time_triggered = urgency != BreakUrgency.NONE

    if decision.break_suggested and urgency == BreakUrgency.NONE:
        urgency = BreakUrgency.SUGGESTED

    return BreakStatus(
        suggested=decision.break_suggested or time_triggered,
        urgency=urgency,
        state_triggered=decision.break_suggested,
        time_triggered=time_triggered,
    )


def should_celebrate(draw: float, probability: float) -> bool:
    """Decide a sampled celebration for a correct answer.

    Args:
        draw: Uniform sample in [0, 1).
        probability: Chance of celebrating.
    """
    return draw < probability


def should_force_motivation(consecutive_wrong_before: int) -> bool:
    """A wrong answer forces motivation from the third consecutive miss on.

    Args:
        consecutive_wrong_before: Streak length before counting this miss.
    """
    return consecutive_wrong_before >= PolicyThresholds.CONSECUTIVE_WRONG_TRIGGER

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotion-aware learning session.

The session owns the activity log and every piece of derived state for
one learner:
- Recording activities and recomputing the EmotionalState in full
- Evaluating the policy (difficulty, break, message category)
- Firing event-driven messages (celebration, forced motivation)
- Managing the break affordance and its time-driven urgency
- Notifying subscribers (the UI layer) after every change

All work is synchronous. Elapsed time is read from the injected clock
at evaluation time; there is no background timer. A UI that wants the
time-driven rules re-checked calls tick() on its own schedule.
"""

import random
from collections.abc import Callable
from datetime import datetime

from emotion_aware.core.config.settings import EmotionSettings, get_settings
from emotion_aware.core.emotional.activity_log import ActivityLog
from emotion_aware.core.emotional.assessment import (
    AssessmentAnalysis,
    PriorAssessmentSummary,
    analyze_assessment,
    initial_message_category,
    needs_initial_break,
    seed_state,
)
from emotion_aware.core.emotional.constants import (
    BreakUrgency,
    DifficultyLevel,
    MessageCategory,
)
from emotion_aware.core.emotional.context import (
    BreakStatus,
    EmotionalState,
    EncouragementMessage,
    LearningActivity,
    SessionStatistics,
)
from emotion_aware.core.emotional.exceptions import InvalidActivityError, SeedingError
from emotion_aware.core.emotional.messages import MessageCatalog, MessageSelector, RandomSource
from emotion_aware.core.emotional.policy import (
    PolicyDecision,
    combine_break,
    evaluate_policy,
    should_celebrate,
    should_force_motivation,
    suggest_difficulty,
)
from emotion_aware.core.emotional.signals import aggregate_state
from emotion_aware.utils.datetime import Clock, minutes_between, seconds_between, utc_now
from emotion_aware.utils.logging import session_logger

StateListener = Callable[["EmotionAwareSession"], None]


class EmotionAwareSession:
    """Single-learner session exposing the emotion-aware operations.

    The snapshot is rebuilt from the whole activity log on every
    mutation. Only one message is active at a time: when an event
    message and a policy message fire for the same activity, the policy
    message is evaluated last and replaces the event message.

    Attributes:
        display_name: Name substituted into every message.
    """

    def __init__(
        self,
        display_name: str | None = None,
        *,
        clock: Clock = utc_now,
        rng: RandomSource | None = None,
        settings: EmotionSettings | None = None,
        selector: MessageSelector | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            display_name: Learner's name for message personalization.
            clock: Source of "now"; inject a fixed clock for tests.
            rng: Random source for celebrations and template choice.
            settings: Emotion settings; defaults to the cached settings.
            selector: Message selector; built from settings when omitted.
        """
        self._settings = settings or get_settings().emotion
        name = (display_name or "").strip()
        self.display_name = name or self._settings.default_display_name
        self._logger = session_logger(__name__, self.display_name)

        self._clock = clock
        self._rng: RandomSource = rng or random.Random()
        self._selector = selector or MessageSelector(
            MessageCatalog.load(self._settings.messages_path),
            self._rng,
        )
        self._listeners: list[StateListener] = []

        self._log = ActivityLog()
        self._start_session()

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def _start_session(self) -> None:
        now = self._clock()
        self._session_start: datetime = now
        self._last_evaluated: datetime = now
        self._log.clear()
        self._consecutive_wrong = 0
        self._state = EmotionalState.default()
        self._difficulty = suggest_difficulty(self._state)
        self._message: EncouragementMessage | None = None
        self._break_status = BreakStatus.none()
        self._seed: PriorAssessmentSummary | None = None
        self._analysis: AssessmentAnalysis | None = None

    def reset_session(self) -> None:
        """Clear the log, counters, message, seed and elapsed-time baseline."""
        self._start_session()
        self._logger.info("session_reset")
        self._notify()

    def seed_from_prior_assessment(self, summary: PriorAssessmentSummary) -> EmotionalState:
        """Seed the initial state from the learner's previous assessment.

        Also greets the learner with assessment feedback and, after a
        difficult and long assessment, offers a break right away.

        Args:
            summary: Previous assessment summary.

        Returns:
            The seeded EmotionalState.

        Raises:
            SeedingError: If the session was already seeded or has
                recorded activity.
        """
        if self._seed is not None:
            raise SeedingError("Session has already been seeded")
        if self._log:
            raise SeedingError(
                "Cannot seed a session after activities were recorded",
                details={"activities": len(self._log)},
            )

        self._seed = summary
        self._analysis = analyze_assessment(summary)
        self._state = seed_state(summary)
        self._difficulty = suggest_difficulty(self._state)

        self._message = self._selector.assessment_feedback(
            initial_message_category(summary),
            self._analysis.performance,
            self.display_name,
            summary.percentage_score,
        )
        if needs_initial_break(summary):
            self._break_status = BreakStatus(
                suggested=True,
                urgency=BreakUrgency.SUGGESTED,
                state_triggered=True,
            )

        self._logger.info(
            "session_seeded",
            percentage_score=summary.percentage_score,
            frustration=self._state.frustration_level,
            stress=self._state.stress_level,
            engagement=self._state.engagement_level,
            confidence=self._state.confidence_level,
        )
        self._notify()
        return self._state

    # =========================================================================
    # Activity recording
    # =========================================================================

    def append_activity(self, activity: LearningActivity) -> EmotionalState:
        """Record one activity and recompute the whole session state.

        Args:
            activity: A validated learner activity.

        Returns:
            The freshly recomputed EmotionalState.

        Raises:
            InvalidActivityError: If ``activity`` is not a LearningActivity.
        """
        if not isinstance(activity, LearningActivity):
            raise InvalidActivityError(
                "Expected a LearningActivity",
                details={"type": type(activity).__name__},
            )

        self._log.append(activity)
        self._logger.debug(
            "activity_recorded",
            activity_type=activity.activity_type.value,
            is_correct=activity.is_correct,
            total=len(self._log),
        )

        self._apply_answer_events(activity)
        self._evaluate()
        self._notify()
        return self._state

    def _apply_answer_events(self, activity: LearningActivity) -> None:
        if activity.is_correct_answer:
            self._consecutive_wrong = 0
            if should_celebrate(self._rng.random(), self._settings.celebration_probability):
                self._show(MessageCategory.CELEBRATION)
        elif activity.is_wrong_answer:
            if should_force_motivation(self._consecutive_wrong):
                self._show(MessageCategory.MOTIVATION)
            self._consecutive_wrong += 1

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _session_minutes(self, now: datetime) -> float:
        return minutes_between(self._session_start, now)

    def _evaluate(self) -> PolicyDecision:
        now = self._clock()
        self._last_evaluated = now
        session_minutes = self._session_minutes(now)

        self._state = aggregate_state(self._log.snapshot(), session_minutes, now)
        decision = evaluate_policy(self._state)
        self._difficulty = decision.difficulty
        self._break_status = combine_break(decision, session_minutes)

        if self._break_status.suggested:
            self._show(MessageCategory.BREAK, self._break_status.urgency)
            self._logger.info(
                "break_suggested",
                urgency=self._break_status.urgency.value,
                state_triggered=self._break_status.state_triggered,
                time_triggered=self._break_status.time_triggered,
            )
        elif decision.message_category is not None:
            self._show(decision.message_category)

        return decision

    def tick(self) -> bool:
        """Periodic re-evaluation of the time-driven rules.

        Ignored until ``tick_interval_seconds`` have passed since the
        previous evaluation, so a dismissed break does not return a
        second later. Before any activity is recorded the baseline
        snapshot is kept and only the break status is refreshed.

        Returns:
            True if the session was re-evaluated.
        """
        now = self._clock()
        if seconds_between(self._last_evaluated, now) < self._settings.tick_interval_seconds:
            return False

        if self._log:
            self._evaluate()
        else:
            self._last_evaluated = now
            decision = evaluate_policy(self._state)
            status = combine_break(decision, self._session_minutes(now))
            if status.time_triggered:
                self._break_status = status
                self._show(MessageCategory.BREAK, status.urgency)

        self._notify()
        return True

    def _show(
        self,
        category: MessageCategory,
        urgency: BreakUrgency = BreakUrgency.NONE,
    ) -> None:
        self._message = self._selector.select(category, self.display_name, urgency)
        self._logger.debug("message_triggered", category=category.value, urgency=urgency.value)

    # =========================================================================
    # Message and break actions
    # =========================================================================

    def dismiss_message(self) -> None:
        """Clear the active message and hide the break affordance.

        Scores are left untouched.
        """
        self._message = None
        self._break_status = BreakStatus.none()
        self._notify()

    def take_break(self) -> EncouragementMessage:
        """Accept the break suggestion.

        Hides the break affordance and confirms with a break message.
        Scores and the session clock are left untouched; the next
        evaluation may suggest the break again.

        Returns:
            The confirmation message.
        """
        self._break_status = BreakStatus.none()
        self._message = self._selector.break_accepted(self.display_name)
        self._logger.info("break_taken", activities=len(self._log))
        self._notify()
        return self._message

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> EmotionalState:
        return self._state

    def get_state(self) -> EmotionalState:
        """Current snapshot, without any recomputation."""
        return self._state

    def get_suggested_difficulty(self) -> DifficultyLevel:
        return self._difficulty

    def get_active_message(self) -> EncouragementMessage | None:
        return self._message

    def get_break_status(self) -> BreakStatus:
        return self._break_status

    @property
    def consecutive_wrong(self) -> int:
        return self._consecutive_wrong

    @property
    def activities(self) -> tuple[LearningActivity, ...]:
        return self._log.snapshot()

    @property
    def assessment_analysis(self) -> AssessmentAnalysis | None:
        """Analysis of the seeding assessment, if the session was seeded."""
        return self._analysis

    def get_statistics(self) -> SessionStatistics:
        """Counters for the session statistics panel."""
        return SessionStatistics(
            total_activities=len(self._log),
            correct_answers=self._log.correct_count,
            wrong_answers=self._log.wrong_count,
            elapsed_minutes=int(self._session_minutes(self._clock())),
            consecutive_wrong=self._consecutive_wrong,
        )

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the session after each change.

        Args:
            listener: Callable receiving this session.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for EmotionAwareSession.

Covers the full append -> recompute -> policy -> message loop, seeding,
time-driven breaks, tick throttling and observers.
"""

import random

import pytest

from emotion_aware.core.config.settings import EmotionSettings
from emotion_aware.core.emotional.assessment import PriorAssessmentSummary
from emotion_aware.core.emotional.constants import (
    ActivityType,
    BreakUrgency,
    DifficultyLevel,
    MessageCategory,
)
from emotion_aware.core.emotional.context import EmotionalState, LearningActivity
from emotion_aware.core.emotional.exceptions import InvalidActivityError, SeedingError
from emotion_aware.core.emotional.messages import MessageCatalog, MessageSelector
from emotion_aware.core.emotional.service import EmotionAwareSession


class SpySelector(MessageSelector):
    """Selector recording every category it is asked for."""

    def __init__(self, rng) -> None:
        super().__init__(rng=rng)
        self.selected: list[MessageCategory] = []

    def select(self, category, name, urgency=BreakUrgency.NONE):
        self.selected.append(category)
        return super().select(category, name, urgency)


def _random_activity(clock, generator: random.Random) -> LearningActivity:
    activity_type = generator.choice(list(ActivityType))
    return LearningActivity(
        activity_type=activity_type,
        timestamp=clock(),
        is_correct=(
            generator.random() < 0.5
            if activity_type == ActivityType.QUESTION_ANSWERED
            else None
        ),
        time_spent=generator.choice([None, 5, 40, 150]),
        difficulty_level=generator.choice([None, *DifficultyLevel]),
    )


def _levels(state: EmotionalState) -> tuple[int, int, int, int]:
    return (
        state.frustration_level,
        state.stress_level,
        state.engagement_level,
        state.confidence_level,
    )


class TestSessionLifecycle:
    """Tests for construction and reset."""

    def test_fresh_session_defaults(self, session: EmotionAwareSession) -> None:
        assert _levels(session.get_state()) == (0, 0, 100, 70)
        assert session.get_suggested_difficulty() is DifficultyLevel.MEDIUM
        assert session.get_active_message() is None
        assert not session.get_break_status().suggested
        assert session.consecutive_wrong == 0
        assert session.activities == ()
        assert session.assessment_analysis is None

    def test_get_state_does_not_recompute(self, session, clock, make_activity) -> None:
        session.append_activity(make_activity(time_spent=60))
        first = session.get_state()

        clock.advance(minutes=10)

        assert session.get_state() is first
        assert session.state is first

    def test_reset_clears_everything(self, session, clock, make_activity) -> None:
        for _ in range(5):
            session.append_activity(make_activity(is_correct=False, time_spent=60))
        clock.advance(minutes=20)

        session.reset_session()

        assert _levels(session.get_state()) == (0, 0, 100, 70)
        assert session.activities == ()
        assert session.get_active_message() is None
        assert not session.get_break_status().suggested
        assert session.consecutive_wrong == 0
        assert session.get_statistics().elapsed_minutes == 0

    @pytest.mark.parametrize("display_name", [None, "", "   "])
    def test_blank_name_falls_back_to_default(self, make_session, display_name) -> None:
        assert make_session(display_name).display_name == "Learner"

    def test_name_is_stripped(self, make_session) -> None:
        assert make_session("  Ada  ").display_name == "Ada"


class TestAppendActivity:
    """Tests for recording activities and the resulting state."""

    def test_rejects_non_activity(self, session: EmotionAwareSession) -> None:
        with pytest.raises(InvalidActivityError, match="LearningActivity"):
            session.append_activity({"activity_type": "retry"})  # type: ignore[arg-type]

        assert session.activities == ()

    def test_frustration_grows_with_each_miss(self, session, make_activity) -> None:
        previous = 0
        for count in range(1, 11):
            state = session.append_activity(make_activity(is_correct=False))

            assert state.frustration_level == min(15 * count, 100)
            assert state.frustration_level >= previous
            previous = state.frustration_level

    def test_consecutive_wrong_counter(
        self, clock, rng, emotion_settings, make_activity
    ) -> None:
        selector = SpySelector(rng)
        session = EmotionAwareSession(
            "Ada",
            clock=clock,
            rng=rng,
            settings=emotion_settings,
            selector=selector,
        )
        streaks = []
        for is_correct in (False, False, True, False):
            session.append_activity(make_activity(is_correct=is_correct, time_spent=60))
            streaks.append(session.consecutive_wrong)

        assert streaks == [1, 2, 0, 1]
        # a single motivation from frustration 45; the streak restarted, so none is forced
        assert selector.selected == [MessageCategory.MOTIVATION]

    def test_non_answers_keep_the_streak(self, session, make_activity) -> None:
        session.append_activity(make_activity(is_correct=False, time_spent=60))
        session.append_activity(make_activity(ActivityType.HINT_REQUESTED))
        session.append_activity(make_activity(ActivityType.RETRY, time_spent=60))

        assert session.consecutive_wrong == 1

    def test_frustration_triggers_break(self, session, make_activity) -> None:
        for _ in range(3):
            session.append_activity(make_activity(is_correct=False, time_spent=60))
        for _ in range(2):
            session.append_activity(make_activity(ActivityType.RETRY, time_spent=60))

        state = session.get_state()
        status = session.get_break_status()
        message = session.get_active_message()

        assert state.frustration_level == 65
        assert state.confidence_level == 67
        assert status.suggested
        assert status.state_triggered
        assert status.urgency is BreakUrgency.SUGGESTED
        assert message is not None
        assert message.category is MessageCategory.BREAK
        assert "Ada" in message.text

    def test_heavy_frustration_suggests_easy(self, session, make_activity) -> None:
        for _ in range(5):
            session.append_activity(make_activity(is_correct=False, time_spent=60))

        assert session.get_state().frustration_level == 75
        assert session.get_suggested_difficulty() is DifficultyLevel.EASY

    def test_steady_success_suggests_hard(self, session, make_activity) -> None:
        for _ in range(4):
            session.append_activity(make_activity(is_correct=True, time_spent=60))

        assert _levels(session.get_state()) == (0, 0, 100, 100)
        assert session.get_suggested_difficulty() is DifficultyLevel.HARD
        assert session.get_active_message() is None

    def test_statistics(self, session, clock, make_activity) -> None:
        session.append_activity(make_activity(is_correct=True, time_spent=60))
        session.append_activity(make_activity(is_correct=False, time_spent=60))
        session.append_activity(make_activity(ActivityType.HINT_REQUESTED))
        clock.advance(minutes=12, seconds=30)

        stats = session.get_statistics()

        assert stats.total_activities == 3
        assert stats.correct_answers == 1
        assert stats.wrong_answers == 1
        assert stats.consecutive_wrong == 1
        assert stats.elapsed_minutes == 12

    def test_random_activity_stream_stays_consistent(self, make_session, clock) -> None:
        session = make_session(default_draw=0.5)
        generator = random.Random(99)

        for _ in range(150):
            clock.advance(seconds=generator.randint(0, 240))
            session.append_activity(_random_activity(clock, generator))
            state = session.get_state()

            for level in _levels(state):
                assert 0 <= level <= 100
            assert state.confidence_level == max(
                0, (200 - state.frustration_level - state.stress_level) // 2
            )
            assert session.get_state() == state


class TestEventMessages:
    """Tests for celebration and forced motivation."""

    def test_correct_answer_can_celebrate(self, make_session, make_activity) -> None:
        session = make_session(draws=[0.1])

        session.append_activity(make_activity(is_correct=True, time_spent=60))

        message = session.get_active_message()
        assert message is not None
        assert message.category is MessageCategory.CELEBRATION
        assert "Ada" in message.text

    def test_unlucky_draw_does_not_celebrate(self, session, make_activity) -> None:
        session.append_activity(make_activity(is_correct=True, time_spent=60))

        assert session.get_active_message() is None

    def test_zero_probability_never_celebrates(self, make_session, make_activity) -> None:
        session = make_session(
            draws=[0.0],
            settings=EmotionSettings(celebration_probability=0.0),
        )

        session.append_activity(make_activity(is_correct=True, time_spent=60))

        assert session.get_active_message() is None

    def test_third_miss_forces_motivation(self, clock, rng, emotion_settings, make_activity) -> None:
        selector = SpySelector(rng)
        session = EmotionAwareSession(
            "Ada",
            clock=clock,
            rng=rng,
            settings=emotion_settings,
            selector=selector,
        )

        session.append_activity(make_activity(is_correct=False, time_spent=60))
        session.append_activity(make_activity(is_correct=False, time_spent=60))
        assert selector.selected == []

        session.append_activity(make_activity(is_correct=False, time_spent=60))

        # forced by the streak, then again by frustration 45
        assert selector.selected == [MessageCategory.MOTIVATION, MessageCategory.MOTIVATION]
        assert session.get_active_message().category is MessageCategory.MOTIVATION

    def test_policy_message_replaces_celebration(self, make_session, make_activity) -> None:
        session = make_session(draws=[0.1])
        for _ in range(7):
            session.append_activity(make_activity(ActivityType.HINT_REQUESTED))
        assert session.get_active_message().category is MessageCategory.GUIDANCE

        session.append_activity(make_activity(is_correct=True, time_spent=60))

        assert session.get_state().engagement_level == 44
        assert session.get_active_message().category is MessageCategory.GUIDANCE


class TestSeeding:
    """Tests for seed_from_prior_assessment."""

    @pytest.fixture
    def summary(self) -> PriorAssessmentSummary:
        return PriorAssessmentSummary(
            percentage_score=90,
            wrong_count=1,
            total_questions=10,
            time_taken_minutes=50,
        )

    def test_seeded_state_and_greeting(self, session, summary) -> None:
        state = session.seed_from_prior_assessment(summary)

        assert _levels(state) == (8, 55, 100, 90)
        assert session.get_state() is state
        assert session.get_suggested_difficulty() is DifficultyLevel.HARD
        message = session.get_active_message()
        assert message.category is MessageCategory.CELEBRATION
        assert "Ada" in message.text
        assert "90%" in message.text
        assert not session.get_break_status().suggested
        assert session.assessment_analysis is not None

    def test_first_activity_replaces_seed(self, session, summary, make_activity) -> None:
        session.seed_from_prior_assessment(summary)

        state = session.append_activity(make_activity(is_correct=True, time_spent=60))

        assert _levels(state) == (0, 0, 100, 100)

    def test_cannot_seed_twice(self, session, summary) -> None:
        session.seed_from_prior_assessment(summary)

        with pytest.raises(SeedingError, match="already"):
            session.seed_from_prior_assessment(summary)

    def test_cannot_seed_after_activity(self, session, summary, make_activity) -> None:
        session.append_activity(make_activity(time_spent=60))

        with pytest.raises(SeedingError) as exc_info:
            session.seed_from_prior_assessment(summary)

        assert exc_info.value.details == {"activities": 1}

    def test_reset_allows_seeding_again(self, session, summary, make_activity) -> None:
        session.append_activity(make_activity(time_spent=60))
        session.reset_session()

        state = session.seed_from_prior_assessment(summary)

        assert state.confidence_level == 90

    def test_long_difficult_assessment_starts_with_break(self, session) -> None:
        summary = PriorAssessmentSummary(
            percentage_score=40,
            wrong_count=6,
            total_questions=10,
            time_taken_minutes=75,
        )

        state = session.seed_from_prior_assessment(summary)

        assert _levels(state) == (48, 70, 60, 40)
        assert session.get_break_status().suggested
        assert session.get_active_message().category is MessageCategory.GUIDANCE


class TestBreaks:
    """Tests for time-driven breaks, dismissal and take_break."""

    def test_long_session_suggests_break(self, session, clock, make_activity) -> None:
        clock.advance(minutes=50)

        session.append_activity(make_activity(is_correct=True, time_spent=60))

        status = session.get_break_status()
        assert session.get_state().stress_level == 30
        assert status.suggested
        assert status.time_triggered
        assert not status.state_triggered
        assert status.urgency is BreakUrgency.SUGGESTED
        assert session.get_active_message().category is MessageCategory.BREAK

    def test_very_long_session_is_urgent(self, session, clock, make_activity) -> None:
        clock.advance(minutes=95)

        session.append_activity(make_activity(is_correct=True, time_spent=60))

        message = session.get_active_message()
        urgent_pool = MessageCatalog.load().pools["break_urgent"]
        assert session.get_state().stress_level == 70
        assert session.get_break_status().urgency is BreakUrgency.URGENT
        assert message.urgency is BreakUrgency.URGENT
        assert message.text == urgent_pool[0].format(name="Ada")

    def test_dismiss_keeps_scores(self, session, clock, make_activity) -> None:
        clock.advance(minutes=50)
        state = session.append_activity(make_activity(is_correct=True, time_spent=60))

        session.dismiss_message()

        assert session.get_active_message() is None
        assert not session.get_break_status().suggested
        assert session.get_state() is state

    def test_take_break_keeps_session_clock(self, session, clock, make_activity) -> None:
        clock.advance(minutes=95)
        before = session.append_activity(make_activity(is_correct=True, time_spent=60))

        confirmation = session.take_break()

        assert confirmation.text.startswith("Great decision, Ada!")
        assert session.get_active_message() is confirmation
        assert not session.get_break_status().suggested
        assert session.get_state() is before

        clock.advance(minutes=1)
        state = session.append_activity(make_activity(is_correct=True, time_spent=60))

        # 96 minutes since session start: both long-session bonuses apply
        assert state.stress_level == 70
        assert state.confidence_level == 65
        assert session.get_suggested_difficulty() is DifficultyLevel.MEDIUM
        assert session.get_break_status().urgency is BreakUrgency.URGENT
        assert session.get_statistics().elapsed_minutes == 96


class TestTick:
    """Tests for the periodic re-evaluation."""

    def test_tick_is_throttled(self, session, clock) -> None:
        clock.advance(seconds=30)
        assert not session.tick()

        clock.advance(seconds=30)
        assert session.tick()
        assert not session.tick()

    def test_tick_applies_idle_penalty(self, session, clock, make_activity) -> None:
        session.append_activity(make_activity(is_correct=True, time_spent=60))
        clock.advance(seconds=200)

        assert session.tick()
        assert session.get_state().engagement_level == 60

    def test_tick_before_activity_only_checks_time(self, session, clock) -> None:
        clock.advance(minutes=50)

        assert session.tick()

        assert _levels(session.get_state()) == (0, 0, 100, 70)
        assert session.get_break_status().time_triggered
        assert session.get_active_message().category is MessageCategory.BREAK

    def test_tick_before_activity_without_break(self, session, clock) -> None:
        clock.advance(minutes=5)

        assert session.tick()
        assert session.get_active_message() is None


class TestObservers:
    """Tests for subscribe and unsubscribe."""

    def test_listener_is_notified_until_unsubscribed(self, session, make_activity) -> None:
        calls: list[EmotionAwareSession] = []
        unsubscribe = session.subscribe(calls.append)

        session.append_activity(make_activity(time_spent=60))
        session.dismiss_message()
        assert calls == [session, session]

        unsubscribe()
        unsubscribe()
        session.append_activity(make_activity(time_spent=60))

        assert len(calls) == 2

    def test_listener_sees_updated_state(self, session, make_activity) -> None:
        seen: list[int] = []
        session.subscribe(lambda s: seen.append(s.get_state().frustration_level))

        session.append_activity(make_activity(is_correct=False, time_spent=60))

        assert seen == [15]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Append-only activity log for a learning session."""

from collections.abc import Iterator

from emotion_aware.core.emotional.context import LearningActivity


class ActivityLog:
    """Ordered, append-only record of learner activities.

    Insertion order is authoritative; activity timestamps never reorder
    entries. Entries are only removed all at once through clear(),
    which backs the session reset.
    """

    def __init__(self) -> None:
        self._entries: list[LearningActivity] = []

    def append(self, activity: LearningActivity) -> None:
        """Record an activity at the end of the log."""
        self._entries.append(activity)

    def clear(self) -> None:
        """Drop every recorded activity."""
        self._entries.clear()

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self._entries if a.is_correct_answer)

    @property
    def wrong_count(self) -> int:
        return sum(1 for a in self._entries if a.is_wrong_answer)

    def snapshot(self) -> tuple[LearningActivity, ...]:
        """Immutable copy of the whole log."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LearningActivity]:
        return iter(tuple(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)

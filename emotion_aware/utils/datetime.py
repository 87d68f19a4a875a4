# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for the emotion-aware learning engine.

All datetimes handled by the engine are timezone-aware UTC. Session
code never reads the system clock directly: it receives a ``Clock``
callable so elapsed-time rules can be tested with a fixed "now".

Usage:
------
    from emotion_aware.utils.datetime import utc_now

    session = EmotionAwareSession("Ada", clock=utc_now)
"""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Ensure a datetime is timezone-aware UTC.

    Naive datetimes are assumed to already be in UTC.

    Args:
        dt: A naive or aware datetime.

    Returns:
        Timezone-aware UTC datetime.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def seconds_between(start: datetime, end: datetime) -> float:
    """Seconds elapsed from ``start`` to ``end`` (negative if end is earlier)."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds()


def minutes_between(start: datetime, end: datetime) -> float:
    """Minutes elapsed from ``start`` to ``end``, never negative."""
    return max(0.0, seconds_between(start, end) / 60)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations and the Clock type
"""

from emotion_aware.utils.datetime import (
    Clock,
    ensure_utc,
    minutes_between,
    seconds_between,
    utc_now,
)
from emotion_aware.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    session_logger,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "session_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "Clock",
    "utc_now",
    "ensure_utc",
    "seconds_between",
    "minutes_between",
]

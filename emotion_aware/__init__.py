"""Emotion-aware adaptive learning engine.

Derives frustration, stress, engagement and confidence levels from a
learner's activity log and turns them into difficulty suggestions,
break recommendations and encouragement messages.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"

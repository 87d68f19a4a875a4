# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the emotion-aware learning engine.

This module defines the exception hierarchy:
- EmotionError: Base exception for all engine errors
- InvalidActivityError: Malformed learner activity
- OutOfRangeSeedError: Impossible prior-assessment values
- SeedingError: Seeding attempted at the wrong point of a session
- MessageCatalogError: Invalid encouragement template catalog
"""

from typing import Any


class EmotionError(Exception):
    """Base exception for all emotion engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize emotion engine error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidActivityError(EmotionError):
    """Raised when an activity is missing or carries invalid fields.

    Activities are rejected at the boundary rather than coerced.
    """


class OutOfRangeSeedError(EmotionError):
    """Raised when a prior-assessment summary holds impossible values."""


class SeedingError(EmotionError):
    """Raised when a session is seeded twice or after recording activity."""


class MessageCatalogError(EmotionError):
    """Raised when the encouragement template catalog is unusable.

    Attributes:
        category: Catalog section that failed validation, if known.
    """

    def __init__(
        self,
        message: str,
        category: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.category = category
        super().__init__(message, details)

    def __str__(self) -> str:
        base = self.message
        if self.category:
            base = f"[{self.category}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Message selector for encouragement messages.

Templates live in a YAML catalog (``messages.yaml`` in this package by
default) and are personalized with the learner's display name. The
random source is injected so tests can make selection deterministic;
production uses ``random.Random``.
"""

import logging
import random
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, TypeVar

from emotion_aware.core.config.yaml_loader import (
    YAMLLoadError,
    load_package_yaml,
    load_yaml,
)
from emotion_aware.core.emotional.constants import (
    BreakUrgency,
    MessageCategory,
    PerformanceBand,
)
from emotion_aware.core.emotional.context import EncouragementMessage
from emotion_aware.core.emotional.exceptions import MessageCatalogError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_TEMPLATES_PER_CATEGORY = 5
BREAK_URGENT_POOL = "break_urgent"
BREAK_ACCEPTED_POOL = "break_accepted"
ASSESSMENT_FEEDBACK_POOL = "assessment_feedback"

CATEGORY_POOLS = (
    MessageCategory.MOTIVATION.value,
    MessageCategory.BREAK.value,
    BREAK_URGENT_POOL,
    MessageCategory.CELEBRATION.value,
    MessageCategory.GUIDANCE.value,
)

_PLACEHOLDER_PROBE = {"name": "Learner", "score": 0}


class RandomSource(Protocol):
    """Subset of ``random.Random`` used by the engine."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def _validate_templates(key: str, templates: Any, minimum: int) -> list[str]:
    if not isinstance(templates, list) or not templates:
        raise MessageCatalogError("Template pool is missing or empty", category=key)
    if len(templates) < minimum:
        raise MessageCatalogError(
            f"Template pool needs at least {minimum} entries",
            category=key,
            details={"count": len(templates)},
        )
    for template in templates:
        if not isinstance(template, str) or "{name}" not in template:
            raise MessageCatalogError(
                "Every template must be a string containing {name}",
                category=key,
                details={"template": template},
            )
        try:
            template.format(**_PLACEHOLDER_PROBE)
        except (KeyError, IndexError, ValueError) as e:
            raise MessageCatalogError(
                f"Template has unsupported placeholders: {e}",
                category=key,
                details={"template": template},
            ) from e
    return list(templates)


class MessageCatalog:
    """Validated set of message templates.

    Attributes:
        pools: Templates per category pool (motivation, break,
            break_urgent, celebration, guidance, break_accepted).
        feedback: Assessment feedback templates per performance band.
    """

    def __init__(
        self,
        pools: Mapping[str, list[str]],
        feedback: Mapping[PerformanceBand, list[str]],
    ) -> None:
        self.pools = dict(pools)
        self.feedback = dict(feedback)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MessageCatalog":
        """Build a catalog from parsed YAML.

        Raises:
            MessageCatalogError: If a pool is missing, too small, or holds
                a template without the {name} placeholder.
        """
        pools = {
            key: _validate_templates(key, data.get(key), MIN_TEMPLATES_PER_CATEGORY)
            for key in CATEGORY_POOLS
        }
        pools[BREAK_ACCEPTED_POOL] = _validate_templates(
            BREAK_ACCEPTED_POOL, data.get(BREAK_ACCEPTED_POOL), 1
        )

        raw_feedback = data.get(ASSESSMENT_FEEDBACK_POOL)
        if not isinstance(raw_feedback, Mapping):
            raise MessageCatalogError(
                "assessment_feedback must map performance bands to templates",
                category=ASSESSMENT_FEEDBACK_POOL,
            )
        feedback = {
            band: _validate_templates(
                f"{ASSESSMENT_FEEDBACK_POOL}.{band.value}",
                raw_feedback.get(band.value),
                1,
            )
            for band in PerformanceBand
        }
        return cls(pools, feedback)

    @classmethod
    def load(cls, path: Path | None = None) -> "MessageCatalog":
        """Load the catalog from ``path`` or from the packaged YAML.

        Raises:
            MessageCatalogError: If the file cannot be read or is invalid.
        """
        try:
            if path is None:
                data = load_package_yaml(__package__, "messages.yaml")
            else:
                data = load_yaml(path)
        except YAMLLoadError as e:
            raise MessageCatalogError(str(e), details={"path": str(e.path)}) from e

        catalog = cls.from_mapping(data)
        logger.debug(
            "Loaded message catalog from %s (%d pools)",
            path or "package",
            len(catalog.pools),
        )
        return catalog

    def pool_for(
        self,
        category: MessageCategory,
        urgency: BreakUrgency = BreakUrgency.NONE,
    ) -> list[str]:
        """Templates for a category; urgent breaks use their own pool."""
        if category == MessageCategory.BREAK and urgency == BreakUrgency.URGENT:
            return self.pools[BREAK_URGENT_POOL]
        return self.pools[category.value]


class MessageSelector:
    """Selects and personalizes encouragement messages.

    Selection among templates of the same category is uniform through
    the injected random source.
    """

    def __init__(
        self,
        catalog: MessageCatalog | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._catalog = catalog or MessageCatalog.load()
        self._rng = rng or random.Random()

    @property
    def catalog(self) -> MessageCatalog:
        return self._catalog

    def select(
        self,
        category: MessageCategory,
        name: str,
        urgency: BreakUrgency = BreakUrgency.NONE,
    ) -> EncouragementMessage:
        """Pick a random template of ``category`` and fill in the name.

        Args:
            category: Category that was triggered.
            name: Learner's display name.
            urgency: Break urgency; only used for the break category.

        Returns:
            Personalized EncouragementMessage.
        """
        template = self._rng.choice(self._catalog.pool_for(category, urgency))
        if category != MessageCategory.BREAK:
            urgency = BreakUrgency.NONE
        return EncouragementMessage(
            category=category,
            text=template.format(name=name, score=""),
            urgency=urgency,
        )

    def break_accepted(self, name: str) -> EncouragementMessage:
        """Confirmation shown when the learner takes the suggested break."""
        template = self._rng.choice(self._catalog.pools[BREAK_ACCEPTED_POOL])
        return EncouragementMessage(
            category=MessageCategory.BREAK,
            text=template.format(name=name, score=""),
        )

    def assessment_feedback(
        self,
        category: MessageCategory,
        band: PerformanceBand,
        name: str,
        score: float,
    ) -> EncouragementMessage:
        """Greeting that reflects the prior assessment result.

        Args:
            category: Category chosen for the greeting.
            band: Performance band of the prior assessment.
            name: Learner's display name.
            score: Prior percentage score, shown rounded to a whole number.
        """
        template = self._rng.choice(self._catalog.feedback[band])
        return EncouragementMessage(
            category=category,
            text=template.format(name=name, score=f"{score:.0f}"),
        )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for the emotion-aware engine.

Session events (activity recorded, break suggested, session seeded, ...)
are emitted through structlog as key/value events; the pure scoring and
message modules use plain ``logging`` loggers under the same
``emotion_aware`` namespace. Both end up on the stdlib handlers, rendered
for a terminal in development and as JSON lines everywhere else.

Example:
    >>> from emotion_aware.core.config import get_settings
    >>> from emotion_aware.utils.logging import setup_logging, session_logger
    >>> setup_logging(get_settings())
    >>> log = session_logger("emotion_aware.core.emotional.service", "Ada")
    >>> log.info("break_taken", activities=12)
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from emotion_aware.core.config.settings import Settings

LOGGER_NAMESPACE = "emotion_aware"


def build_processors(settings: "Settings") -> list[Processor]:
    """Processor chain for the configured environment.

    The chain ends in ``ConsoleRenderer`` for development or debug runs
    and in ``JSONRenderer`` (with exception formatting) otherwise.
    """
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development or settings.debug:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        chain.append(structlog.processors.format_exc_info)
        chain.append(structlog.processors.JSONRenderer())
    return chain


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and the stdlib bridge from settings.

    Structlog hands rendered lines to stdlib loggers of the same name,
    so the level of the ``emotion_aware`` logger gates both kinds of
    records.

    Args:
        settings: Application settings (environment, debug, log_level).
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger(LOGGER_NAMESPACE).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for a module, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def session_logger(name: str, display_name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger carrying the learner's name on every event.

    The name is bound on the returned logger only; nothing is put into
    the shared context, so concurrent sessions do not leak into each
    other's events.

    Args:
        name: Logger name, usually ``__name__``.
        display_name: Learner name of the session.
    """
    return get_logger(name).bind(learner=display_name)


def bind_context(**kwargs: object) -> None:
    """Bind values to every event logged from the current context.

    Meant for the embedding application, e.g. a request or lesson id.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with bind_context()."""
    structlog.contextvars.clear_contextvars()

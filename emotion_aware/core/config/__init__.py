# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Utilities for loading YAML files from disk or the package

Example:
    >>> from emotion_aware.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from emotion_aware.core.config.settings import (
    EmotionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from emotion_aware.core.config.yaml_loader import (
    YAMLLoadError,
    load_package_yaml,
    load_yaml,
    parse_yaml,
)

__all__ = [
    # Settings
    "Settings",
    "EmotionSettings",
    "get_settings",
    "clear_settings_cache",
    # YAML utilities
    "load_yaml",
    "load_package_yaml",
    "parse_yaml",
    "YAMLLoadError",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reading YAML documents from disk or from package resources.

The encouragement catalog ships as ``messages.yaml`` inside
``emotion_aware.core.emotional`` and may be replaced by a file on disk
(``EMOTION_MESSAGES_PATH``). Both routes return the top-level mapping
and report every failure as YAMLLoadError.

Example:
    >>> from emotion_aware.core.config.yaml_loader import load_package_yaml
    >>> catalog = load_package_yaml("emotion_aware.core.emotional", "messages.yaml")
    >>> sorted(catalog)[:2]
    ['assessment_feedback', 'break']
"""

from importlib import resources
from pathlib import Path
from typing import Any

import yaml


class YAMLLoadError(Exception):
    """A YAML document could not be read or is not a mapping.

    Attributes:
        path: File path or ``package/name`` of the resource.
        reason: What went wrong.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def parse_yaml(content: str, source: Path | str) -> dict[str, Any]:
    """Parse YAML text whose root must be a mapping.

    Args:
        content: Raw YAML text.
        source: Origin of the text, used in error messages.

    Returns:
        The parsed mapping; ``{}`` for an empty or comment-only document.

    Raises:
        YAMLLoadError: On a syntax error or a non-mapping root.
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise YAMLLoadError(source, f"Invalid YAML syntax: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise YAMLLoadError(
            source, f"YAML root must be a mapping, got {type(document).__name__}"
        )
    return document


def load_yaml(path: Path) -> dict[str, Any]:
    """Read and parse a YAML file.

    Raises:
        YAMLLoadError: If ``path`` is missing, is a directory, cannot be
            read, or does not hold a YAML mapping.
    """
    if not path.exists():
        raise YAMLLoadError(path, "File does not exist")
    if not path.is_file():
        raise YAMLLoadError(path, "Path is not a file")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e

    return parse_yaml(text, path)


def load_package_yaml(package: str, name: str) -> dict[str, Any]:
    """Read and parse a YAML resource bundled with a package.

    Args:
        package: Dotted name of the package holding the resource.
        name: Resource file name.

    Raises:
        YAMLLoadError: If the package or resource is missing, or the
            resource does not hold a YAML mapping.
    """
    source = f"{package}/{name}"
    try:
        text = resources.files(package).joinpath(name).read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError) as e:
        raise YAMLLoadError(source, f"Cannot read resource: {e}") from e

    return parse_yaml(text, source)

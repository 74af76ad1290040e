from __future__ import annotations

"""
@meta
name: settings_snapshot
type: utility
domain: config
responsibility:
  - Load application settings from packaged defaults and an override YAML
  - Provide read-only dotted-path access to hierarchical settings
inputs:
  - reference.yaml (packaged)
  - Optional override YAML (argument or CLUSTER_CONFIG_SETTINGS)
outputs:
  - SettingsSnapshot
tags:
  - utility
  - config
lifecycle:
  status: active
"""
import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from common.shared.yaml_utils import load_yaml
from constants import (
    DEPRECATED_LOCAL_KEY,
    LOCAL_COMPUTATION_KEY,
    SETTINGS_PATH_ENV_KEY,
)
from .exceptions import SettingsError

logger = logging.getLogger(__name__)

REFERENCE_SETTINGS_PATH = Path(__file__).with_name("reference.yaml")

_TRUE_STRINGS = frozenset({"true", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "off"})

_MISSING = object()


class SettingsSnapshot:
    """
    Read-only view over hierarchical application settings.

    Paths are dotted (``model.local-computation``); each segment indexes one
    level of nested mappings. A path whose value is ``None`` is treated as
    absent, matching how HOCON treats ``null``.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for segment in path.split("."):
            if not isinstance(node, Mapping) or segment not in node:
                return _MISSING
            node = node[segment]
        return _MISSING if node is None else node

    def has_path(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def get(self, path: str, default: Any = None) -> Any:
        value = self._lookup(path)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def get_bool(self, path: str) -> bool:
        """
        Read a boolean setting.

        Args:
            path: Dotted settings path.

        Returns:
            The boolean value. Strings ``true/yes/on`` and ``false/no/off``
            are accepted case-insensitively.

        Raises:
            SettingsError: If the path is missing or not a boolean.
        """
        value = self._lookup(path)
        if value is _MISSING:
            raise SettingsError(f"No configuration setting found for key '{path}'")
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise SettingsError(f"Setting '{path}' has type {type(value).__name__} rather than boolean: {value!r}")

    def __repr__(self) -> str:
        return f"SettingsSnapshot({self._data!r})"


def merge_settings(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge ``overrides`` onto ``base``; nested mappings merge recursively.

    Args:
        base: Base settings dictionary (not modified).
        overrides: Settings taking precedence over ``base``.

    Returns:
        Merged settings dictionary.
    """
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = merge_settings(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _split_path(path: str) -> Tuple[str, str]:
    parent, _, leaf = path.rpartition(".")
    return parent, leaf


def _defines(settings: Mapping[str, Any], path: str) -> bool:
    return SettingsSnapshot(settings).has_path(path)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        return load_yaml(path)
    except FileNotFoundError as exc:
        raise SettingsError(f"Settings file not found: {path}") from exc
    except (yaml.YAMLError, ValueError, OSError) as exc:
        raise SettingsError(f"Unable to read settings file {path}: {exc}") from exc


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SettingsSnapshot:
    """
    Build a :class:`SettingsSnapshot` from packaged defaults plus overrides.

    The override file is ``path`` when given, else the file named by the
    ``CLUSTER_CONFIG_SETTINGS`` environment variable, else none. An override
    that sets only the deprecated ``model.local`` flag drops the packaged
    ``model.local-computation`` default so the deprecated value still applies.

    Args:
        path: Optional override YAML path.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Merged, read-only settings.

    Raises:
        SettingsError: If the override file is missing or unreadable.
    """
    environ = os.environ if environ is None else environ
    settings = _read_yaml(REFERENCE_SETTINGS_PATH)

    override_path = path or environ.get(SETTINGS_PATH_ENV_KEY) or None
    if override_path:
        override_path = Path(override_path)
        logger.debug("Loading settings overrides from %s", override_path)
        overrides = _read_yaml(override_path)
        if _defines(overrides, DEPRECATED_LOCAL_KEY) and not _defines(overrides, LOCAL_COMPUTATION_KEY):
            parent, leaf = _split_path(LOCAL_COMPUTATION_KEY)
            section = settings.get(parent)
            if isinstance(section, dict):
                section.pop(leaf, None)
        settings = merge_settings(settings, overrides)

    return SettingsSnapshot(settings)

"""Custom exceptions for cluster configuration patching."""

from pathlib import Path
from typing import Optional, Union


class ClusterConfigError(Exception):
    """Base exception for configuration patching errors."""

    pass


class ConfigDirectoryError(ClusterConfigError):
    """Raised when the Hadoop configuration directory is missing or not a directory."""

    pass


class ResourceLoadError(ClusterConfigError):
    """Raised when a configuration resource exists but cannot be read or parsed."""

    def __init__(self, message: str, resource: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.resource = resource


class SettingsError(ClusterConfigError):
    """Raised when an application setting is missing or has an invalid value."""

    pass


class VariableSubstitutionError(ClusterConfigError):
    """Raised when ${var} expansion of a configuration value does not terminate."""

    pass

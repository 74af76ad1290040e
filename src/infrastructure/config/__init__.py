"""Cluster configuration loading and patching."""

from .exceptions import (
    ClusterConfigError,
    ConfigDirectoryError,
    ResourceLoadError,
    SettingsError,
    VariableSubstitutionError,
)
from .patcher import (
    ConfigPatcher,
    find_hadoop_conf_dir,
    is_local_computation,
    load_hadoop_resources,
    patch_configuration,
    reconcile_default_fs,
    remove_lzo_codecs,
)
from .settings import SettingsSnapshot, load_settings, merge_settings
from .store import ConfigurationStore

__all__ = [
    "ClusterConfigError",
    "ConfigDirectoryError",
    "ResourceLoadError",
    "SettingsError",
    "VariableSubstitutionError",
    "ConfigPatcher",
    "find_hadoop_conf_dir",
    "is_local_computation",
    "load_hadoop_resources",
    "patch_configuration",
    "reconcile_default_fs",
    "remove_lzo_codecs",
    "SettingsSnapshot",
    "load_settings",
    "merge_settings",
    "ConfigurationStore",
]

"""Shared constants module.

This module provides the environment, file and key names used when patching
a cluster configuration store.
"""

from .cluster import (
    HADOOP_CONF_DIR_KEY,
    DEFAULT_HADOOP_CONF_DIR,
    SETTINGS_PATH_ENV_KEY,
    HADOOP_RESOURCE_FILES,
    FS_DEFAULT_NAME_KEY,
    FS_DEFAULT_NAME_DEFAULT,
    LEGACY_FS_DEFAULT_NAME_KEY,
    IO_COMPRESSION_CODECS_KEY,
    LZO_CODEC_MARKER,
    LOCAL_COMPUTATION_KEY,
    DEPRECATED_LOCAL_KEY,
)

__all__ = [
    "HADOOP_CONF_DIR_KEY",
    "DEFAULT_HADOOP_CONF_DIR",
    "SETTINGS_PATH_ENV_KEY",
    "HADOOP_RESOURCE_FILES",
    "FS_DEFAULT_NAME_KEY",
    "FS_DEFAULT_NAME_DEFAULT",
    "LEGACY_FS_DEFAULT_NAME_KEY",
    "IO_COMPRESSION_CODECS_KEY",
    "LZO_CODEC_MARKER",
    "LOCAL_COMPUTATION_KEY",
    "DEPRECATED_LOCAL_KEY",
]

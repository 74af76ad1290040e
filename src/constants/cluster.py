"""Stable identifiers for the cluster configuration patcher.

These are *not* behaviour knobs (those live in the settings YAML), but
environment, file and key names that mirror the Hadoop client conventions.
"""

# Environment
HADOOP_CONF_DIR_KEY = "HADOOP_CONF_DIR"
DEFAULT_HADOOP_CONF_DIR = "/etc/hadoop/conf"
SETTINGS_PATH_ENV_KEY = "CLUSTER_CONFIG_SETTINGS"

# Resource files, in load order (later files override earlier ones)
HADOOP_RESOURCE_FILES = (
    "core-site.xml",
    "core-default.xml",
    "hdfs-default.xml",
    "hdfs-site.xml",
    "mapred-default.xml",
    "mapred-site.xml",
    "yarn-default.xml",
    "yarn-site.xml",
)

# Configuration store keys
FS_DEFAULT_NAME_KEY = "fs.defaultFS"
FS_DEFAULT_NAME_DEFAULT = "file:///"
LEGACY_FS_DEFAULT_NAME_KEY = "fs.default.name"
IO_COMPRESSION_CODECS_KEY = "io.compression.codecs"
LZO_CODEC_MARKER = ".lzo.Lzo"

# Settings keys
LOCAL_COMPUTATION_KEY = "model.local-computation"
DEPRECATED_LOCAL_KEY = "model.local"

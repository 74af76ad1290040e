from __future__ import annotations

"""
@meta
name: config_patcher
type: utility
domain: config
responsibility:
  - Decide between local and cluster computation from application settings
  - Resolve the Hadoop configuration directory
  - Merge the standard Hadoop XML resources into a configuration store
  - Reconcile fs.defaultFS with the legacy fs.default.name key
  - Strip LZO codecs from io.compression.codecs
inputs:
  - SettingsSnapshot
  - HADOOP_CONF_DIR environment variable
  - ConfigurationStore (caller-owned)
outputs:
  - Patched ConfigurationStore
tags:
  - utility
  - config
  - hadoop
lifecycle:
  status: active
"""
import logging
import os
import warnings
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from constants import (
    DEFAULT_HADOOP_CONF_DIR,
    DEPRECATED_LOCAL_KEY,
    FS_DEFAULT_NAME_DEFAULT,
    FS_DEFAULT_NAME_KEY,
    HADOOP_CONF_DIR_KEY,
    HADOOP_RESOURCE_FILES,
    IO_COMPRESSION_CODECS_KEY,
    LEGACY_FS_DEFAULT_NAME_KEY,
    LOCAL_COMPUTATION_KEY,
    LZO_CODEC_MARKER,
)
from .exceptions import ConfigDirectoryError
from .settings import SettingsSnapshot, load_settings
from .store import ConfigurationStore

logger = logging.getLogger(__name__)


def is_local_computation(settings: SettingsSnapshot) -> bool:
    """
    Read the local-computation flag, falling back to the deprecated ``model.local``.

    Raises:
        SettingsError: If neither key is set, or the value is not boolean.
    """
    if settings.has_path(LOCAL_COMPUTATION_KEY):
        return settings.get_bool(LOCAL_COMPUTATION_KEY)

    message = (
        f"{DEPRECATED_LOCAL_KEY} is deprecated; use model.local-data and {LOCAL_COMPUTATION_KEY}"
    )
    logger.warning(message)
    warnings.warn(message, DeprecationWarning, stacklevel=2)
    return settings.get_bool(DEPRECATED_LOCAL_KEY)


def find_hadoop_conf_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Resolve the Hadoop configuration directory.

    Uses ``HADOOP_CONF_DIR`` when set and non-empty, else ``/etc/hadoop/conf``.

    Args:
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Path to the configuration directory.

    Raises:
        ConfigDirectoryError: If the path does not exist or is not a directory.
    """
    environ = os.environ if environ is None else environ
    conf_path = environ.get(HADOOP_CONF_DIR_KEY) or DEFAULT_HADOOP_CONF_DIR
    conf_dir = Path(conf_path)
    if not conf_dir.is_dir():
        raise ConfigDirectoryError(f"Not a directory: {conf_dir}")
    return conf_dir


def load_hadoop_resources(
    store: ConfigurationStore,
    conf_dir: Path,
    resource_names: Sequence[str] = HADOOP_RESOURCE_FILES,
) -> List[Path]:
    """
    Merge the named resources from ``conf_dir`` into ``store``, in order.

    Missing files are skipped. A file that exists but cannot be parsed
    raises ``ResourceLoadError``; resources merged before it stay merged.

    Returns:
        Paths of the resources that were loaded.
    """
    loaded: List[Path] = []
    for file_name in resource_names:
        resource = Path(conf_dir) / file_name
        if not resource.exists():
            logger.debug("Skipping missing configuration resource %s", resource)
            continue
        loaded.append(store.add_resource(resource.absolute().as_uri()))
    return loaded


def reconcile_default_fs(store: ConfigurationStore) -> Optional[str]:
    """
    Populate ``fs.defaultFS`` from ``fs.default.name`` when it is unset or the built-in default.

    Older generated client configs set only the legacy key. If the legacy
    key is also unset, ``fs.defaultFS`` stays unset.

    Returns:
        The resolved ``fs.defaultFS`` value, or ``None``.
    """
    default_fs = store.get(FS_DEFAULT_NAME_KEY)
    if default_fs is None or default_fs == FS_DEFAULT_NAME_DEFAULT:
        legacy_value = store.get(LEGACY_FS_DEFAULT_NAME_KEY)
        if legacy_value is not None:
            store.set(FS_DEFAULT_NAME_KEY, legacy_value)
        default_fs = store.get(FS_DEFAULT_NAME_KEY)
    logger.info("%s = %s", FS_DEFAULT_NAME_KEY, default_fs)
    return default_fs


def remove_lzo_codecs(store: ConfigurationStore) -> bool:
    """
    Removes ``LzoCodec`` and ``LzopCodec`` from ``io.compression.codecs``.

    Their implementations are not shipped with Hadoop, but the codec factory
    may instantiate every listed class even when unused.

    Returns:
        True if the codec list was rewritten.
    """
    codecs_property = store.get(IO_COMPRESSION_CODECS_KEY)
    if codecs_property is None or LZO_CODEC_MARKER not in codecs_property:
        return False

    codecs = [codec for codec in codecs_property.split(",") if LZO_CODEC_MARKER not in codec]
    store.set(IO_COMPRESSION_CODECS_KEY, ",".join(codecs))
    logger.debug("Removed LZO codecs from %s", IO_COMPRESSION_CODECS_KEY)
    return True


class ConfigPatcher:
    """
    Applies cluster adjustments to a caller-owned :class:`ConfigurationStore`.

    In local-computation mode the store is left untouched. Otherwise the
    Hadoop resources are merged, ``fs.defaultFS`` is reconciled and LZO
    codecs are removed, in that order.
    """

    def __init__(
        self,
        settings: Optional[SettingsSnapshot] = None,
        environ: Optional[Mapping[str, str]] = None,
        resource_names: Sequence[str] = HADOOP_RESOURCE_FILES,
    ):
        self.environ = os.environ if environ is None else environ
        self.settings = settings if settings is not None else load_settings(environ=self.environ)
        self.resource_names = tuple(resource_names)

    def patch(self, store: ConfigurationStore) -> ConfigurationStore:
        if is_local_computation(self.settings):
            logger.debug("Local computation enabled; Hadoop configuration not loaded")
            return store

        conf_dir = find_hadoop_conf_dir(self.environ)
        load_hadoop_resources(store, conf_dir, self.resource_names)
        reconcile_default_fs(store)
        remove_lzo_codecs(store)
        return store


def patch_configuration(
    base: Optional[Union[ConfigurationStore, Mapping[str, Any]]] = None,
    settings: Optional[SettingsSnapshot] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigurationStore:
    """
    Build a patched :class:`ConfigurationStore` from ``base``.

    ``base`` is copied, never modified.

    Args:
        base: Base store or mapping of entries (default: empty).
        settings: Application settings (default: :func:`load_settings`).
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        The new, patched store.
    """
    store = ConfigurationStore(base, environ=environ)
    return ConfigPatcher(settings=settings, environ=environ).patch(store)

"""Shared pytest fixtures for all tests."""

import logging
from pathlib import Path

import pytest

from fixtures.configs import write_configuration_xml
from infrastructure.config import SettingsSnapshot


@pytest.fixture
def hadoop_conf_dir(tmp_path) -> Path:
    """Create an empty Hadoop configuration directory."""
    conf_dir = tmp_path / "hadoop-conf"
    conf_dir.mkdir()
    return conf_dir


@pytest.fixture
def cluster_env(hadoop_conf_dir):
    """Environment mapping pointing HADOOP_CONF_DIR at the temp directory."""
    return {"HADOOP_CONF_DIR": str(hadoop_conf_dir)}


@pytest.fixture
def cluster_settings() -> SettingsSnapshot:
    """Settings selecting cluster (non-local) computation."""
    return SettingsSnapshot({"model": {"local-computation": False}})


@pytest.fixture
def local_settings() -> SettingsSnapshot:
    """Settings selecting local computation."""
    return SettingsSnapshot({"model": {"local-computation": True}})


@pytest.fixture
def core_site(hadoop_conf_dir) -> Path:
    """A core-site.xml naming an HDFS namenode."""
    return write_configuration_xml(
        hadoop_conf_dir / "core-site.xml",
        {"fs.defaultFS": "hdfs://namenode:8020", "hadoop.tmp.dir": "/tmp/hadoop"},
    )


@pytest.fixture
def patcher_caplog(caplog):
    """Capture all records from the configuration package."""
    caplog.set_level(logging.DEBUG, logger="infrastructure")
    return caplog

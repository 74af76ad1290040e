"""
@meta
name: config_patch_cli
type: script
domain: config
responsibility:
  - Parse command-line arguments for configuration patching
  - Print the resolved configuration store
inputs:
  - Command-line arguments
  - Settings YAML and Hadoop configuration directory
outputs:
  - key=value lines on stdout
tags:
  - cli
  - config
lifecycle:
  status: active
"""

"""Command-line entry point that prints a patched cluster configuration.

Usage:
    python -m infrastructure.config.cli --hadoop-conf-dir /etc/hadoop/conf
    python -m infrastructure.config.cli --set fs.default.name=hdfs://nn:8020 --key fs.defaultFS
"""

import argparse
import os
import sys
from typing import List, Optional

from common.shared.argument_parsing import (
    add_log_level_argument,
    add_settings_argument,
    collect_key_values,
    parse_key_value,
)
from common.shared.logging_utils import get_logger
from constants import HADOOP_CONF_DIR_KEY
from .exceptions import ClusterConfigError
from .patcher import patch_configuration
from .settings import load_settings


def parse_patch_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for configuration patching.
    
    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Resolve a Hadoop client configuration and print its properties",
    )
    add_settings_argument(parser)
    parser.add_argument(
        "--hadoop-conf-dir",
        type=str,
        default=None,
        help=f"Hadoop configuration directory (overrides ${HADOOP_CONF_DIR_KEY})",
    )
    parser.add_argument(
        "--set",
        dest="base_entries",
        metavar="KEY=VALUE",
        type=parse_key_value,
        action="append",
        default=None,
        help="Base configuration entry; may be repeated",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Print only this key",
    )
    add_log_level_argument(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_patch_arguments(argv)
    logger = get_logger("infrastructure", args.log_level)

    environ = dict(os.environ)
    if args.hadoop_conf_dir:
        environ[HADOOP_CONF_DIR_KEY] = args.hadoop_conf_dir

    try:
        settings = load_settings(args.settings, environ=environ)
        store = patch_configuration(
            base=collect_key_values(args.base_entries),
            settings=settings,
            environ=environ,
        )
        if args.key is not None:
            value = store.get(args.key)
            lines = None if value is None else [value]
        else:
            lines = [f"{key}={store.get(key)}" for key in sorted(store)]
    except ClusterConfigError as exc:
        logger.error("Configuration patching failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if lines is None:
        print(f"error: {args.key} is not set", file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

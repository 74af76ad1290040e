"""
@meta
name: shared_argument_parsing
type: utility
domain: shared
responsibility:
  - Provide shared argument parsing utilities for CLI scripts
  - Add common arguments (settings file, log level, key=value overrides)
inputs:
  - ArgumentParser instances
outputs:
  - Configured parsers
tags:
  - utility
  - shared
  - cli
lifecycle:
  status: active
"""

"""Shared argument parsing utilities for CLI scripts."""

import argparse
from typing import Dict, List, Optional, Tuple


def add_settings_argument(parser: argparse.ArgumentParser) -> None:
    """Add --settings argument to parser."""
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="Path to a settings override YAML (default: $CLUSTER_CONFIG_SETTINGS)",
    )


def add_log_level_argument(parser: argparse.ArgumentParser) -> None:
    """Add --log-level argument to parser."""
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )


def parse_key_value(text: str) -> Tuple[str, str]:
    """
    Parse a ``KEY=VALUE`` argument.

    Raises:
        argparse.ArgumentTypeError: If there is no ``=`` or the key is empty.
    """
    key, separator, value = text.partition("=")
    key = key.strip()
    if not separator or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{text}'")
    return key, value


def collect_key_values(pairs: Optional[List[Tuple[str, str]]]) -> Dict[str, str]:
    """Fold repeated ``KEY=VALUE`` arguments into a dict; later keys win."""
    return dict(pairs or [])

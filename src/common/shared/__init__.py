"""Shared YAML, logging and argument parsing helpers."""

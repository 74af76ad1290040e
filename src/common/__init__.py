"""Generic shared utilities module.

This module contains generic, domain-agnostic utilities used by the
configuration patcher and its command-line entry point.
"""

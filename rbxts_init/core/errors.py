"""
Error hierarchy — every failure the CLI knows how to report.

Anything raised as a ScaffoldError is printed as a one-line diagnostic
and exits non-zero. Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for expected, user-facing failures."""


class ConfigError(ScaffoldError):
    """Invalid settings, or a config file we cannot read back."""

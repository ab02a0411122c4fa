"""
Core functionality for crossconfig.

This package contains the foundational modules that other components depend on.
Build machine detection lives in :mod:`crossconfig.core.platform` and is
imported from there directly, since it depends on the triple parser.
"""

from .exceptions import (
    CrossConfigError,
    InvalidTripleError,
    MalformedConfigError,
    SettingsFileError,
)

__all__ = [
    "CrossConfigError",
    "InvalidTripleError",
    "MalformedConfigError",
    "SettingsFileError",
]

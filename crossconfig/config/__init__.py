"""Settings input for crossconfig.

This package reads raw cross-compilation settings from files and
command-line pairs.
"""

from crossconfig.config.loader import (
    load_settings_file,
    settings_from_pairs,
    merge_settings,
)

__all__ = [
    "load_settings_file",
    "settings_from_pairs",
    "merge_settings",
]

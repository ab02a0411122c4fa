"""
Shared utilities for CLI commands.

Provides common output helpers used across CLI commands so that every
command prints in the same format.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from crossconfig.config.loader import (
    load_settings_file,
    merge_settings,
    settings_from_pairs,
)
from crossconfig.cross.settings import LIST_KEYS

logger = logging.getLogger(__name__)


# ============================================================================
# Settings Input
# ============================================================================


def gather_settings(
    settings_file: Optional[Path], pairs: Optional[List[str]]
) -> Dict[str, Any]:
    """
    Collect settings from an optional file and ``-C KEY=VALUE`` pairs.

    Pairs override keys from the file. A list key given as a single pair
    becomes a one-element list; its value is never split on whitespace.

    Args:
        settings_file: Path to YAML/JSON settings file, or None
        pairs: KEY=VALUE strings, or None

    Returns:
        Merged settings dictionary
    """
    file_settings = load_settings_file(settings_file) if settings_file else {}
    pair_settings = settings_from_pairs(pairs or [])
    for key in LIST_KEYS:
        if isinstance(pair_settings.get(key), str):
            pair_settings[key] = [pair_settings[key]]
    return merge_settings(file_settings, pair_settings)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_json(data: Any):
    """Print data as indented JSON on stdout."""
    print(json.dumps(data, indent=2, sort_keys=True))


def format_fields(fields: Dict[str, Any], width: int = 0) -> str:
    """
    Format key-value pairs as aligned lines.

    Args:
        fields: Key-value pairs to display
        width: Key column width (default: longest key)

    Returns:
        Formatted multi-line string
    """
    width = width or max((len(key) for key in fields), default=0)
    lines = []
    for key, value in fields.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(str(item) for item in value) if value else "(none)"
        elif value is None or value == "":
            value = "(none)"
        lines.append(f"{key.ljust(width)} : {value}")
    return "\n".join(lines)

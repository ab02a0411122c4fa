"""Settings input for crossconfig.

This module reads raw settings mappings from YAML or JSON files and from
``KEY=VALUE`` pairs as passed with pip's ``--config-settings`` / ``-C``.
The result is a plain dictionary for
:class:`~crossconfig.cross.settings.CrossConfigResolver`; no validation of
the recognized keys happens here.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import yaml

from crossconfig.core.exceptions import SettingsFileError

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def load_settings_file(path: Path) -> Dict[str, Any]:
    """
    Load a settings mapping from a YAML or JSON file.

    The format is chosen by file suffix; anything that is not ``.json`` is
    read as YAML (a superset of JSON).

    Args:
        path: Path to the settings file

    Returns:
        Settings dictionary (empty dict for an empty file)

    Raises:
        SettingsFileError: If the file is missing, unreadable, malformed,
            or its top level is not a mapping

    Example:
        >>> settings = load_settings_file(Path("cross-aarch64.yaml"))
        >>> settings["host"]
        'aarch64-unknown-linux-gnu'
    """
    path = Path(path)
    if not path.exists():
        raise SettingsFileError(f"Settings file not found: {path}")

    logger.debug(f"Loading settings from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in JSON_SUFFIXES:
                text = f.read()
                data = json.loads(text) if text.strip() else None
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsFileError(f"Cannot read settings file {path}: {e}")
    except json.JSONDecodeError as e:
        raise SettingsFileError(f"Invalid JSON in {path}: {e}")
    except yaml.YAMLError as e:
        raise SettingsFileError(f"Invalid YAML in {path}: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SettingsFileError(
            f"Settings file {path} must contain a mapping, got {type(data).__name__}"
        )

    return data


def settings_from_pairs(pairs: Iterable[str]) -> Dict[str, Any]:
    """
    Build a settings mapping from ``KEY=VALUE`` strings.

    Follows pip's ``--config-settings`` convention: a key given once maps to
    a string, a key given several times maps to a list of its values in
    order. Values are not shell-split.

    Args:
        pairs: Strings of the form 'KEY=VALUE'

    Returns:
        Settings dictionary

    Raises:
        SettingsFileError: If a pair has no '=' or an empty key

    Example:
        >>> settings_from_pairs(["host=aarch64-linux-gnu", "cflags=-O2", "cflags=-g"])
        {'host': 'aarch64-linux-gnu', 'cflags': ['-O2', '-g']}
    """
    settings: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SettingsFileError(f"Invalid setting {pair!r}, expected KEY=VALUE")

        if key not in settings:
            settings[key] = value
        elif isinstance(settings[key], list):
            settings[key].append(value)
        else:
            settings[key] = [settings[key], value]
    return settings


def merge_settings(*mappings: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge settings mappings; later mappings win key by key.

    Returns:
        New dictionary, inputs are not modified
    """
    merged: Dict[str, Any] = {}
    for mapping in mappings:
        for key, value in mapping.items():
            if key in merged:
                logger.debug(f"Setting '{key}' overridden")
            merged[key] = value
    return merged


__all__ = [
    "load_settings_file",
    "settings_from_pairs",
    "merge_settings",
]

"""
Process-wide active build configuration.

Build helper scripts and spawned subprocesses need to see the same
cross-compile configuration as the backend that resolved it. This module
holds that configuration in one explicit singleton:

- it is empty until the first :func:`crossconfig.cross.settings.resolve`
- it then holds exactly the most recently resolved configuration
- each resolve replaces it wholesale; the configuration itself is immutable

Only one build configuration is assumed to be active per process. Readers
are safe at any time; overlapping builds that resolve concurrently in one
process must serialize their resolve calls themselves (last writer wins).

Subprocesses receive the configuration through the ``CROSSCONFIG_SETTINGS``
environment variable, see :func:`export_environ`.

Example:
    >>> from crossconfig.cross.settings import resolve
    >>> from crossconfig.cross.state import get_active_config, export_environ
    >>>
    >>> resolve({"host": "aarch64-unknown-linux-gnu"})
    >>> get_active_config().is_cross_compiling
    True
    >>> subprocess.run(cmd, env=export_environ(get_active_config()))
"""

import json
import logging
import os
from typing import Mapping, Optional

from crossconfig.core.exceptions import MalformedConfigError
from crossconfig.cross.settings import CrossBuildConfig, CrossConfigResolver

logger = logging.getLogger(__name__)

ENVIRON_VARIABLE = "CROSSCONFIG_SETTINGS"


class ActiveBuildConfig:
    """
    Holder for the configuration of the build currently running in this process.

    There is a single shared instance, returned by :meth:`instance`. The
    holder only ever swaps one reference, so no lock is taken.
    """

    _instance: Optional["ActiveBuildConfig"] = None

    def __init__(self):
        self._config: Optional[CrossBuildConfig] = None

    @classmethod
    def instance(cls) -> "ActiveBuildConfig":
        """Get the process-wide holder, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def config(self) -> Optional[CrossBuildConfig]:
        """The active configuration, or None before the first resolve."""
        return self._config

    def publish(self, config: CrossBuildConfig):
        """
        Replace the active configuration.

        Args:
            config: Newly resolved configuration
        """
        if not isinstance(config, CrossBuildConfig):
            raise TypeError(
                f"expected CrossBuildConfig, got {type(config).__name__}"
            )
        if self._config is not None:
            logger.debug("Replacing active build configuration")
        self._config = config

    def clear(self):
        """Forget the active configuration."""
        self._config = None


def get_active_config() -> Optional[CrossBuildConfig]:
    """
    Get the most recently resolved configuration.

    Returns:
        Active CrossBuildConfig, or None if nothing was resolved yet
    """
    return ActiveBuildConfig.instance().config


def publish_active_config(config: CrossBuildConfig):
    """Make config the active configuration of this process."""
    ActiveBuildConfig.instance().publish(config)


def clear_active_config():
    """
    Clear the active configuration.

    Useful for testing, or between independent builds in one process.
    """
    ActiveBuildConfig.instance().clear()


def export_environ(
    config: CrossBuildConfig, env: Optional[Mapping[str, str]] = None
) -> dict:
    """
    Build a subprocess environment carrying config.

    Args:
        config: Configuration to hand to the subprocess
        env: Base environment (default: os.environ)

    Returns:
        New environment dictionary; env itself is not modified

    Raises:
        MalformedConfigError: If a passed-through extra setting cannot be
            represented as JSON (e.g. a date parsed from YAML)
    """
    settings = config.to_settings()
    try:
        payload = json.dumps(settings, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise MalformedConfigError(
            _unserializable_key(settings),
            f"cannot be exported to {ENVIRON_VARIABLE} as JSON: {e}",
        ) from e

    environ = dict(os.environ if env is None else env)
    environ[ENVIRON_VARIABLE] = payload
    return environ


def _unserializable_key(settings: Mapping) -> str:
    """Name the first setting that json.dumps rejects."""
    for key, value in settings.items():
        if not isinstance(key, str):
            return repr(key)
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            return key
    return ENVIRON_VARIABLE


def config_from_environ(
    environ: Optional[Mapping[str, str]] = None,
    resolver: Optional[CrossConfigResolver] = None,
) -> Optional[CrossBuildConfig]:
    """
    Re-create the configuration exported by a parent process.

    Args:
        environ: Environment to read (default: os.environ)
        resolver: Resolver to use (default: CrossConfigResolver())

    Returns:
        CrossBuildConfig, or None if the environment carries no configuration

    Raises:
        MalformedConfigError: If the variable does not hold a JSON object
    """
    environ = os.environ if environ is None else environ
    payload = environ.get(ENVIRON_VARIABLE)
    if payload is None:
        return None

    try:
        settings = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedConfigError(ENVIRON_VARIABLE, f"invalid JSON: {e}")

    if not isinstance(settings, dict):
        raise MalformedConfigError(
            ENVIRON_VARIABLE, f"expected a JSON object, got {type(settings).__name__}"
        )

    logger.debug(f"Loaded build configuration from {ENVIRON_VARIABLE}")
    return (resolver or CrossConfigResolver()).resolve(settings)


__all__ = [
    "ENVIRON_VARIABLE",
    "ActiveBuildConfig",
    "get_active_config",
    "publish_active_config",
    "clear_active_config",
    "export_environ",
    "config_from_environ",
]

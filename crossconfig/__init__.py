"""
crossconfig - cross-compilation settings for Python build backends.

Build frontends pass build backends a flat settings mapping. crossconfig
parses the ``host`` triple found there, applies the documented defaults of
the other cross-compilation keys and exposes the result as an immutable
configuration shared by everything running in the build process.

Usage:
    import crossconfig

    config = crossconfig.resolve({"host": "armv7-unknown-linux-gnueabihf"})
    config.host.arch          # 'arm'
    config.host.sub           # 'v7'
    config.is_cross_compiling # True
"""

from crossconfig.core.exceptions import (
    CrossConfigError,
    InvalidTripleError,
    MalformedConfigError,
    SettingsFileError,
)
from crossconfig.cross import (
    UNKNOWN,
    NATIVE,
    AUTO,
    HostTriple,
    TripleParser,
    parse_triple,
    CrossBuildConfig,
    CrossConfigResolver,
    is_cross_compiling,
    resolve,
    get_active_config,
    clear_active_config,
    export_environ,
    config_from_environ,
)

__version__ = "0.1.0"

__all__ = [
    "CrossConfigError",
    "InvalidTripleError",
    "MalformedConfigError",
    "SettingsFileError",
    "UNKNOWN",
    "NATIVE",
    "AUTO",
    "HostTriple",
    "TripleParser",
    "parse_triple",
    "CrossBuildConfig",
    "CrossConfigResolver",
    "is_cross_compiling",
    "resolve",
    "get_active_config",
    "clear_active_config",
    "export_environ",
    "config_from_environ",
]

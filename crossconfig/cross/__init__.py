"""
Cross-compilation support for crossconfig.

This module provides host triple parsing, resolution of cross-compile
settings into an immutable configuration, and the process-wide active
configuration shared with build helpers and subprocesses.
"""

from crossconfig.cross.triples import UNKNOWN, HostTriple, TripleParser, parse_triple
from crossconfig.cross.settings import (
    NATIVE,
    AUTO,
    CrossBuildConfig,
    CrossConfigResolver,
    is_cross_compiling,
    resolve,
)
from crossconfig.cross.state import (
    ActiveBuildConfig,
    get_active_config,
    clear_active_config,
    export_environ,
    config_from_environ,
)
from crossconfig.cross.platform_tags import guess_platform_tag, native_platform_tag

__all__ = [
    "UNKNOWN",
    "HostTriple",
    "TripleParser",
    "parse_triple",
    "NATIVE",
    "AUTO",
    "CrossBuildConfig",
    "CrossConfigResolver",
    "is_cross_compiling",
    "resolve",
    "ActiveBuildConfig",
    "get_active_config",
    "clear_active_config",
    "export_environ",
    "config_from_environ",
    "guess_platform_tag",
    "native_platform_tag",
]

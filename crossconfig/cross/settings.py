"""
Cross-compilation settings resolution.

Build frontends hand build backends a flat, string-keyed settings mapping
(the same dict that carries ``--config-settings``). This module reads the
cross-compilation keys out of that mapping, applies their documented
defaults and produces an immutable :class:`CrossBuildConfig`.

Recognized keys:

    ============== =============== ========== ==================================
    Key            Type            Default    Meaning
    ============== =============== ========== ==================================
    host           str             "native"   host triple; else cross-compiling
    host_prefix    str             absent     host Python installation prefix
    sysroot        str             absent     host filesystem root on build box
    platform_tag   str             "auto"     wheel platform tag override
    include_dirs   list[str]       []         compiler include search path
    lib_dirs       list[str]       []         linker library search path
    cc             list[str]       absent     C compiler argv
    c++            list[str]       absent     C++ compiler argv
    cflags         list[str]       []         pre-split C flags
    cxxflags       list[str]       []         pre-split C++ flags
    ldflags        list[str]       []         pre-split link flags
    ============== =============== ========== ==================================

Every other key is passed through untouched in ``CrossBuildConfig.extra``;
backend specific keys should be namespaced as ``"<backend>:<key>"``.

Usage:
    from crossconfig.cross.settings import resolve

    config = resolve({"host": "aarch64-linux-android", "cflags": ["-O2"]})
    if config.is_cross_compiling:
        print(f"Cross-compiling for {config.host}")
"""

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from crossconfig.core.exceptions import MalformedConfigError
from crossconfig.core.platform import detect_build_triple
from crossconfig.cross.triples import HostTriple, TripleParser
from crossconfig.cross.platform_tags import guess_platform_tag, native_platform_tag

logger = logging.getLogger(__name__)

NATIVE = "native"
AUTO = "auto"
NAMESPACE_SEPARATOR = ":"

# Settings key -> CrossBuildConfig attribute
SCALAR_KEYS = {
    "host": "host",
    "host_prefix": "host_prefix",
    "sysroot": "sysroot",
    "platform_tag": "platform_tag",
}

LIST_KEYS = {
    "include_dirs": "include_dirs",
    "lib_dirs": "lib_dirs",
    "cc": "cc",
    "c++": "cxx",
    "cflags": "cflags",
    "cxxflags": "cxxflags",
    "ldflags": "ldflags",
}

# List keys that default to "absent" rather than an empty list
OPTIONAL_LIST_KEYS = frozenset({"cc", "c++"})

RECOGNIZED_KEYS = frozenset(SCALAR_KEYS) | frozenset(LIST_KEYS)


def is_cross_compiling(settings: Mapping[str, Any]) -> bool:
    """
    Check whether a settings mapping requests a cross-compile.

    This is true whenever ``host`` is set to anything but ``"native"``,
    even if the triple happens to describe the build machine itself.

    Args:
        settings: Raw settings mapping

    Returns:
        True if cross-compiling
    """
    return settings.get("host", NATIVE) != NATIVE


@dataclass(frozen=True)
class CrossBuildConfig:
    """
    Resolved cross-compilation configuration.

    Instances are immutable; sequences are tuples and ``extra`` is a
    read-only mapping, so a published configuration can be shared freely
    between readers.

    Attributes:
        host: Parsed host triple, or the string "native"
        host_prefix: Host Python installation prefix, if given
        sysroot: Host filesystem root on the build machine, if given
        platform_tag: Wheel platform tag, or "auto"
        include_dirs: Compiler include search path
        lib_dirs: Linker library search path
        cc: C compiler argv, if overridden
        cxx: C++ compiler argv, if overridden (settings key "c++")
        cflags: C compile flags
        cxxflags: C++ compile flags
        ldflags: Link flags
        extra: Unrecognized settings, passed through untouched
    """

    host: Union[HostTriple, str] = NATIVE
    host_prefix: Optional[str] = None
    sysroot: Optional[str] = None
    platform_tag: str = AUTO
    include_dirs: Tuple[str, ...] = ()
    lib_dirs: Tuple[str, ...] = ()
    cc: Optional[Tuple[str, ...]] = None
    cxx: Optional[Tuple[str, ...]] = None
    cflags: Tuple[str, ...] = ()
    cxxflags: Tuple[str, ...] = ()
    ldflags: Tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self):
        if self.host != NATIVE and not isinstance(self.host, HostTriple):
            raise MalformedConfigError(
                "host",
                f"expected a HostTriple or {NATIVE!r}, got {self.host!r}; "
                "parse triple strings with parse_triple() first",
            )

    @property
    def is_cross_compiling(self) -> bool:
        """True iff host is anything other than "native"."""
        return self.host != NATIVE

    @property
    def is_null_cross_compile(self) -> bool:
        """
        True when cross-compiling for the very machine running the build.

        Such builds exercise the cross-compile code paths without needing
        a second machine.
        """
        if not self.is_cross_compiling:
            return False

        return self.host.same_machine(detect_build_triple())

    def backend_settings(self, backend: str) -> Dict[str, Any]:
        """
        Get the namespaced settings of one backend.

        Args:
            backend: Backend name, e.g. 'meson'

        Returns:
            Dictionary of that backend's keys with the namespace stripped

        Example:
            >>> config = resolve({"meson:cross_file": "cross.ini"})
            >>> config.backend_settings("meson")
            {'cross_file': 'cross.ini'}
        """
        prefix = f"{backend}{NAMESPACE_SEPARATOR}"
        return {
            key[len(prefix):]: value
            for key, value in self.extra.items()
            if key.startswith(prefix)
        }

    def effective_platform_tag(self) -> Optional[str]:
        """
        Get the platform tag to build wheels for.

        Returns:
            The explicit platform_tag, or for "auto" the native tag (native
            builds) or a tag guessed from the host triple; None if no guess
            can be made
        """
        if self.platform_tag != AUTO:
            return self.platform_tag
        if not self.is_cross_compiling:
            return native_platform_tag()
        return guess_platform_tag(self.host)

    def to_settings(self) -> Dict[str, Any]:
        """
        Convert back to a flat settings mapping.

        Only keys that differ from their defaults are emitted, followed by
        the passed-through extra keys. Resolving the result yields an
        equal configuration.

        Returns:
            Settings dictionary with list values as lists
        """
        settings: Dict[str, Any] = {}
        if self.is_cross_compiling:
            settings["host"] = str(self.host)
        if self.host_prefix is not None:
            settings["host_prefix"] = self.host_prefix
        if self.sysroot is not None:
            settings["sysroot"] = self.sysroot
        if self.platform_tag != AUTO:
            settings["platform_tag"] = self.platform_tag
        for key, attr in LIST_KEYS.items():
            value = getattr(self, attr)
            if value:
                settings[key] = list(value)
        settings.update(self.extra)
        return settings

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "host": self.host.to_dict() if self.is_cross_compiling else NATIVE,
            "cross_compiling": self.is_cross_compiling,
            "host_prefix": self.host_prefix,
            "sysroot": self.sysroot,
            "platform_tag": self.platform_tag,
            "include_dirs": list(self.include_dirs),
            "lib_dirs": list(self.lib_dirs),
            "cc": list(self.cc) if self.cc is not None else None,
            "c++": list(self.cxx) if self.cxx is not None else None,
            "cflags": list(self.cflags),
            "cxxflags": list(self.cxxflags),
            "ldflags": list(self.ldflags),
            "extra": dict(self.extra),
        }


class CrossConfigResolver:
    """
    Resolve raw settings mappings into CrossBuildConfig instances.

    Resolution is a pure function of the mapping: nothing is read from the
    filesystem and the input is never modified.
    """

    def __init__(self, triple_parser: Optional[TripleParser] = None):
        """
        Initialize resolver.

        Args:
            triple_parser: Parser for the host key (default: TripleParser())
        """
        self.triple_parser = triple_parser or TripleParser()

    def resolve(self, settings: Mapping[str, Any]) -> CrossBuildConfig:
        """
        Resolve a settings mapping.

        Args:
            settings: Flat settings mapping (string keys, string or list values)

        Returns:
            Validated, immutable CrossBuildConfig

        Raises:
            MalformedConfigError: If a key holds a value of the wrong shape
            InvalidTripleError: If host is not a parseable triple
        """
        if not isinstance(settings, Mapping):
            raise MalformedConfigError(
                "<settings>", f"expected a mapping, got {type(settings).__name__}"
            )

        values: Dict[str, Any] = {}

        # is_cross_compiling() counts a null host as cross-compiling
        if "host" in settings and settings["host"] is None:
            raise MalformedConfigError(
                "host", f"expected a host triple or {NATIVE!r}, got None"
            )
        host = self._get_string(settings, "host")
        if host is not None and host != NATIVE:
            values["host"] = self.triple_parser.parse(host)

        for key in ("host_prefix", "sysroot"):
            values[SCALAR_KEYS[key]] = self._get_path(settings, key)

        platform_tag = self._get_string(settings, "platform_tag")
        if platform_tag is not None:
            values["platform_tag"] = platform_tag

        for key, attr in LIST_KEYS.items():
            items = self._get_list(settings, key)
            if items is not None:
                values[attr] = items

        values["extra"] = MappingProxyType(self._collect_extra(settings))

        config = CrossBuildConfig(**values)
        if config.is_cross_compiling:
            logger.debug(f"Resolved cross-compile configuration for host {config.host}")
        else:
            logger.debug("Resolved native build configuration")
        return config

    def _get_string(self, settings: Mapping[str, Any], key: str) -> Optional[str]:
        value = settings.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedConfigError(
                key, f"expected a string, got {type(value).__name__}"
            )
        return value

    def _get_path(self, settings: Mapping[str, Any], key: str) -> Optional[str]:
        value = settings.get(key)
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return self._get_string(settings, key)

    def _get_list(
        self, settings: Mapping[str, Any], key: str
    ) -> Optional[Tuple[str, ...]]:
        """Read a list-valued key, rejecting unsplit scalar strings."""
        value = settings.get(key)
        if value is None:
            return None

        if isinstance(value, (str, bytes)):
            raise MalformedConfigError(
                key,
                f"expected a list of strings, got a single string {value!r}; "
                "split the value into separate arguments before passing it",
            )
        if not isinstance(value, (list, tuple)):
            raise MalformedConfigError(
                key, f"expected a list of strings, got {type(value).__name__}"
            )

        items = []
        for index, item in enumerate(value):
            if isinstance(item, os.PathLike):
                item = os.fspath(item)
            if not isinstance(item, str):
                raise MalformedConfigError(
                    key, f"item {index} must be a string, got {type(item).__name__}"
                )
            items.append(item)

        if key in OPTIONAL_LIST_KEYS and not items:
            raise MalformedConfigError(key, "compiler command must not be empty")

        return tuple(items)

    def _collect_extra(self, settings: Mapping[str, Any]) -> Dict[str, Any]:
        extra = {}
        for key, value in settings.items():
            if key in RECOGNIZED_KEYS:
                continue
            if isinstance(key, str) and NAMESPACE_SEPARATOR in key:
                logger.debug(f"Passing through backend setting '{key}'")
            else:
                logger.warning(
                    f"Unrecognized setting '{key}' passed through; "
                    f"backend specific keys should be namespaced as '<backend>:{key}'"
                )
            extra[key] = value
        return extra


_default_resolver = CrossConfigResolver()


def resolve(settings: Mapping[str, Any]) -> CrossBuildConfig:
    """
    Resolve settings and publish the result as the active configuration.

    Args:
        settings: Flat settings mapping

    Returns:
        Resolved CrossBuildConfig, also available afterwards through
        :func:`crossconfig.cross.state.get_active_config`

    Raises:
        MalformedConfigError: If a key holds a value of the wrong shape
        InvalidTripleError: If host is not a parseable triple
    """
    from crossconfig.cross.state import publish_active_config

    config = _default_resolver.resolve(settings)
    publish_active_config(config)
    return config


__all__ = [
    "NATIVE",
    "AUTO",
    "RECOGNIZED_KEYS",
    "is_cross_compiling",
    "CrossBuildConfig",
    "CrossConfigResolver",
    "resolve",
]

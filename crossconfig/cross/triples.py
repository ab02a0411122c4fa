"""
Host triple parsing.

This module parses host triples such as ``aarch64-unknown-linux-gnu`` into
structured fields. A triple has the general format
``<arch><sub>-<vendor>-<sys>-<abi>``, where:

    <arch>    x86_64, aarch64, arm, thumb, riscv64, wasm32, etc.
    <sub>     sub-architecture fused onto arch, e.g. v6m, v7, v7a on ARM
    <vendor>  pc, apple, unknown, nvidia, etc.
    <sys>     linux, darwin, windows, none, wasi, etc.
    <abi>     gnu, musl, gnueabihf, android, msvc, eabi, etc.

Parsing is permissive: toolchains invent new triples all the time, so
unrecognized components are kept verbatim and missing ones become
``"unknown"``. Only structurally broken input (empty string, empty
components, more than four components) is rejected.

Usage:
    from crossconfig.cross.triples import parse_triple

    triple = parse_triple("armv7-unknown-linux-gnueabihf")
    print(triple.arch, triple.sub)   # arm v7
    print(triple)                    # armv7-unknown-linux-gnueabihf
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from crossconfig.core.exceptions import InvalidTripleError

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

# v5te, v6m, v7, v7a, v7em, v8.1a, v8m.main
_ARM_SUB = re.compile(r"v\d+(?:\.\d+)?[a-z]*(?:\.[a-z]+)?")
_SPARC_SUB = re.compile(r"v[89]")
_ARM64_SUB = re.compile(r"e")
_X86_64_SUB = re.compile(r"h")

_VERSION_SUFFIX = re.compile(r"[0-9][0-9._]*$")

_ARCH_ALIASES = {
    "arm64": "aarch64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "ppc": "powerpc",
    "ppc64": "powerpc64",
    "ppc64le": "powerpc64le",
}


def _system_base(token: str) -> str:
    """Strip a trailing version from a sys token (``darwin23.1.0`` -> ``darwin``)."""
    return _VERSION_SUFFIX.sub("", token.lower())


@dataclass(frozen=True)
class HostTriple:
    """
    Structured host triple.

    Every field holds either a token taken from the parsed string or the
    sentinel ``"unknown"``. ``sub`` is the only field allowed to be empty,
    meaning the architecture carries no sub-architecture suffix.

    Attributes:
        arch: Architecture root (e.g. 'aarch64', 'arm', 'x86_64')
        sub: Sub-architecture suffix (e.g. 'v7', 'v6m') or ''
        vendor: Vendor (e.g. 'unknown', 'apple', 'pc')
        sys: Operating system or environment (e.g. 'linux', 'darwin', 'none')
        abi: ABI / environment (e.g. 'gnu', 'musl', 'gnueabihf', 'android')
    """

    arch: str
    sub: str = ""
    vendor: str = UNKNOWN
    sys: str = UNKNOWN
    abi: str = UNKNOWN

    def __post_init__(self):
        for name in ("arch", "sub", "vendor", "sys", "abi"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidTripleError(
                    value, f"field '{name}' must be a string, got {type(value).__name__}"
                )
            if "-" in value:
                raise InvalidTripleError(value, f"field '{name}' must not contain '-'")
            if name != "sub" and not value:
                raise InvalidTripleError(value, f"field '{name}' must not be empty")

    @property
    def machine(self) -> str:
        """Architecture with its sub-architecture suffix, e.g. ``armv7``."""
        return f"{self.arch}{self.sub}"

    @property
    def normalized_arch(self) -> str:
        """
        Architecture with common aliases folded.

        Example:
            >>> HostTriple("arm64", vendor="apple", sys="darwin").normalized_arch
            'aarch64'
        """
        return _ARCH_ALIASES.get(self.arch, self.arch)

    @property
    def is_linux(self) -> bool:
        return _system_base(self.sys) == "linux"

    @property
    def is_darwin(self) -> bool:
        return _system_base(self.sys) in ("darwin", "macos", "macosx")

    @property
    def is_windows(self) -> bool:
        return _system_base(self.sys) in ("windows", "win", "mingw", "cygwin")

    @property
    def is_android(self) -> bool:
        return _system_base(self.abi).startswith("android") or (
            _system_base(self.sys) == "android"
        )

    @property
    def is_wasm(self) -> bool:
        return self.arch in ("wasm32", "wasm64")

    def canonical(self) -> str:
        """
        Get the canonical text form ``<arch><sub>-<vendor>-<sys>-<abi>``.

        All four segments are always present; indeterminate segments read
        ``unknown``.

        Returns:
            Canonical triple string
        """
        return f"{self.machine}-{self.vendor}-{self.sys}-{self.abi}"

    def short(self) -> str:
        """
        Get the shortest spelling that parses back to this triple.

        An unknown vendor or abi is only dropped where the grammar allows
        it, e.g. ``aarch64-linux-android`` rather than
        ``aarch64-unknown-linux-android``.

        Returns:
            Shortest equivalent triple string
        """
        candidates = [
            self.machine,
            f"{self.machine}-{self.sys}",
            f"{self.machine}-{self.sys}-{self.abi}",
            f"{self.machine}-{self.vendor}-{self.sys}",
        ]
        for candidate in candidates:
            if parse_triple(candidate) == self:
                return candidate
        return self.canonical()

    def same_machine(self, other: "HostTriple") -> bool:
        """
        Check whether two triples describe the same kind of machine.

        Architecture aliases and sys version suffixes are ignored, and an
        ``unknown`` vendor on either side matches any vendor, so
        ``x86_64-pc-linux-gnu`` matches ``x86_64-unknown-linux-gnu``.

        Args:
            other: Triple to compare against

        Returns:
            True if both triples target the same machine
        """
        if self.vendor != other.vendor and UNKNOWN not in (self.vendor, other.vendor):
            return False
        return (
            self.normalized_arch == other.normalized_arch
            and self.sub == other.sub
            and _system_base(self.sys) == _system_base(other.sys)
            and self.abi == other.abi
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "arch": self.arch,
            "sub": self.sub,
            "vendor": self.vendor,
            "sys": self.sys,
            "abi": self.abi,
        }

    def __str__(self) -> str:
        return self.canonical()


class TripleParser:
    """
    Parse host triple strings into :class:`HostTriple` values.

    The lookup tables are class attributes so a subclass can extend them
    for targets this module does not know about.

    Three-component triples are ambiguous: ``arch-X-Y`` may be missing its
    vendor (``aarch64-linux-android``) or its abi (``x86_64-apple-darwin``).
    The parser resolves this with a heuristic: when ``X`` is listed in
    :attr:`KNOWN_SYSTEMS` the vendor is taken to be missing, otherwise the
    abi is. A vendor that happens to share a name with an operating system
    will therefore be misread; spell such triples out with all four
    components.
    """

    # Architecture roots mapped to the pattern their sub-architecture
    # suffix must fully match (None: the root takes no suffix).
    ARCH_SUBARCHES: Dict[str, Optional["re.Pattern[str]"]] = {
        "arm": _ARM_SUB,
        "armeb": _ARM_SUB,
        "thumb": _ARM_SUB,
        "thumbeb": _ARM_SUB,
        "aarch64": None,
        "aarch64_be": None,
        "arm64": _ARM64_SUB,
        "x86_64": _X86_64_SUB,
        "x86": None,
        "i386": None,
        "i486": None,
        "i586": None,
        "i686": None,
        "mips": None,
        "mipsel": None,
        "mips64": None,
        "mips64el": None,
        "powerpc": None,
        "powerpc64": None,
        "powerpc64le": None,
        "ppc": None,
        "ppc64": None,
        "ppc64le": None,
        "riscv32": None,
        "riscv64": None,
        "s390x": None,
        "sparc": _SPARC_SUB,
        "sparc64": None,
        "loongarch64": None,
        "wasm32": None,
        "wasm64": None,
        "nvptx64": None,
        "hexagon": None,
        "m68k": None,
    }

    KNOWN_SYSTEMS = frozenset(
        {
            "linux",
            "darwin",
            "macos",
            "macosx",
            "ios",
            "tvos",
            "watchos",
            "visionos",
            "windows",
            "win32",
            "mingw32",
            "cygwin",
            "freebsd",
            "netbsd",
            "openbsd",
            "dragonfly",
            "solaris",
            "illumos",
            "aix",
            "haiku",
            "hurd",
            "fuchsia",
            "redox",
            "nto",
            "vxworks",
            "uefi",
            "wasi",
            "emscripten",
            "cuda",
            "none",
        }
    )

    def __init__(self):
        self._roots = sorted(self.ARCH_SUBARCHES, key=len, reverse=True)

    def parse(self, raw: str) -> HostTriple:
        """
        Parse a host triple string.

        Args:
            raw: Hyphen-delimited triple with one to four components

        Returns:
            Parsed HostTriple; undetermined fields are ``"unknown"``

        Raises:
            InvalidTripleError: If raw is not a string, is empty, has an
                empty component or has more than four components

        Example:
            >>> TripleParser().parse("aarch64-unknown-linux-gnu")
            HostTriple(arch='aarch64', sub='', vendor='unknown', sys='linux', abi='gnu')
        """
        if not isinstance(raw, str):
            raise InvalidTripleError(raw, f"expected a string, got {type(raw).__name__}")

        text = raw.strip()
        if not text:
            raise InvalidTripleError(raw, "empty string")

        parts = text.split("-")
        if any(not part for part in parts):
            raise InvalidTripleError(raw, "empty component")
        if len(parts) > 4:
            raise InvalidTripleError(
                raw, f"expected at most 4 components, got {len(parts)}"
            )

        arch, sub = self.split_machine(parts[0])
        vendor = sys_name = abi = UNKNOWN

        if len(parts) == 4:
            vendor, sys_name, abi = parts[1:]
        elif len(parts) == 3:
            if self.is_known_system(parts[1]):
                sys_name, abi = parts[1:]
            else:
                vendor, sys_name = parts[1:]
        elif len(parts) == 2:
            sys_name = parts[1]

        triple = HostTriple(arch=arch, sub=sub, vendor=vendor, sys=sys_name, abi=abi)
        logger.debug(f"Parsed host triple {raw!r} as {triple.to_dict()}")
        return triple

    def split_machine(self, component: str) -> Tuple[str, str]:
        """
        Split the first triple component into architecture and sub-architecture.

        Args:
            component: First component, e.g. 'armv7', 'thumbv6m', 'x86_64'

        Returns:
            Tuple of (arch, sub); sub is '' when no known suffix matched
        """
        for root in self._roots:
            if not component.startswith(root):
                continue
            rest = component[len(root):]
            if not rest:
                return component, ""
            pattern = self.ARCH_SUBARCHES[root]
            if pattern is not None and pattern.fullmatch(rest):
                return root, rest
        return component, ""

    def is_known_system(self, token: str) -> bool:
        """Check whether token names a known sys, ignoring a version suffix."""
        lowered = token.lower()
        return lowered in self.KNOWN_SYSTEMS or _system_base(lowered) in self.KNOWN_SYSTEMS


_default_parser = TripleParser()


def parse_triple(raw: str) -> HostTriple:
    """
    Parse a host triple string with the default parser.

    Args:
        raw: Triple string, e.g. 'aarch64-linux-android'

    Returns:
        Parsed HostTriple

    Raises:
        InvalidTripleError: If the string is structurally unparseable
    """
    return _default_parser.parse(raw)


__all__ = [
    "UNKNOWN",
    "HostTriple",
    "TripleParser",
    "parse_triple",
]

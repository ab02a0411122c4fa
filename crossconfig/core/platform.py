"""
Build machine detection for crossconfig.

This module detects the triple of the machine performing the build. It is
used to spot "null" cross-compiles, where the requested host triple names
the same machine the build runs on (useful for testing cross-compile code
paths without a second machine).

Usage:
    from crossconfig.core.platform import detect_build_triple

    build = detect_build_triple()
    print(f"Building on {build}")
"""

import functools
import logging
import platform
import sysconfig

from crossconfig.cross.triples import HostTriple, parse_triple, UNKNOWN
from crossconfig.core.exceptions import InvalidTripleError

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def detect_build_triple() -> HostTriple:
    """
    Detect the host triple of the current (build) machine.

    This function is cached - it only runs detection once per process.

    Returns:
        HostTriple describing the build machine

    Example:
        >>> build = detect_build_triple()
        >>> print(build.canonical())
        x86_64-pc-linux-gnu
    """
    gnu_type = sysconfig.get_config_var("HOST_GNU_TYPE")
    if gnu_type:
        try:
            triple = parse_triple(gnu_type)
            logger.debug(f"Build triple from HOST_GNU_TYPE: {triple}")
            return triple
        except InvalidTripleError as e:
            logger.debug(f"Ignoring unusable HOST_GNU_TYPE: {e}")

    triple = HostTriple(
        arch=_detect_architecture(),
        vendor=_detect_vendor(),
        sys=_detect_system(),
        abi=_detect_abi(),
    )
    logger.debug(f"Build triple from platform module: {triple}")
    return triple


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Architecture in triple spelling: 'x86_64', 'aarch64', 'i686', ...
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "aarch64"
    elif machine in ("i386", "i686", "x86"):
        return "i686"
    elif machine:
        # Return original for unknown architectures
        return machine
    else:
        return UNKNOWN


def _detect_vendor() -> str:
    system = platform.system().lower()
    if system == "darwin":
        return "apple"
    elif system == "windows":
        return "pc"
    return UNKNOWN


def _detect_system() -> str:
    """
    Detect operating system.

    Returns:
        sys field: 'linux', 'darwin', 'windows', ... or 'unknown'
    """
    system = platform.system().lower()
    return system or UNKNOWN


def _detect_abi() -> str:
    """
    Detect the ABI field.

    Returns:
        'gnu' or 'musl' on Linux, 'msvc' on Windows, 'unknown' otherwise
    """
    system = platform.system().lower()

    if system == "linux":
        libc, _ = platform.libc_ver()
        if libc == "glibc":
            return "gnu"
        # platform.libc_ver() reports nothing on musl
        return "musl" if not libc else libc
    elif system == "windows":
        return "msvc"
    return UNKNOWN


def clear_build_triple_cache():
    """
    Clear the build triple detection cache.

    This forces the next call to detect_build_triple() to re-detect.
    Useful for testing.
    """
    detect_build_triple.cache_clear()


__all__ = [
    "detect_build_triple",
    "clear_build_triple_cache",
]

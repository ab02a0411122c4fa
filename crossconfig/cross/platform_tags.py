"""
Wheel platform tag helpers.

When the ``platform_tag`` setting is left at ``"auto"``, backends need a
platform tag for the wheels they build. For native builds that is the
running interpreter's platform; for cross builds it has to be derived from
the host triple. Only the common hosts are mapped; anything else yields
``None`` and the backend has to ask the user for an explicit tag.
"""

import logging
import re
import sysconfig
from typing import Optional

from crossconfig.cross.triples import HostTriple

logger = logging.getLogger(__name__)

DEFAULT_ANDROID_API_LEVEL = 21
DEFAULT_IOS_DEPLOYMENT_TARGET = "13_0"

_LINUX_ARCHES = {
    "x86_64": "x86_64",
    "aarch64": "aarch64",
    "x86": "i686",
    "powerpc64le": "ppc64le",
    "powerpc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loongarch64",
}

_ANDROID_ABIS = {
    "aarch64": "arm64_v8a",
    "arm": "armeabi_v7a",
    "x86_64": "x86_64",
    "x86": "x86",
}

_WINDOWS_TAGS = {
    "x86_64": "win_amd64",
    "x86": "win32",
    "aarch64": "win_arm64",
}


def normalize_platform_tag(platform_tag: str) -> str:
    """
    Normalize a platform string into wheel tag form.

    Example:
        >>> normalize_platform_tag("macosx-11.0-arm64")
        'macosx_11_0_arm64'
    """
    return platform_tag.replace("-", "_").replace(".", "_")


def native_platform_tag() -> str:
    """Get the platform tag of the running interpreter."""
    return normalize_platform_tag(sysconfig.get_platform())


def guess_platform_tag(triple: HostTriple) -> Optional[str]:
    """
    Guess a generic wheel platform tag for a host triple.

    Args:
        triple: Host triple of the cross-compile target

    Returns:
        Platform tag (e.g. 'linux_aarch64', 'android_21_arm64_v8a'),
        or None if the host is not one of the mapped platforms

    Example:
        >>> guess_platform_tag(parse_triple("aarch64-unknown-linux-gnu"))
        'linux_aarch64'
    """
    arch = triple.normalized_arch

    if triple.is_android:
        android_abi = _ANDROID_ABIS.get(arch)
        if android_abi is None:
            return _no_guess(triple)
        match = re.search(r"(\d+)$", triple.abi)
        api_level = int(match.group(1)) if match else DEFAULT_ANDROID_API_LEVEL
        return f"android_{api_level}_{android_abi}"

    if triple.is_linux:
        if arch == "arm" and triple.sub.startswith(("v6", "v7")):
            return f"linux_arm{triple.sub[:2]}l"
        linux_arch = _LINUX_ARCHES.get(arch)
        if linux_arch is None:
            return _no_guess(triple)
        return f"linux_{linux_arch}"

    if triple.is_darwin:
        if arch == "aarch64":
            return "macosx_11_0_arm64"
        if arch == "x86_64":
            return "macosx_10_9_x86_64"
        return _no_guess(triple)

    if triple.sys.lower().startswith("ios"):
        sdk = "iphonesimulator" if triple.abi == "simulator" else "iphoneos"
        ios_arch = "arm64" if arch == "aarch64" else arch
        if ios_arch not in ("arm64", "x86_64"):
            return _no_guess(triple)
        return f"ios_{DEFAULT_IOS_DEPLOYMENT_TARGET}_{ios_arch}_{sdk}"

    if triple.is_windows:
        tag = _WINDOWS_TAGS.get(arch)
        if tag is None:
            return _no_guess(triple)
        return tag

    return _no_guess(triple)


def _no_guess(triple: HostTriple) -> None:
    logger.debug(f"No platform tag mapping for host {triple}")
    return None


__all__ = [
    "normalize_platform_tag",
    "native_platform_tag",
    "guess_platform_tag",
]

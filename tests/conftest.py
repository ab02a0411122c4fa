"""
Pytest configuration and shared fixtures for crossconfig tests.
"""

import pytest

from crossconfig.core.platform import clear_build_triple_cache
from crossconfig.cross.state import clear_active_config


@pytest.fixture(autouse=True)
def clean_process_state():
    """Start and finish every test without an active config or cached build triple."""
    clear_active_config()
    clear_build_triple_cache()
    yield
    clear_active_config()
    clear_build_triple_cache()


@pytest.fixture
def android_settings():
    """Settings for an Android arm64 cross-compile."""
    return {
        "host": "aarch64-linux-android",
        "sysroot": "/opt/android-ndk/toolchains/llvm/prebuilt/linux-x86_64/sysroot",
        "include_dirs": ["/sysroot/usr/include"],
        "cc": ["aarch64-linux-android21-clang"],
        "c++": ["aarch64-linux-android21-clang++"],
        "cflags": ["-O2", "-fPIC"],
    }


@pytest.fixture
def settings_file(tmp_path):
    """A YAML settings file for a Raspberry Pi cross-compile."""
    path = tmp_path / "cross-rpi.yaml"
    path.write_text(
        "host: armv7-unknown-linux-gnueabihf\n"
        "sysroot: /opt/rpi-sysroot\n"
        "lib_dirs:\n"
        "  - /opt/rpi-sysroot/usr/lib/arm-linux-gnueabihf\n"
        "cflags: [-O2, -mfpu=neon]\n"
        "meson:cross_file: rpi.ini\n",
        encoding="utf-8",
    )
    return path

"""
Unit tests for build machine detection.

Tests cover:
- Detection from sysconfig HOST_GNU_TYPE
- Fallback detection from the platform module
- Architecture normalization
- ABI detection (glibc, musl, MSVC)
- Cache behavior
"""

from unittest.mock import patch

from crossconfig.core.platform import (
    clear_build_triple_cache,
    detect_build_triple,
    _detect_abi,
    _detect_architecture,
)
from crossconfig.cross.triples import HostTriple


class TestHostGnuType:
    """Tests for detection via sysconfig."""

    @patch("sysconfig.get_config_var")
    def test_uses_host_gnu_type(self, mock_config_var):
        """Test that HOST_GNU_TYPE is parsed when available."""
        mock_config_var.return_value = "x86_64-pc-linux-gnu"

        triple = detect_build_triple()

        assert triple == HostTriple(
            arch="x86_64", vendor="pc", sys="linux", abi="gnu"
        )
        mock_config_var.assert_called_with("HOST_GNU_TYPE")

    @patch("platform.libc_ver")
    @patch("platform.system")
    @patch("platform.machine")
    @patch("sysconfig.get_config_var")
    def test_unparseable_host_gnu_type_falls_back(
        self, mock_config_var, mock_machine, mock_system, mock_libc
    ):
        """Test that a broken HOST_GNU_TYPE is ignored."""
        mock_config_var.return_value = "x86_64--linux"
        mock_machine.return_value = "x86_64"
        mock_system.return_value = "Linux"
        mock_libc.return_value = ("glibc", "2.35")

        triple = detect_build_triple()

        assert triple.canonical() == "x86_64-unknown-linux-gnu"


class TestPlatformFallback:
    """Tests for detection via the platform module."""

    @patch("platform.libc_ver")
    @patch("platform.system")
    @patch("platform.machine")
    @patch("sysconfig.get_config_var")
    def test_linux_glibc(self, mock_config_var, mock_machine, mock_system, mock_libc):
        mock_config_var.return_value = None
        mock_machine.return_value = "aarch64"
        mock_system.return_value = "Linux"
        mock_libc.return_value = ("glibc", "2.35")

        assert detect_build_triple().canonical() == "aarch64-unknown-linux-gnu"

    @patch("platform.libc_ver")
    @patch("platform.system")
    @patch("platform.machine")
    @patch("sysconfig.get_config_var")
    def test_linux_musl(self, mock_config_var, mock_machine, mock_system, mock_libc):
        mock_config_var.return_value = None
        mock_machine.return_value = "x86_64"
        mock_system.return_value = "Linux"
        mock_libc.return_value = ("", "")

        assert detect_build_triple().abi == "musl"

    @patch("platform.system")
    @patch("platform.machine")
    @patch("sysconfig.get_config_var")
    def test_windows(self, mock_config_var, mock_machine, mock_system):
        mock_config_var.return_value = None
        mock_machine.return_value = "AMD64"
        mock_system.return_value = "Windows"

        assert detect_build_triple().canonical() == "x86_64-pc-windows-msvc"

    @patch("platform.system")
    @patch("platform.machine")
    @patch("sysconfig.get_config_var")
    def test_macos_arm64(self, mock_config_var, mock_machine, mock_system):
        mock_config_var.return_value = None
        mock_machine.return_value = "arm64"
        mock_system.return_value = "Darwin"

        triple = detect_build_triple()

        assert triple.arch == "aarch64"
        assert triple.vendor == "apple"
        assert triple.sys == "darwin"
        assert triple.abi == "unknown"


class TestArchitecture:
    """Tests for architecture normalization."""

    @patch("platform.machine")
    def test_aliases(self, mock_machine):
        for machine, expected in [
            ("x86_64", "x86_64"),
            ("AMD64", "x86_64"),
            ("arm64", "aarch64"),
            ("i386", "i686"),
            ("riscv64", "riscv64"),
            ("armv7l", "armv7l"),
        ]:
            mock_machine.return_value = machine
            assert _detect_architecture() == expected

    @patch("platform.machine")
    def test_empty_machine(self, mock_machine):
        mock_machine.return_value = ""

        assert _detect_architecture() == "unknown"


class TestAbi:
    """Tests for ABI detection."""

    @patch("platform.system")
    def test_unknown_system(self, mock_system):
        mock_system.return_value = "FreeBSD"

        assert _detect_abi() == "unknown"


class TestCache:
    """Tests for detection caching."""

    @patch("sysconfig.get_config_var")
    def test_cached(self, mock_config_var):
        """Test that detection runs once per process."""
        mock_config_var.return_value = "aarch64-unknown-linux-gnu"

        first = detect_build_triple()
        second = detect_build_triple()

        assert first is second
        assert mock_config_var.call_count == 1

    @patch("sysconfig.get_config_var")
    def test_clear_cache(self, mock_config_var):
        mock_config_var.return_value = "aarch64-unknown-linux-gnu"
        detect_build_triple()

        clear_build_triple_cache()
        mock_config_var.return_value = "x86_64-pc-linux-gnu"

        assert detect_build_triple().arch == "x86_64"
        assert mock_config_var.call_count == 2

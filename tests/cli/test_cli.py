"""
Tests for the command-line interface.
"""

import json
from unittest.mock import patch

import pytest

from crossconfig.cli.parser import CLI
from crossconfig.cli.utils import format_fields
from crossconfig.cross.state import get_active_config
from crossconfig.cross.triples import parse_triple


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        """Test CLI can be created."""
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "crossconfig" in capsys.readouterr().out

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["frobnicate"])


class TestArgumentParsing:
    """Test subcommand argument parsing."""

    def test_triple_args(self):
        args = CLI().parse_args(["triple", "aarch64-linux-gnu", "--json"])

        assert args.command == "triple"
        assert args.triple == "aarch64-linux-gnu"
        assert args.json is True

    def test_resolve_defaults(self):
        args = CLI().parse_args(["resolve"])

        assert args.command == "resolve"
        assert args.settings is None
        assert args.config_settings == []
        assert args.json is False

    def test_resolve_repeated_pairs(self):
        args = CLI().parse_args(
            ["-v", "resolve", "-C", "cflags=-O2", "--config-settings", "cflags=-g"]
        )

        assert args.verbose is True
        assert args.config_settings == ["cflags=-O2", "cflags=-g"]


class TestTripleCommand:
    """Test the triple command."""

    def test_json_output(self, capsys):
        result = CLI().run(["triple", "armv7-unknown-linux-gnueabihf", "--json"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["arch"] == "arm"
        assert data["sub"] == "v7"
        assert data["canonical"] == "armv7-unknown-linux-gnueabihf"
        assert data["short"] == "armv7-linux-gnueabihf"

    def test_text_output(self, capsys):
        result = CLI().run(["triple", "aarch64-linux-android"])

        assert result == 0
        out = capsys.readouterr().out
        assert "aarch64-unknown-linux-android" in out
        assert "android" in out

    def test_invalid_triple(self):
        assert CLI().run(["-q", "triple", "arm--linux"]) == 1


class TestResolveCommand:
    """Test the resolve command."""

    def test_pairs(self, capsys):
        result = CLI().run(
            [
                "resolve",
                "-C", "host=aarch64-linux-android",
                "-C", "cflags=-O2",
                "-C", "cflags=-g",
                "--json",
            ]
        )

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["cross_compiling"] is True
        assert data["cflags"] == ["-O2", "-g"]
        assert data["effective_platform_tag"] == "android_21_arm64_v8a"

    def test_publishes_active_config(self, capsys):
        CLI().run(["resolve", "-C", "host=wasm32-wasi", "--json"])

        assert get_active_config().host.sys == "wasi"

    def test_settings_file(self, capsys, settings_file):
        result = CLI().run(["resolve", "--settings", str(settings_file), "--json"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["host"]["sub"] == "v7"
        assert data["sysroot"] == "/opt/rpi-sysroot"
        assert data["extra"] == {"meson:cross_file": "rpi.ini"}

    def test_pairs_override_file(self, capsys, settings_file):
        result = CLI().run(
            [
                "resolve",
                "-s", str(settings_file),
                "-C", "sysroot=/other",
                "--json",
            ]
        )

        assert result == 0
        assert json.loads(capsys.readouterr().out)["sysroot"] == "/other"

    def test_text_output(self, capsys):
        result = CLI().run(["resolve"])

        assert result == 0
        out = capsys.readouterr().out
        assert "native" in out
        assert "cross_compiling" in out

    def test_single_list_pair_is_not_split(self, capsys):
        """Test that one -C cflags=... stays a single argument."""
        result = CLI().run(["resolve", "-C", "cflags=-O2 -g", "--json"])

        assert result == 0
        assert json.loads(capsys.readouterr().out)["cflags"] == ["-O2 -g"]

    def test_single_compiler(self, capsys):
        result = CLI().run(
            ["resolve", "-C", "host=aarch64-linux-gnu", "-C", "cc=clang", "--json"]
        )

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["cc"] == ["clang"]
        assert data["c++"] is None

    def test_single_include_dir(self, capsys):
        result = CLI().run(
            ["resolve", "-C", "include_dirs=/sysroot/usr/include", "--json"]
        )

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["include_dirs"] == ["/sysroot/usr/include"]

    def test_single_pair_overrides_file_list(self, capsys, settings_file):
        result = CLI().run(
            ["resolve", "-s", str(settings_file), "-C", "cflags=-O0", "--json"]
        )

        assert result == 0
        assert json.loads(capsys.readouterr().out)["cflags"] == ["-O0"]

    def test_missing_settings_file(self, tmp_path):
        assert CLI().run(["-q", "resolve", "-s", str(tmp_path / "nope.yaml")]) == 1


class TestNativeCommand:
    """Test the native command."""

    def test_json_output(self, capsys):
        with patch(
            "crossconfig.cli.commands.native.detect_build_triple",
            return_value=parse_triple("x86_64-pc-linux-gnu"),
        ), patch(
            "crossconfig.cli.commands.native.native_platform_tag",
            return_value="linux_x86_64",
        ):
            result = CLI().run(["native", "--json"])

        assert result == 0
        assert json.loads(capsys.readouterr().out) == {
            "triple": "x86_64-pc-linux-gnu",
            "platform_tag": "linux_x86_64",
        }


class TestFormatFields:
    """Test aligned field output."""

    def test_alignment_and_empty_values(self):
        text = format_fields({"host": "native", "cflags": ("-O2", "-g"), "cc": None})

        assert text.splitlines() == [
            "host   : native",
            "cflags : -O2 -g",
            "cc     : (none)",
        ]

    def test_empty_list(self):
        assert format_fields({"lib_dirs": ()}) == "lib_dirs : (none)"

"""
crossconfig CLI argument parser.

This module implements the command-line interface for crossconfig using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from crossconfig.core.exceptions import CrossConfigError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("crossconfig")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """crossconfig command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="crossconfig",
            description="crossconfig - cross-compilation settings for Python build backends",
            epilog='Use "crossconfig COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"crossconfig {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_triple_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_native_command(subparsers)

        return parser

    def _add_triple_command(self, subparsers):
        """Add 'triple' subcommand."""
        parser = subparsers.add_parser(
            "triple",
            help="Parse a host triple",
            description="Parse a host triple and show its arch, sub, vendor, sys and abi",
        )
        parser.add_argument(
            "triple", metavar="TRIPLE", help="Host triple (e.g. aarch64-linux-android)"
        )
        parser.add_argument("--json", action="store_true", help="Print JSON output")

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Resolve cross-compilation settings",
            description=(
                "Resolve cross-compilation settings from a settings file and/or "
                "KEY=VALUE pairs, applying documented defaults"
            ),
        )
        parser.add_argument(
            "--settings",
            "-s",
            type=Path,
            metavar="PATH",
            help="YAML or JSON settings file",
        )
        parser.add_argument(
            "--config-settings",
            "-C",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Setting in pip --config-settings form; repeat a key to build a list",
        )
        parser.add_argument("--json", action="store_true", help="Print JSON output")

    def _add_native_command(self, subparsers):
        """Add 'native' subcommand."""
        parser = subparsers.add_parser(
            "native",
            help="Show the build machine triple",
            description="Show the detected triple and platform tag of this machine",
        )
        parser.add_argument("--json", action="store_true", help="Print JSON output")

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except CrossConfigError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        # Command module mapping
        command_map = {
            "triple": "crossconfig.cli.commands.triple",
            "resolve": "crossconfig.cli.commands.resolve",
            "native": "crossconfig.cli.commands.native",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()

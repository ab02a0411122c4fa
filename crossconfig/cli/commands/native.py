"""
Native command implementation.

Prints the detected triple and platform tag of the build machine.
"""

import logging

from crossconfig.cli.utils import format_fields, print_json
from crossconfig.core.platform import detect_build_triple
from crossconfig.cross.platform_tags import native_platform_tag

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the native command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    triple = detect_build_triple()
    tag = native_platform_tag()

    if args.json:
        print_json({"triple": triple.canonical(), "platform_tag": tag})
        return 0

    print(format_fields({"triple": triple.canonical(), "platform_tag": tag}))
    return 0

"""
Triple command implementation.

Parses a host triple and prints its fields.
"""

import logging

from crossconfig.cli.utils import format_fields, print_json
from crossconfig.cross.triples import parse_triple

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the triple command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    triple = parse_triple(args.triple)

    if args.json:
        data = triple.to_dict()
        data["canonical"] = triple.canonical()
        data["short"] = triple.short()
        print_json(data)
        return 0

    print(
        format_fields(
            {
                "arch": triple.arch,
                "sub": triple.sub,
                "vendor": triple.vendor,
                "sys": triple.sys,
                "abi": triple.abi,
                "canonical": triple.canonical(),
            }
        )
    )
    return 0

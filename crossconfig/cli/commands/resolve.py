"""
Resolve command implementation.

Resolves cross-compilation settings from a file and/or ``-C KEY=VALUE``
pairs and prints the resulting configuration.
"""

import logging

from crossconfig.cli.utils import format_fields, gather_settings, print_json
from crossconfig.cross.settings import resolve

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = gather_settings(args.settings, args.config_settings)
    logger.debug(f"Raw settings: {settings}")

    config = resolve(settings)

    if args.json:
        data = config.to_dict()
        data["effective_platform_tag"] = config.effective_platform_tag()
        print_json(data)
        return 0

    fields = {
        "host": str(config.host),
        "cross_compiling": "yes" if config.is_cross_compiling else "no",
        "host_prefix": config.host_prefix,
        "sysroot": config.sysroot,
        "platform_tag": config.platform_tag,
        "effective_platform_tag": config.effective_platform_tag() or "(undetermined)",
        "include_dirs": config.include_dirs,
        "lib_dirs": config.lib_dirs,
        "cc": config.cc,
        "c++": config.cxx,
        "cflags": config.cflags,
        "cxxflags": config.cxxflags,
        "ldflags": config.ldflags,
    }
    for key, value in sorted(config.extra.items()):
        fields[key] = value

    print(format_fields(fields))
    return 0

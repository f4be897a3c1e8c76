"""
Resolve command implementation.

Prints the manager-specific name for each generic package name.
"""

import logging

from envkit.cli.utils import load_run_config, print_error
from envkit.packages.detector import detect
from envkit.packages.kinds import ManagerKind
from envkit.packages.resolver import resolve

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments (packages, manager)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")

    config = load_run_config(args)

    if args.manager:
        try:
            manager = ManagerKind.parse(args.manager)
        except ValueError as e:
            print_error(str(e))
            return 1
    else:
        manager = detect()
        if manager is ManagerKind.MISSING:
            manager = ManagerKind.BREW
        if manager is ManagerKind.UNKNOWN:
            print_error(
                "Could not detect package manager", "Use --manager to pick one"
            )
            return 1

    for package in args.packages:
        print(f"{package}: {resolve(manager, package, config.overrides)}")
    return 0

"""
Detect command implementation.

Prints the package manager EnvKit would use on this host.
"""

import logging

from envkit.core.platform import detect_platform
from envkit.packages.detector import detect
from envkit.packages.kinds import ManagerKind

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        0 if a usable (or bootstrappable) manager was found, 1 otherwise
    """
    logger.debug(f"Arguments: {args}")

    platform_info = detect_platform()
    manager = detect(platform_info)

    print(f"Platform: {platform_info}")
    print(f"Package manager: {manager}")

    if manager is ManagerKind.UNKNOWN:
        logger.error("Could not detect package manager")
        return 1
    if manager is ManagerKind.MISSING:
        print("Homebrew is not installed; it will be installed on the next setup run.")
    return 0

"""
Package manager detection.

Detection probes the host exactly once per run: platform check first, then
an ordered list of manager executables. The result is threaded through the
rest of the run as a plain value.
"""

import logging
from typing import Callable, Optional

from envkit.core.environment import Environment
from envkit.core.platform import PlatformInfo, detect_platform
from envkit.packages.kinds import LINUX_PROBE_ORDER, MANAGER_SPECS, ManagerKind

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]


def detect(
    platform_info: Optional[PlatformInfo] = None,
    env: Optional[Environment] = None,
    which: Optional[Which] = None,
) -> ManagerKind:
    """
    Detect the host's package manager.

    On macOS only Homebrew is considered; its absence yields
    ``ManagerKind.MISSING``. Elsewhere apt, dnf, yum, pacman and zypper are
    probed in that order.

    Args:
        platform_info: Host platform (detected when omitted)
        env: Environment whose PATH is searched (process environment when omitted)
        which: Executable lookup function (defaults to ``env.which``)

    Returns:
        Detected manager, ``UNKNOWN`` if none found, or ``MISSING``

    Example:
        >>> detect(PlatformInfo("linux", "x64"), which=lambda n: "/usr/bin/pacman" if n == "pacman" else None)
        <ManagerKind.PACMAN: 'pacman'>
    """
    if platform_info is None:
        platform_info = detect_platform()
    if which is None:
        if env is None:
            env = Environment.from_os()
        which = env.which

    if platform_info.is_macos:
        brew = MANAGER_SPECS[ManagerKind.BREW].executable
        if which(brew):
            logger.debug("Found Homebrew")
            return ManagerKind.BREW
        logger.debug("Homebrew not found on macOS")
        return ManagerKind.MISSING

    for kind in LINUX_PROBE_ORDER:
        executable = MANAGER_SPECS[kind].executable
        location = which(executable)
        if location:
            logger.debug(f"Found {kind} at {location}")
            return kind

    logger.debug("No supported package manager found")
    return ManagerKind.UNKNOWN


__all__ = ["detect"]

"""
Homebrew bootstrap for macOS hosts.

When detection reports ``ManagerKind.MISSING`` the Homebrew installer is
downloaded and run once, ``brew shellenv`` is persisted to ``~/.zprofile``
and the Homebrew prefix is added to the run's environment. The caller then
uses ``ManagerKind.BREW`` for the rest of the run without probing again.
"""

import logging
from pathlib import Path
from typing import Tuple

from envkit.core.download import download_file
from envkit.core.environment import Environment
from envkit.core.exceptions import MissingPrerequisiteError, UnknownManagerError
from envkit.core.filesystem import append_line, temporary_directory
from envkit.core.platform import PlatformInfo
from envkit.core.process import CommandRunner
from envkit.packages.kinds import ManagerKind

logger = logging.getLogger(__name__)

HOMEBREW_INSTALL_URL = (
    "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
)


def homebrew_environment(env: Environment, platform_info: PlatformInfo) -> Environment:
    """
    Apply what ``brew shellenv`` exports to an environment.

    Args:
        env: Current environment
        platform_info: Host platform (selects the prefix)

    Returns:
        Environment with Homebrew's bin/sbin first on PATH
    """
    prefix = platform_info.homebrew_prefix()
    return (
        env.with_path_prepended(prefix / "sbin")
        .with_path_prepended(prefix / "bin")
        .with_variable("HOMEBREW_PREFIX", prefix)
    )


def install_homebrew(
    runner: CommandRunner,
    env: Environment,
    platform_info: PlatformInfo,
    home: Path,
) -> Environment:
    """
    Install Homebrew and make it reachable.

    Args:
        runner: Command runner
        env: Current environment
        platform_info: Host platform
        home: Home directory whose ``.zprofile`` receives ``brew shellenv``

    Returns:
        Environment with Homebrew on PATH

    Raises:
        DownloadError: If the installer cannot be fetched
        CommandFailedError: If the installer fails
    """
    logger.info("Homebrew not found. Installing Homebrew...")

    installer_env = env.with_variable("NONINTERACTIVE", "1")
    if runner.dry_run:
        logger.info(f"[dry-run] download {HOMEBREW_INSTALL_URL}")
        runner.run(["/bin/bash", "install.sh"], installer_env)
    else:
        with temporary_directory(prefix="envkit_brew_") as tmp:
            script = download_file(HOMEBREW_INSTALL_URL, tmp / "install.sh")
            runner.run(["/bin/bash", str(script)], installer_env)

    brew = platform_info.homebrew_prefix() / "bin" / "brew"
    shellenv = f'eval "$({brew} shellenv)"'
    zprofile = home / ".zprofile"
    if runner.dry_run:
        logger.info(f"[dry-run] append to {zprofile}: {shellenv}")
    else:
        append_line(zprofile, shellenv)
        logger.debug(f"Added brew shellenv to {zprofile}")

    return homebrew_environment(env, platform_info)


def require_manager(detected: ManagerKind) -> ManagerKind:
    """
    Check that a detection result can install packages.

    Raises:
        UnknownManagerError: If no supported manager exists
        MissingPrerequisiteError: If Homebrew must be bootstrapped first
    """
    if detected is ManagerKind.UNKNOWN:
        raise UnknownManagerError()
    if detected is ManagerKind.MISSING:
        raise MissingPrerequisiteError("brew", "Homebrew must be installed first")
    return detected


def ensure_manager(
    detected: ManagerKind,
    runner: CommandRunner,
    env: Environment,
    platform_info: PlatformInfo,
    home: Path,
) -> Tuple[ManagerKind, Environment]:
    """
    Turn a detection result into a usable manager.

    Args:
        detected: Result of :func:`envkit.packages.detector.detect`
        runner: Command runner
        env: Current environment
        platform_info: Host platform
        home: Target home directory

    Returns:
        (manager, environment) to use for the remainder of the run

    Raises:
        UnknownManagerError: If no supported manager exists
    """
    try:
        manager = require_manager(detected)
    except MissingPrerequisiteError as e:
        logger.debug(str(e))
        env = install_homebrew(runner, env, platform_info, home)
        manager = ManagerKind.BREW

    logger.info(f"Detected package manager: {manager}")
    return manager, env


__all__ = [
    "HOMEBREW_INSTALL_URL",
    "ensure_manager",
    "homebrew_environment",
    "install_homebrew",
    "require_manager",
]

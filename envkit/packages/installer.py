"""
Install dispatch for OS package managers.

Maps a :class:`~envkit.packages.kinds.ManagerKind` to its non-interactive
install invocation and executes it through a
:class:`~envkit.core.process.CommandRunner`. Any failure is raised
immediately; nothing is retried and later packages are not attempted.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from envkit.core.environment import Environment
from envkit.core.exceptions import UnsupportedManagerError
from envkit.core.process import CommandRunner
from envkit.packages.kinds import MANAGER_SPECS, ManagerKind, ManagerSpec
from envkit.packages.resolver import PackageRequest, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallOutcome:
    """
    Result of a successful install invocation.

    Attributes:
        manager: Manager that performed the install
        package: Concrete package name passed to the manager
        command: Full argv that was executed (including sudo, if any)
        returncode: Exit status of the manager
    """

    manager: ManagerKind
    package: str
    command: Tuple[str, ...]
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _spec_for(manager: ManagerKind) -> ManagerSpec:
    spec = MANAGER_SPECS.get(manager)
    if spec is None:
        raise UnsupportedManagerError(manager)
    return spec


def install_command(manager: ManagerKind, *packages: str) -> List[str]:
    """
    Build the non-interactive install argv for ``manager`` (without sudo).

    Raises:
        UnsupportedManagerError: For UNKNOWN or MISSING
    """
    return list(_spec_for(manager).install) + list(packages)


def install(
    manager: ManagerKind,
    package: str,
    runner: CommandRunner,
    env: Environment,
) -> InstallOutcome:
    """
    Install one package with the given manager.

    Args:
        manager: Detected package manager
        package: Concrete (already resolved) package name
        runner: Command runner
        env: Environment for the child process

    Returns:
        InstallOutcome describing the executed command

    Raises:
        UnsupportedManagerError: If manager cannot install (no process is started)
        CommandFailedError: If the manager exits non-zero
        PermissionDeniedError: If sudo is missing or the manager binary is not executable
        CommandNotFoundError: If the manager binary itself is absent (only
            possible when running as root or for brew)
    """
    spec = _spec_for(manager)
    cmd = install_command(manager, package)

    logger.info(f"Installing {package}...")
    result = runner.run(cmd, env, privileged=spec.needs_root)

    return InstallOutcome(
        manager=manager,
        package=package,
        command=tuple(result.args),
        returncode=result.returncode,
    )


def install_all(
    manager: ManagerKind,
    packages: Iterable[Union[str, PackageRequest]],
    runner: CommandRunner,
    env: Environment,
    overrides: Optional[Mapping[str, Mapping[ManagerKind, str]]] = None,
) -> List[InstallOutcome]:
    """
    Resolve and install packages one at a time, in order.

    The first failure propagates; remaining packages are not attempted.

    Args:
        manager: Detected package manager
        packages: Generic names or package requests
        runner: Command runner
        env: Environment for child processes
        overrides: Extra name overrides (generic -> manager -> name)

    Returns:
        One outcome per package
    """
    _spec_for(manager)

    outcomes = []
    for package in packages:
        if isinstance(package, PackageRequest):
            table = dict(overrides or {})
            table[package.name] = {**table.get(package.name, {}), **package.overrides}
            name = resolve(manager, package.name, table)
        else:
            name = resolve(manager, package, overrides)
        outcomes.append(install(manager, name, runner, env))
    return outcomes


def refresh(manager: ManagerKind, runner: CommandRunner, env: Environment) -> int:
    """
    Refresh the manager's package index.

    dnf and yum ``check-update`` report pending updates through a non-zero
    exit status, so failures are tolerated for them only.

    Returns:
        Exit status of the refresh command

    Raises:
        UnsupportedManagerError: If manager cannot refresh
        CommandFailedError: If the refresh fails for any other manager
    """
    spec = _spec_for(manager)
    logger.info("Updating package manager...")
    result = runner.run(
        spec.refresh,
        env,
        privileged=spec.needs_root,
        allow_failure=spec.refresh_may_fail,
    )
    return result.returncode


__all__ = [
    "InstallOutcome",
    "install",
    "install_all",
    "install_command",
    "refresh",
]

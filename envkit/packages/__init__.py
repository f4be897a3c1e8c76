"""
OS package manager abstraction for EnvKit.

Available Components:
--------------------
- ManagerKind: Enumeration of supported package managers
- detect: Probe the host for a package manager
- resolve / PackageRequest: Map generic names to manager-specific names
- install / install_all / refresh: Run the manager non-interactively
- ensure_manager: Bootstrap Homebrew on macOS when it is missing

Example Usage:
-------------
    from envkit.core import CommandRunner, Environment
    from envkit.packages import detect, install, resolve

    env = Environment.from_os()
    manager = detect(env=env)
    install(manager, resolve(manager, "golang"), CommandRunner(), env)
"""

from envkit.packages.kinds import (
    ManagerKind,
    ManagerSpec,
    MANAGER_SPECS,
    SUPPORTED_MANAGERS,
)
from envkit.packages.detector import detect
from envkit.packages.resolver import PACKAGE_OVERRIDES, PackageRequest, resolve
from envkit.packages.installer import (
    InstallOutcome,
    install,
    install_all,
    install_command,
    refresh,
)
from envkit.packages.bootstrap import ensure_manager, require_manager

from envkit.core.exceptions import (
    PackageManagerError,
    UnknownManagerError,
    UnsupportedManagerError,
    MissingPrerequisiteError,
)

__all__ = [
    "ManagerKind",
    "ManagerSpec",
    "MANAGER_SPECS",
    "SUPPORTED_MANAGERS",
    "detect",
    "PACKAGE_OVERRIDES",
    "PackageRequest",
    "resolve",
    "InstallOutcome",
    "install",
    "install_all",
    "install_command",
    "refresh",
    "ensure_manager",
    "require_manager",
    "PackageManagerError",
    "UnknownManagerError",
    "UnsupportedManagerError",
    "MissingPrerequisiteError",
]

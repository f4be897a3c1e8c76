"""
Generic-to-concrete package name resolution.

Most packages share a name across distributions. The few that do not are
listed in :data:`PACKAGE_OVERRIDES`; everything else resolves to itself.
Resolution never performs I/O.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from envkit.packages.kinds import ManagerKind

_APT = ManagerKind.APT
_DNF = ManagerKind.DNF
_YUM = ManagerKind.YUM
_PACMAN = ManagerKind.PACMAN
_ZYPPER = ManagerKind.ZYPPER
_BREW = ManagerKind.BREW

PACKAGE_OVERRIDES: Dict[str, Dict[ManagerKind, str]] = {
    # Homebrew's python formula ships pip
    "python3-pip": {_BREW: "python3"},
    "golang": {_PACMAN: "go", _ZYPPER: "go", _BREW: "go"},
    "clangd": {
        _DNF: "clang-tools-extra",
        _YUM: "clang-tools-extra",
        _PACMAN: "clang",
        _ZYPPER: "clang",
        _BREW: "llvm",
    },
    "jdk17": {
        _APT: "openjdk-17-jdk",
        _DNF: "java-17-openjdk-devel",
        _YUM: "java-17-openjdk-devel",
        _PACMAN: "jdk17-openjdk",
        _ZYPPER: "java-17-openjdk-devel",
        _BREW: "openjdk@17",
    },
    "python-neovim": {
        _APT: "python3-pynvim",
        _DNF: "python3-neovim",
        _YUM: "python3-neovim",
        _PACMAN: "python-pynvim",
        _ZYPPER: "python3-neovim",
    },
}


def resolve(
    manager: ManagerKind,
    generic: str,
    overrides: Optional[Mapping[str, Mapping[ManagerKind, str]]] = None,
) -> str:
    """
    Map a generic package name to the name used by ``manager``.

    Args:
        manager: Target package manager
        generic: Generic package name
        overrides: Extra overrides consulted before the built-in table

    Returns:
        Manager-specific package name, or ``generic`` when no override exists

    Example:
        >>> resolve(ManagerKind.PACMAN, "golang")
        'go'
        >>> resolve(ManagerKind.APT, "ripgrep")
        'ripgrep'
    """
    for table in (overrides or {}, PACKAGE_OVERRIDES):
        name = table.get(generic, {}).get(manager)
        if name:
            return name
    return generic


@dataclass(frozen=True)
class PackageRequest:
    """
    A package to install, with optional per-manager names.

    Attributes:
        name: Generic package name
        overrides: Concrete names keyed by manager, taking precedence over
            the built-in table
    """

    name: str
    overrides: Mapping[ManagerKind, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Package name cannot be empty")

    def resolve(self, manager: ManagerKind) -> str:
        return resolve(manager, self.name, {self.name: self.overrides})


__all__ = ["PACKAGE_OVERRIDES", "PackageRequest", "resolve"]

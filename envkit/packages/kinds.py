"""
Supported OS package managers and their static command tables.

Classes:
    ManagerKind: Closed enumeration of package managers known to EnvKit
    ManagerSpec: Executable name and command forms for one manager
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class ManagerKind(Enum):
    """
    Package manager identifiers.

    ``UNKNOWN`` means no supported manager was found. ``MISSING`` means the
    platform's bundled manager (Homebrew on macOS) is absent but can be
    bootstrapped. Neither can install packages.
    """

    APT = "apt"
    DNF = "dnf"
    YUM = "yum"
    PACMAN = "pacman"
    ZYPPER = "zypper"
    BREW = "brew"
    UNKNOWN = "unknown"
    MISSING = "missing"

    @property
    def is_supported(self) -> bool:
        return self in MANAGER_SPECS

    @classmethod
    def parse(cls, value: str) -> "ManagerKind":
        """
        Parse a manager name (case-insensitive).

        Raises:
            ValueError: If the name is not a supported manager
        """
        try:
            kind = cls(value.strip().lower())
        except ValueError:
            kind = None
        if kind is None or not kind.is_supported:
            choices = ", ".join(k.value for k in SUPPORTED_MANAGERS)
            raise ValueError(f"Unknown package manager '{value}' (choose from {choices})")
        return kind

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ManagerSpec:
    """
    Static description of a package manager.

    Attributes:
        executable: Binary probed on PATH during detection
        install: Non-interactive install argv prefix (package names appended)
        refresh: Index refresh argv
        refresh_may_fail: Tolerate a non-zero refresh exit status
        needs_root: Install and refresh need system-wide write access
    """

    executable: str
    install: Tuple[str, ...]
    refresh: Tuple[str, ...]
    refresh_may_fail: bool = False
    needs_root: bool = True


MANAGER_SPECS: Dict[ManagerKind, ManagerSpec] = {
    ManagerKind.APT: ManagerSpec(
        executable="apt",
        install=("apt-get", "install", "-y"),
        refresh=("apt-get", "update"),
    ),
    # check-update exits 100 when updates are available
    ManagerKind.DNF: ManagerSpec(
        executable="dnf",
        install=("dnf", "install", "-y"),
        refresh=("dnf", "check-update"),
        refresh_may_fail=True,
    ),
    ManagerKind.YUM: ManagerSpec(
        executable="yum",
        install=("yum", "install", "-y"),
        refresh=("yum", "check-update"),
        refresh_may_fail=True,
    ),
    ManagerKind.PACMAN: ManagerSpec(
        executable="pacman",
        install=("pacman", "-S", "--noconfirm"),
        refresh=("pacman", "-Sy"),
    ),
    ManagerKind.ZYPPER: ManagerSpec(
        executable="zypper",
        install=("zypper", "--non-interactive", "install"),
        refresh=("zypper", "refresh"),
    ),
    ManagerKind.BREW: ManagerSpec(
        executable="brew",
        install=("brew", "install"),
        refresh=("brew", "update"),
        needs_root=False,
    ),
}

SUPPORTED_MANAGERS: Tuple[ManagerKind, ...] = tuple(MANAGER_SPECS)

# Linux probe order; the first reachable executable wins
LINUX_PROBE_ORDER: Tuple[ManagerKind, ...] = (
    ManagerKind.APT,
    ManagerKind.DNF,
    ManagerKind.YUM,
    ManagerKind.PACMAN,
    ManagerKind.ZYPPER,
)


__all__ = [
    "ManagerKind",
    "ManagerSpec",
    "MANAGER_SPECS",
    "SUPPORTED_MANAGERS",
    "LINUX_PROBE_ORDER",
]

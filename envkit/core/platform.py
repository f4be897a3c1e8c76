"""
Platform detection for EnvKit.

This module identifies the host operating system family, CPU architecture
and Linux distribution. The operating system decides which package managers
are probed; the architecture decides where Homebrew installs itself on
macOS.

Usage:
    from envkit.core.platform import detect_platform

    info = detect_platform()
    if info.is_macos:
        ...
"""

import functools
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system family ('linux', 'macos', or the lowercased
            ``platform.system()`` value for anything else)
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm', ...)
        distribution: Linux distribution ID ('ubuntu', 'arch', ...) or empty
    """

    os: str
    arch: str
    distribution: str = ""

    @property
    def is_macos(self) -> bool:
        return self.os == "macos"

    def homebrew_prefix(self) -> Path:
        """
        Get the Homebrew installation prefix for this platform.

        Returns:
            /opt/homebrew on Apple Silicon, /usr/local otherwise

        Example:
            >>> PlatformInfo("macos", "arm64").homebrew_prefix()
            PosixPath('/opt/homebrew')
        """
        if self.arch == "arm64":
            return Path("/opt/homebrew")
        return Path("/usr/local")

    def platform_string(self) -> str:
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        parts = [self.platform_string()]
        if self.distribution:
            parts.append(f"({self.distribution})")
        return " ".join(parts)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information
    """
    os_name = _detect_os()
    return PlatformInfo(
        os=os_name,
        arch=_detect_architecture(),
        distribution=_detect_distribution() if os_name == "linux" else "",
    )


def _detect_os(ostype: Optional[str] = None) -> str:
    """
    Detect operating system family.

    ``OSTYPE`` (set by bash and zsh) is consulted first; the Python
    platform module is the fallback when it is not exported.

    Args:
        ostype: Override for the ``OSTYPE`` value (defaults to environment)

    Returns:
        Normalized OS name: 'macos', 'linux', or the raw system name
    """
    if ostype is None:
        ostype = os.environ.get("OSTYPE", "")

    if ostype.startswith("darwin"):
        return "macos"
    if ostype.startswith("linux"):
        return "linux"

    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def _detect_distribution(os_release: Path = Path("/etc/os-release")) -> str:
    """
    Detect Linux distribution from os-release.

    Returns:
        Distribution ID: 'ubuntu', 'fedora', 'arch', etc., or 'unknown'
    """
    try:
        if os_release.exists():
            for line in os_release.read_text().splitlines():
                if line.startswith("ID="):
                    return line.split("=", 1)[1].strip().strip('"').strip("'")
    except OSError:
        pass

    return "unknown"


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
]

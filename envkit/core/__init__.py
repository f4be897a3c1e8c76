"""
Core functionality for EnvKit.

This package contains the foundational modules that other components depend on.
"""

from .environment import Environment

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .process import CommandRunner

from .exceptions import (
    EnvKitError,
    PackageManagerError,
    UnknownManagerError,
    UnsupportedManagerError,
    MissingPrerequisiteError,
    CommandError,
    CommandFailedError,
    CommandNotFoundError,
    PermissionDeniedError,
    VerificationFailedError,
    StepPreconditionError,
    DownloadError,
    FilesystemError,
    ConfigError,
)

__all__ = [
    "Environment",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "CommandRunner",
    "EnvKitError",
    "PackageManagerError",
    "UnknownManagerError",
    "UnsupportedManagerError",
    "MissingPrerequisiteError",
    "CommandError",
    "CommandFailedError",
    "CommandNotFoundError",
    "PermissionDeniedError",
    "VerificationFailedError",
    "StepPreconditionError",
    "DownloadError",
    "FilesystemError",
    "ConfigError",
]

"""
Centralized exception hierarchy for EnvKit.

This module defines all custom exceptions used across the codebase so that
the CLI layer can map every failure to a single exit code path.
"""

from typing import List, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class EnvKitError(Exception):
    """Base exception for all EnvKit errors."""

    pass


# ============================================================================
# Package Manager Exceptions
# ============================================================================


class PackageManagerError(EnvKitError):
    """Base exception for package manager errors."""

    pass


class UnknownManagerError(PackageManagerError):
    """No supported package manager was found on the host."""

    def __init__(self, message: str = "Could not detect a supported package manager"):
        super().__init__(message)


class UnsupportedManagerError(PackageManagerError):
    """An operation was requested for a manager that cannot perform it."""

    def __init__(self, manager):
        self.manager = manager
        super().__init__(f"Unsupported package manager: {manager}")


class MissingPrerequisiteError(PackageManagerError):
    """
    The platform's package manager itself is absent.

    Raised by detection helpers when a bootstrap install is required
    before any package can be installed.
    """

    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        msg = f"Required tool not found: {tool}"
        if hint:
            msg += f" ({hint})"
        super().__init__(msg)


# ============================================================================
# Process Exceptions
# ============================================================================


class CommandError(EnvKitError):
    """Base exception for external command failures."""

    def __init__(self, command: Sequence[str], message: str):
        self.command = list(command)
        super().__init__(message)


class CommandFailedError(CommandError):
    """External command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int):
        self.returncode = returncode
        super().__init__(
            command,
            f"Command failed with exit code {returncode}: {' '.join(command)}",
        )


class CommandNotFoundError(CommandError):
    """External command executable could not be found."""

    def __init__(self, command: Sequence[str]):
        super().__init__(command, f"Command not found: {command[0]}")


class PermissionDeniedError(CommandError):
    """External command could not be executed due to missing permissions."""

    def __init__(self, command: Sequence[str], reason: str = ""):
        msg = f"Permission denied running: {' '.join(command)}"
        if reason:
            msg += f" ({reason})"
        super().__init__(command, msg)


# ============================================================================
# Provisioning Exceptions
# ============================================================================


class VerificationFailedError(EnvKitError):
    """Post-install verification found required tools still missing."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            "The following required tools are not installed: " + " ".join(self.missing)
        )


class StepPreconditionError(EnvKitError):
    """A pipeline step was reached before the tools it needs exist."""

    def __init__(self, step: str, missing: List[str]):
        self.step = step
        self.missing = list(missing)
        super().__init__(
            f"Step '{step}' requires missing tools: {', '.join(self.missing)}"
        )


class DownloadError(EnvKitError):
    """Exception raised when an installer download fails."""

    pass


class FilesystemError(EnvKitError):
    """Base exception for filesystem operations."""

    pass


class ConfigError(EnvKitError):
    """Configuration parsing or validation error."""

    pass

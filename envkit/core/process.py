"""
External command execution for EnvKit.

Every process EnvKit starts goes through :class:`CommandRunner`, which
receives the current :class:`~envkit.core.environment.Environment`
explicitly, escalates with ``sudo`` when asked to and the process is not
root, and turns failures into typed exceptions.
"""

import logging
import os
import subprocess
from typing import List, Optional, Sequence

from envkit.core.environment import Environment
from envkit.core.exceptions import (
    CommandFailedError,
    CommandNotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

SUDO = "sudo"


def is_root() -> bool:
    """Check whether the current process runs with an effective UID of 0."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(str(part) for part in cmd)


class CommandRunner:
    """
    Run external commands with explicit environment and error handling.

    Attributes:
        dry_run: Log commands instead of executing them
        as_root: Whether the process already has root privileges

    Example:
        runner = CommandRunner()
        runner.run(["apt-get", "install", "-y", "git"], env, privileged=True)
    """

    def __init__(self, dry_run: bool = False, as_root: Optional[bool] = None):
        self.dry_run = dry_run
        self.as_root = is_root() if as_root is None else as_root

    def escalate(self, cmd: Sequence[str]) -> List[str]:
        """
        Prefix a command with ``sudo`` unless already running as root.

        Args:
            cmd: Command argv

        Returns:
            Command argv, possibly prefixed
        """
        cmd = [str(part) for part in cmd]
        if self.as_root:
            return cmd
        return [SUDO] + cmd

    def run(
        self,
        cmd: Sequence[str],
        env: Environment,
        privileged: bool = False,
        allow_failure: bool = False,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and wait for it to finish.

        Args:
            cmd: Command argv
            env: Environment passed to the child process
            privileged: Escalate with sudo when not root
            allow_failure: Return normally on a non-zero exit status

        Returns:
            Completed process (returncode 0 in dry-run mode)

        Raises:
            CommandFailedError: Non-zero exit status and allow_failure is False
            CommandNotFoundError: Executable does not exist
            PermissionDeniedError: Executable cannot be run, or sudo is missing
        """
        argv = self.escalate(cmd) if privileged else [str(part) for part in cmd]

        if self.dry_run:
            logger.info(f"[dry-run] {format_command(argv)}")
            return subprocess.CompletedProcess(argv, 0)

        logger.debug(f"Running: {format_command(argv)}")

        try:
            result = subprocess.run(argv, env=env.to_dict(), check=False)
        except FileNotFoundError as e:
            if privileged and argv[0] == SUDO:
                raise PermissionDeniedError(argv, f"{SUDO} is not installed") from e
            raise CommandNotFoundError(argv) from e
        except PermissionError as e:
            raise PermissionDeniedError(argv, str(e)) from e

        if result.returncode != 0:
            if allow_failure:
                logger.debug(
                    f"Ignoring exit code {result.returncode} from: {format_command(argv)}"
                )
                return result
            raise CommandFailedError(argv, result.returncode)

        return result


__all__ = ["CommandRunner", "format_command", "is_root", "SUDO"]

"""
Process mocks: a command runner that records instead of executing, and
fake executables for PATH lookups.
"""

import os
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from envkit.core.environment import Environment
from envkit.core.exceptions import CommandFailedError
from envkit.core.process import CommandRunner


class RecordingRunner(CommandRunner):
    """
    CommandRunner that records argv instead of spawning processes.

    Attributes:
        calls: Executed argv lists (after sudo escalation)
        envs: Environment passed with each call
        fail_on: Predicate selecting commands that exit non-zero
        on_run: Hook invoked with each argv (e.g. to simulate a clone)
    """

    def __init__(self, as_root: bool = False, dry_run: bool = False):
        super().__init__(dry_run=dry_run, as_root=as_root)
        self.calls: List[List[str]] = []
        self.envs: List[Environment] = []
        self.fail_on: Optional[Callable[[List[str]], bool]] = None
        self.on_run: Optional[Callable[[List[str]], None]] = None

    def run(
        self,
        cmd,
        env,
        privileged=False,
        allow_failure=False,
    ):
        argv = self.escalate(cmd) if privileged else [str(part) for part in cmd]
        self.calls.append(argv)
        self.envs.append(env)
        if self.on_run is not None:
            self.on_run(argv)
        if self.fail_on is not None and self.fail_on(argv):
            if allow_failure:
                return subprocess.CompletedProcess(argv, 100, "", "")
            raise CommandFailedError(argv, 1)
        return subprocess.CompletedProcess(argv, 0, "", "")


def make_executables(directory: Path, *names: str) -> Path:
    """Create executable stubs so that ``shutil.which`` finds them."""
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        exe = directory / name
        exe.write_text("#!/bin/sh\nexit 0\n")
        os.chmod(exe, 0o755)
    return directory

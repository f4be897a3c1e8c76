"""
Reusable provisioning steps.

Each factory returns a :class:`~envkit.setup.pipeline.Step`. Paths given as
strings are relative to the run's home directory; callables receive the
:class:`~envkit.setup.pipeline.RunContext` and return a path.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from envkit.core.download import download_file
from envkit.core.environment import Environment
from envkit.core.exceptions import VerificationFailedError
from envkit.core.filesystem import (
    atomic_write,
    backup_path,
    ensure_directory,
    temporary_directory,
)
from envkit.packages.installer import install_all, refresh
from envkit.setup.pipeline import RunContext, Step

logger = logging.getLogger(__name__)

PathSpec = Union[str, Callable[[RunContext], Path]]


def resolve_path(spec: PathSpec, context: RunContext) -> Path:
    if callable(spec):
        return spec(context)
    return context.home_path(spec)


def tool_missing(tool: str) -> Callable[[RunContext], bool]:
    """Predicate for ``Step.when``: true when ``tool`` is not on PATH."""

    def predicate(context: RunContext) -> bool:
        return context.env.which(tool) is None

    return predicate


def refresh_index() -> Step:
    """Refresh the package manager's index."""

    def action(context: RunContext) -> None:
        refresh(context.manager, context.runner, context.env)

    return Step("Update package manager", action)


def install_packages(
    packages: Sequence[str],
    name: Optional[str] = None,
    when: Optional[Callable[[RunContext], bool]] = None,
) -> Step:
    """Resolve and install generic package names in order."""
    packages = list(packages)

    def action(context: RunContext) -> None:
        install_all(
            context.manager,
            packages,
            context.runner,
            context.env,
            overrides=context.overrides,
        )

    return Step(name or f"Install {', '.join(packages)}", action, when=when)


def run_command(
    name: str,
    cmd: Sequence[str],
    privileged: bool = False,
    requires: Sequence[str] = (),
    when: Optional[Callable[[RunContext], bool]] = None,
) -> Step:
    """Run a fixed command; the first element must be reachable on PATH."""
    cmd = list(cmd)

    def action(context: RunContext) -> None:
        context.run(cmd, privileged=privileged)

    return Step(name, action, requires=tuple(requires), when=when)


def execute_installer(
    context: RunContext,
    url: str,
    args: Sequence[str] = (),
    shell: str = "sh",
    extra_env: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Download an installer script to a temporary file and run it.

    Raises:
        DownloadError: If the script cannot be fetched
        CommandFailedError: If the installer exits non-zero
    """
    env = context.env
    for key, value in (extra_env or {}).items():
        env = env.with_variable(key, value)

    if context.dry_run:
        logger.info(f"[dry-run] download {url}")
        context.runner.run([shell, "<installer>"] + list(args), env)
        return

    with temporary_directory(prefix="envkit_installer_") as tmp:
        script = download_file(url, tmp / "install.sh")
        context.runner.run([shell, str(script)] + list(args), env)


def run_installer(
    name: str,
    url: str,
    args: Sequence[str] = (),
    shell: str = "sh",
    extra_env: Optional[Mapping[str, str]] = None,
    update_env: Optional[Callable[[RunContext], Environment]] = None,
    when: Optional[Callable[[RunContext], bool]] = None,
) -> Step:
    """
    Download a remote installer script and execute it.

    Args:
        name: Step name
        url: HTTPS URL of the installer script
        args: Arguments passed to the script
        shell: Interpreter used to run the script
        extra_env: Variables set only for the installer process
        update_env: Computes the environment later steps should use
        when: Optional predicate deciding whether to run
    """
    args = list(args)

    def action(context: RunContext) -> Optional[Environment]:
        execute_installer(context, url, args, shell=shell, extra_env=extra_env)
        if update_env is not None:
            return update_env(context)
        return None

    return Step(name, action, requires=(shell,), when=when)


def git_clone(
    name: str,
    url: str,
    destination: PathSpec,
    depth: Optional[int] = None,
) -> Step:
    """Clone a git repository into ``destination``."""

    def action(context: RunContext) -> None:
        target = resolve_path(destination, context)
        cmd = ["git", "clone"]
        if depth is not None:
            cmd += ["--depth", str(depth)]
        cmd += [url, str(target)]
        context.run(cmd)

    return Step(name, action, requires=("git",))


def backup(name: str, *paths: PathSpec) -> Step:
    """Rename existing files or directories to timestamped siblings."""

    def action(context: RunContext) -> None:
        for spec in paths:
            backup_path(resolve_path(spec, context), dry_run=context.dry_run)

    return Step(name, action)


def make_directory(name: str, path: PathSpec) -> Step:
    def action(context: RunContext) -> None:
        target = resolve_path(path, context)
        if context.dry_run:
            logger.info(f"[dry-run] mkdir -p {target}")
            return
        ensure_directory(target)

    return Step(name, action)


def write_file(name: str, path: PathSpec, content: str) -> Step:
    """Write a static file, creating parent directories."""

    def action(context: RunContext) -> None:
        target = resolve_path(path, context)
        if context.dry_run:
            logger.info(f"[dry-run] write {target}")
            return
        atomic_write(target, content)
        logger.debug(f"Wrote {target}")

    return Step(name, action)


def copy_from_repository(
    name: str, url: str, files: Iterable[str], destination: PathSpec
) -> Step:
    """
    Clone a repository into a temporary directory and copy files out of it.

    The clone is removed afterwards.
    """
    files = list(files)

    def action(context: RunContext) -> None:
        target_dir = resolve_path(destination, context)
        if context.dry_run:
            context.run(["git", "clone", url, "<tmp>"])
            for item in files:
                logger.info(f"[dry-run] cp <tmp>/{item} {target_dir / item}")
            return

        with temporary_directory(prefix="envkit_repo_") as tmp:
            checkout = tmp / "repo"
            context.run(["git", "clone", url, str(checkout)])
            for item in files:
                ensure_directory(target_dir)
                shutil.copy2(checkout / item, target_dir / item)
                logger.info(f"Installed {target_dir / item}")

    return Step(name, action, requires=("git",))


def find_missing_tools(tools: Iterable[str], env: Environment) -> list:
    return [tool for tool in tools if env.which(tool) is None]


def verify_tools(tools: Sequence[str], name: str = "Verify installation") -> Step:
    """Fail with VerificationFailedError listing every tool not on PATH."""
    tools = list(tools)

    def action(context: RunContext) -> None:
        missing = find_missing_tools(tools, context.env)
        if not missing:
            logger.debug(f"All tools present: {', '.join(tools)}")
            return
        if context.dry_run:
            logger.warning(f"[dry-run] missing tools: {' '.join(missing)}")
            return
        raise VerificationFailedError(missing)

    return Step(name, action)


__all__ = [
    "PathSpec",
    "backup",
    "copy_from_repository",
    "execute_installer",
    "find_missing_tools",
    "git_clone",
    "install_packages",
    "make_directory",
    "refresh_index",
    "resolve_path",
    "run_command",
    "run_installer",
    "tool_missing",
    "verify_tools",
    "write_file",
]

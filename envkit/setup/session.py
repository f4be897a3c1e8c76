"""
Run session setup.

A session detects the package manager exactly once, bootstraps Homebrew if
needed, and produces the :class:`~envkit.setup.pipeline.RunContext` that is
handed unchanged (apart from its environment) to every step of the run.
"""

import getpass
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from envkit.config.parser import EnvKitConfig
from envkit.core.environment import Environment
from envkit.core.platform import PlatformInfo, detect_platform
from envkit.core.process import CommandRunner
from envkit.packages.bootstrap import ensure_manager
from envkit.packages.detector import Which, detect
from envkit.setup import nvim, zsh
from envkit.setup.pipeline import Pipeline, RunContext

logger = logging.getLogger(__name__)

PROFILES: Dict[str, Callable[[EnvKitConfig], Pipeline]] = {
    "zsh": lambda config: zsh.build_pipeline(config.zsh),
    "nvim": lambda config: nvim.build_pipeline(config.nvim),
}


def _login_name(env: Environment) -> str:
    user = env.get("USER")
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def start_session(
    config: EnvKitConfig,
    runner: Optional[CommandRunner] = None,
    platform_info: Optional[PlatformInfo] = None,
    env: Optional[Environment] = None,
    which: Optional[Which] = None,
) -> RunContext:
    """
    Detect the package manager and build the run context.

    Args:
        config: Loaded configuration
        runner: Command runner (created from ``config.dry_run`` if omitted)
        platform_info: Host platform (detected if omitted)
        env: Starting environment (snapshot of ``os.environ`` if omitted)
        which: Executable lookup used for detection (defaults to ``env.which``)

    Returns:
        Run context bound to the detected manager

    Raises:
        UnknownManagerError: If no supported package manager is found
        DownloadError / CommandFailedError: If the Homebrew bootstrap fails
    """
    if runner is None:
        runner = CommandRunner(dry_run=config.dry_run)
    if platform_info is None:
        platform_info = detect_platform()
    if env is None:
        env = Environment.from_os()

    home = config.home or Path(env.get("HOME") or Path.home())
    logger.debug(f"Platform: {platform_info}; home: {home}")

    detected = detect(platform_info, env=env, which=which)
    manager, env = ensure_manager(detected, runner, env, platform_info, home)

    return RunContext(
        manager=manager,
        env=env,
        runner=runner,
        platform=platform_info,
        home=home,
        user=_login_name(env),
        overrides=config.overrides,
    )


def run_profile(name: str, config: EnvKitConfig, context: RunContext) -> RunContext:
    """
    Build and run a named profile.

    Raises:
        KeyError: If the profile does not exist
    """
    pipeline = PROFILES[name](config)
    return pipeline.run(context)


__all__ = ["PROFILES", "run_profile", "start_session"]

"""
Zsh environment profile.

Installs Zsh with Oh My Zsh, the syntax-highlighting and autosuggestion
plugins, a ``.zshrc`` from the configuration repository, Bun and Go, then
makes Zsh the login shell.
"""

import logging
from pathlib import Path

from envkit.config.parser import ZshConfig
from envkit.core.environment import Environment
from envkit.setup.pipeline import Pipeline, RunContext, Step
from envkit.setup.steps import (
    backup,
    copy_from_repository,
    git_clone,
    install_packages,
    refresh_index,
    run_installer,
    tool_missing,
)

logger = logging.getLogger(__name__)

OH_MY_ZSH_INSTALL_URL = (
    "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
)
BUN_INSTALL_URL = "https://bun.sh/install"


def zsh_custom_dir(context: RunContext) -> Path:
    """Oh My Zsh custom directory (``$ZSH_CUSTOM`` or the default)."""
    custom = context.env.get("ZSH_CUSTOM")
    if custom:
        return Path(custom).expanduser()
    return context.home_path(".oh-my-zsh/custom")


def _plugin_dir(name: str):
    def resolve(context: RunContext) -> Path:
        return zsh_custom_dir(context) / "plugins" / name

    return resolve


def _bun_environment(context: RunContext) -> Environment:
    return context.env.with_path_prepended(context.home_path(".bun/bin"))


def set_login_shell() -> Step:
    """Make zsh the login shell (``sudo chsh`` on macOS, ``chsh`` elsewhere)."""

    def action(context: RunContext) -> None:
        zsh = context.env.which("zsh") or "zsh"
        logger.info("Setting Zsh as default shell...")
        if context.platform.is_macos:
            context.run(["chsh", "-s", zsh, context.user], privileged=True)
        else:
            context.run(["chsh", "-s", zsh])

    return Step("Set Zsh as default shell", action, requires=("zsh",))


def build_pipeline(config: ZshConfig) -> Pipeline:
    """
    Build the Zsh setup pipeline.

    Args:
        config: Zsh profile configuration

    Returns:
        Pipeline ready to run
    """
    steps = [
        refresh_index(),
        install_packages(config.packages, name="Install required packages"),
        run_installer(
            "Install Oh My Zsh",
            OH_MY_ZSH_INSTALL_URL,
            args=["--unattended"],
            extra_env={"RUNZSH": "no", "CHSH": "no"},
        ),
    ]

    for plugin, url in config.plugins.items():
        steps.append(git_clone(f"Install {plugin}", url, _plugin_dir(plugin)))

    steps += [
        backup("Back up existing .zshrc", ".zshrc"),
        copy_from_repository("Set up .zshrc", config.config_repo, [".zshrc"], "."),
        run_installer(
            "Install Bun", BUN_INSTALL_URL, shell="bash", update_env=_bun_environment
        ),
        install_packages(["golang"], name="Install Go", when=tool_missing("go")),
    ]

    if config.set_default_shell:
        steps.append(set_login_shell())

    return Pipeline("Zsh environment", steps)


__all__ = [
    "BUN_INSTALL_URL",
    "OH_MY_ZSH_INSTALL_URL",
    "build_pipeline",
    "set_login_shell",
    "zsh_custom_dir",
]

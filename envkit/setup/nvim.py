"""
Neovim (AstroNvim) profile.

Installs the base toolchain, Neovim, Rust and Go, replaces any existing
Neovim configuration with AstroNvim plus the user configuration, installs
the language servers and finally verifies every required tool is on PATH.
"""

import logging
from pathlib import Path

from envkit.config.parser import NvimConfig
from envkit.core.environment import Environment
from envkit.core.exceptions import VerificationFailedError
from envkit.packages.installer import install_all
from envkit.packages.kinds import MANAGER_SPECS, ManagerKind
from envkit.setup.pipeline import Pipeline, RunContext, Step
from envkit.setup.steps import (
    backup,
    execute_installer,
    git_clone,
    install_packages,
    make_directory,
    refresh_index,
    run_command,
    verify_tools,
    write_file,
)

logger = logging.getLogger(__name__)

RUSTUP_INSTALL_URL = "https://sh.rustup.rs"
NEOVIM_PPA = "ppa:neovim-ppa/unstable"
APT_SOURCES_DIR = Path("/etc/apt/sources.list.d")

MASON_SETUP = """\
return {
  ensure_installed = {
    -- LSPs
    "jdtls",
    "pyright",
    "rust-analyzer",
    "gopls",
    "clangd",

    -- DAP
    "debugpy",
    "codelldb",

    -- Linters
    "flake8",
    "shellcheck",

    -- Formatters
    "black",
    "prettier",
    "stylua",
  },
}
"""


def has_neovim_ppa(sources_dir: Path = APT_SOURCES_DIR) -> bool:
    """Check whether the unstable Neovim PPA is already an apt source."""
    if not sources_dir.is_dir():
        return False
    for source in sources_dir.iterdir():
        try:
            if "neovim-ppa/unstable" in source.read_text(errors="ignore"):
                return True
        except OSError:
            continue
    return False


def npm_global(package: str) -> Step:
    """Install a global npm package, escalating where system npm needs root."""

    def action(context: RunContext) -> None:
        privileged = MANAGER_SPECS[context.manager].needs_root
        context.run(["npm", "install", "-g", package], privileged=privileged)

    return Step(f"Install {package} (npm)", action, requires=("npm",))


def install_neovim(sources_dir: Path = APT_SOURCES_DIR) -> Step:
    """Install Neovim with its Python client, then check ``nvim`` exists."""

    def action(context: RunContext) -> None:
        manager = context.manager

        if manager is ManagerKind.APT and not has_neovim_ppa(sources_dir):
            install_all(
                manager, ["software-properties-common"], context.runner, context.env
            )
            context.run(["add-apt-repository", NEOVIM_PPA, "-y"], privileged=True)
            context.run(["apt-get", "update"], privileged=True)
        elif manager is ManagerKind.YUM:
            install_all(manager, ["epel-release"], context.runner, context.env)

        packages = ["neovim"]
        if manager is not ManagerKind.BREW:
            packages.append("python-neovim")
        install_all(
            manager, packages, context.runner, context.env, overrides=context.overrides
        )

        if not context.dry_run and context.env.which("nvim") is None:
            raise VerificationFailedError(["nvim"])

    return Step("Install Neovim", action)


def _cargo_environment(context: RunContext) -> Environment:
    return context.env.with_path_prepended(context.home_path(".cargo/bin"))


def install_rust() -> Step:
    """Install Rust through rustup, or update an existing toolchain."""

    def action(context: RunContext) -> Environment:
        if context.env.which("rustup"):
            logger.info("Rust is already installed, updating...")
            context.run(["rustup", "update"])
        else:
            execute_installer(context, RUSTUP_INSTALL_URL, args=["-y"])
        return _cargo_environment(context)

    return Step("Install Rust", action)


def install_go() -> Step:
    """Install Go, check it exists, and export GOPATH with its bin directory."""

    def action(context: RunContext) -> Environment:
        install_all(
            context.manager,
            ["golang"],
            context.runner,
            context.env,
            overrides=context.overrides,
        )
        if not context.dry_run and context.env.which("go") is None:
            raise VerificationFailedError(["go"])

        gopath = context.env.get("GOPATH") or str(context.home_path("go"))
        return context.env.with_variable("GOPATH", gopath).with_path_appended(
            Path(gopath) / "bin"
        )

    return Step("Install Go", action)


def build_pipeline(config: NvimConfig, sources_dir: Path = APT_SOURCES_DIR) -> Pipeline:
    """
    Build the AstroNvim setup pipeline.

    Args:
        config: Neovim profile configuration
        sources_dir: apt sources directory checked for the Neovim PPA

    Returns:
        Pipeline ready to run
    """
    nvim_config = ".config/nvim"
    steps = [
        refresh_index(),
        install_packages(config.packages, name="Install base dependencies"),
        npm_global("npm@latest"),
        install_neovim(sources_dir),
        install_rust(),
        install_go(),
        backup(
            "Back up existing Neovim configuration",
            nvim_config,
            ".local/share/nvim",
        ),
        git_clone("Install AstroNvim", config.distribution_repo, nvim_config, depth=1),
        git_clone(
            "Install user configuration", config.user_repo, f"{nvim_config}/lua/user"
        ),
        npm_global("pyright"),
        install_packages(["jdk17"], name="Install JDK 17"),
        make_directory(
            "Create jdtls directory", ".local/share/nvim/mason/packages/jdtls"
        ),
        run_command(
            "Install rust-analyzer",
            ["rustup", "component", "add", "rust-analyzer"],
            requires=("rustup",),
        ),
        run_command(
            "Install gopls",
            ["go", "install", "golang.org/x/tools/gopls@latest"],
            requires=("go",),
        ),
        install_packages(["clangd"], name="Install clangd"),
        write_file(
            "Create Mason setup",
            f"{nvim_config}/lua/user/mason-setup/init.lua",
            MASON_SETUP,
        ),
        verify_tools(config.required_tools),
    ]
    return Pipeline("AstroNvim", steps)


__all__ = [
    "MASON_SETUP",
    "NEOVIM_PPA",
    "RUSTUP_INSTALL_URL",
    "build_pipeline",
    "has_neovim_ppa",
    "install_go",
    "install_neovim",
    "install_rust",
    "npm_global",
]

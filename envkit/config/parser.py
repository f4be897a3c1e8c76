"""YAML configuration parser for EnvKit.

This module provides parsing and validation for envkit.yaml profile files.
Every section is optional; missing values fall back to the defaults below.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from envkit.core.exceptions import ConfigError
from envkit.packages.kinds import ManagerKind

DEFAULT_CONFIG_NAME = "envkit.yaml"

ZSH_PACKAGES = ["zsh", "git", "curl", "fastfetch"]

NVIM_PACKAGES = [
    "git",
    "curl",
    "unzip",
    "npm",
    "python3",
    "python3-pip",
    "ripgrep",
    "gcc",
    "make",
    "nodejs",
]


@dataclass
class ZshConfig:
    """Zsh profile configuration."""

    packages: List[str] = field(default_factory=lambda: list(ZSH_PACKAGES))
    config_repo: str = "git@github.com:2k4sm/sys-config.git"
    plugins: Dict[str, str] = field(
        default_factory=lambda: {
            "zsh-syntax-highlighting": "https://github.com/zsh-users/zsh-syntax-highlighting.git",
            "zsh-autosuggestions": "https://github.com/zsh-users/zsh-autosuggestions",
        }
    )
    set_default_shell: bool = True


@dataclass
class NvimConfig:
    """Neovim profile configuration."""

    packages: List[str] = field(default_factory=lambda: list(NVIM_PACKAGES))
    distribution_repo: str = "https://github.com/AstroNvim/AstroNvim"
    user_repo: str = "https://github.com/2k4sm/user"
    required_tools: List[str] = field(
        default_factory=lambda: ["nvim", "git", "npm", "python3", "go", "rustc", "clangd"]
    )


@dataclass
class EnvKitConfig:
    """Complete EnvKit configuration."""

    version: int = 1
    home: Optional[Path] = None
    dry_run: bool = False
    zsh: ZshConfig = field(default_factory=ZshConfig)
    nvim: NvimConfig = field(default_factory=NvimConfig)
    overrides: Dict[str, Dict[ManagerKind, str]] = field(default_factory=dict)


_TOP_LEVEL_KEYS = {"version", "home", "dry_run", "zsh", "nvim", "overrides"}


def parse_config(config_path: Path) -> EnvKitConfig:
    """
    Parse envkit.yaml configuration file.

    Args:
        config_path: Path to envkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        return EnvKitConfig()

    return parse_data(data)


def load_config(
    config_path: Optional[Path] = None, search_dir: Optional[Path] = None
) -> EnvKitConfig:
    """
    Load configuration from an explicit path or the default location.

    Args:
        config_path: Explicit file (must exist)
        search_dir: Directory searched for envkit.yaml (default: cwd)

    Returns:
        Parsed configuration, or defaults when no file is present
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
    if default.exists():
        return parse_config(default)
    return EnvKitConfig()


def parse_data(data: Any) -> EnvKitConfig:
    """Parse and validate already-loaded configuration data."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    config = EnvKitConfig(version=version)

    if data.get("home"):
        config.home = Path(str(data["home"])).expanduser()

    if "dry_run" in data:
        config.dry_run = _bool(data["dry_run"], "dry_run")

    if "zsh" in data:
        section = _section(data, "zsh")
        zsh = config.zsh
        if "packages" in section:
            zsh.packages = _string_list(section["packages"], "zsh.packages")
        if "config_repo" in section:
            zsh.config_repo = str(section["config_repo"])
        if "plugins" in section:
            plugins = section["plugins"]
            if not isinstance(plugins, dict):
                raise ConfigError("zsh.plugins must be a mapping of name to URL")
            zsh.plugins = {str(k): str(v) for k, v in plugins.items()}
        if "set_default_shell" in section:
            zsh.set_default_shell = _bool(
                section["set_default_shell"], "zsh.set_default_shell"
            )

    if "nvim" in data:
        section = _section(data, "nvim")
        nvim = config.nvim
        if "packages" in section:
            nvim.packages = _string_list(section["packages"], "nvim.packages")
        if "distribution_repo" in section:
            nvim.distribution_repo = str(section["distribution_repo"])
        if "user_repo" in section:
            nvim.user_repo = str(section["user_repo"])
        if "required_tools" in section:
            nvim.required_tools = _string_list(
                section["required_tools"], "nvim.required_tools"
            )

    if "overrides" in data:
        config.overrides = _parse_overrides(data["overrides"])

    return config


def _section(data: dict, key: str) -> dict:
    section = data[key] or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return section


def _string_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"'{key}' must be a list of non-empty strings")
    return list(value)


def _bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _parse_overrides(value: Any) -> Dict[str, Dict[ManagerKind, str]]:
    if not isinstance(value, dict):
        raise ConfigError("'overrides' must be a mapping of package to manager names")

    overrides: Dict[str, Dict[ManagerKind, str]] = {}
    for package, names in value.items():
        if not isinstance(names, dict):
            raise ConfigError(f"overrides.{package} must be a mapping")
        table = {}
        for manager, name in names.items():
            try:
                kind = ManagerKind.parse(str(manager))
            except ValueError as e:
                raise ConfigError(f"overrides.{package}: {e}") from e
            table[kind] = str(name)
        overrides[str(package)] = table
    return overrides


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "EnvKitConfig",
    "NvimConfig",
    "ZshConfig",
    "load_config",
    "parse_config",
    "parse_data",
]

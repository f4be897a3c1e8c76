"""
Configuration loading for EnvKit.
"""

from .parser import (
    DEFAULT_CONFIG_NAME,
    EnvKitConfig,
    NvimConfig,
    ZshConfig,
    load_config,
    parse_config,
    parse_data,
)
from envkit.core.exceptions import ConfigError

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ConfigError",
    "EnvKitConfig",
    "NvimConfig",
    "ZshConfig",
    "load_config",
    "parse_config",
    "parse_data",
]

"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from envkit.config.parser import EnvKitConfig, load_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_run_config(args) -> EnvKitConfig:
    """
    Load configuration and apply command-line overrides.

    Args:
        args: Parsed arguments (config, home, dry_run)

    Returns:
        Configuration with CLI flags taking precedence

    Raises:
        ConfigError: If the configuration file is invalid
    """
    config_path = getattr(args, "config", None)
    config = load_config(Path(config_path) if config_path else None)

    if getattr(args, "dry_run", False):
        config.dry_run = True
    home = getattr(args, "home", None)
    if home:
        config.home = Path(home).expanduser()

    logger.debug(f"Configuration: {config}")
    return config


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def format_success_message(
    title: str,
    details: Dict[str, Any],
    next_steps: Optional[List[str]] = None,
    width: int = 70,
) -> str:
    """
    Format a standardized success message.

    Args:
        title: Success message title
        details: Key-value pairs to display
        next_steps: Optional list of next step instructions
        width: Width of message box

    Returns:
        Formatted message string
    """
    lines = ["=" * width, title, "=" * width, ""]

    for key, value in details.items():
        lines.append(f"{key}: {value}")

    if next_steps:
        lines.append("")
        lines.append("Next steps:")
        for step in next_steps:
            lines.append(f"  {step}")

    lines.append("")
    return "\n".join(lines)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


# ============================================================================
# Profile Execution
# ============================================================================


def run_profile_command(args, profile: str) -> Optional[Any]:
    """
    Load configuration, start a session and run a profile.

    Args:
        args: Parsed command-line arguments
        profile: Profile name ('zsh' or 'nvim')

    Returns:
        Final run context, or None if the run failed (error already printed)
    """
    from envkit.core.exceptions import EnvKitError
    from envkit.setup.session import run_profile, start_session

    try:
        config = load_run_config(args)
        context = start_session(config)
        return run_profile(profile, config, context)
    except EnvKitError as e:
        logger.debug(f"{profile} setup failed", exc_info=True)
        print_error(f"{profile} setup failed", str(e))
        return None

"""
Zsh command implementation.

Runs the Zsh environment profile.
"""

import logging

from envkit.cli.utils import format_success_message, run_profile_command

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the zsh command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")

    context = run_profile_command(args, "zsh")
    if context is None:
        return 1

    print(
        format_success_message(
            "Installation complete!",
            {"Package manager": context.manager, "Home": context.home},
            next_steps=["Log out and log back in to start using Zsh."],
        )
    )
    return 0

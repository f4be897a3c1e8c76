"""
Nvim command implementation.

Runs the AstroNvim profile.
"""

import logging

from envkit.cli.utils import format_success_message, run_profile_command

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the nvim command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")

    context = run_profile_command(args, "nvim")
    if context is None:
        return 1

    print(
        format_success_message(
            "Installation complete!",
            {"Package manager": context.manager, "Home": context.home},
            next_steps=[
                "Run 'nvim' and let AstroNvim complete the setup.",
                "Language servers are installed by Mason on first launch.",
                "Java development needs JDK 17 or later.",
            ],
        )
    )
    return 0

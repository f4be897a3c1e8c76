"""
Verify command implementation.

Checks that the given tools (by default the Neovim profile's required
tools) are reachable on PATH.
"""

import logging

from envkit.cli.utils import load_run_config, print_error
from envkit.core.environment import Environment
from envkit.setup.steps import find_missing_tools

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the verify command.

    Args:
        args: Parsed command-line arguments (tools)

    Returns:
        0 if every tool is present, 1 otherwise
    """
    logger.debug(f"Arguments: {args}")

    tools = list(args.tools) or load_run_config(args).nvim.required_tools
    missing = find_missing_tools(tools, Environment.from_os())

    for tool in tools:
        print(f"  {'MISSING' if tool in missing else 'ok':8} {tool}")

    if missing:
        print_error(
            "The following required tools are not installed", " ".join(missing)
        )
        return 1

    logger.info("All required tools are installed")
    return 0

"""
Install command implementation.

Detects the package manager once, then resolves and installs each named
package in order, stopping at the first failure.
"""

import logging

from envkit.cli.utils import load_run_config, print_error
from envkit.core.exceptions import EnvKitError
from envkit.packages.installer import install_all, refresh
from envkit.setup.session import start_session

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments (packages, refresh)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug(f"Arguments: {args}")

    try:
        config = load_run_config(args)
        context = start_session(config)

        if args.refresh:
            refresh(context.manager, context.runner, context.env)

        outcomes = install_all(
            context.manager,
            args.packages,
            context.runner,
            context.env,
            overrides=context.overrides,
        )
    except EnvKitError as e:
        logger.debug("Install failed", exc_info=True)
        print_error("Installation failed", str(e))
        return 1

    for outcome in outcomes:
        logger.info(f"Installed {outcome.package} with {outcome.manager}")
    return 0

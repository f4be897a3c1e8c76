"""
EnvKit CLI argument parser.

This module implements the command-line interface for EnvKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from envkit.packages.kinds import SUPPORTED_MANAGERS

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("envkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """EnvKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="envkit",
            description="EnvKit - Developer workstation provisioning",
            epilog='Use "envkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"EnvKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./envkit.yaml)",
        )
        parser.add_argument(
            "--home",
            type=Path,
            metavar="DIR",
            help="Home directory to provision (default: $HOME)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print commands and file operations without performing them",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_detect_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_install_command(subparsers)
        self._add_zsh_command(subparsers)
        self._add_nvim_command(subparsers)
        self._add_verify_command(subparsers)

        return parser

    def _add_detect_command(self, subparsers):
        """Add 'detect' subcommand."""
        subparsers.add_parser(
            "detect",
            help="Show the detected package manager",
            description="Probe the host and print the package manager EnvKit would use",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Show manager-specific package names",
            description="Map generic package names to the names a package manager uses",
        )
        parser.add_argument("packages", nargs="+", metavar="NAME", help="Generic name")
        parser.add_argument(
            "--manager",
            choices=[kind.value for kind in SUPPORTED_MANAGERS],
            metavar="KIND",
            help="Package manager to resolve for (default: detected)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install packages with the detected package manager",
            description="Resolve and install packages in order, stopping at the first failure",
        )
        parser.add_argument("packages", nargs="+", metavar="NAME", help="Generic name")
        parser.add_argument(
            "--refresh",
            action="store_true",
            help="Refresh the package index before installing",
        )

    def _add_zsh_command(self, subparsers):
        """Add 'zsh' subcommand."""
        subparsers.add_parser(
            "zsh",
            help="Set up Zsh with Oh My Zsh, plugins, Bun and Go",
            description="Install and configure the Zsh environment",
        )

    def _add_nvim_command(self, subparsers):
        """Add 'nvim' subcommand."""
        subparsers.add_parser(
            "nvim",
            help="Set up Neovim with AstroNvim and language servers",
            description="Install Neovim, language toolchains and the AstroNvim configuration",
        )

    def _add_verify_command(self, subparsers):
        """Add 'verify' subcommand."""
        parser = subparsers.add_parser(
            "verify",
            help="Check that required tools are installed",
            description="Check that tools are reachable on PATH",
        )
        parser.add_argument(
            "tools",
            nargs="*",
            metavar="TOOL",
            help="Tools to check (default: the nvim profile's required tools)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "detect": "envkit.cli.commands.detect",
            "resolve": "envkit.cli.commands.resolve",
            "install": "envkit.cli.commands.install",
            "zsh": "envkit.cli.commands.zsh",
            "nvim": "envkit.cli.commands.nvim",
            "verify": "envkit.cli.commands.verify",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()

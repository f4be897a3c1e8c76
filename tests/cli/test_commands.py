"""
Tests for CLI command implementations.
"""

from unittest.mock import patch

import pytest

from envkit.cli.commands import detect as detect_command
from envkit.cli.commands import install as install_command
from envkit.cli.commands import nvim as nvim_command
from envkit.cli.commands import resolve as resolve_command
from envkit.cli.commands import verify as verify_command
from envkit.cli.commands import zsh as zsh_command
from envkit.cli.parser import CLI
from envkit.core.exceptions import UnknownManagerError
from envkit.core.platform import PlatformInfo
from envkit.packages.kinds import ManagerKind


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run commands from an empty directory so no envkit.yaml is picked up."""
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


def parse(*argv):
    return CLI().parse_args(list(argv))


class TestDetectCommand:
    """Test detect command."""

    def test_prints_manager(self, capsys):
        """Test detect prints the platform and manager."""
        arch = PlatformInfo("linux", "x64", "arch")

        with patch.object(
            detect_command, "detect_platform", return_value=arch
        ), patch.object(detect_command, "detect", return_value=ManagerKind.PACMAN):
            assert detect_command.run(parse("detect")) == 0

        out = capsys.readouterr().out
        assert "Package manager: pacman" in out
        assert "linux-x64 (arch)" in out

    def test_unknown_exits_1(self, capsys):
        """Test detect fails when no manager is found."""
        with patch.object(detect_command, "detect", return_value=ManagerKind.UNKNOWN):
            assert detect_command.run(parse("detect")) == 1

    def test_missing_homebrew_is_not_an_error(self, capsys):
        """Test missing Homebrew is reported but not fatal."""
        with patch.object(detect_command, "detect", return_value=ManagerKind.MISSING):
            assert detect_command.run(parse("detect")) == 0

        assert "Homebrew is not installed" in capsys.readouterr().out


class TestResolveCommand:
    """Test resolve command."""

    def test_explicit_manager(self, capsys):
        """Test resolving names for an explicit manager."""
        args = parse("resolve", "python3-pip", "golang", "git", "--manager", "brew")

        assert resolve_command.run(args) == 0
        assert capsys.readouterr().out.splitlines() == [
            "python3-pip: python3",
            "golang: go",
            "git: git",
        ]

    def test_missing_homebrew_resolves_for_brew(self, capsys):
        """Test missing Homebrew resolves names for brew."""
        with patch.object(resolve_command, "detect", return_value=ManagerKind.MISSING):
            assert resolve_command.run(parse("resolve", "clangd")) == 0

        assert capsys.readouterr().out.strip() == "clangd: llvm"

    def test_unknown_manager(self, capsys):
        """Test resolve fails without a detectable manager."""
        with patch.object(resolve_command, "detect", return_value=ManagerKind.UNKNOWN):
            assert resolve_command.run(parse("resolve", "git")) == 1

        assert "Use --manager" in capsys.readouterr().err

    def test_config_overrides(self, workdir, capsys):
        """Test overrides from envkit.yaml are applied."""
        (workdir / "envkit.yaml").write_text("overrides:\n  fd: {apt: fd-find}\n")

        assert resolve_command.run(parse("resolve", "fd", "--manager", "apt")) == 0
        assert capsys.readouterr().out.strip() == "fd: fd-find"


class TestInstallCommand:
    """Test install command."""

    def test_installs_in_order(self, make_context, runner):
        """Test install refreshes then installs each package in order."""
        with patch.object(
            install_command, "start_session", return_value=make_context(ManagerKind.DNF)
        ):
            assert install_command.run(parse("install", "--refresh", "clangd", "git")) == 0

        assert runner.calls == [
            ["sudo", "dnf", "check-update"],
            ["sudo", "dnf", "install", "-y", "clang-tools-extra"],
            ["sudo", "dnf", "install", "-y", "git"],
        ]

    def test_failure_exits_1(self, make_context, runner, capsys):
        """Test an install failure stops the run and exits with 1."""
        runner.fail_on = lambda argv: argv[-1] == "git"

        with patch.object(install_command, "start_session", return_value=make_context()):
            assert install_command.run(parse("install", "git", "curl")) == 1

        assert "Installation failed" in capsys.readouterr().err
        assert len(runner.calls) == 1

    def test_unknown_manager(self, capsys):
        """Test install fails when no manager is detected."""
        with patch.object(
            install_command, "start_session", side_effect=UnknownManagerError()
        ):
            assert install_command.run(parse("install", "git")) == 1

        assert "Could not detect a supported package manager" in capsys.readouterr().err

    def test_cli_flags_reach_config(self, make_context, tmp_path):
        """Test --dry-run and --home override the configuration."""
        with patch.object(
            install_command, "start_session", return_value=make_context()
        ) as mock_start:
            install_command.run(
                parse("--dry-run", "--home", str(tmp_path / "h"), "install", "git")
            )

        config = mock_start.call_args.args[0]
        assert config.dry_run is True
        assert config.home == tmp_path / "h"


class TestProfileCommands:
    """Test zsh and nvim commands."""

    @pytest.mark.parametrize(
        "command,name", [(zsh_command, "zsh"), (nvim_command, "nvim")]
    )
    def test_success(self, make_context, capsys, command, name):
        """Test a successful profile run prints the summary."""
        context = make_context()

        with patch(
            "envkit.setup.session.start_session", return_value=context
        ), patch("envkit.setup.session.run_profile", return_value=context) as mock_run:
            assert command.run(parse(name)) == 0

        assert mock_run.call_args.args[0] == name
        assert "Installation complete!" in capsys.readouterr().out

    def test_failure(self, capsys):
        """Test a failed profile run exits with 1."""
        with patch(
            "envkit.setup.session.start_session", side_effect=UnknownManagerError()
        ):
            assert zsh_command.run(parse("zsh")) == 1

        assert "zsh setup failed" in capsys.readouterr().err


class TestVerifyCommand:
    """Test verify command."""

    def test_reports_missing(self, add_tools, bin_dir, monkeypatch, capsys):
        """Test verify lists missing tools and fails."""
        add_tools("git")
        monkeypatch.setenv("PATH", str(bin_dir))

        assert verify_command.run(parse("verify", "git", "nvim")) == 1

        captured = capsys.readouterr()
        assert "ok       git" in captured.out
        assert "MISSING  nvim" in captured.out
        assert "nvim" in captured.err

    def test_all_present(self, add_tools, bin_dir, monkeypatch):
        """Test verify succeeds when every tool exists."""
        add_tools("git", "go")
        monkeypatch.setenv("PATH", str(bin_dir))

        assert verify_command.run(parse("verify", "git", "go")) == 0

    def test_defaults_to_nvim_tools(self, bin_dir, monkeypatch, capsys):
        """Test verify checks the nvim profile tools by default."""
        monkeypatch.setenv("PATH", str(bin_dir))

        assert verify_command.run(parse("verify")) == 1

        out = capsys.readouterr().out
        for tool in ["nvim", "git", "npm", "python3", "go", "rustc", "clangd"]:
            assert tool in out

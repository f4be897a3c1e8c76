"""
Tests for the Zsh profile pipeline.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from envkit.config.parser import ZshConfig
from envkit.core.exceptions import CommandFailedError
from envkit.packages.kinds import ManagerKind
from envkit.setup.zsh import build_pipeline, set_login_shell, zsh_custom_dir
from tests.mocks import RecordingRunner


def fake_download(url, destination, timeout=30):
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text("#!/bin/sh\n")
    return destination


def clone_config_repo(argv):
    """Simulate cloning the configuration repository."""
    if argv[:2] == ["git", "clone"] and argv[-1].endswith("repo"):
        checkout = Path(argv[-1])
        checkout.mkdir(parents=True)
        (checkout / ".zshrc").write_text("ZSH_THEME=robbyrussell\n")


@pytest.fixture
def zsh_host(add_tools, runner):
    add_tools("sh", "bash", "git", "zsh", "go")
    runner.on_run = clone_config_repo
    return runner


class TestZshPipeline:
    """Test the Zsh setup sequence."""

    def test_step_order(self):
        """Test the step order."""
        names = build_pipeline(ZshConfig()).step_names()

        assert names == [
            "Update package manager",
            "Install required packages",
            "Install Oh My Zsh",
            "Install zsh-syntax-highlighting",
            "Install zsh-autosuggestions",
            "Back up existing .zshrc",
            "Set up .zshrc",
            "Install Bun",
            "Install Go",
            "Set Zsh as default shell",
        ]

    def test_full_run_on_apt(self, zsh_host, make_context, home, bin_dir):
        """Test the full sequence on an apt host."""
        (home / ".zshrc").write_text("old config\n")

        with patch("envkit.setup.steps.download_file", side_effect=fake_download):
            final = build_pipeline(ZshConfig()).run(make_context(ManagerKind.APT))

        calls = zsh_host.calls
        assert calls[0] == ["sudo", "apt-get", "update"]
        assert calls[1:5] == [
            ["sudo", "apt-get", "install", "-y", name]
            for name in ["zsh", "git", "curl", "fastfetch"]
        ]
        assert calls[5][0] == "sh" and calls[5][-1] == "--unattended"
        assert zsh_host.envs[5].get("RUNZSH") == "no"
        assert zsh_host.envs[5].get("CHSH") == "no"
        plugins = home / ".oh-my-zsh" / "custom" / "plugins"
        assert calls[6][-1] == str(plugins / "zsh-syntax-highlighting")
        assert calls[7][-1] == str(plugins / "zsh-autosuggestions")
        assert calls[8][:3] == ["git", "clone", "git@github.com:2k4sm/sys-config.git"]
        assert calls[9][0] == "bash"
        assert calls[10] == ["chsh", "-s", str(bin_dir / "zsh")]
        assert len(calls) == 11

        assert (home / ".zshrc").read_text() == "ZSH_THEME=robbyrussell\n"
        backups = [p for p in home.iterdir() if p.name.startswith(".zshrc.bak.")]
        assert [p.read_text() for p in backups] == ["old config\n"]
        assert final.env.path[0] == str(home / ".bun" / "bin")

    def test_installs_go_when_missing(self, add_tools, runner, make_context):
        """Test Go is installed when missing."""
        add_tools("sh", "bash", "git", "zsh")
        runner.on_run = clone_config_repo

        with patch("envkit.setup.steps.download_file", side_effect=fake_download):
            build_pipeline(ZshConfig()).run(make_context(ManagerKind.PACMAN))

        assert ["sudo", "pacman", "-S", "--noconfirm", "go"] in runner.calls

    def test_plugin_clone_failure_halts(self, zsh_host, make_context, home):
        """Test a failed plugin clone stops the run."""
        zsh_host.fail_on = lambda argv: "zsh-syntax-highlighting" in argv[-1]

        with patch("envkit.setup.steps.download_file", side_effect=fake_download):
            with pytest.raises(CommandFailedError):
                build_pipeline(ZshConfig()).run(make_context())

        assert not any(call[0] == "chsh" for call in zsh_host.calls)

    def test_dry_run_changes_nothing(self, make_context, home):
        """Test dry run changes nothing."""
        (home / ".zshrc").write_text("old config\n")
        runner = RecordingRunner(dry_run=True)

        with patch("envkit.setup.steps.download_file") as mock_download:
            build_pipeline(ZshConfig()).run(make_context(runner=runner))

        mock_download.assert_not_called()
        assert (home / ".zshrc").read_text() == "old config\n"
        assert list(home.iterdir()) == [home / ".zshrc"]


class TestZshHelpers:
    """Test custom dir and login shell helpers."""

    def test_zsh_custom_from_environment(self, make_context, env, tmp_path):
        """Test ZSH_CUSTOM is honoured."""
        context = make_context(env=env.with_variable("ZSH_CUSTOM", tmp_path / "omz"))

        assert zsh_custom_dir(context) == tmp_path / "omz"

    def test_login_shell_on_macos(self, add_tools, make_context, macos, runner, bin_dir):
        """Test chsh runs through sudo for the user on macOS."""
        add_tools("zsh")

        set_login_shell().action(make_context(ManagerKind.BREW, platform=macos))

        assert runner.calls == [["sudo", "chsh", "-s", str(bin_dir / "zsh"), "dev"]]

    def test_skip_login_shell(self):
        """Test the login shell step can be disabled."""
        config = ZshConfig(set_default_shell=False)

        assert "Set Zsh as default shell" not in build_pipeline(config).step_names()

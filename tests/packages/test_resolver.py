"""
Unit tests for package name resolution.
"""

import pytest

from envkit.packages.kinds import SUPPORTED_MANAGERS, ManagerKind
from envkit.packages.resolver import PackageRequest, resolve


class TestResolve:
    """Test resolve function."""

    @pytest.mark.parametrize(
        "manager,generic,expected",
        [
            (ManagerKind.BREW, "python3-pip", "python3"),
            (ManagerKind.APT, "python3-pip", "python3-pip"),
            (ManagerKind.PACMAN, "python3-pip", "python3-pip"),
            (ManagerKind.PACMAN, "golang", "go"),
            (ManagerKind.APT, "golang", "golang"),
            (ManagerKind.DNF, "clangd", "clang-tools-extra"),
            (ManagerKind.BREW, "clangd", "llvm"),
            (ManagerKind.ZYPPER, "clangd", "clang"),
            (ManagerKind.APT, "jdk17", "openjdk-17-jdk"),
            (ManagerKind.BREW, "jdk17", "openjdk@17"),
            (ManagerKind.APT, "python-neovim", "python3-pynvim"),
            (ManagerKind.BREW, "python-neovim", "python-neovim"),
        ],
    )
    def test_special_cases(self, manager, generic, expected):
        """Test the built-in name overrides."""
        assert resolve(manager, generic) == expected

    @pytest.mark.parametrize("manager", SUPPORTED_MANAGERS)
    def test_identity_for_common_names(self, manager):
        """Test names without overrides resolve to themselves."""
        assert resolve(manager, "ripgrep") == "ripgrep"
        assert resolve(manager, "git") == "git"

    def test_sentinel_managers_fall_through(self):
        """Test sentinel managers get the generic name."""
        assert resolve(ManagerKind.UNKNOWN, "golang") == "golang"

    def test_extra_overrides_win(self):
        """Test extra overrides take precedence."""
        overrides = {"golang": {ManagerKind.PACMAN: "go-git"}}

        assert resolve(ManagerKind.PACMAN, "golang", overrides) == "go-git"
        assert resolve(ManagerKind.ZYPPER, "golang", overrides) == "go"


class TestPackageRequest:
    """Test PackageRequest."""

    def test_own_overrides(self):
        """Test a request's own overrides."""
        request = PackageRequest("fd", {ManagerKind.APT: "fd-find"})

        assert request.resolve(ManagerKind.APT) == "fd-find"
        assert request.resolve(ManagerKind.BREW) == "fd"

    def test_falls_back_to_builtin_table(self):
        """Test requests fall back to the built-in table."""
        assert PackageRequest("clangd").resolve(ManagerKind.BREW) == "llvm"

    def test_empty_name(self):
        """Test an empty name is rejected."""
        with pytest.raises(ValueError):
            PackageRequest("")

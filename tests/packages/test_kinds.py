"""
Unit tests for package manager kinds and command tables.
"""

import pytest

from envkit.packages.kinds import (
    LINUX_PROBE_ORDER,
    MANAGER_SPECS,
    SUPPORTED_MANAGERS,
    ManagerKind,
)


class TestManagerKind:
    """Test ManagerKind enum."""

    def test_sentinels_are_not_supported(self):
        """Test UNKNOWN and MISSING are not supported."""
        assert not ManagerKind.UNKNOWN.is_supported
        assert not ManagerKind.MISSING.is_supported

    def test_every_supported_kind_has_spec(self):
        """Test every real manager has a spec."""
        assert set(SUPPORTED_MANAGERS) == {
            ManagerKind.APT,
            ManagerKind.DNF,
            ManagerKind.YUM,
            ManagerKind.PACMAN,
            ManagerKind.ZYPPER,
            ManagerKind.BREW,
        }

    @pytest.mark.parametrize("value", ["apt", " Pacman ", "BREW"])
    def test_parse(self, value):
        """Test parsing manager names."""
        assert ManagerKind.parse(value).value == value.strip().lower()

    @pytest.mark.parametrize("value", ["unknown", "missing", "emerge", ""])
    def test_parse_rejects(self, value):
        """Test parsing rejects sentinels and unknown names."""
        with pytest.raises(ValueError, match="Unknown package manager"):
            ManagerKind.parse(value)

    def test_str(self):
        """Test the string form is the value."""
        assert str(ManagerKind.ZYPPER) == "zypper"


class TestManagerSpecs:
    """Test static manager command tables."""

    def test_probe_order(self):
        """Test the Linux probe order."""
        assert [k.value for k in LINUX_PROBE_ORDER] == [
            "apt",
            "dnf",
            "yum",
            "pacman",
            "zypper",
        ]

    def test_only_dnf_and_yum_refresh_may_fail(self):
        """Test only dnf and yum tolerate refresh failures."""
        tolerant = {k for k, spec in MANAGER_SPECS.items() if spec.refresh_may_fail}
        assert tolerant == {ManagerKind.DNF, ManagerKind.YUM}

    def test_brew_runs_unprivileged(self):
        """Test brew does not need root."""
        assert not MANAGER_SPECS[ManagerKind.BREW].needs_root
        assert MANAGER_SPECS[ManagerKind.APT].needs_root

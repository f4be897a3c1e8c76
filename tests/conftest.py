"""
Pytest configuration and shared fixtures for EnvKit tests.
"""

from pathlib import Path

import pytest

from envkit.core.environment import Environment
from envkit.core.platform import PlatformInfo
from envkit.packages.kinds import ManagerKind
from envkit.setup.pipeline import RunContext
from tests.mocks import RecordingRunner, make_executables


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def home(tmp_path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path) -> Path:
    return make_executables(tmp_path / "bin")


@pytest.fixture
def env(bin_dir, home) -> Environment:
    """Environment whose PATH only contains ``bin_dir``."""
    return Environment(
        path=(str(bin_dir),), variables={"HOME": str(home), "USER": "dev"}
    )


@pytest.fixture
def linux() -> PlatformInfo:
    return PlatformInfo("linux", "x64", "ubuntu")


@pytest.fixture
def macos() -> PlatformInfo:
    return PlatformInfo("macos", "arm64")


@pytest.fixture
def make_context(runner, env, linux, home):
    """Factory for RunContext with sensible defaults."""

    def factory(manager: ManagerKind = ManagerKind.APT, **kwargs) -> RunContext:
        values = dict(
            manager=manager,
            env=env,
            runner=runner,
            platform=linux,
            home=home,
            user="dev",
        )
        values.update(kwargs)
        return RunContext(**values)

    return factory


@pytest.fixture
def add_tools(bin_dir):
    """Make executables reachable through the ``env`` fixture's PATH."""

    def factory(*names: str) -> Path:
        return make_executables(bin_dir, *names)

    return factory

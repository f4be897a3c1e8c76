"""
Immutable process environment for EnvKit.

Provisioning steps make freshly installed toolchains reachable (Cargo's bin
directory, GOPATH/bin, the Homebrew prefix) without touching ``os.environ``.
Each such step returns a new :class:`Environment`; the command runner passes
the current one explicitly to every subprocess it starts.

Example:
    >>> env = Environment.from_os()
    >>> env = env.with_path_prepended(Path.home() / ".cargo" / "bin")
    >>> subprocess.run(["cargo", "--version"], env=env.to_dict())
"""

import os
import shutil
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Environment:
    """
    Environment variables and PATH entries for child processes.

    Attributes:
        path: PATH entries in search order
        variables: All other variables (PATH is never stored here)
    """

    path: Tuple[str, ...] = ()
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        variables = dict(self.variables)
        variables.pop("PATH", None)
        object.__setattr__(self, "path", tuple(str(p) for p in self.path))
        object.__setattr__(self, "variables", MappingProxyType(variables))

    @classmethod
    def from_os(cls, environ: Optional[Mapping[str, str]] = None) -> "Environment":
        """
        Snapshot an environment mapping (defaults to ``os.environ``).

        Args:
            environ: Mapping to copy

        Returns:
            New Environment
        """
        if environ is None:
            environ = os.environ
        path = tuple(p for p in environ.get("PATH", "").split(os.pathsep) if p)
        return cls(path=path, variables=dict(environ))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        if name == "PATH":
            return os.pathsep.join(self.path)
        return self.variables.get(name, default)

    def with_path_prepended(self, entry: Union[str, Path]) -> "Environment":
        """Return a copy with ``entry`` searched first (duplicates removed)."""
        entry = str(entry)
        rest = tuple(p for p in self.path if p != entry)
        return replace(self, path=(entry,) + rest)

    def with_path_appended(self, entry: Union[str, Path]) -> "Environment":
        """Return a copy with ``entry`` searched last, unless already present."""
        entry = str(entry)
        if entry in self.path:
            return self
        return replace(self, path=self.path + (entry,))

    def with_variable(self, name: str, value: Union[str, Path]) -> "Environment":
        if name == "PATH":
            raise ValueError("Use with_path_prepended/with_path_appended for PATH")
        variables = dict(self.variables)
        variables[name] = str(value)
        return replace(self, variables=variables)

    def which(self, name: str) -> Optional[str]:
        """
        Locate an executable on this environment's PATH.

        Args:
            name: Executable name

        Returns:
            Absolute path to executable, or None if not reachable
        """
        return shutil.which(name, path=os.pathsep.join(self.path))

    def to_dict(self) -> Dict[str, str]:
        """Flatten into a mapping suitable for ``subprocess`` ``env=``."""
        env = dict(self.variables)
        env["PATH"] = os.pathsep.join(self.path)
        return env


__all__ = ["Environment"]

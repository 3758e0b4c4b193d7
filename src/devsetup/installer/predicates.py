"""
Idempotency Predicates

A step's predicate answers "is the goal state already satisfied?". The set
of predicate kinds is closed: package registered, path exists, command
resolves, version equals.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, TYPE_CHECKING

from devsetup.installer.exceptions import CommandError

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


class Predicate:
    """Base class for idempotency predicates."""

    def evaluate(self, ctx: "EnvironmentContext") -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class PackageRegistered(Predicate):
    """True when every package is recorded as installed by the package manager."""
    packages: Tuple[str, ...]

    def __init__(self, *packages: str):
        if not packages:
            raise ValueError("PackageRegistered needs at least one package")
        object.__setattr__(self, "packages", tuple(packages))

    def evaluate(self, ctx: "EnvironmentContext") -> bool:
        return all(ctx.package_manager.is_installed(p) for p in self.packages)

    def describe(self) -> str:
        if len(self.packages) == 1:
            return f"package {self.packages[0]} installed"
        return f"{len(self.packages)} packages installed"


@dataclass(frozen=True)
class PathExists(Predicate):
    """True when every path exists. A leading ~ means the context home."""
    paths: Tuple[str, ...]

    def __init__(self, *paths: str):
        if not paths:
            raise ValueError("PathExists needs at least one path")
        object.__setattr__(self, "paths", tuple(paths))

    def evaluate(self, ctx: "EnvironmentContext") -> bool:
        return all(ctx.expand(p).exists() for p in self.paths)

    def describe(self) -> str:
        return ", ".join(self.paths) + " exists"


@dataclass(frozen=True)
class CommandResolves(Predicate):
    """True when the command is on PATH and running it exits 0."""
    argv: Tuple[str, ...]

    def __init__(self, *argv: str):
        if not argv:
            raise ValueError("CommandResolves needs a command")
        object.__setattr__(self, "argv", tuple(argv))

    def evaluate(self, ctx: "EnvironmentContext") -> bool:
        if ctx.which(self.argv[0]) is None:
            return False
        try:
            result = ctx.run(list(self.argv), check=False, timeout=30)
        except CommandError:
            return False
        return result.returncode == 0

    def describe(self) -> str:
        return f"'{' '.join(self.argv)}' succeeds"


@dataclass(frozen=True)
class VersionEquals(Predicate):
    """True when the installed version string equals the latest one.

    Comparison is exact string equality. ``current`` returns None when
    nothing is installed, which never matches.
    """
    label: str
    current: Callable[["EnvironmentContext"], Optional[str]] = field(compare=False)
    latest: Callable[["EnvironmentContext"], str] = field(compare=False)

    def evaluate(self, ctx: "EnvironmentContext") -> bool:
        installed = self.current(ctx)
        if installed is None:
            return False
        return installed == self.latest(ctx)

    def describe(self) -> str:
        return f"{self.label} is the latest version"

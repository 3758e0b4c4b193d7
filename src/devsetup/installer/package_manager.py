"""
APT Package Manager

Host package manager collaborator: index update, upgrade, installed-package
queries, installs and cache cleanup.
"""

from typing import Callable, Iterable, List, Sequence

from devsetup.installer.command import CommandResult
from devsetup.installer.logging_config import get_logger


logger = get_logger("apt")

Runner = Callable[..., CommandResult]


class AptPackageManager:
    """apt-get / dpkg-query wrapper.

    All commands go through ``run`` so the caller controls the environment
    and tests can record calls instead of executing them.
    """

    def __init__(self, run: Runner):
        self._run = run

    def _apt(self, *args: str, **kwargs) -> CommandResult:
        return self._run(
            ["env", "DEBIAN_FRONTEND=noninteractive", "apt-get", *args],
            sudo=True,
            **kwargs
        )

    def update_index(self):
        """Refresh the package index (apt-get update)."""
        self._apt("update")

    def upgrade(self):
        """Upgrade every installed package."""
        self._apt("upgrade", "-y")

    def is_installed(self, package: str) -> bool:
        """Check if a Debian package is recorded as installed."""
        result = self._run(
            ["dpkg-query", "-W", "-f=${Status}", package],
            check=False,
        )
        return "install ok installed" in result.stdout

    def missing(self, packages: Iterable[str]) -> List[str]:
        """Return the packages that are not installed yet, in order."""
        return [package for package in packages if not self.is_installed(package)]

    def install(self, packages: Sequence[str]):
        """Install packages; an empty list is a no-op."""
        if not packages:
            return
        logger.info("Installing %d packages: %s", len(packages), ", ".join(packages))
        self._apt("install", "-y", *packages)

    def autoremove(self):
        self._apt("autoremove", "-y")

    def autoclean(self):
        self._apt("autoclean")

"""
Environment Context

Explicit process state shared by installation steps: the environment
variables passed to child processes (PATH in particular), the home
directory and its shell profiles, and the host collaborators.
"""

import getpass
import os
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from devsetup.installer.command import CommandResult, run_command
from devsetup.installer.logging_config import get_logger
from devsetup.installer.package_manager import AptPackageManager

if TYPE_CHECKING:
    from devsetup.config import SetupConfig
    from devsetup.downloader import Downloader
    from devsetup.installer.ui import InstallerUI


logger = get_logger("environment")

# Candidate shell profiles, relative to the home directory
PROFILE_FILES = (".bashrc", ".zshrc")


class EnvironmentContext:
    """State and collaborators handed to every step action and predicate."""

    def __init__(
        self,
        home: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        runner: Optional[Callable[..., CommandResult]] = None,
        package_manager: Optional[Any] = None,
        downloader: Optional["Downloader"] = None,
        ui: Optional["InstallerUI"] = None,
        config: Optional["SetupConfig"] = None,
        profile_files: Sequence[str] = PROFILE_FILES,
    ):
        from devsetup.config import SetupConfig
        from devsetup.downloader import Downloader
        from devsetup.installer.ui import InstallerUI

        self.home = Path(home) if home else Path.home()
        self.env = dict(env) if env is not None else dict(os.environ)
        self.env.setdefault("HOME", str(self.home))
        self.runner = runner or run_command
        self.package_manager = package_manager or AptPackageManager(self.run)
        self.downloader = downloader or Downloader()
        self.ui = ui or InstallerUI()
        self.config = config or SetupConfig()
        self.profile_files = tuple(profile_files)

    @property
    def user(self) -> str:
        return self.env.get("USER") or self.env.get("LOGNAME") or getpass.getuser()

    def expand(self, path: str) -> Path:
        """Expand a leading ~ against this context's home directory."""
        if path == "~":
            return self.home
        if path.startswith("~/"):
            return self.home / path[2:]
        return Path(path)

    def run(self, argv: Sequence[str], **kwargs) -> CommandResult:
        """Run a command with this context's environment."""
        kwargs.setdefault("env", self.env)
        return self.runner(list(argv), **kwargs)

    def which(self, command: str) -> Optional[str]:
        """Resolve a command against this context's PATH."""
        return shutil.which(command, path=self.env.get("PATH", os.defpath))

    def append_path(self, entry: str) -> bool:
        """Add an entry to PATH for the rest of the run.

        Returns:
            True if PATH changed
        """
        entries = [p for p in self.env.get("PATH", "").split(os.pathsep) if p]
        if entry in entries:
            return False
        entries.append(entry)
        self.env["PATH"] = os.pathsep.join(entries)
        logger.debug("PATH += %s", entry)
        return True

    def present_profiles(self) -> List[Path]:
        """Shell profile files that exist in the home directory."""
        return [self.home / name for name in self.profile_files if (self.home / name).is_file()]

    def ensure_profile_line(self, line: str, marker: Optional[str] = None) -> List[Path]:
        """Append a line to every present shell profile that lacks it.

        Args:
            line: Line to append (e.g. a PATH export)
            marker: Substring whose presence means the line is already there
                (defaults to the line itself)

        Returns:
            Profile files that were written
        """
        marker = marker or line
        written = []
        for profile in self.present_profiles():
            content = profile.read_text(errors="surrogateescape")
            if marker in content:
                continue
            prefix = "" if not content or content.endswith("\n") else "\n"
            with open(profile, "a") as f:
                f.write(f"{prefix}{line}\n")
            logger.info("Appended to %s: %s", profile, line)
            written.append(profile)
        return written

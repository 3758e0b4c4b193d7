"""
Command Runner

Thin subprocess wrapper used for every external tool call (apt, dpkg,
git, tar, sh). Commands are logged; output is captured for the log file.
"""

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, List

from devsetup.installer.exceptions import CommandError
from devsetup.installer.logging_config import get_logger


logger = get_logger("command")

# Default timeout for a single external command (seconds)
DEFAULT_TIMEOUT = 1800


@dataclass(frozen=True)
class CommandResult:
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def is_root() -> bool:
    """Check if the current process runs as root."""
    return hasattr(os, "geteuid") and os.geteuid() == 0


def with_sudo(argv: Sequence[str], preserve_env: bool = False) -> List[str]:
    """Prefix argv with sudo unless we already are root."""
    if is_root():
        return list(argv)
    prefix = ["sudo", "-E"] if preserve_env else ["sudo"]
    return [*prefix, *argv]


def run_command(
    argv: Sequence[str],
    *,
    check: bool = True,
    sudo: bool = False,
    preserve_env: bool = False,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    input_text: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Run a command with consistent logging.

    Args:
        argv: Command and arguments
        check: Raise CommandError on a non-zero exit status
        sudo: Run through sudo (skipped when already root)
        preserve_env: Pass -E to sudo
        env: Full environment for the child (default: inherit)
        cwd: Working directory
        input_text: Text fed to stdin
        timeout: Seconds before the command is killed

    Returns:
        CommandResult with captured output
    """
    argv_list = with_sudo(argv, preserve_env) if sudo else list(argv)
    logger.info("CMD %s", format_argv(argv_list))

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            capture_output=True,
            text=True,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(
            f"Command not found: {argv_list[0]}",
            argv=argv_list,
            stderr=str(e),
        )
    except subprocess.TimeoutExpired:
        raise CommandError(
            f"Command timed out after {timeout}s: {format_argv(argv_list)}",
            argv=argv_list,
        )

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(
            f"Command failed ({p.returncode}): {format_argv(argv_list)}",
            argv=argv_list,
            returncode=p.returncode,
            stderr=p.stderr,
        )

    return CommandResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)

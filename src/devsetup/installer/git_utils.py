"""
Git utilities for cloning plugin repositories.

Used by the Zsh step to fetch Oh My Zsh plugins.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


def is_git_available(ctx: "EnvironmentContext") -> bool:
    """Check if git is available on the context PATH.

    Returns:
        True if git command is available
    """
    return ctx.which("git") is not None


def clone_repository(ctx: "EnvironmentContext", url: str, target: Path, depth: int = 1) -> bool:
    """Clone a repository unless the target directory already exists.

    Args:
        ctx: Environment the clone runs in
        url: Repository URL
        target: Destination directory
        depth: Shallow clone depth (0 for full history)

    Returns:
        True if a clone was performed, False if the target already existed
    """
    if target.exists():
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    argv = ["git", "clone"]
    if depth:
        argv += ["--depth", str(depth)]
    argv += [url, str(target)]
    ctx.run(argv, timeout=300)
    return True

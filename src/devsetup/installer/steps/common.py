"""
Shared step helpers: package-list installs and signed APT repositories.
"""

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


def install_missing(ctx: "EnvironmentContext", packages: Sequence[str]) -> List[str]:
    """Install the packages that are not registered yet.

    Returns:
        Packages that were installed
    """
    missing = ctx.package_manager.missing(packages)
    for package in packages:
        if package not in missing:
            ctx.ui.print_warning(f"{package} is already installed")

    if missing:
        ctx.ui.print_info(f"Installing apt packages: {' '.join(missing)}")
        ctx.package_manager.install(missing)
        ctx.ui.print_success(f"Installed {', '.join(missing)}")
    return missing


def add_signed_repository(
    ctx: "EnvironmentContext",
    key_url: str,
    keyring_path: str,
    list_path: str,
    source_line: str,
):
    """Import a repository signing key, register the source and refresh the index."""
    ctx.ui.print_info(f"Adding APT repository {list_path}")
    key = ctx.downloader.fetch_text(key_url)
    ctx.run(["gpg", "--yes", "--dearmor", "-o", keyring_path], sudo=True, input_text=key)
    ctx.run(["chmod", "644", keyring_path], sudo=True)
    ctx.run(["tee", list_path], sudo=True, input_text=source_line + "\n")
    ctx.package_manager.update_index()


def run_remote_script(
    ctx: "EnvironmentContext",
    url: str,
    args: Sequence[str] = (),
    shell: str = "sh",
    sudo: bool = False,
):
    """Fetch an installer script and pipe it to a shell (curl | sh)."""
    script = ctx.downloader.fetch_text(url)
    argv = [shell, "-s", "--", *args] if args else [shell, "-s"]
    ctx.run(argv, input_text=script, sudo=sudo, preserve_env=sudo)

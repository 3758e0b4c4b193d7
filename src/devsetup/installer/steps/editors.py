"""
Editors Step

Visual Studio Code from Microsoft's APT repository.
"""

from typing import TYPE_CHECKING

from devsetup.installer.predicates import CommandResolves
from devsetup.installer.steps.common import add_signed_repository, install_missing

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


MICROSOFT_KEY_URL = "https://packages.microsoft.com/keys/microsoft.asc"
MICROSOFT_KEYRING = "/etc/apt/trusted.gpg.d/packages.microsoft.gpg"
VSCODE_LIST = "/etc/apt/sources.list.d/vscode.list"
VSCODE_SOURCE = (
    f"deb [arch=amd64,arm64,armhf signed-by={MICROSOFT_KEYRING}] "
    "https://packages.microsoft.com/repos/code stable main"
)

VSCODE_RESOLVES = CommandResolves("code", "--version")


def install_editors(ctx: "EnvironmentContext"):
    ctx.ui.print_info("Installing Visual Studio Code...")
    add_signed_repository(ctx, MICROSOFT_KEY_URL, MICROSOFT_KEYRING, VSCODE_LIST, VSCODE_SOURCE)
    install_missing(ctx, ["code"])
    ctx.ui.print_success("Editors installed")

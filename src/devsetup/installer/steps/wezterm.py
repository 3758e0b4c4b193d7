"""
WezTerm Steps

Install WezTerm from its APT repository and write its Lua configuration.
"""

from typing import TYPE_CHECKING

from devsetup.installer.predicates import CommandResolves, PathExists
from devsetup.installer.steps.common import add_signed_repository, install_missing
from devsetup.terminal_config import WEZTERM_CONFIG_PATH, write_wezterm_config

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


WEZTERM_KEY_URL = "https://apt.fury.io/wez/gpg.key"
WEZTERM_KEYRING = "/usr/share/keyrings/wezterm-fury.gpg"
WEZTERM_LIST = "/etc/apt/sources.list.d/wezterm.list"
WEZTERM_SOURCE = f"deb [signed-by={WEZTERM_KEYRING}] https://apt.fury.io/wez/ * *"

WEZTERM_RESOLVES = CommandResolves("wezterm", "--version")
WEZTERM_CONFIG_EXISTS = PathExists(WEZTERM_CONFIG_PATH)


def install_wezterm(ctx: "EnvironmentContext"):
    add_signed_repository(ctx, WEZTERM_KEY_URL, WEZTERM_KEYRING, WEZTERM_LIST, WEZTERM_SOURCE)
    install_missing(ctx, ["wezterm"])
    ctx.ui.print_success("WezTerm installed")


def configure_wezterm(ctx: "EnvironmentContext"):
    path = write_wezterm_config(
        ctx.expand(WEZTERM_CONFIG_PATH),
        color_scheme=ctx.config.color_scheme,
        font=ctx.config.font,
    )
    ctx.ui.print_success(f"Wrote {path} ({ctx.config.color_scheme}, {ctx.config.font})")

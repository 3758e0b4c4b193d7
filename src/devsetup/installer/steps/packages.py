"""
Package List Steps

Basic development tools and Lua, installed straight from apt.
"""

from typing import TYPE_CHECKING

from devsetup.installer.steps.common import install_missing

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


DEV_PACKAGES = (
    "build-essential",
    "git",
    "curl",
    "wget",
    "vim",
    "neovim",
    "tree",
    "htop",
    "unzip",
    "software-properties-common",
    "apt-transport-https",
    "ca-certificates",
    "gnupg",
    "lsb-release",
    "jq",
    "xclip",
    "ffmpeg",
)

LUA_PACKAGES = (
    "lua5.4",
    "luajit",
    "luarocks",
)


def install_dev_tools(ctx: "EnvironmentContext"):
    ctx.ui.print_info("Installing basic development tools...")
    install_missing(ctx, DEV_PACKAGES)


def install_lua(ctx: "EnvironmentContext"):
    ctx.ui.print_info("Installing Lua...")
    install_missing(ctx, LUA_PACKAGES)
    ctx.ui.print_success("Lua installed")

"""
Rust Step

Install the Rust toolchain through rustup.
"""

from typing import TYPE_CHECKING

from devsetup.installer.predicates import CommandResolves
from devsetup.installer.steps.common import run_remote_script

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


RUSTUP_INSTALLER = "https://sh.rustup.rs"
CARGO_PROFILE_LINE = "source $HOME/.cargo/env"

RUSTC_RESOLVES = CommandResolves("rustc", "--version")


def install_rust(ctx: "EnvironmentContext"):
    ctx.ui.print_info("Installing Rust...")
    run_remote_script(ctx, RUSTUP_INSTALLER, ["-y"])

    for profile in ctx.ensure_profile_line(CARGO_PROFILE_LINE, marker=".cargo/env"):
        ctx.ui.print_info(f"Added cargo to PATH in {profile}")
    ctx.append_path(str(ctx.home / ".cargo" / "bin"))
    ctx.ui.print_success("Rust installed")

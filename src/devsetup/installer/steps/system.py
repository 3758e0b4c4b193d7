"""
System Steps

Package index update (mandatory, first) and cache cleanup (last).
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


def update_system(ctx: "EnvironmentContext"):
    """Refresh the package index and upgrade installed packages."""
    ctx.ui.print_info("Updating system packages...")
    ctx.package_manager.update_index()
    ctx.package_manager.upgrade()
    ctx.ui.print_success("System updated")


def cleanup(ctx: "EnvironmentContext"):
    """Remove orphaned packages and stale archives."""
    ctx.ui.print_info("Cleaning up...")
    ctx.package_manager.autoremove()
    ctx.package_manager.autoclean()
    ctx.ui.print_success("Cleanup complete")

"""
Zsh Step

Install Zsh, Oh My Zsh and popular plugins, and make zsh the login shell.
Each part is checked on its own, so a partial previous run is completed.
"""

from typing import TYPE_CHECKING

from devsetup.installer.exceptions import StepError
from devsetup.installer.git_utils import clone_repository, is_git_available
from devsetup.installer.predicates import PathExists
from devsetup.installer.steps.common import install_missing, run_remote_script

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


OH_MY_ZSH_DIR = "~/.oh-my-zsh"
OH_MY_ZSH_INSTALLER = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"

ZSH_PLUGINS = {
    "zsh-autosuggestions": "https://github.com/zsh-users/zsh-autosuggestions",
    "zsh-syntax-highlighting": "https://github.com/zsh-users/zsh-syntax-highlighting",
}


def setup_zsh(ctx: "EnvironmentContext"):
    """Install Zsh with Oh My Zsh and plugins."""
    install_missing(ctx, ["zsh"])
    install_oh_my_zsh(ctx)
    set_login_shell(ctx)
    install_plugins(ctx)
    ctx.ui.print_success("Zsh setup complete")


def install_oh_my_zsh(ctx: "EnvironmentContext") -> bool:
    if PathExists(OH_MY_ZSH_DIR).evaluate(ctx):
        ctx.ui.print_warning("Oh My Zsh already installed")
        return False

    ctx.ui.print_info("Installing Oh My Zsh...")
    run_remote_script(ctx, OH_MY_ZSH_INSTALLER, ["--unattended"])
    ctx.ui.print_success("Oh My Zsh installed")
    return True


def set_login_shell(ctx: "EnvironmentContext") -> bool:
    if ctx.env.get("SHELL", "").endswith("/zsh"):
        ctx.ui.print_warning("Default shell is already zsh")
        return False

    zsh_path = ctx.which("zsh")
    if not zsh_path:
        raise StepError("zsh is not on PATH after installation", step="zsh")

    ctx.ui.print_info("Changing default shell to zsh...")
    ctx.run(["chsh", "-s", zsh_path, ctx.user], sudo=True)
    ctx.env["SHELL"] = zsh_path
    ctx.ui.print_success("Default shell changed to zsh (requires logout/login)")
    return True


def install_plugins(ctx: "EnvironmentContext"):
    plugins_dir = ctx.expand(OH_MY_ZSH_DIR) / "custom" / "plugins"
    if not is_git_available(ctx):
        raise StepError(
            "git is required to install zsh plugins",
            step="zsh",
            remediation="Install git (the dev-tools step) and re-run",
        )

    for name, url in ZSH_PLUGINS.items():
        if clone_repository(ctx, url, plugins_dir / name):
            ctx.ui.print_success(f"Installed plugin {name}")
        else:
            ctx.ui.print_warning(f"Plugin {name} already installed")

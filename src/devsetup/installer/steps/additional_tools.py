"""
Additional Tools Step

Modern CLI replacements, Docker, Node.js LTS and docker group membership.
"""

from typing import TYPE_CHECKING

from devsetup.installer.steps.common import install_missing, run_remote_script

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


ADDITIONAL_PACKAGES = (
    "fzf",             # Fuzzy finder
    "ripgrep",         # Better grep
    "fd-find",         # Better find
    "bat",             # Better cat
    "exa",             # Better ls
    "docker.io",       # Containerization
    "docker-compose",  # Docker Compose
)

NODESOURCE_SETUP = "https://deb.nodesource.com/setup_lts.x"
DOCKER_GROUP = "docker"


def install_additional_tools(ctx: "EnvironmentContext"):
    ctx.ui.print_info("Installing additional tools...")
    install_missing(ctx, ADDITIONAL_PACKAGES)
    install_nodejs(ctx)
    join_docker_group(ctx)
    ctx.ui.print_success("Additional tools installed")


def install_nodejs(ctx: "EnvironmentContext") -> bool:
    if ctx.which("node"):
        ctx.ui.print_warning("Node.js is already installed")
        return False

    ctx.ui.print_info("Installing Node.js...")
    run_remote_script(ctx, NODESOURCE_SETUP, shell="bash", sudo=True)
    install_missing(ctx, ["nodejs"])
    return True


def user_groups(ctx: "EnvironmentContext", user: str) -> list:
    result = ctx.run(["id", "-nG", user], check=False)
    return result.stdout.split() if result.returncode == 0 else []


def join_docker_group(ctx: "EnvironmentContext") -> bool:
    user = ctx.user
    if DOCKER_GROUP in user_groups(ctx, user):
        ctx.ui.print_warning("User already in docker group")
        return False

    ctx.run(["usermod", "-aG", DOCKER_GROUP, user], sudo=True)
    ctx.ui.print_success("Added user to docker group (requires logout/login)")
    return True

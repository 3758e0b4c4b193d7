"""
Go Step

Install the latest Go release from go.dev into /usr/local/go.
"""

import tempfile
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from devsetup.downloader import go_archive_name, go_archive_url
from devsetup.installer.predicates import VersionEquals

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


GO_ROOT = "/usr/local/go"
GO_BIN = f"{GO_ROOT}/bin"
GO_PROFILE_LINE = "export PATH=$PATH:/usr/local/go/bin:$HOME/go/bin"


def installed_go_version(ctx: "EnvironmentContext") -> Optional[str]:
    """Version reported by `go version` (e.g. '1.22.3'), or None."""
    if ctx.which("go") is None:
        return None
    result = ctx.run(["go", "version"], check=False, timeout=30)
    if result.returncode != 0:
        return None
    # "go version go1.22.3 linux/amd64"
    fields = result.stdout.split()
    if len(fields) < 3 or not fields[2].startswith("go"):
        return None
    return fields[2][2:]


def latest_go_version(ctx: "EnvironmentContext") -> str:
    return ctx.downloader.get_latest_go_version()


GO_IS_LATEST = VersionEquals("Go", current=installed_go_version, latest=latest_go_version)


def install_golang(ctx: "EnvironmentContext"):
    """Download the Go archive, replace /usr/local/go and export PATH."""
    version = latest_go_version(ctx)
    arch = ctx.config.go_arch
    ctx.ui.print_info(f"Installing Go {version} ({arch})...")

    with tempfile.TemporaryDirectory(prefix="devsetup-go-") as tmp_dir:
        archive = Path(tmp_dir) / go_archive_name(version, arch)
        ctx.ui.show_progress(
            f"Downloading {archive.name}",
            lambda: ctx.downloader.download_file(go_archive_url(version, arch), archive),
        )
        ctx.run(["rm", "-rf", GO_ROOT], sudo=True)
        ctx.run(["tar", "-C", "/usr/local", "-xzf", str(archive)], sudo=True)

    for profile in ctx.ensure_profile_line(GO_PROFILE_LINE, marker=GO_BIN):
        ctx.ui.print_info(f"Added Go to PATH in {profile}")
    ctx.append_path(GO_BIN)
    ctx.ui.print_success(f"Go {version} installed")

"""Shared fakes for devsetup tests: package manager, command runner, downloader."""

import io
import stat
from pathlib import Path

import pytest
from rich.console import Console

from devsetup.config import SetupConfig
from devsetup.installer.command import CommandResult
from devsetup.installer.environment import EnvironmentContext
from devsetup.installer.exceptions import CommandError, DownloadError
from devsetup.installer.ui import InstallerUI


class FakePackageManager:
    """In-memory package registry that records every call."""

    def __init__(self, installed=(), fail_update=False, fail_install=()):
        self.installed = set(installed)
        self.fail_update = fail_update
        self.fail_install = set(fail_install)
        self.calls = []

    def update_index(self):
        self.calls.append(("update",))
        if self.fail_update:
            raise CommandError("Command failed (100): apt-get update", returncode=100,
                               stderr="E: Could not get lock /var/lib/apt/lists/lock")

    def upgrade(self):
        self.calls.append(("upgrade",))

    def is_installed(self, package):
        return package in self.installed

    def missing(self, packages):
        return [p for p in packages if p not in self.installed]

    def install(self, packages):
        self.calls.append(("install", tuple(packages)))
        broken = self.fail_install.intersection(packages)
        if broken:
            raise CommandError(f"Command failed (100): apt-get install {' '.join(packages)}",
                               returncode=100, stderr=f"E: Unable to locate package {sorted(broken)[0]}")
        self.installed.update(packages)

    def autoremove(self):
        self.calls.append(("autoremove",))

    def autoclean(self):
        self.calls.append(("autoclean",))

    @property
    def install_calls(self):
        return [c for c in self.calls if c[0] == "install"]


class RecordingRunner:
    """Stands in for run_command; records argv and kwargs.

    ``responses`` maps an argv prefix tuple to a CommandResult or exception.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append((argv, kwargs))
        for prefix, response in self.responses.items():
            if tuple(argv[:len(prefix)]) == prefix:
                if isinstance(response, Exception):
                    raise response
                return response
        return CommandResult(argv=argv, returncode=0, stdout="", stderr="")

    @property
    def argvs(self):
        return [argv for argv, _ in self.calls]

    def kwargs_for(self, argv):
        for recorded, kwargs in self.calls:
            if recorded == list(argv):
                return kwargs
        raise AssertionError(f"{argv} was not run")


class FakeDownloader:
    """Serves canned texts and writes fake archives."""

    def __init__(self, latest_go="1.22.3", texts=None, fail=()):
        self.latest_go = latest_go
        self.texts = dict(texts or {})
        self.fail = set(fail)
        self.fetched = []
        self.downloaded = []

    def fetch_text(self, url):
        self.fetched.append(url)
        if url in self.fail:
            raise DownloadError(f"Failed to fetch {url}", url=url)
        return self.texts.get(url, f"# script from {url}\n")

    def download_file(self, url, dest):
        self.downloaded.append((url, dest))
        if url in self.fail:
            raise DownloadError(f"Download failed: {url}", url=url)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(b"archive")
        return dest

    def get_latest_go_version(self):
        if "go" in self.fail:
            raise DownloadError("Could not determine latest Go version")
        return self.latest_go


def make_executable(directory: Path, name: str) -> Path:
    """Create an empty executable so shutil.which finds it."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def package_manager():
    return FakePackageManager()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def ui(output):
    return InstallerUI(Console(file=output, force_terminal=False, width=120))


@pytest.fixture
def ctx(home, bin_dir, runner, package_manager, downloader, ui):
    return EnvironmentContext(
        home=home,
        env={
            "PATH": str(bin_dir),
            "HOME": str(home),
            "USER": "tester",
            "SHELL": "/bin/bash",
        },
        runner=runner,
        package_manager=package_manager,
        downloader=downloader,
        ui=ui,
        config=SetupConfig(go_arch="amd64"),
    )

"""
devsetup Downloader

HTTP(S) fetches for release metadata, binary archives, installer scripts
and repository signing keys.
"""

from pathlib import Path
from typing import Optional

import requests

from devsetup.installer.exceptions import DownloadError, NetworkError
from devsetup.installer.logging_config import get_logger


logger = get_logger("downloader")

GO_RELEASES_URL = "https://go.dev/dl/?mode=json"
GO_DOWNLOAD_BASE = "https://go.dev/dl"

USER_AGENT = "devsetup"


class Downloader:
    """Fetches remote resources with consistent timeouts and errors."""

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        """Initialize downloader.

        Args:
            timeout: Per-request timeout in seconds (archives get 4x)
            session: Optional requests session (shared connection pool)
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self._latest_go: Optional[str] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a text resource (install script, ASCII-armored key)."""
        logger.info("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(f"Failed to fetch {url}", url=url, details=str(e))
        return resp.text

    def fetch_json(self, url: str):
        """Fetch and decode a JSON document."""
        logger.info("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise NetworkError(f"Failed to query {url}", endpoint=url, details=str(e))
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from {url}", endpoint=url, details=str(e))

    def download_file(self, url: str, dest: Path) -> Path:
        """Stream a binary download to dest.

        Returns:
            dest
        """
        logger.info("Downloading %s -> %s", url, dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            resp = self.session.get(
                url,
                stream=True,
                timeout=self.timeout * 4,
                allow_redirects=True,
            )
            resp.raise_for_status()

            with open(dest, "wb") as f:
                for chunk in resp.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)

        except requests.RequestException as e:
            if dest.exists():
                dest.unlink()
            raise DownloadError(f"Download failed: {url}", url=url, details=str(e))

        return dest

    def get_latest_go_version(self) -> str:
        """Latest stable Go release, without the 'go' prefix (e.g. '1.22.3')."""
        if self._latest_go:
            return self._latest_go

        releases = self.fetch_json(GO_RELEASES_URL)
        for release in releases or []:
            if release.get("stable") and release.get("version", "").startswith("go"):
                self._latest_go = release["version"][2:]
                return self._latest_go

        raise NetworkError(
            "Could not determine latest Go version",
            endpoint=GO_RELEASES_URL,
            details="No stable release in response",
        )


def go_archive_name(version: str, arch: str = "amd64") -> str:
    return f"go{version}.linux-{arch}.tar.gz"


def go_archive_url(version: str, arch: str = "amd64") -> str:
    return f"{GO_DOWNLOAD_BASE}/{go_archive_name(version, arch)}"

"""
devsetup Configuration

Loads the optional config.yaml (policy map, WezTerm theme, Go architecture).

Usage:
    config = load_config()
    policy = config.policy  # {"rust": Decision.DECLINE}
"""

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from devsetup.installer.exceptions import ConfigError
from devsetup.installer.policy import Decision


DEFAULT_COLOR_SCHEME = "catppuccin-mocha"
DEFAULT_FONT = "MesloLGS NF"

# platform.machine() -> Go download architecture
GO_ARCHES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "armv6l",
    "armv7l": "armv6l",
    "i386": "386",
    "i686": "386",
}


@dataclass
class SetupConfig:
    """Resolved devsetup configuration."""
    policy: Dict[str, Decision] = field(default_factory=dict)
    color_scheme: str = DEFAULT_COLOR_SCHEME
    font: str = DEFAULT_FONT
    go_arch: str = ""
    source: Optional[Path] = None

    def __post_init__(self):
        if not self.go_arch:
            self.go_arch = detect_go_arch()


def detect_go_arch() -> str:
    machine = platform.machine().lower()
    return GO_ARCHES.get(machine, "amd64")


def get_default_config_path() -> Path:
    """Get the default config path (DEVSETUP_CONFIG overrides)."""
    override = os.environ.get("DEVSETUP_CONFIG")
    if override:
        return Path(override).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "devsetup" / "config.yaml"


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping", config_key=key)
    return value


def parse_config(data: Any, source: Optional[Path] = None) -> SetupConfig:
    """Build a SetupConfig from already-parsed YAML data."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping", details=str(source or ""))

    policy = {
        str(name): Decision.parse(value, str(name))
        for name, value in _section(data, "steps").items()
    }
    wezterm = _section(data, "wezterm")
    go = _section(data, "go")

    return SetupConfig(
        policy=policy,
        color_scheme=str(wezterm.get("color_scheme", DEFAULT_COLOR_SCHEME)),
        font=str(wezterm.get("font", DEFAULT_FONT)),
        go_arch=str(go.get("arch", "")),
        source=source,
    )


def load_config(path: Optional[Path] = None) -> SetupConfig:
    """Load configuration from YAML.

    A missing default file yields the defaults; a missing explicit file
    is an error.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else get_default_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return SetupConfig()

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}", details=str(e))

    return parse_config(data, source=config_path)

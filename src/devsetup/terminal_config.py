"""
WezTerm Configuration

Renders the Lua configuration for the WezTerm terminal emulator.
"""

from pathlib import Path

from devsetup.config import DEFAULT_COLOR_SCHEME, DEFAULT_FONT


WEZTERM_CONFIG_PATH = "~/.config/wezterm/wezterm.lua"

WEZTERM_TEMPLATE = """local wezterm = require("wezterm")
local config = {{}}

-- Theme
config.color_scheme = {color_scheme}

-- Font
config.font = wezterm.font({font})

return config
"""


def lua_string(value: str) -> str:
    """Quote a value as a Lua string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def render_wezterm_config(
    color_scheme: str = DEFAULT_COLOR_SCHEME,
    font: str = DEFAULT_FONT
) -> str:
    return WEZTERM_TEMPLATE.format(
        color_scheme=lua_string(color_scheme),
        font=lua_string(font),
    )


def write_wezterm_config(
    path: Path,
    color_scheme: str = DEFAULT_COLOR_SCHEME,
    font: str = DEFAULT_FONT
) -> Path:
    """Write wezterm.lua, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_wezterm_config(color_scheme, font))
    return path

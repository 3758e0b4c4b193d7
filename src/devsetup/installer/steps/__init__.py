"""
devsetup Installation Steps

The fixed, ordered step catalogue for the installer.
"""

from devsetup.installer.predicates import PackageRegistered
from devsetup.installer.steps.system import update_system, cleanup
from devsetup.installer.steps.packages import (
    DEV_PACKAGES, LUA_PACKAGES, install_dev_tools, install_lua
)
from devsetup.installer.steps.zsh import setup_zsh
from devsetup.installer.steps.golang import GO_IS_LATEST, install_golang
from devsetup.installer.steps.rust import RUSTC_RESOLVES, install_rust
from devsetup.installer.steps.wezterm import (
    WEZTERM_RESOLVES, WEZTERM_CONFIG_EXISTS, install_wezterm, configure_wezterm
)
from devsetup.installer.steps.additional_tools import install_additional_tools
from devsetup.installer.steps.editors import VSCODE_RESOLVES, install_editors

# Step definitions for the installer orchestrator
INSTALL_STEPS = [
    {
        "name": "system-update",
        "title": "System Update",
        "action": update_system,
        "fatal": True,
    },
    {
        "name": "dev-tools",
        "title": "Basic Development Tools",
        "action": install_dev_tools,
        "prompt": "Install basic development tools?",
        "predicate": PackageRegistered(*DEV_PACKAGES),
    },
    {
        "name": "zsh",
        "title": "Zsh with Oh My Zsh",
        "action": setup_zsh,
        "prompt": "Setup Zsh with Oh My Zsh?",
    },
    {
        "name": "go",
        "title": "Go",
        "action": install_golang,
        "prompt": "Install Go?",
        "predicate": GO_IS_LATEST,
    },
    {
        "name": "rust",
        "title": "Rust",
        "action": install_rust,
        "prompt": "Install Rust?",
        "predicate": RUSTC_RESOLVES,
    },
    {
        "name": "lua",
        "title": "Lua",
        "action": install_lua,
        "prompt": "Install Lua?",
        "predicate": PackageRegistered(*LUA_PACKAGES),
    },
    {
        "name": "wezterm",
        "title": "WezTerm",
        "action": install_wezterm,
        "prompt": "Install WezTerm?",
        "predicate": WEZTERM_RESOLVES,
    },
    {
        "name": "wezterm-config",
        "title": "WezTerm Configuration",
        "action": configure_wezterm,
        "prompt": "Write WezTerm configuration?",
        "predicate": WEZTERM_CONFIG_EXISTS,
    },
    {
        "name": "additional-tools",
        "title": "Additional Development Tools",
        "action": install_additional_tools,
        "prompt": "Install additional development tools?",
    },
    {
        "name": "editors",
        "title": "Editors (VS Code)",
        "action": install_editors,
        "prompt": "Install editors (VS Code)?",
        "predicate": VSCODE_RESOLVES,
    },
    {
        "name": "cleanup",
        "title": "Cleanup",
        "action": cleanup,
    },
]

STEP_NAMES = [step["name"] for step in INSTALL_STEPS]
FATAL_STEP_NAMES = [step["name"] for step in INSTALL_STEPS if step.get("fatal")]

__all__ = [
    "update_system",
    "install_dev_tools",
    "setup_zsh",
    "install_golang",
    "install_rust",
    "install_lua",
    "install_wezterm",
    "configure_wezterm",
    "install_additional_tools",
    "install_editors",
    "cleanup",
    "INSTALL_STEPS",
    "STEP_NAMES",
    "FATAL_STEP_NAMES",
]

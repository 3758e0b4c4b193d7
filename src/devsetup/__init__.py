"""
devsetup: Development Workstation Provisioning

Idempotent installer for an Ubuntu development environment.
"""

try:
    from importlib.metadata import version
    __version__ = version("devsetup")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]

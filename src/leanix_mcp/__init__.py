# LeanIX MCP Server
# File: __init__.py
# Version: v1

"""Top-level package for the LeanIX MCP Server."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]


def _resolve_version() -> str:
    """Resolve installed distribution version.

    Uses Python package metadata so __version__ stays aligned with pyproject.toml.
    """
    try:
        return version("mcp-leanix-server")
    except PackageNotFoundError:
        # Running from source tree without installed package metadata.
        return "0.1.0"


__version__ = _resolve_version()

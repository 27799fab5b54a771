# LeanIX MCP Server
# File: tools/__init__.py
# Version: v1

"""Helpers for registering MCP tools."""

from __future__ import annotations

from .tasks import register_tools

__all__ = ["register_tools"]

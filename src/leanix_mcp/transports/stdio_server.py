# LeanIX MCP Server
# File: transports/stdio_server.py
# Version: v1

"""STDIO entrypoint for the LeanIX MCP server.

This is the script behind the ``leanix-mcp`` console command.

It:

- configures logging on stderr (stdout carries the MCP protocol),
- validates the LeanIX configuration before anything else,
- creates a FastMCP server and registers the LeanIX tools, and
- runs the built-in stdio transport.
"""

from __future__ import annotations

import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

from ..config import LeanIXConfig
from ..tools import tasks

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = (os.getenv("LEANIX_LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Synchronous entrypoint for console_scripts."""
    _configure_logging()

    # Blank subdomain / token is a startup failure, not a per-call one.
    cfg = LeanIXConfig.from_env().validate()
    logger.info("Starting LeanIX MCP server for %s", cfg.base_url)

    mcp = FastMCP("leanix-mcp")
    tasks.register_tools(mcp)

    # Let FastMCP handle stdio + event loop setup.
    mcp.run()


if __name__ == "__main__":
    main()

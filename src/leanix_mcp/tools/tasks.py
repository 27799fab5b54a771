# LeanIX MCP Server
# File: tools/tasks.py
# Version: v1
#
# NOTE: This module is the single place where we define the operations that
# are exposed as MCP tools.  The MCP transport simply calls
# `register_tools(server)` to wire these up.

from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, List, Optional

from ..auth import OAuthClient
from ..client import LeanIXClient
from ..config import LeanIXConfig
from ..queries import FactSheetType


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _make_error(code: str, message: str) -> Dict[str, Any]:
    """Small, LLM-friendly error shape used by diagnostics."""
    return {"code": code, "message": message}


def _make_client(cfg: Optional[LeanIXConfig] = None) -> LeanIXClient:
    """Create a LeanIXClient from environment variables.

    Raises ConfigurationError when the subdomain or API token is blank.

    Note: Callers should prefer invoking this with *no arguments* to keep
    unit tests monkeypatch-friendly (tests often replace _make_client with
    a no-arg lambda).
    """
    cfg = cfg or LeanIXConfig.from_env()
    oauth = OAuthClient(config=cfg)
    return LeanIXClient(config=cfg, oauth=oauth)


# ---------------------------------------------------------------------------
# Core async tasks (library-style)
# ---------------------------------------------------------------------------


async def get_fact_sheets_by_type(fact_sheet_type: str) -> List[Dict[str, Any]]:
    client = _make_client()
    fact_sheets = await client.get_fact_sheets_by_type(fact_sheet_type)
    return [fs.to_dict() for fs in fact_sheets]


async def get_fact_sheets_by_type_paginated(
    fact_sheet_type: str,
    first: Optional[int] = None,
    after: Optional[str] = None,
) -> Dict[str, Any]:
    client = _make_client()
    return await client.get_fact_sheets_by_type_paginated(
        fact_sheet_type, first=first, after=after
    )


async def search_fact_sheets_by_name(search_term: str) -> List[Dict[str, Any]]:
    client = _make_client()
    fact_sheets = await client.search_fact_sheets_by_name(search_term)
    return [fs.to_dict() for fs in fact_sheets]


async def get_workspace_info() -> str:
    client = _make_client()
    result = await client.get_workspace_info()
    return "Workspace information: " + json.dumps(result, separators=(",", ":"))


async def get_types() -> List[Dict[str, Any]]:
    client = _make_client()
    facets = await client.get_types()
    return [f.to_dict() for f in facets]


async def get_fact_sheets_of_type(fact_sheet_type: FactSheetType) -> List[Dict[str, Any]]:
    """First page of a fixed fact sheet type at the default page size."""
    client = _make_client()
    fact_sheets = await client.fetch_all_default_page(fact_sheet_type)
    return [fs.to_dict() for fs in fact_sheets]


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


def _collect_workspace_config() -> Dict[str, Any]:
    """Redacted snapshot of the LeanIX configuration from env."""
    cfg = LeanIXConfig.from_env()
    configured = bool(cfg.subdomain and cfg.subdomain.strip())

    return {
        "subdomain": cfg.subdomain,
        "base_url": cfg.base_url if configured else None,
        "api_token_configured": bool(cfg.api_token and cfg.api_token.strip()),
        "default_page_size": cfg.default_page_size,
        "timeout_seconds": cfg.timeout_seconds,
        "verify_tls": bool(cfg.verify_tls),
    }


async def diagnostics() -> Dict[str, Any]:
    started = time.time()
    config_info = _collect_workspace_config()

    checks: List[Dict[str, Any]] = []

    t0 = time.time()
    try:
        client = _make_client()
        checks.append(
            {"name": "client_init", "ok": True, "error": None, "elapsed_ms": int((time.time() - t0) * 1000)}
        )
    except Exception as exc:
        checks.append(
            {
                "name": "client_init",
                "ok": False,
                "error": _make_error("CONFIG_ERROR", str(exc)),
                "elapsed_ms": int((time.time() - t0) * 1000),
            }
        )
        return {
            "ok": False,
            "config": config_info,
            "checks": checks,
            "meta": {"elapsed_ms": int((time.time() - started) * 1000)},
        }

    t0 = time.time()
    try:
        await client.oauth.get_access_token()
        checks.append(
            {"name": "access_token", "ok": True, "error": None, "elapsed_ms": int((time.time() - t0) * 1000)}
        )
    except Exception as exc:
        checks.append(
            {
                "name": "access_token",
                "ok": False,
                "error": _make_error("AUTH_ERROR", str(exc)),
                "elapsed_ms": int((time.time() - t0) * 1000),
            }
        )

    return {
        "ok": all(c["ok"] for c in checks),
        "config": config_info,
        "checks": checks,
        "meta": {"elapsed_ms": int((time.time() - started) * 1000)},
    }


# ---------------------------------------------------------------------------
# MCP tool registration
# ---------------------------------------------------------------------------

# Tool name -> (fact sheet type, description) for the fixed-type tools.
FACT_SHEET_TYPE_TOOLS: Dict[str, tuple[FactSheetType, str]] = {
    "getApplications": (FactSheetType.APPLICATION, "Get the first page of Application fact sheets."),
    "getITComponents": (FactSheetType.IT_COMPONENT, "Get the first page of IT Component fact sheets."),
    "getBusinessCapabilities": (
        FactSheetType.BUSINESS_CAPABILITY,
        "Get the first page of Business Capability fact sheets.",
    ),
    "getProviders": (FactSheetType.PROVIDER, "Get the first page of Provider fact sheets."),
    "getOrganizations": (FactSheetType.ORGANIZATION, "Get the first page of Organization fact sheets."),
    "getBusinessContexts": (FactSheetType.BUSINESS_CONTEXT, "Get the first page of Business Context fact sheets."),
    "getInterfaces": (FactSheetType.INTERFACE, "Get the first page of Interface fact sheets."),
    "getDataObjects": (FactSheetType.DATA_OBJECT, "Get the first page of Data Object fact sheets."),
}


def _fact_sheet_type_tool(
    fact_sheet_type: FactSheetType,
) -> Callable[[], Any]:
    async def tool() -> List[Dict[str, Any]]:
        return await get_fact_sheets_of_type(fact_sheet_type)

    return tool


def register_tools(server: Any) -> None:
    """Register MCP tools on an MCP Server-like instance."""
    if server is None or not hasattr(server, "tool"):
        raise ValueError(
            "register_tools(server) expects an MCP Server-like object that exposes a .tool() decorator."
        )

    @server.tool(
        name="getFactSheetsByType",
        description="Get all factsheets of a given type (e.g. Application, DataObject).",
    )
    async def mcp_get_fact_sheets_by_type(type: str) -> List[Dict[str, Any]]:  # noqa: A002
        return await get_fact_sheets_by_type(type)

    @server.tool(
        name="getFactSheetsByTypePaginated",
        description=(
            "Get one page of factsheets of a given type. Pass pageInfo.endCursor "
            "as 'after' to fetch the next page."
        ),
    )
    async def mcp_get_fact_sheets_by_type_paginated(
        type: str,  # noqa: A002
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await get_fact_sheets_by_type_paginated(type, first=first, after=after)

    @server.tool(
        name="searchFactSheetsByName",
        description="Search for factsheets by name using LeanIX full-text search.",
    )
    async def mcp_search_fact_sheets_by_name(term: str) -> List[Dict[str, Any]]:
        return await search_fact_sheets_by_name(term)

    @server.tool(
        name="getWorkspaceInfo",
        description="Get information regarding the workspace (fact sheet counts per facet).",
    )
    async def mcp_get_workspace_info() -> str:
        return await get_workspace_info()

    @server.tool(
        name="getTypes",
        description="List the fact sheet types and other filter facets of the workspace.",
    )
    async def mcp_get_types() -> List[Dict[str, Any]]:
        return await get_types()

    for tool_name, (fact_sheet_type, description) in FACT_SHEET_TYPE_TOOLS.items():
        server.tool(name=tool_name, description=description)(
            _fact_sheet_type_tool(fact_sheet_type)
        )

    @server.tool(
        name="leanix_diagnostics",
        description="Check the LeanIX configuration and token exchange without exposing secrets.",
    )
    async def mcp_diagnostics() -> Dict[str, Any]:
        return await diagnostics()

# LeanIX MCP Server
# File: tests/test_tools.py
# Version: v1

"""Tests for the MCP-facing tasks in tools.tasks.

These tests patch `_make_client` so that we never talk to a real LeanIX
workspace. All behaviour is verified against simple fake clients.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List

import pytest

from leanix_mcp.errors import ConfigurationError
from leanix_mcp.models import Facet, FacetResult, FactSheet, Lifecycle
from leanix_mcp.queries import FactSheetType
from leanix_mcp.tools import tasks


def _run(coro):
    """Helper to run async coroutines in plain pytest tests."""
    return asyncio.run(coro)


class DummyServer:
    """Collects tools registered through the FastMCP-style decorator."""

    def __init__(self) -> None:
        self.tools: Dict[str, Any] = {}

    def tool(self, name=None, description=None, **kwargs):
        def decorator(fn):
            self.tools[name or fn.__name__] = fn
            return fn

        return decorator


class _FakeLeanIXClient:
    """Fake client recording which high-level operations were called."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    async def get_fact_sheets_by_type(self, fact_sheet_type):
        self.calls.append(("by_type", fact_sheet_type))
        return [FactSheet(id="1", name="CRM", type=fact_sheet_type, lifecycle=Lifecycle(phase="active"))]

    async def get_fact_sheets_by_type_paginated(self, fact_sheet_type, first=None, after=None):
        self.calls.append(("paginated", fact_sheet_type, first, after))
        return {"pageInfo": {"hasNextPage": False, "endCursor": None}, "edges": []}

    async def fetch_all_default_page(self, fact_sheet_type):
        self.calls.append(("default_page", fact_sheet_type))
        return [FactSheet(id="9", type=fact_sheet_type.value)]

    async def search_fact_sheets_by_name(self, search_term):
        self.calls.append(("search", search_term))
        return [FactSheet(id="2", name=search_term, tags=["x"])]

    async def get_workspace_info(self):
        self.calls.append(("workspace",))
        return {"data": {"allFactSheets": {"totalCount": 5}}}

    async def get_types(self):
        self.calls.append(("types",))
        return [Facet(facet_key="FactSheetTypes", results=[FacetResult(name="Application", key="Application")])]


@pytest.fixture
def fake_client(monkeypatch) -> _FakeLeanIXClient:
    client = _FakeLeanIXClient()
    monkeypatch.setattr(tasks, "_make_client", lambda: client)
    return client


def test_register_tools_exposes_full_tool_surface() -> None:
    server = DummyServer()
    tasks.register_tools(server)

    assert set(server.tools) == {
        "getFactSheetsByType",
        "getFactSheetsByTypePaginated",
        "searchFactSheetsByName",
        "getWorkspaceInfo",
        "getTypes",
        "getApplications",
        "getITComponents",
        "getBusinessCapabilities",
        "getProviders",
        "getOrganizations",
        "getBusinessContexts",
        "getInterfaces",
        "getDataObjects",
        "leanix_diagnostics",
    }


def test_every_fact_sheet_type_has_a_tool() -> None:
    covered = {t for t, _ in tasks.FACT_SHEET_TYPE_TOOLS.values()}
    assert covered == set(FactSheetType)


def test_register_tools_rejects_non_server() -> None:
    with pytest.raises(ValueError):
        tasks.register_tools(object())


@pytest.mark.parametrize(
    "tool_name,expected_type",
    [
        ("getApplications", "Application"),
        ("getITComponents", "ITComponent"),
        ("getBusinessCapabilities", "BusinessCapability"),
        ("getProviders", "Provider"),
        ("getOrganizations", "Organization"),
        ("getBusinessContexts", "BusinessContext"),
        ("getInterfaces", "Interface"),
        ("getDataObjects", "DataObject"),
    ],
)
def test_fixed_type_tools_fetch_one_default_page(fake_client, tool_name, expected_type) -> None:
    server = DummyServer()
    tasks.register_tools(server)

    result = _run(server.tools[tool_name]())

    assert fake_client.calls == [("default_page", FactSheetType(expected_type))]
    assert result[0]["id"] == "9"
    assert result[0]["type"] == expected_type


def test_get_fact_sheets_by_type_returns_plain_dicts(fake_client) -> None:
    result = _run(tasks.get_fact_sheets_by_type("Application"))

    assert fake_client.calls == [("by_type", "Application")]
    assert result[0]["name"] == "CRM"
    assert result[0]["lifecycle"] == {"as_string": None, "phase": "active"}
    assert result[0]["tags"] is None
    json.dumps(result)


def test_paginated_tool_passes_arguments_through(fake_client) -> None:
    server = DummyServer()
    tasks.register_tools(server)

    page = _run(server.tools["getFactSheetsByTypePaginated"]("Interface", first=5, after="c1"))

    assert fake_client.calls == [("paginated", "Interface", 5, "c1")]
    assert page["pageInfo"]["hasNextPage"] is False


def test_search_tool(fake_client) -> None:
    server = DummyServer()
    tasks.register_tools(server)

    result = _run(server.tools["searchFactSheetsByName"]("Azure"))

    assert fake_client.calls == [("search", "Azure")]
    assert result[0]["tags"] == ["x"]


def test_workspace_info_is_a_summary_string(fake_client) -> None:
    result = _run(tasks.get_workspace_info())

    assert result.startswith("Workspace information: ")
    assert "totalCount" in result
    payload = json.loads(result[len("Workspace information: "):])
    assert payload["data"]["allFactSheets"]["totalCount"] == 5


def test_get_types_returns_facets(fake_client) -> None:
    result = _run(tasks.get_types())

    assert result == [
        {
            "facet_key": "FactSheetTypes",
            "results": [{"name": "Application", "key": "Application", "count": None}],
        }
    ]


def test_make_client_requires_configuration(monkeypatch) -> None:
    monkeypatch.delenv("LEANIX_SUBDOMAIN", raising=False)
    monkeypatch.setenv("LEANIX_API_TOKEN", "secret")

    with pytest.raises(ConfigurationError):
        tasks._make_client()


def test_diagnostics_reports_config_error_without_secrets(monkeypatch) -> None:
    monkeypatch.setenv("LEANIX_SUBDOMAIN", "acme")
    monkeypatch.setenv("LEANIX_API_TOKEN", "   ")

    result = _run(tasks.diagnostics())

    assert result["ok"] is False
    assert result["checks"][0]["name"] == "client_init"
    assert result["checks"][0]["error"]["code"] == "CONFIG_ERROR"
    assert result["config"]["api_token_configured"] is False


class _FakeOAuth:
    def __init__(self, fail: bool) -> None:
        self.fail = fail

    async def get_access_token(self) -> str:
        if self.fail:
            raise RuntimeError("HTTP 401")
        return "token"


class _FakeDiagnosticsClient:
    def __init__(self, fail: bool) -> None:
        self.oauth = _FakeOAuth(fail)


@pytest.mark.parametrize("fail", [False, True])
def test_diagnostics_checks_token_exchange(monkeypatch, fail) -> None:
    monkeypatch.setenv("LEANIX_SUBDOMAIN", "acme")
    monkeypatch.setenv("LEANIX_API_TOKEN", "super-secret")
    monkeypatch.setattr(tasks, "_make_client", lambda: _FakeDiagnosticsClient(fail))

    result = _run(tasks.diagnostics())

    assert result["ok"] is (not fail)
    assert [c["name"] for c in result["checks"]] == ["client_init", "access_token"]
    assert result["config"]["base_url"] == "https://acme.leanix.net"
    assert "super-secret" not in json.dumps(result)

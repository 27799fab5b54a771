# LeanIX MCP Server
# File: tests/test_sanity.py
# Version: v1

"""Configuration loading and query catalog sanity tests."""

import pytest

from leanix_mcp import queries
from leanix_mcp.config import LeanIXConfig
from leanix_mcp.errors import ConfigurationError, ValidationError


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LEANIX_SUBDOMAIN", " acme ")
    monkeypatch.setenv("LEANIX_API_TOKEN", "secret")
    monkeypatch.setenv("LEANIX_DEFAULT_PAGE_SIZE", "75")
    monkeypatch.delenv("LEANIX_HOST", raising=False)

    cfg = LeanIXConfig.from_env().validate()

    assert cfg.subdomain == "acme"
    assert cfg.default_page_size == 75
    assert cfg.base_url == "https://acme.leanix.net"
    assert cfg.token_url == "https://acme.leanix.net/services/mtm/v1/oauth2/token"
    assert cfg.graphql_url == "https://acme.leanix.net/services/pathfinder/v1/graphql"


def test_config_page_size_falls_back_and_clamps(monkeypatch) -> None:
    monkeypatch.setenv("LEANIX_DEFAULT_PAGE_SIZE", "not-a-number")
    assert LeanIXConfig.from_env().default_page_size == 50

    monkeypatch.setenv("LEANIX_DEFAULT_PAGE_SIZE", "0")
    assert LeanIXConfig.from_env().default_page_size == 1


def test_validate_rejects_non_positive_page_size() -> None:
    with pytest.raises(ConfigurationError):
        LeanIXConfig(subdomain="acme", api_token="t", default_page_size=0).validate()


def test_paginated_variables_reject_non_positive_first() -> None:
    with pytest.raises(ValidationError):
        queries.by_type_paginated_variables("Application", first=0, after=None, default_page_size=10)


@pytest.mark.parametrize("first", [2.7, 3.0, "10", "ten", True])
def test_paginated_variables_reject_non_integer_first(first) -> None:
    with pytest.raises(ValidationError):
        queries.by_type_paginated_variables("Application", first=first, after=None, default_page_size=10)


def test_blank_cursor_is_omitted() -> None:
    variables = queries.by_type_paginated_variables(
        "Application", first=None, after="", default_page_size=10
    )
    assert variables == {"type": "Application", "first": 10}


def test_enum_type_is_sent_as_plain_string() -> None:
    variables = queries.by_type_variables(queries.FactSheetType.IT_COMPONENT)
    assert variables == {"type": "ITComponent"}
    assert type(variables["type"]) is str


def test_paginated_query_requests_page_info_but_no_subscriptions() -> None:
    assert "pageInfo" in queries.BY_TYPE_PAGINATED_QUERY
    assert "endCursor" in queries.BY_TYPE_PAGINATED_QUERY
    assert "subscriptions" not in queries.BY_TYPE_PAGINATED_QUERY
    assert "subscriptions" in queries.SEARCH_BY_NAME_QUERY
    assert "count" not in queries.TYPES_QUERY

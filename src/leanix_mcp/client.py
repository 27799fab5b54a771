# LeanIX MCP Server
# File: client.py
# Version: v1
"""High-level client for the LeanIX Pathfinder GraphQL API.

Implements:

- query() for raw GraphQL execution with a fresh bearer token
- get_fact_sheets_by_type() / search_fact_sheets_by_name() mapped to FactSheet
- get_fact_sheets_by_type_paginated() returning the raw page descriptor
- fetch_all_default_page() for the first page at the configured page size
- get_workspace_info() / get_types() for facet introspection
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional
import logging

import httpx
from httpx import RequestError

from . import queries
from .auth import OAuthClient
from .config import LeanIXConfig
from .errors import QueryError
from .mapper import get_list, get_path, graphql_errors, map_edges, map_facets, map_fact_sheets
from .models import Facet, FactSheet
from .queries import FactSheetType

logger = logging.getLogger(__name__)


@dataclass
class LeanIXClient:
    """Wrapper around the LeanIX GraphQL endpoint of one workspace.

    ``http_client`` may be a shared ``httpx.AsyncClient``; when omitted a
    short-lived client is opened for each request.
    """

    config: LeanIXConfig
    oauth: OAuthClient
    http_client: Optional[httpx.AsyncClient] = None

    def __post_init__(self) -> None:
        self.config.validate()

    @property
    def subdomain(self) -> str:
        return str(self.config.subdomain)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def graphql_endpoint(self) -> str:
        return self.config.graphql_url

    @property
    def token_endpoint(self) -> str:
        return self.config.token_url

    # ------------------------------------------------------------------
    # Raw GraphQL execution
    # ------------------------------------------------------------------

    async def query(
        self,
        query_text: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Execute a GraphQL query and return the parsed JSON envelope.

        The request body always carries both ``query`` and ``variables``;
        missing variables are sent as ``null``.
        """
        token = await self.oauth.get_access_token()
        url = self.graphql_endpoint

        payload = {
            "query": query_text,
            "variables": dict(variables) if variables is not None else None,
        }
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            if self.http_client is not None:
                response = await self.http_client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=float(self.config.timeout_seconds),
                    verify=self.config.verify_tls,
                ) as http_client:
                    response = await http_client.post(url, json=payload, headers=headers)
        except RequestError as exc:
            logger.error("Error calling LeanIX GraphQL API at %s: %s", url, exc)
            raise QueryError(
                f"Error calling LeanIX GraphQL API at '{url}': {exc}"
            ) from exc

        if not response.is_success:
            status = response.status_code
            body_preview = response.text[:500]
            logger.error(
                "GraphQL query failed. Status: %s, Body: %s", status, body_preview
            )
            raise QueryError(
                f"GraphQL query failed at '{url}' (HTTP {status}). "
                f"Response snippet: {body_preview}",
                status_code=status,
                body_snippet=body_preview,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise QueryError(
                f"GraphQL response from '{url}' is not valid JSON "
                f"(HTTP {response.status_code}).",
                status_code=response.status_code,
                body_snippet=response.text[:500],
            ) from exc

        errors = graphql_errors(data)
        if errors:
            # Only the HTTP status decides success; callers inspect ``data``.
            logger.warning(
                "GraphQL response carried %d error(s): %s",
                len(errors),
                errors[0].get("message"),
            )

        logger.debug("GraphQL query executed successfully")
        return data

    # ------------------------------------------------------------------
    # Fact sheets
    # ------------------------------------------------------------------

    async def get_fact_sheets_by_type(
        self, fact_sheet_type: FactSheetType | str
    ) -> List[FactSheet]:
        """Return all fact sheets of a type (id, names, type, lifecycle phase)."""
        variables = queries.by_type_variables(fact_sheet_type)
        logger.info("Fetching fact sheets of type: %s", variables["type"])

        result = await self.query(queries.BY_TYPE_QUERY, variables)
        fact_sheets = map_fact_sheets(result)

        logger.info(
            "Fetched %d fact sheets of type: %s", len(fact_sheets), variables["type"]
        )
        return fact_sheets

    async def get_fact_sheets_by_type_paginated(
        self,
        fact_sheet_type: FactSheetType | str,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Fetch one page of fact sheets of a type.

        Returns the ``allFactSheets`` object as sent by LeanIX so callers can
        read ``pageInfo.endCursor`` and request the next page themselves.
        When the response has no such object an empty page is returned.
        """
        variables = queries.by_type_paginated_variables(
            fact_sheet_type,
            first=first,
            after=after,
            default_page_size=self.config.default_page_size,
        )
        logger.info(
            "Fetching page of fact sheets of type %s (first=%s, after=%s)",
            variables["type"],
            variables["first"],
            variables.get("after"),
        )

        result = await self.query(queries.BY_TYPE_PAGINATED_QUERY, variables)
        page = get_path(result, "data", "allFactSheets")
        if not isinstance(page, dict):
            return {"pageInfo": {"hasNextPage": False, "endCursor": None}, "edges": []}
        return page

    async def fetch_all_default_page(
        self, fact_sheet_type: FactSheetType | str
    ) -> List[FactSheet]:
        """Return the first page of a type at the configured default page size.

        Does not follow ``hasNextPage``.
        """
        page = await self.get_fact_sheets_by_type_paginated(fact_sheet_type)
        fact_sheets = map_edges(get_list(page, "edges"))
        logger.info(
            "Fetched %d fact sheets of type: %s",
            len(fact_sheets),
            queries.fact_sheet_type_name(fact_sheet_type),
        )
        return fact_sheets

    async def search_fact_sheets_by_name(self, search_term: str) -> List[FactSheet]:
        """Full-text search over fact sheets, including subscriptions."""
        variables = queries.search_by_name_variables(search_term)
        logger.info("Searching for fact sheets with term: %s", search_term)

        result = await self.query(queries.SEARCH_BY_NAME_QUERY, variables)
        fact_sheets = map_fact_sheets(result)

        logger.info(
            "Found %d fact sheets for search term: %s", len(fact_sheets), search_term
        )
        return fact_sheets

    # ------------------------------------------------------------------
    # Workspace introspection
    # ------------------------------------------------------------------

    async def get_workspace_info(self) -> Any:
        """Return the raw envelope with totalCount and facet counts."""
        logger.info("Fetching workspace information (fact sheet counts and overview)")
        return await self.query(queries.WORKSPACE_INFO_QUERY)

    async def get_types(self) -> List[Facet]:
        """Return the filter facets (fact sheet types and friends) of the workspace."""
        logger.info("Fetching fact sheet type facets")
        result = await self.query(queries.TYPES_QUERY)
        return map_facets(result)

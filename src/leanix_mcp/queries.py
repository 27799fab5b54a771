# LeanIX MCP Server
# File: queries.py
# Version: v1

"""GraphQL query templates for the LeanIX Pathfinder API.

Each template documents its variable contract; the ``*_variables`` helpers
bind caller arguments into the variables mapping sent with the query.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from .errors import ValidationError


class FactSheetType(str, Enum):
    """Fact sheet types with a dedicated convenience tool."""

    APPLICATION = "Application"
    IT_COMPONENT = "ITComponent"
    BUSINESS_CAPABILITY = "BusinessCapability"
    PROVIDER = "Provider"
    ORGANIZATION = "Organization"
    BUSINESS_CONTEXT = "BusinessContext"
    INTERFACE = "Interface"
    DATA_OBJECT = "DataObject"


# Variables: type: FactSheetType!
BY_TYPE_QUERY = """
query GetFactSheetsByType($type: FactSheetType!) {
  allFactSheets(factSheetType: $type) {
    edges {
      node {
        id
        name
        displayName
        description
        type
        ... on Application {
          lifecycle {
            phase
          }
        }
      }
    }
  }
}
"""

# Variables: type: FactSheetType!, first: Int, after: String
BY_TYPE_PAGINATED_QUERY = """
query GetFactSheetsByTypePaginated($type: FactSheetType!, $first: Int, $after: String) {
  allFactSheets(factSheetType: $type, first: $first, after: $after) {
    totalCount
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        id
        name
        displayName
        fullName
        type
        description
        status
        lxState
        completion {
          completion
          percentage
        }
        updatedAt
        createdAt
        tags {
          name
        }
        ... on Application {
          lifecycle {
            asString
          }
          businessCriticality
          technicalSuitability
          functionalSuitability
        }
      }
    }
  }
}
"""

# Variables: name: String!
SEARCH_BY_NAME_QUERY = """
query SearchFactSheetsByName($name: String!) {
  allFactSheets(filter: {fullTextSearch: $name}) {
    edges {
      node {
        id
        name
        displayName
        fullName
        type
        description
        status
        lxState
        completion {
          completion
          percentage
        }
        updatedAt
        createdAt
        tags {
          name
        }
        subscriptions {
          totalCount
          edges {
            node {
              id
              type
              user {
                id
                displayName
                email
              }
              roles {
                id
                name
                comment
              }
              createdAt
            }
          }
        }
        ... on Application {
          lifecycle {
            asString
          }
          businessCriticality
          technicalSuitability
          functionalSuitability
        }
      }
    }
  }
}
"""

# No variables.
WORKSPACE_INFO_QUERY = """
query WorkspaceInfo {
  allFactSheets {
    totalCount
    filterOptions {
      facets {
        facetKey
        results {
          name
          key
          count
        }
      }
    }
  }
}
"""

# No variables.
TYPES_QUERY = """
query FactSheetTypes {
  allFactSheets {
    filterOptions {
      facets {
        facetKey
        results {
          name
          key
        }
      }
    }
  }
}
"""


def require_text(value: Optional[str], name: str) -> str:
    """Return ``value`` or raise ValidationError when it is None or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} parameter is required")
    return str(value)


def fact_sheet_type_name(fact_sheet_type: FactSheetType | str) -> str:
    if isinstance(fact_sheet_type, FactSheetType):
        return fact_sheet_type.value
    return require_text(fact_sheet_type, "factSheetType")


def by_type_variables(fact_sheet_type: FactSheetType | str) -> Dict[str, Any]:
    return {"type": fact_sheet_type_name(fact_sheet_type)}


def by_type_paginated_variables(
    fact_sheet_type: FactSheetType | str,
    first: Optional[int],
    after: Optional[str],
    default_page_size: int,
) -> Dict[str, Any]:
    """Bind the paginated query variables.

    ``first`` falls back to ``default_page_size``; ``after`` is left out of
    the mapping entirely when no cursor is given.
    """
    if first is None:
        first = default_page_size
    elif isinstance(first, bool) or not isinstance(first, int) or first < 1:
        raise ValidationError(f"first must be a positive integer, got {first!r}")

    variables: Dict[str, Any] = {
        "type": fact_sheet_type_name(fact_sheet_type),
        "first": first,
    }
    if after is not None and str(after).strip():
        variables["after"] = after
    return variables


def search_by_name_variables(search_term: Optional[str]) -> Dict[str, Any]:
    return {"name": require_text(search_term, "searchTerm")}

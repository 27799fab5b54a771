# LeanIX MCP Server
# File: mapper.py
# Version: v1

"""Mapping of LeanIX GraphQL responses into domain models.

Navigation is lenient: a missing or wrongly shaped ``data`` /
``allFactSheets`` / ``edges`` yields an empty result. Mapping is strict: once
an edge is present, a node that cannot be converted raises MappingError and
the whole batch is discarded.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from .errors import MappingError
from .models import (
    Completion,
    Facet,
    FacetResult,
    FactSheet,
    Lifecycle,
    Role,
    Subscription,
    SubscriptionEdge,
    Subscriptions,
    User,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_path(document: Any, *keys: str) -> Any:
    """Walk nested mappings; return None as soon as a step is missing."""
    current = document
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def get_list(document: Any, *keys: str) -> List[Any]:
    """Like get_path, but only a JSON array counts as found."""
    value = get_path(document, *keys)
    return value if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Field converters
# ---------------------------------------------------------------------------


def _str(node: Mapping[str, Any], key: str) -> Optional[str]:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise MappingError(
        f"Field '{key}' expected a scalar value, got {type(value).__name__}."
    )


def _int(node: Mapping[str, Any], key: str) -> Optional[int]:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise MappingError(f"Field '{key}' expected an integer, got bool.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MappingError(f"Field '{key}' expected an integer, got {value!r}.")


def _obj(
    node: Mapping[str, Any],
    key: str,
    convert: Callable[[Mapping[str, Any]], T],
) -> Optional[T]:
    value = node.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise MappingError(
            f"Field '{key}' expected an object, got {type(value).__name__}."
        )
    return convert(value)


def _objs(
    node: Mapping[str, Any],
    key: str,
    convert: Callable[[Mapping[str, Any]], T],
) -> Optional[List[T]]:
    value = node.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise MappingError(
            f"Field '{key}' expected an array, got {type(value).__name__}."
        )
    items: List[T] = []
    for item in value:
        if not isinstance(item, Mapping):
            raise MappingError(
                f"Field '{key}' expected an array of objects, "
                f"found {type(item).__name__}."
            )
        items.append(convert(item))
    return items


# ---------------------------------------------------------------------------
# Node mappers
# ---------------------------------------------------------------------------


def _completion(node: Mapping[str, Any]) -> Completion:
    return Completion(
        completion=_str(node, "completion"),
        percentage=_int(node, "percentage"),
    )


def _lifecycle(node: Mapping[str, Any]) -> Lifecycle:
    return Lifecycle(as_string=_str(node, "asString"), phase=_str(node, "phase"))


def _user(node: Mapping[str, Any]) -> User:
    return User(
        id=_str(node, "id"),
        display_name=_str(node, "displayName"),
        email=_str(node, "email"),
    )


def _role(node: Mapping[str, Any]) -> Role:
    return Role(
        id=_str(node, "id"),
        name=_str(node, "name"),
        comment=_str(node, "comment"),
    )


def _subscription(node: Mapping[str, Any]) -> Subscription:
    return Subscription(
        id=_str(node, "id"),
        type=_str(node, "type"),
        user=_obj(node, "user", _user),
        roles=_objs(node, "roles", _role),
        created_at=_str(node, "createdAt"),
    )


def _subscription_edge(node: Mapping[str, Any]) -> SubscriptionEdge:
    return SubscriptionEdge(node=_obj(node, "node", _subscription))


def _subscriptions(node: Mapping[str, Any]) -> Subscriptions:
    return Subscriptions(
        edges=_objs(node, "edges", _subscription_edge),
        total_count=_int(node, "totalCount"),
    )


def _tag_name(node: Mapping[str, Any]) -> Optional[str]:
    return _str(node, "name")


def map_fact_sheet(node: Any) -> FactSheet:
    """Convert one ``node`` object into a FactSheet; unknown keys are ignored."""
    if not isinstance(node, Mapping):
        raise MappingError(
            f"Fact sheet node must be an object, got {type(node).__name__}."
        )

    tags = _objs(node, "tags", _tag_name)

    return FactSheet(
        id=_str(node, "id"),
        name=_str(node, "name"),
        display_name=_str(node, "displayName"),
        full_name=_str(node, "fullName"),
        type=_str(node, "type"),
        description=_str(node, "description"),
        status=_str(node, "status"),
        lx_state=_str(node, "lxState"),
        completion=_obj(node, "completion", _completion),
        updated_at=_str(node, "updatedAt"),
        created_at=_str(node, "createdAt"),
        tags=[t for t in tags if t is not None] if tags is not None else None,
        lifecycle=_obj(node, "lifecycle", _lifecycle),
        business_criticality=_str(node, "businessCriticality"),
        technical_suitability=_str(node, "technicalSuitability"),
        functional_suitability=_str(node, "functionalSuitability"),
        subscriptions=_obj(node, "subscriptions", _subscriptions),
    )


def map_edges(edges: List[Any]) -> List[FactSheet]:
    """Map a list of ``{node: {...}}`` edges; any bad edge fails the batch."""
    fact_sheets: List[FactSheet] = []
    for index, edge in enumerate(edges):
        if not isinstance(edge, Mapping):
            raise MappingError(
                f"Error mapping fact sheets: edge {index} is "
                f"{type(edge).__name__}, expected an object."
            )
        try:
            fact_sheets.append(map_fact_sheet(edge.get("node")))
        except MappingError as exc:
            logger.error("Error mapping fact sheet edge %s: %s", index, exc)
            raise MappingError(
                f"Error mapping fact sheets: edge {index}: {exc}"
            ) from exc
    return fact_sheets


def map_fact_sheets(document: Any) -> List[FactSheet]:
    """Map ``data.allFactSheets.edges[].node`` into FactSheet records."""
    return map_edges(get_list(document, "data", "allFactSheets", "edges"))


def _facet_result(node: Mapping[str, Any]) -> FacetResult:
    return FacetResult(
        name=_str(node, "name"),
        key=_str(node, "key"),
        count=_int(node, "count"),
    )


def map_facets(document: Any) -> List[Facet]:
    """Map ``data.allFactSheets.filterOptions.facets`` into Facet records."""
    facets: List[Facet] = []
    for item in get_list(document, "data", "allFactSheets", "filterOptions", "facets"):
        if not isinstance(item, Mapping):
            raise MappingError(
                f"Facet entry must be an object, got {type(item).__name__}."
            )
        facets.append(
            Facet(
                facet_key=_str(item, "facetKey"),
                results=_objs(item, "results", _facet_result) or [],
            )
        )
    return facets


def graphql_errors(document: Any) -> List[Dict[str, Any]]:
    """Return the ``errors`` array of a GraphQL envelope, if any."""
    return [e for e in get_list(document, "errors") if isinstance(e, dict)]

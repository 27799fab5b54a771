# LeanIX MCP Server
# File: models.py
# Version: v1

"""Domain models used by the LeanIX MCP server.

Every field is optional: LeanIX returns a different subset of attributes per
fact sheet type and per query, so an absent attribute stays ``None``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass
class Completion:
    completion: Optional[str] = None
    percentage: Optional[int] = None


@dataclass
class Lifecycle:
    as_string: Optional[str] = None
    phase: Optional[str] = None


@dataclass
class User:
    id: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None


@dataclass
class Role:
    id: Optional[str] = None
    name: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class Subscription:
    """A user subscribed to a fact sheet (e.g. RESPONSIBLE, OBSERVER)."""

    id: Optional[str] = None
    type: Optional[str] = None
    user: Optional[User] = None
    roles: Optional[List[Role]] = None
    created_at: Optional[str] = None


@dataclass
class SubscriptionEdge:
    node: Optional[Subscription] = None


@dataclass
class Subscriptions:
    edges: Optional[List[SubscriptionEdge]] = None
    total_count: Optional[int] = None


@dataclass
class FactSheet:
    """One item of the LeanIX inventory (Application, DataObject, ...)."""

    id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    full_name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    lx_state: Optional[str] = None
    completion: Optional[Completion] = None

    # Opaque ISO-8601 strings as returned by LeanIX.
    updated_at: Optional[str] = None
    created_at: Optional[str] = None

    tags: Optional[List[str]] = None
    lifecycle: Optional[Lifecycle] = None

    # Application-only classification codes, not validated locally.
    business_criticality: Optional[str] = None
    technical_suitability: Optional[str] = None
    functional_suitability: Optional[str] = None

    subscriptions: Optional[Subscriptions] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FacetResult:
    name: Optional[str] = None
    key: Optional[str] = None
    count: Optional[int] = None


@dataclass
class Facet:
    """A filter facet (e.g. ``FactSheetTypes``) with its result buckets."""

    facet_key: Optional[str] = None
    results: Optional[List[FacetResult]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

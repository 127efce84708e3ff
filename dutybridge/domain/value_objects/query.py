"""
Query Value Objects

Architectural Intent:
- Host-side abstract queries for incidents and services
- Immutable; parsed from the host's JSON payloads at the plugin boundary

Design Decisions:
- Scope names are canonical human-readable names, resolved to provider ids
  by the translator, never by the query itself
- Metadata is an open mapping used for provider-specific passthrough filters
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional


def _as_tuple(values: Any) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class QueryScope:
    """Name-based filter dimensions."""
    service: str = ""
    team: str = ""
    environment: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "QueryScope":
        data = data or {}
        return cls(
            service=data.get("service") or "",
            team=data.get("team") or "",
            environment=data.get("environment") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "service": self.service,
            "team": self.team,
            "environment": self.environment,
        }


@dataclass(frozen=True)
class IncidentQuery:
    """Abstract incident query."""
    query: str = ""
    statuses: tuple[str, ...] = ()
    severities: tuple[str, ...] = ()
    scope: QueryScope = field(default_factory=QueryScope)
    limit: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "IncidentQuery":
        data = data or {}
        return cls(
            query=data.get("query") or "",
            statuses=_as_tuple(data.get("statuses")),
            severities=_as_tuple(data.get("severities")),
            scope=QueryScope.from_dict(data.get("scope")),
            limit=_as_int(data.get("limit")),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True)
class ServiceQuery:
    """Abstract service query. Free text goes through ``name``."""
    name: str = ""
    scope: QueryScope = field(default_factory=QueryScope)
    limit: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "ServiceQuery":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            scope=QueryScope.from_dict(data.get("scope")),
            limit=_as_int(data.get("limit")),
            metadata=dict(data.get("metadata") or {}),
        )

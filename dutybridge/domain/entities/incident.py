"""
Incident Entities

Architectural Intent:
- Host-side incident model returned by every incident provider
- Inputs for create/update/timeline-append operations
- Serialized to the host's camelCase JSON at the plugin boundary

Design Decisions:
- Entities are frozen; converters build a fresh instance on every call
- Missing timestamps are None rather than a sentinel datetime
- UpdateIncidentInput uses None for "leave unchanged"
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from dutybridge.domain.value_objects.timestamp import format_timestamp, parse_timestamp


@dataclass(frozen=True)
class Incident:
    id: str
    title: str = ""
    description: str = ""
    status: str = ""
    severity: str = ""
    service: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    fields: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "severity": self.severity,
            "service": self.service,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "fields": self.fields,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class TimelineEntry:
    id: str
    incident_id: str
    at: Optional[datetime] = None
    kind: str = ""
    body: str = ""
    actor: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "incidentId": self.incident_id,
            "at": format_timestamp(self.at),
            "kind": self.kind,
            "body": self.body,
            "actor": self.actor,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class CreateIncidentInput:
    title: str
    description: str = ""
    status: str = ""
    severity: str = ""
    service: str = ""
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "CreateIncidentInput":
        data = data or {}
        return cls(
            title=data.get("title") or "",
            description=data.get("description") or "",
            status=data.get("status") or "",
            severity=data.get("severity") or "",
            service=data.get("service") or "",
            fields=dict(data.get("fields") or {}),
        )


@dataclass(frozen=True)
class UpdateIncidentInput:
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    severity: Optional[str] = None
    service: Optional[str] = None
    fields: Optional[dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "UpdateIncidentInput":
        data = data or {}
        fields = data.get("fields")
        return cls(
            title=data.get("title"),
            description=data.get("description"),
            status=data.get("status"),
            severity=data.get("severity"),
            service=data.get("service"),
            fields=dict(fields) if fields is not None else None,
        )


@dataclass(frozen=True)
class TimelineAppendInput:
    body: str
    at: Optional[datetime] = None
    kind: str = "note"
    actor: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "TimelineAppendInput":
        data = data or {}
        return cls(
            body=data.get("body") or "",
            at=parse_timestamp(data.get("at")),
            kind=data.get("kind") or "note",
            actor=dict(data.get("actor") or {}),
            metadata=dict(data.get("metadata") or {}),
        )

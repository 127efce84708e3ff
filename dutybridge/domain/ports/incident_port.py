"""
Incident Provider Port

Architectural Intent:
- The provider contract exposed to the host for incidents
- Implemented by the PagerDuty adapter and the in-memory reference adapter
- Enables host code and the plugin transport to stay provider-agnostic

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- get/update/append_timeline raise NotFoundError for unknown ids
- query returns an empty list when nothing matches
"""

from __future__ import annotations
from typing import Protocol, runtime_checkable

from dutybridge.domain.entities.incident import (
    CreateIncidentInput,
    Incident,
    TimelineAppendInput,
    TimelineEntry,
    UpdateIncidentInput,
)
from dutybridge.domain.value_objects.query import IncidentQuery


@runtime_checkable
class IncidentProviderPort(Protocol):
    """Port for incident management operations."""

    async def query(self, query: IncidentQuery) -> list[Incident]:
        ...

    async def get(self, incident_id: str) -> Incident:
        ...

    async def list(self) -> list[Incident]:
        ...

    async def create(self, data: CreateIncidentInput) -> Incident:
        ...

    async def update(self, incident_id: str, data: UpdateIncidentInput) -> Incident:
        ...

    async def get_timeline(self, incident_id: str) -> list[TimelineEntry]:
        ...

    async def append_timeline(
        self, incident_id: str, entry: TimelineAppendInput
    ) -> None:
        ...

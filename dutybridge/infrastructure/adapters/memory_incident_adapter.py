"""
In-Memory Incident Adapter

Architectural Intent:
- Reference implementation of IncidentProviderPort for development and tests
- Shows the provider contract without a network dependency

Design Decisions:
- One lock guards the incident and timeline stores
- Sequential ids (inc-1, inc-2, ... and tl-1, tl-2, ...)
- Mappings are deep-copied on the way in and on the way out, so callers
  never share mutable state with the store
- Unknown ids raise NotFoundError
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import replace
from datetime import datetime, UTC
from itertools import count
import logging
import threading

from dutybridge.domain.entities.incident import (
    CreateIncidentInput,
    Incident,
    TimelineAppendInput,
    TimelineEntry,
    UpdateIncidentInput,
)
from dutybridge.domain.exceptions import NotFoundError
from dutybridge.domain.value_objects.query import IncidentQuery

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "open"
DEFAULT_SEVERITY = "medium"
SOURCE = "memory"


def _copy_incident(incident: Incident) -> Incident:
    return replace(
        incident,
        fields=deepcopy(incident.fields),
        metadata=deepcopy(incident.metadata),
    )


def _copy_entry(entry: TimelineEntry) -> TimelineEntry:
    return replace(
        entry,
        actor=deepcopy(entry.actor),
        metadata=deepcopy(entry.metadata),
    )


class MemoryIncidentAdapter:
    """Thread-safe in-memory incident provider."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._incidents: dict[str, Incident] = {}
        self._timelines: dict[str, list[TimelineEntry]] = {}
        self._incident_ids = count(1)
        self._entry_ids = count(1)

    async def query(self, query: IncidentQuery) -> list[Incident]:
        statuses = {s.lower() for s in query.statuses}
        severities = {s.lower() for s in query.severities}
        service = query.scope.service.lower()
        service_id = (query.metadata or {}).get("service_id")

        with self._lock:
            matched = []
            for incident in self._incidents.values():
                if statuses and incident.status.lower() not in statuses:
                    continue
                if severities and incident.severity.lower() not in severities:
                    continue
                if service and service not in incident.service.lower():
                    continue
                if service_id and incident.metadata.get("service_id") != service_id:
                    continue
                matched.append(_copy_incident(incident))
                if query.limit > 0 and len(matched) >= query.limit:
                    break
        return matched

    async def get(self, incident_id: str) -> Incident:
        with self._lock:
            incident = self._incidents.get(incident_id)
            if incident is None:
                raise NotFoundError("incident", incident_id)
            return _copy_incident(incident)

    async def list(self) -> list[Incident]:
        with self._lock:
            return [_copy_incident(i) for i in self._incidents.values()]

    async def create(self, data: CreateIncidentInput) -> Incident:
        now = datetime.now(UTC)
        with self._lock:
            incident_id = f"inc-{next(self._incident_ids)}"
            incident = Incident(
                id=incident_id,
                title=data.title,
                description=data.description,
                status=data.status or DEFAULT_STATUS,
                severity=data.severity or DEFAULT_SEVERITY,
                service=data.service,
                created_at=now,
                updated_at=now,
                fields=deepcopy(data.fields),
                metadata={"source": SOURCE, "service_id": data.service},
            )
            self._incidents[incident_id] = incident
            self._timelines[incident_id] = []
            logger.info("Created in-memory incident %s - %s", incident_id, data.title)
            return _copy_incident(incident)

    async def update(self, incident_id: str, data: UpdateIncidentInput) -> Incident:
        with self._lock:
            current = self._incidents.get(incident_id)
            if current is None:
                raise NotFoundError("incident", incident_id)

            changes = {
                name: value
                for name, value in (
                    ("title", data.title),
                    ("description", data.description),
                    ("status", data.status),
                    ("severity", data.severity),
                    ("service", data.service),
                )
                if value is not None
            }
            if data.fields is not None:
                changes["fields"] = deepcopy(data.fields)
            if data.service is not None:
                metadata = deepcopy(current.metadata)
                metadata["service_id"] = data.service
                changes["metadata"] = metadata

            updated = replace(current, updated_at=datetime.now(UTC), **changes)
            self._incidents[incident_id] = updated
            logger.info("Updated in-memory incident %s (%s)", incident_id, ", ".join(changes))
            return _copy_incident(updated)

    async def get_timeline(self, incident_id: str) -> list[TimelineEntry]:
        with self._lock:
            return [_copy_entry(e) for e in self._timelines.get(incident_id, [])]

    async def append_timeline(
        self, incident_id: str, entry: TimelineAppendInput
    ) -> None:
        with self._lock:
            if incident_id not in self._incidents:
                raise NotFoundError("incident", incident_id)
            self._timelines[incident_id].append(
                TimelineEntry(
                    id=f"tl-{next(self._entry_ids)}",
                    incident_id=incident_id,
                    at=entry.at or datetime.now(UTC),
                    kind=entry.kind,
                    body=entry.body,
                    actor=deepcopy(entry.actor),
                    metadata=deepcopy(entry.metadata),
                )
            )

"""
PagerDuty Incident Adapter

Architectural Intent:
- Implements IncidentProviderPort on top of PagerDutyAPIPort
- Reads go through the QueryTranslator and the record converter; writes build
  PagerDuty payloads from the host inputs
- Holds no state beyond its config and collaborators

Design Decisions:
- A filter set that matches nothing (a scope name with zero hits) returns an
  empty list without calling the listing endpoint
- New incidents are always opened against the configured service id
- Urgency comes from the input severity, falling back to the configured
  default severity
- Updates send only the fields the caller supplied
"""

from __future__ import annotations
import logging
from typing import Any

from dutybridge.domain.entities.incident import (
    CreateIncidentInput,
    Incident,
    TimelineAppendInput,
    TimelineEntry,
    UpdateIncidentInput,
)
from dutybridge.domain.ports.pagerduty_api_port import PagerDutyAPIPort
from dutybridge.domain.services.query_translator import QueryTranslator
from dutybridge.domain.services.record_converter import (
    to_host_incident,
    to_timeline_entry,
)
from dutybridge.domain.services.vocabulary import (
    severity_to_urgency,
    status_to_provider_status,
)
from dutybridge.domain.value_objects.query import IncidentQuery
from dutybridge.domain.value_objects.resource import Resource
from dutybridge.infrastructure.config import IncidentAdapterConfig

logger = logging.getLogger(__name__)


class PagerDutyIncidentAdapter:
    """Incident provider backed by the PagerDuty REST API."""

    def __init__(
        self,
        config: IncidentAdapterConfig,
        api: PagerDutyAPIPort,
        translator: QueryTranslator,
    ) -> None:
        self._config = config
        self._api = api
        self._translator = translator

    @property
    def config(self) -> IncidentAdapterConfig:
        return self._config

    async def query(self, query: IncidentQuery) -> list[Incident]:
        params = await self._translator.translate_incident_query(query)
        if params.matches_nothing:
            logger.debug(
                "Incident query matches nothing (%s); skipping listing",
                ", ".join(params.empty_filters()),
            )
            return []

        records = await self._api.list_resources(Resource.INCIDENT, params)
        logger.debug("PagerDuty returned %d incidents", len(records))
        return [to_host_incident(record, self._config.source) for record in records]

    async def get(self, incident_id: str) -> Incident:
        record = await self._api.get(Resource.INCIDENT, incident_id)
        return to_host_incident(record, self._config.source)

    async def list(self) -> list[Incident]:
        return await self.query(IncidentQuery())

    async def create(self, data: CreateIncidentInput) -> Incident:
        severity = data.severity or self._config.default_severity
        incident: dict[str, Any] = {
            "type": "incident",
            "title": data.title,
            "service": {"id": self._config.service_id, "type": "service_reference"},
            "urgency": severity_to_urgency(severity),
        }

        details = data.fields.get("body") or data.description
        if details:
            incident["body"] = {"type": "incident_body", "details": str(details)}

        incident_key = data.fields.get("incident_key")
        if incident_key:
            incident["incident_key"] = str(incident_key)

        record = await self._api.create(Resource.INCIDENT, {"incident": incident})
        created = to_host_incident(record, self._config.source)
        logger.info(
            "Created PagerDuty incident %s [urgency=%s, service=%s]",
            created.id,
            incident["urgency"],
            self._config.service_id,
        )
        return created

    async def update(self, incident_id: str, data: UpdateIncidentInput) -> Incident:
        incident: dict[str, Any] = {"type": "incident"}
        if data.title is not None:
            incident["title"] = data.title
        if data.status is not None:
            incident["status"] = status_to_provider_status(data.status)
        if data.severity is not None:
            incident["urgency"] = severity_to_urgency(data.severity)

        record = await self._api.update(
            Resource.INCIDENT, incident_id, {"incident": incident}
        )
        logger.info(
            "Updated PagerDuty incident %s (%s)",
            incident_id,
            ", ".join(k for k in incident if k != "type") or "no changes",
        )
        return to_host_incident(record, self._config.source)

    async def get_timeline(self, incident_id: str) -> list[TimelineEntry]:
        records = await self._api.list_log_entries(incident_id)
        return [to_timeline_entry(record, incident_id) for record in records]

    async def append_timeline(
        self, incident_id: str, entry: TimelineAppendInput
    ) -> None:
        await self._api.append_note(incident_id, entry.body)
        logger.info("Appended note to PagerDuty incident %s", incident_id)

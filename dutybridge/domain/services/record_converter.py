"""
Record Converter

Architectural Intent:
- Maps raw PagerDuty records (decoded JSON) onto host entities
- Carries every provider-specific field without a first-class host
  equivalent in the entity's metadata mapping
- One-way: host -> provider reconstruction is not attempted

Design Decisions:
- Never raises on missing or malformed optional data; absent nested objects
  omit their metadata key, absent scalars become "" and unparseable
  timestamps become None
- Status and urgency go through the vocabulary mapper
- Service tags team_0, team_1, ... are positional and follow source order

Metadata keys:
    Incident: source, incident_key, incident_number, provider_status,
              urgency, service_id, service_url, html_url,
              last_status_change_at, assignments*, escalation_policy*, teams*
    Service:  source, summary, description, status, html_url,
              alert_creation, escalation_policy*, teams*
    Timeline: type
    (* only when present and non-empty)
"""

from typing import Any

from dutybridge.domain.entities.incident import Incident, TimelineEntry
from dutybridge.domain.entities.service import Service
from dutybridge.domain.services.vocabulary import (
    provider_status_to_status,
    urgency_to_severity,
)
from dutybridge.domain.value_objects.timestamp import parse_timestamp


def _obj(record: Any, key: str) -> dict[str, Any]:
    value = record.get(key) if isinstance(record, dict) else None
    return value if isinstance(value, dict) else {}


def _list(record: Any, key: str) -> list[dict[str, Any]]:
    value = record.get(key) if isinstance(record, dict) else None
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _str(record: Any, key: str) -> str:
    value = record.get(key) if isinstance(record, dict) else None
    if value is None:
        return ""
    return str(value)


def _reference(record: dict[str, Any]) -> dict[str, Any]:
    return {"id": _str(record, "id"), "summary": _str(record, "summary")}


def to_host_incident(record: dict[str, Any], source: str) -> Incident:
    service = _obj(record, "service")
    status = _str(record, "status")
    urgency = _str(record, "urgency")

    metadata: dict[str, Any] = {
        "source": source,
        "incident_key": _str(record, "incident_key"),
        "provider_status": status,
        "urgency": urgency,
        "service_id": _str(service, "id"),
        "service_url": _str(service, "html_url"),
        "html_url": _str(record, "html_url"),
        "last_status_change_at": _str(record, "last_status_change_at"),
    }
    if record.get("incident_number") is not None:
        metadata["incident_number"] = record["incident_number"]

    assignees = [
        {
            "id": _str(assignee, "id"),
            "name": _str(assignee, "summary"),
            "html_url": _str(assignee, "html_url"),
        }
        for assignee in (_obj(a, "assignee") for a in _list(record, "assignments"))
    ]
    if assignees:
        metadata["assignments"] = assignees

    policy = _obj(record, "escalation_policy")
    if policy.get("id"):
        metadata["escalation_policy"] = _reference(policy)

    teams = [_reference(team) for team in _list(record, "teams")]
    if teams:
        metadata["teams"] = teams

    return Incident(
        id=_str(record, "id"),
        title=_str(record, "title"),
        description=_str(_obj(record, "body"), "details"),
        status=provider_status_to_status(status),
        severity=urgency_to_severity(urgency),
        service=_str(service, "summary"),
        created_at=parse_timestamp(record.get("created_at")),
        updated_at=parse_timestamp(record.get("updated_at")),
        metadata=metadata,
    )


def to_host_service(record: dict[str, Any], source: str) -> Service:
    metadata: dict[str, Any] = {
        "source": source,
        "summary": _str(record, "summary"),
        "description": _str(record, "description"),
        "status": _str(record, "status"),
        "html_url": _str(record, "html_url"),
        "alert_creation": _str(record, "alert_creation"),
    }

    policy = _obj(record, "escalation_policy")
    if policy.get("id"):
        metadata["escalation_policy"] = _reference(policy)

    tags: dict[str, str] = {}
    teams = _list(record, "teams")
    if teams:
        metadata["teams"] = [_reference(team) for team in teams]
        for index, team in enumerate(teams):
            tags[f"team_{index}"] = _str(team, "summary")

    return Service(
        id=_str(record, "id"),
        name=_str(record, "name"),
        tags=tags,
        metadata=metadata,
    )


def to_timeline_entry(record: dict[str, Any], incident_id: str) -> TimelineEntry:
    entry_type = _str(record, "type")

    actor: dict[str, Any] = {}
    agent = _obj(record, "agent")
    if agent:
        actor["name"] = _str(agent, "summary")
        if agent.get("id"):
            actor["id"] = _str(agent, "id")

    return TimelineEntry(
        id=_str(record, "id"),
        incident_id=incident_id,
        at=parse_timestamp(record.get("created_at")),
        kind=entry_type,
        body=_str(record, "summary"),
        actor=actor,
        metadata={"type": entry_type},
    )

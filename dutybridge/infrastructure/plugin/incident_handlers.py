"""
Incident plugin method handlers.

Each handler decodes its payload into host inputs, calls the provider and
returns a JSON-ready result.
"""

from typing import Any

from dutybridge.domain.entities.incident import (
    CreateIncidentInput,
    TimelineAppendInput,
    UpdateIncidentInput,
)
from dutybridge.domain.ports.incident_port import IncidentProviderPort
from dutybridge.domain.value_objects.query import IncidentQuery


def _id(payload: dict[str, Any]) -> str:
    return str(payload.get("id") or "")


def _input(payload: dict[str, Any]) -> dict[str, Any]:
    data = payload.get("input")
    return data if isinstance(data, dict) else {}


async def _handle_query(provider: IncidentProviderPort, payload: dict[str, Any]) -> Any:
    incidents = await provider.query(IncidentQuery.from_dict(payload))
    return [i.to_dict() for i in incidents]


async def _handle_list(provider: IncidentProviderPort, payload: dict[str, Any]) -> Any:
    incidents = await provider.list()
    return [i.to_dict() for i in incidents]


async def _handle_get(provider: IncidentProviderPort, payload: dict[str, Any]) -> Any:
    incident = await provider.get(_id(payload))
    return incident.to_dict()


async def _handle_create(provider: IncidentProviderPort, payload: dict[str, Any]) -> Any:
    incident = await provider.create(CreateIncidentInput.from_dict(payload))
    return incident.to_dict()


async def _handle_update(provider: IncidentProviderPort, payload: dict[str, Any]) -> Any:
    incident = await provider.update(
        _id(payload), UpdateIncidentInput.from_dict(_input(payload))
    )
    return incident.to_dict()


async def _handle_timeline_get(
    provider: IncidentProviderPort, payload: dict[str, Any]
) -> Any:
    entries = await provider.get_timeline(_id(payload))
    return [e.to_dict() for e in entries]


async def _handle_timeline_append(
    provider: IncidentProviderPort, payload: dict[str, Any]
) -> Any:
    await provider.append_timeline(
        _id(payload), TimelineAppendInput.from_dict(_input(payload))
    )
    return {"status": "ok"}


INCIDENT_HANDLERS = {
    "incident.query": _handle_query,
    "incident.list": _handle_list,
    "incident.get": _handle_get,
    "incident.create": _handle_create,
    "incident.update": _handle_update,
    "incident.timeline.get": _handle_timeline_get,
    "incident.timeline.append": _handle_timeline_append,
}

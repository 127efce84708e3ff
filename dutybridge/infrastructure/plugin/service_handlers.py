"""Service plugin method handlers."""

from typing import Any

from dutybridge.domain.ports.service_port import ServiceProviderPort
from dutybridge.domain.value_objects.query import ServiceQuery


async def _handle_query(provider: ServiceProviderPort, payload: dict[str, Any]) -> Any:
    services = await provider.query(ServiceQuery.from_dict(payload))
    return [s.to_dict() for s in services]


async def _handle_get(provider: ServiceProviderPort, payload: dict[str, Any]) -> Any:
    service = await provider.get(str(payload.get("id") or ""))
    return service.to_dict()


SERVICE_HANDLERS = {
    "service.query": _handle_query,
    "service.get": _handle_get,
}

"""
Service Provider Port

Provider contract exposed to the host for services: query and get.
"""

from typing import Protocol, runtime_checkable

from dutybridge.domain.entities.service import Service
from dutybridge.domain.value_objects.query import ServiceQuery


@runtime_checkable
class ServiceProviderPort(Protocol):
    """Port for service catalog lookups."""

    async def query(self, query: ServiceQuery) -> list[Service]:
        """Query services. Returns an empty list when nothing matches."""
        ...

    async def get(self, service_id: str) -> Service:
        """Get one service. Raises NotFoundError for unknown ids."""
        ...

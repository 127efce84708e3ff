"""
PagerDuty API Port

Architectural Intent:
- Port for the raw PagerDuty REST API consumed by the translation layer
- Domain services depend on this contract, never on the HTTP client
- Records are returned as raw decoded JSON dicts; conversion happens in
  the domain converters

Design Decisions:
- Uses Protocol for structural typing (test doubles need no inheritance)
- get/update/append_note raise NotFoundError on 404
- Every other unexpected response raises TransportError
"""

from typing import Any, Protocol, runtime_checkable

from dutybridge.domain.value_objects.filter_params import FilterParams
from dutybridge.domain.value_objects.resource import Resource


@runtime_checkable
class PagerDutyAPIPort(Protocol):
    """Port for PagerDuty REST API v2 calls."""

    async def list_entities(
        self, kind: Resource, query: str, limit: int
    ) -> list[dict[str, Any]]:
        """Search a collection by name. Returns raw records."""
        ...

    async def list_resources(
        self, resource: Resource, params: FilterParams
    ) -> list[dict[str, Any]]:
        """List a collection with the given filters."""
        ...

    async def get(self, resource: Resource, entity_id: str) -> dict[str, Any]:
        """Fetch one record by id."""
        ...

    async def create(
        self, resource: Resource, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a record. Payload is the full request envelope."""
        ...

    async def update(
        self, resource: Resource, entity_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update a record. Payload is the full request envelope."""
        ...

    async def append_note(self, incident_id: str, text: str) -> None:
        """Add a note to an incident."""
        ...

    async def list_log_entries(self, incident_id: str) -> list[dict[str, Any]]:
        """List the log entries of an incident."""
        ...

"""Tests for NameResolver."""

import asyncio

import pytest

from dutybridge.domain.exceptions import NameLookupError, TransportError
from dutybridge.domain.services.name_resolver import LOOKUP_PAGE_SIZE, NameResolver
from dutybridge.domain.value_objects.resource import Resource


SERVICES = [
    {"id": "PSVC1", "name": "Production API"},
    {"id": "PSVC2", "name": "Production Database"},
    {"id": "PSVC3", "name": "Staging API"},
]


class TestResolveIdsByName:
    @pytest.mark.asyncio
    async def test_substring_match_keeps_order(self, fake_api):
        fake_api.entities[Resource.SERVICE] = SERVICES
        resolver = NameResolver(fake_api)

        ids = await resolver.resolve_ids_by_name(Resource.SERVICE, "production")

        assert ids == ["PSVC1", "PSVC2"]

    @pytest.mark.asyncio
    async def test_match_is_case_insensitive(self, fake_api):
        fake_api.entities[Resource.SERVICE] = SERVICES
        resolver = NameResolver(fake_api)

        assert await resolver.resolve_ids_by_name(Resource.SERVICE, "API") == ["PSVC1", "PSVC3"]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_not_error(self, fake_api):
        fake_api.entities[Resource.SERVICE] = SERVICES
        resolver = NameResolver(fake_api)

        assert await resolver.resolve_ids_by_name(Resource.SERVICE, "nonexistent") == []

    @pytest.mark.asyncio
    async def test_server_side_candidates_are_rechecked(self, fake_api):
        fake_api.entities[Resource.TEAM] = [
            {"id": "PTEAM1", "name": "Database Team"},
            {"id": "PTEAM2", "name": "Networking"},
            {"id": "PTEAM3"},
        ]
        resolver = NameResolver(fake_api)

        assert await resolver.resolve_ids_by_name(Resource.TEAM, "database") == ["PTEAM1"]

    @pytest.mark.asyncio
    async def test_single_search_request(self, fake_api):
        fake_api.entities[Resource.TEAM] = []
        resolver = NameResolver(fake_api)

        await resolver.resolve_ids_by_name(Resource.TEAM, "Platform")

        assert fake_api.calls == [
            ("list_entities", Resource.TEAM, "Platform", LOOKUP_PAGE_SIZE)
        ]

    @pytest.mark.asyncio
    async def test_transport_failure_wrapped(self, fake_api):
        fake_api.error = TransportError("pagerduty api error: 500 boom", 500, "boom")
        resolver = NameResolver(fake_api)

        with pytest.raises(NameLookupError) as exc_info:
            await resolver.resolve_ids_by_name(Resource.SERVICE, "Production")

        err = exc_info.value
        assert err.kind == "service"
        assert err.name == "Production"
        assert "service" in str(err)
        assert "Production" in str(err)
        assert isinstance(err.__cause__, TransportError)
        assert isinstance(err, LookupError)

    @pytest.mark.asyncio
    async def test_cancellation_not_wrapped(self, fake_api):
        fake_api.error = asyncio.CancelledError()
        resolver = NameResolver(fake_api)

        with pytest.raises(asyncio.CancelledError):
            await resolver.resolve_ids_by_name(Resource.SERVICE, "Production")

    @pytest.mark.asyncio
    async def test_incidents_are_not_resolvable(self, fake_api):
        resolver = NameResolver(fake_api)

        with pytest.raises(ValueError):
            await resolver.resolve_ids_by_name(Resource.INCIDENT, "anything")
        assert fake_api.calls == []

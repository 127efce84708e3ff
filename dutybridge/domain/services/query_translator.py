"""
Query Translator

Architectural Intent:
- Builds PagerDuty list filters from the host's abstract incident/service
  queries
- Combines direct filters, vocabulary-mapped filters, name-resolved scope
  filters and metadata passthrough filters with AND semantics
- The only network I/O is scope resolution through the NameResolver

Design Decisions:
- Translation is monotonic: each recognized field adds filters, none removes
- Scope filters that resolve to zero ids are declared anyway; an empty
  ``service_ids[]``/``team_ids[]`` means "match nothing", not "no filter"
- Metadata passthrough is appended after scope filters (additive union)
- Service resolution happens before team resolution, sequentially
- A failed resolution fails the whole translation; partial filter sets are
  never returned
- The adapter's configured default service id is never applied here
"""

import logging
from typing import Any

from dutybridge.domain.services.name_resolver import NameResolver
from dutybridge.domain.services.vocabulary import (
    severity_to_urgency,
    status_to_provider_status,
)
from dutybridge.domain.value_objects.filter_params import FilterParams
from dutybridge.domain.value_objects.query import IncidentQuery, ServiceQuery
from dutybridge.domain.value_objects.resource import Resource

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100

LIMIT = "limit"
QUERY = "query"
STATUSES = "statuses[]"
URGENCIES = "urgencies[]"
SERVICE_IDS = "service_ids[]"
TEAM_IDS = "team_ids[]"
INCIDENT_KEY = "incident_key"


def _metadata_string(metadata: dict[str, Any], key: str) -> str:
    value = metadata.get(key)
    if isinstance(value, str):
        return value
    return ""


class QueryTranslator:
    """Translates host queries into PagerDuty filter parameters."""

    def __init__(self, resolver: NameResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> NameResolver:
        return self._resolver

    async def translate_incident_query(self, query: IncidentQuery) -> FilterParams:
        params = FilterParams()
        self._apply_limit(params, query.limit)

        for status in query.statuses:
            params.add(STATUSES, status_to_provider_status(status))

        for severity in query.severities:
            params.add(URGENCIES, severity_to_urgency(severity))

        if query.scope.service:
            await self._apply_scope(
                params, SERVICE_IDS, Resource.SERVICE, query.scope.service
            )

        if query.scope.team:
            await self._apply_scope(params, TEAM_IDS, Resource.TEAM, query.scope.team)

        self._ignore_environment(query.scope.environment)

        metadata = query.metadata or {}
        service_id = _metadata_string(metadata, "service_id")
        if service_id:
            params.add(SERVICE_IDS, service_id)
        team_id = _metadata_string(metadata, "team_id")
        if team_id:
            params.add(TEAM_IDS, team_id)
        incident_key = _metadata_string(metadata, "incident_key")
        if incident_key:
            params.set(INCIDENT_KEY, incident_key)

        if query.query:
            logger.debug(
                "Free-text incident search is not supported by PagerDuty; "
                "dropping query %r",
                query.query,
            )

        return params

    async def translate_service_query(self, query: ServiceQuery) -> FilterParams:
        params = FilterParams()
        self._apply_limit(params, query.limit)

        if query.name:
            params.set(QUERY, query.name)

        if query.scope.team:
            await self._apply_scope(params, TEAM_IDS, Resource.TEAM, query.scope.team)

        if query.scope.service:
            logger.debug(
                "Service scope has no meaning for service listings; ignoring %r",
                query.scope.service,
            )
        self._ignore_environment(query.scope.environment)

        team_id = _metadata_string(query.metadata or {}, "team_id")
        if team_id:
            params.add(TEAM_IDS, team_id)

        return params

    @staticmethod
    def _apply_limit(params: FilterParams, limit: int) -> None:
        if limit > 0:
            params.set(LIMIT, str(limit))
        else:
            params.set(LIMIT, str(DEFAULT_LIMIT))

    async def _apply_scope(
        self, params: FilterParams, param: str, kind: Resource, name: str
    ) -> None:
        ids = await self._resolver.resolve_ids_by_name(kind, name)
        params.declare(param)
        for entity_id in ids:
            params.add(param, entity_id)
        if not ids:
            logger.info("%s scope %r matched no ids; results will be empty", kind, name)

    @staticmethod
    def _ignore_environment(environment: str) -> None:
        if environment:
            logger.debug(
                "Environment scope has no PagerDuty equivalent; ignoring %r",
                environment,
            )

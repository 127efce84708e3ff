"""
PagerDuty Service Adapter

Implements ServiceProviderPort: service queries are translated into
PagerDuty listing filters and the records converted into host services.
A filter set that matches nothing returns an empty list without a listing call.
"""

from __future__ import annotations
import logging

from dutybridge.domain.entities.service import Service
from dutybridge.domain.ports.pagerduty_api_port import PagerDutyAPIPort
from dutybridge.domain.services.query_translator import QueryTranslator
from dutybridge.domain.services.record_converter import to_host_service
from dutybridge.domain.value_objects.query import ServiceQuery
from dutybridge.domain.value_objects.resource import Resource
from dutybridge.infrastructure.config import ServiceAdapterConfig

logger = logging.getLogger(__name__)


class PagerDutyServiceAdapter:
    """Service provider backed by the PagerDuty REST API."""

    def __init__(
        self,
        config: ServiceAdapterConfig,
        api: PagerDutyAPIPort,
        translator: QueryTranslator,
    ) -> None:
        self._config = config
        self._api = api
        self._translator = translator

    @property
    def config(self) -> ServiceAdapterConfig:
        return self._config

    async def query(self, query: ServiceQuery) -> list[Service]:
        params = await self._translator.translate_service_query(query)
        if params.matches_nothing:
            logger.debug(
                "Service query matches nothing (%s); skipping listing",
                ", ".join(params.empty_filters()),
            )
            return []

        records = await self._api.list_resources(Resource.SERVICE, params)
        logger.debug("PagerDuty returned %d services", len(records))
        return [to_host_service(record, self._config.source) for record in records]

    async def get(self, service_id: str) -> Service:
        record = await self._api.get(Resource.SERVICE, service_id)
        return to_host_service(record, self._config.source)

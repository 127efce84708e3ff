"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the dutybridge plugins
- Single place where the HTTP client, name resolver, query translator and
  provider adapters are wired together
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Providers are looked up by name in a registry; the host picks one with
  config["provider"] and gets "pagerduty" when it does not
- Factories validate config before building anything, so a provider never
  starts without credentials
"""

from dataclasses import dataclass
from typing import Any, Callable

from dutybridge.domain.exceptions import ConfigError
from dutybridge.domain.ports.incident_port import IncidentProviderPort
from dutybridge.domain.ports.service_port import ServiceProviderPort
from dutybridge.domain.services.name_resolver import NameResolver
from dutybridge.domain.services.query_translator import QueryTranslator
from dutybridge.infrastructure.adapters.memory_incident_adapter import (
    MemoryIncidentAdapter,
)
from dutybridge.infrastructure.adapters.pagerduty_client import PagerDutyClient
from dutybridge.infrastructure.adapters.pagerduty_incident_adapter import (
    PagerDutyIncidentAdapter,
)
from dutybridge.infrastructure.adapters.pagerduty_service_adapter import (
    PagerDutyServiceAdapter,
)
from dutybridge.infrastructure.config import (
    IncidentAdapterConfig,
    ServiceAdapterConfig,
)

DEFAULT_PROVIDER = "pagerduty"


@dataclass
class PagerDutyContainer:
    """Wired PagerDuty collaborators shared by the adapters."""

    client: PagerDutyClient
    resolver: NameResolver
    translator: QueryTranslator


def create_pagerduty_container(
    api_url: str, api_token: str, from_email: str = "", timeout: float = 30.0
) -> PagerDutyContainer:
    """Create and wire the PagerDuty client, resolver and translator."""
    client = PagerDutyClient(api_url, api_token, from_email=from_email, timeout=timeout)
    resolver = NameResolver(client)
    translator = QueryTranslator(resolver)
    return PagerDutyContainer(client=client, resolver=resolver, translator=translator)


def _pagerduty_incident_provider(cfg: dict[str, Any]) -> IncidentProviderPort:
    config = IncidentAdapterConfig.from_mapping(cfg)
    config.validate()
    container = create_pagerduty_container(
        config.api_url, config.api_token, config.from_email, config.timeout
    )
    return PagerDutyIncidentAdapter(config, container.client, container.translator)


def _memory_incident_provider(cfg: dict[str, Any]) -> IncidentProviderPort:
    return MemoryIncidentAdapter()


def _pagerduty_service_provider(cfg: dict[str, Any]) -> ServiceProviderPort:
    config = ServiceAdapterConfig.from_mapping(cfg)
    config.validate()
    container = create_pagerduty_container(
        config.api_url, config.api_token, timeout=config.timeout
    )
    return PagerDutyServiceAdapter(config, container.client, container.translator)


INCIDENT_PROVIDERS: dict[str, Callable[[dict[str, Any]], IncidentProviderPort]] = {
    "pagerduty": _pagerduty_incident_provider,
    "memory": _memory_incident_provider,
}

SERVICE_PROVIDERS: dict[str, Callable[[dict[str, Any]], ServiceProviderPort]] = {
    "pagerduty": _pagerduty_service_provider,
}


def _provider_name(cfg: dict[str, Any]) -> str:
    name = cfg.get("provider")
    if not isinstance(name, str) or not name.strip():
        return DEFAULT_PROVIDER
    return name.strip().lower()


def create_incident_provider(cfg: dict[str, Any]) -> IncidentProviderPort:
    """Build the incident provider named by cfg["provider"]."""
    name = _provider_name(cfg)
    factory = INCIDENT_PROVIDERS.get(name)
    if factory is None:
        raise ConfigError("provider", f"unknown incident provider: {name}")
    return factory(cfg)


def create_service_provider(cfg: dict[str, Any]) -> ServiceProviderPort:
    """Build the service provider named by cfg["provider"]."""
    name = _provider_name(cfg)
    factory = SERVICE_PROVIDERS.get(name)
    if factory is None:
        raise ConfigError("provider", f"unknown service provider: {name}")
    return factory(cfg)

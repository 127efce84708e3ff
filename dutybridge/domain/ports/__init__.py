"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from dutybridge.domain.ports.pagerduty_api_port import PagerDutyAPIPort
from dutybridge.domain.ports.incident_port import IncidentProviderPort
from dutybridge.domain.ports.service_port import ServiceProviderPort

__all__ = [
    "PagerDutyAPIPort",
    "IncidentProviderPort",
    "ServiceProviderPort",
]

"""
Domain Services Package

Query translation and record conversion between the host model and
PagerDuty's vocabulary.
"""

from dutybridge.domain.services.name_resolver import NameResolver
from dutybridge.domain.services.query_translator import QueryTranslator
from dutybridge.domain.services.record_converter import (
    to_host_incident,
    to_host_service,
    to_timeline_entry,
)
from dutybridge.domain.services.vocabulary import (
    provider_status_to_status,
    severity_to_urgency,
    status_to_provider_status,
    urgency_to_severity,
)

__all__ = [
    "NameResolver",
    "QueryTranslator",
    "to_host_incident",
    "to_host_service",
    "to_timeline_entry",
    "provider_status_to_status",
    "severity_to_urgency",
    "status_to_provider_status",
    "urgency_to_severity",
]

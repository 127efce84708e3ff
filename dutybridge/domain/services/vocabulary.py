"""
Vocabulary Mapping

Architectural Intent:
- Pure functions translating host severity/status to PagerDuty urgency/status
  and back
- Shared by the query translator (filters), the adapters (write payloads)
  and the record converter (read path)

Design Decisions:
- Lookups are case-insensitive
- Severity is lossy: four host tiers collapse into two urgencies, so
  severity -> urgency -> severity does not round-trip
- Unknown severities default to "high" urgency; unknown statuses pass
  through unchanged. The two behaviours differ on purpose and existing
  callers may rely on either one.
"""

_URGENCY_BY_SEVERITY = {
    "critical": "high",
    "sev1": "high",
    "p1": "high",
    "high": "high",
    "sev2": "high",
    "p2": "high",
    "medium": "low",
    "sev3": "low",
    "p3": "low",
    "low": "low",
    "sev4": "low",
    "p4": "low",
}

_SEVERITY_BY_URGENCY = {
    "high": "critical",
    "low": "medium",
}

_PROVIDER_STATUS_BY_STATUS = {
    "open": "triggered",
    "triggered": "triggered",
    "acknowledged": "acknowledged",
    "investigating": "acknowledged",
    "resolved": "resolved",
    "closed": "resolved",
}

_STATUS_BY_PROVIDER_STATUS = {
    "triggered": "open",
    "acknowledged": "acknowledged",
    "resolved": "resolved",
}

DEFAULT_URGENCY = "high"
DEFAULT_SEVERITY = "medium"


def severity_to_urgency(severity: str) -> str:
    """Map a host severity to a PagerDuty urgency. Unknown -> "high"."""
    return _URGENCY_BY_SEVERITY.get((severity or "").lower(), DEFAULT_URGENCY)


def urgency_to_severity(urgency: str) -> str:
    """Map a PagerDuty urgency to a host severity. Unknown -> "medium"."""
    return _SEVERITY_BY_URGENCY.get((urgency or "").lower(), DEFAULT_SEVERITY)


def status_to_provider_status(status: str) -> str:
    """Map a host status to a PagerDuty status. Unknown passes through."""
    return _PROVIDER_STATUS_BY_STATUS.get((status or "").lower(), status)


def provider_status_to_status(status: str) -> str:
    """Map a PagerDuty status to a host status. Unknown passes through."""
    return _STATUS_BY_PROVIDER_STATUS.get((status or "").lower(), status)

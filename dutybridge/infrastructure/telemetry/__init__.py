"""
dutybridge Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry tracing for PagerDuty API calls
- Spans are no-ops until configure_tracing() installs an exporter
"""

from dutybridge.infrastructure.telemetry.tracing import (
    TracingConfig,
    configure_tracing,
    get_tracer,
    shutdown_tracing,
)

__all__ = ["TracingConfig", "configure_tracing", "get_tracer", "shutdown_tracing"]

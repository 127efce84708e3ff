"""
OpenTelemetry Tracing

Architectural Intent:
- Traces every PagerDuty API round-trip so slow name lookups and listings
  are visible next to the host's own spans
- Uses the global tracer provider: spans are no-ops until configured

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
- Validation in __post_init__ prevents accidental plaintext export
"""

from __future__ import annotations
from dataclasses import dataclass
from urllib.parse import urlparse
import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

TRACER_NAME = "dutybridge"


@dataclass(frozen=True)
class TracingConfig:
    endpoint: str = ""
    service_name: str = "dutybridge"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


def configure_tracing(config: TracingConfig) -> bool:
    """Install an SDK tracer provider exporting spans over OTLP gRPC.

    Returns:
        True if tracing was enabled, False when no endpoint is configured
    """
    if not config.endpoint:
        logger.info("OTEL endpoint not configured, tracing disabled")
        return False

    resource = Resource(attributes={SERVICE_NAME: config.service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=config.endpoint, insecure=config.insecure)
        )
    )
    trace.set_tracer_provider(provider)
    logger.info("Tracing enabled, exporting to %s", config.endpoint)
    return True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


def shutdown_tracing() -> None:
    """Flush and stop the SDK tracer provider, if one is installed."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()

"""Tests for OpenTelemetry tracing setup."""

import pytest
from unittest.mock import patch

from opentelemetry.sdk.trace import TracerProvider

from dutybridge.infrastructure.telemetry.tracing import (
    TracingConfig,
    configure_tracing,
    get_tracer,
)


class TestTracingConfig:
    def test_default_empty_endpoint(self):
        config = TracingConfig()
        assert config.endpoint == ""
        assert config.service_name == "dutybridge"

    def test_localhost_http_allowed(self):
        config = TracingConfig(endpoint="http://localhost:4317")
        assert config.endpoint == "http://localhost:4317"

    def test_remote_https_allowed(self):
        config = TracingConfig(endpoint="https://remote.example.com:4317")
        assert config.endpoint == "https://remote.example.com:4317"

    def test_remote_http_rejected(self):
        with pytest.raises(ValueError, match="insecure=True"):
            TracingConfig(endpoint="http://remote.example.com:4317")

    def test_remote_http_with_insecure(self):
        config = TracingConfig(endpoint="http://remote.example.com:4317", insecure=True)
        assert config.insecure is True


class TestConfigureTracing:
    def test_disabled_without_endpoint(self):
        with patch("dutybridge.infrastructure.telemetry.tracing.trace.set_tracer_provider") as set_provider:
            assert configure_tracing(TracingConfig()) is False
        set_provider.assert_not_called()

    def test_installs_sdk_provider(self):
        with patch("dutybridge.infrastructure.telemetry.tracing.OTLPSpanExporter") as exporter, \
             patch("dutybridge.infrastructure.telemetry.tracing.trace.set_tracer_provider") as set_provider:
            enabled = configure_tracing(TracingConfig(endpoint="http://localhost:4317"))

        assert enabled is True
        exporter.assert_called_once_with(endpoint="http://localhost:4317", insecure=False)
        provider = set_provider.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "dutybridge"
        provider.shutdown()

    def test_get_tracer_starts_spans(self):
        with get_tracer().start_as_current_span("pagerduty.GET /incidents") as span:
            span.set_attribute("http.response.status_code", 200)

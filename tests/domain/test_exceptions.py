"""Tests for the adapter error taxonomy."""

from dutybridge.domain.exceptions import (
    AdapterError,
    ConfigError,
    NameLookupError,
    NotFoundError,
    TransportError,
)


class TestAdapterErrors:
    def test_config_error_message(self):
        err = ConfigError("apiToken")
        assert str(err) == "pagerduty apiToken is required"
        assert err.field_name == "apiToken"
        assert err.to_dict()["error"]["code"] == "config_error"

    def test_transport_error_keeps_status_and_body(self):
        err = TransportError("pagerduty api error: 503 busy", 503, "busy")
        assert err.status == 503
        assert err.body == "busy"
        assert err.details == {"status": 503, "body": "busy"}

    def test_not_found_is_lookup_error(self):
        err = NotFoundError("incident", "PINC9")
        assert isinstance(err, LookupError)
        assert isinstance(err, AdapterError)
        assert str(err) == "incident not found: PINC9"

    def test_name_lookup_error_names_kind_and_name(self):
        cause = TransportError("execute request: refused")
        err = NameLookupError("team", "Platform", cause)
        assert str(err) == "lookup team by name 'Platform': execute request: refused"
        assert isinstance(err, LookupError)
        assert err.to_dict()["error"]["details"] == {"kind": "team", "name": "Platform"}

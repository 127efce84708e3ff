"""
Configuration Module

Architectural Intent:
- Typed adapter configuration parsed from the host's per-request config map
- Process settings (logging, telemetry) loaded from a JSON file plus
  environment variables
- Falls back to sensible defaults when values are absent

Design Decisions:
- Config objects are frozen dataclasses, immutable after load
- Adapter configs read the host's camelCase keys and trim whitespace
- validate() raises ConfigError so a provider refuses to start without
  credentials
- Environment variables override file-based settings
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional
import json
import logging
import os

from dutybridge.domain.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "pagerduty"
DEFAULT_API_URL = "https://api.pagerduty.com"
DEFAULT_SEVERITY = "critical"
DEFAULT_TIMEOUT = 30.0


def _string(cfg: Mapping[str, Any], key: str, default: str = "") -> str:
    value = cfg.get(key)
    if not isinstance(value, str):
        return default
    value = value.strip()
    return value or default


def _timeout(cfg: Mapping[str, Any]) -> float:
    value = cfg.get("timeout")
    try:
        timeout = float(value) if value is not None else DEFAULT_TIMEOUT
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid timeout %r", value)
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ServiceAdapterConfig:
    """PagerDuty service adapter configuration."""
    source: str = DEFAULT_SOURCE
    api_token: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, cfg: Optional[Mapping[str, Any]]) -> "ServiceAdapterConfig":
        cfg = cfg or {}
        return cls(
            source=_string(cfg, "source", DEFAULT_SOURCE),
            api_token=_string(cfg, "apiToken"),
            api_url=_string(cfg, "apiURL", DEFAULT_API_URL),
            timeout=_timeout(cfg),
        )

    def validate(self) -> None:
        if not self.api_token:
            raise ConfigError("apiToken")
        if not self.api_url:
            raise ConfigError("apiURL")


@dataclass(frozen=True)
class IncidentAdapterConfig:
    """PagerDuty incident adapter configuration."""
    source: str = DEFAULT_SOURCE
    default_severity: str = DEFAULT_SEVERITY
    api_token: str = ""
    api_url: str = DEFAULT_API_URL
    service_id: str = ""  # service that new incidents are opened against
    from_email: str = ""  # PagerDuty user email sent on writes
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, cfg: Optional[Mapping[str, Any]]) -> "IncidentAdapterConfig":
        cfg = cfg or {}
        return cls(
            source=_string(cfg, "source", DEFAULT_SOURCE),
            default_severity=_string(cfg, "defaultSeverity", DEFAULT_SEVERITY),
            api_token=_string(cfg, "apiToken"),
            api_url=_string(cfg, "apiURL", DEFAULT_API_URL),
            service_id=_string(cfg, "serviceID"),
            from_email=_string(cfg, "fromEmail"),
            timeout=_timeout(cfg),
        )

    def validate(self) -> None:
        if not self.api_token:
            raise ConfigError("apiToken")
        if not self.api_url:
            raise ConfigError("apiURL")
        if not self.service_id:
            raise ConfigError("serviceID")
        if not self.from_email:
            raise ConfigError("fromEmail")


@dataclass(frozen=True)
class TelemetrySettings:
    """OpenTelemetry tracing settings."""
    endpoint: str = ""
    service_name: str = "dutybridge"
    insecure: bool = False


@dataclass(frozen=True)
class AppSettings:
    """Process-level settings for the plugin executables."""
    log_level: str = "WARNING"
    json_logs: bool = False
    telemetry: TelemetrySettings = field(default_factory=TelemetrySettings)


def _env_override(data: dict, prefix: str = "DUTYBRIDGE") -> dict:
    """Override settings with environment variables.

    Environment variables follow the pattern DUTYBRIDGE_SECTION_KEY for
    sections and DUTYBRIDGE_KEY for top-level values. For example:
    DUTYBRIDGE_TELEMETRY_ENDPOINT=https://otel:4317, DUTYBRIDGE_LOG_LEVEL=DEBUG
    """
    top_level = {f.name for f in fields(AppSettings)}
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in top_level:
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_settings_file(path: Path) -> dict:
    """Parse a JSON settings file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Settings file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object", path)
        return {}
    return data


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _build_telemetry(data: Any) -> TelemetrySettings:
    if not isinstance(data, dict):
        return TelemetrySettings()
    defaults = TelemetrySettings()
    return TelemetrySettings(
        endpoint=str(data.get("endpoint", defaults.endpoint)),
        service_name=str(data.get("service_name", defaults.service_name)),
        insecure=_to_bool(data.get("insecure", defaults.insecure)),
    )


def load_settings(
    path: Optional[str] = None,
    env_prefix: str = "DUTYBRIDGE",
) -> AppSettings:
    """Load process settings from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (DUTYBRIDGE_SECTION_KEY)
    2. Settings file values
    3. Defaults

    Args:
        path: Path to settings file (JSON). Defaults to dutybridge.json in CWD.
        env_prefix: Environment variable prefix. Defaults to DUTYBRIDGE.
    """
    settings_path = Path(path) if path else Path("dutybridge.json")
    data = _parse_settings_file(settings_path)
    data = _env_override(data, env_prefix)

    return AppSettings(
        log_level=str(data.get("log_level", "WARNING")).upper(),
        json_logs=_to_bool(data.get("json_logs", False)),
        telemetry=_build_telemetry(data.get("telemetry", {})),
    )
